"""Command line entry point for zksync-deploy library."""

import argparse
import json
import logging
import os
import sys
from typing import Any, List, Optional

from dotenv import load_dotenv

from .artifacts import ArtifactStore
from .config import load_deploy_config
from .constants import PRIVATE_KEY_ENV
from .deployer import Deployer
from .exceptions import DeployError
from .types import DeployOptions

logger = logging.getLogger(__name__)


def parse_constructor_args(raw_args: List[str]) -> List[Any]:
    """Decode each argument as JSON, keeping it as a string when that fails."""
    parsed: List[Any] = []
    for raw in raw_args:
        try:
            parsed.append(json.loads(raw))
        except json.JSONDecodeError:
            parsed.append(raw)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zksync-deploy",
        description="Deploy compiled contracts to a zkSync network",
    )
    parser.add_argument("--config", help="Network config file (default: ./zksync.config.json)")
    parser.add_argument("--network", help="Network name (default: $ZKSYNC_NETWORK or config)")
    parser.add_argument("--artifacts", help="Artifacts directory (default: ./artifacts-zk)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("deploy", "Deploy a contract and print its address"),
        ("estimate", "Estimate gas and fee for deploying a contract"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("contract", help="Contract name or fully qualified name")
        sub.add_argument("args", nargs="*", help="Constructor arguments (JSON or plain strings)")
        sub.add_argument(
            "--private-key",
            default=None,
            help=f"Deployer private key (default: ${PRIVATE_KEY_ENV})",
        )
        if name == "deploy":
            sub.add_argument(
                "--factory-dep",
                action="append",
                default=[],
                dest="factory_deps",
                help="Extra factory dependency bytecode (repeatable)",
            )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    private_key = args.private_key or os.environ.get(PRIVATE_KEY_ENV)
    if not private_key:
        print(
            f"error: private key required: pass --private-key or set ${PRIVATE_KEY_ENV}",
            file=sys.stderr,
        )
        return 1

    try:
        deployer = Deployer.from_config(
            load_deploy_config(args.config),
            network_name=args.network,
            artifacts=ArtifactStore(args.artifacts),
        )
        deployer.set_wallet_from_private_key(private_key)
        constructor_arguments = parse_constructor_args(args.args)

        if args.command == "estimate":
            artifact = deployer.load_artifact(args.contract)
            gas = deployer.estimate_deploy_gas(artifact, constructor_arguments)
            fee = gas * deployer.zk_provider.get_gas_price()
            print(f"gas: {gas}")
            print(f"fee: {fee} wei")
        else:
            contract = deployer.deploy(
                args.contract,
                DeployOptions(
                    constructor_arguments=constructor_arguments,
                    additional_factory_deps=args.factory_deps,
                ),
            )
            print(contract.address)
    except DeployError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
