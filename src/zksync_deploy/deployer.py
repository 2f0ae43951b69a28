"""Main API for zksync-deploy library."""

import logging
from typing import Any, Callable, List, Mapping, Optional, Union

from web3 import Web3

from .artifacts import ArtifactLoader, ArtifactStore, validate_artifact_format
from .config import select_network
from .dependencies import extract_factory_deps
from .exceptions import WalletNotInitializedError
from .factory import ContractFactory
from .networks import resolve_endpoints
from .provider import ZkSyncProvider
from .types import (
    ActiveNetwork,
    DeployConfig,
    DeployedContract,
    DeployOptions,
    NetworkConfig,
    ZkSyncArtifact,
)
from .utils import hexlify
from .wallet import EthWallet, ZkWallet

logger = logging.getLogger(__name__)


def _default_eth_provider(url: str) -> Web3:
    return Web3(Web3.HTTPProvider(url))


class Deployer:
    """
    Deploys contracts to a zkSync network.

    Endpoints are resolved once, at construction. The active wallet is a
    single mutable field: set_wallet* replaces it, and deploy(from_=...)
    replaces it for all later calls too. Nothing here synchronizes wallet
    changes with in-flight deploy or estimate calls; callers sharing one
    Deployer across threads must serialize them.
    """

    def __init__(
        self,
        networks: Mapping[str, NetworkConfig],
        network: ActiveNetwork,
        artifacts: Optional[ArtifactLoader] = None,
        eth_provider_factory: Callable[[str], Web3] = _default_eth_provider,
        zk_provider_factory: Callable[[str], ZkSyncProvider] = ZkSyncProvider,
    ):
        """
        Initialize the deployer.

        Args:
            networks: All configured networks by name
            network: The active network
            artifacts: Artifact loader (defaults to ArtifactStore over ./artifacts-zk)
            eth_provider_factory: Builds the layer-1 provider from a URL
            zk_provider_factory: Builds the layer-2 provider from a URL

        Raises:
            ConfigurationError: If the active network lacks a required URL
        """
        self.network = network
        self.artifacts = artifacts if artifacts is not None else ArtifactStore()
        self.endpoints = resolve_endpoints(networks, network)

        self.eth_provider = eth_provider_factory(self.endpoints.l1_url)
        self.zk_provider = zk_provider_factory(self.endpoints.l2_url)

        self.zk_wallet: Optional[ZkWallet] = None
        self.eth_wallet: Optional[EthWallet] = None

    @classmethod
    def from_config(
        cls,
        config: DeployConfig,
        network_name: Optional[str] = None,
        artifacts: Optional[ArtifactLoader] = None,
        **kwargs: Any,
    ) -> "Deployer":
        """Build a deployer for the network selected from a parsed config."""
        network = select_network(config, network_name)
        return cls(config.networks, network, artifacts, **kwargs)

    # Wallet management

    def set_wallet(self, wallet: ZkWallet) -> None:
        """Use an existing layer-2 wallet, rebound to this deployer's providers."""
        zk_wallet = wallet.connect(self.zk_provider).connect_to_l1(self.eth_provider)
        self.zk_wallet, self.eth_wallet = zk_wallet, zk_wallet.eth_wallet()

    def set_wallet_from_eth_wallet(self, eth_wallet: Any) -> None:
        """Derive the layer-2 wallet from a layer-1 wallet's private key."""
        self.set_wallet_from_private_key(eth_wallet.key)

    def set_wallet_from_private_key(self, private_key: Any) -> None:
        """Derive the layer-2 wallet from a raw key or eth_keys PrivateKey."""
        zk_wallet = ZkWallet(private_key, self.zk_provider, self.eth_provider)
        self.zk_wallet, self.eth_wallet = zk_wallet, zk_wallet.eth_wallet()
        logger.debug("Active wallet set to %s", zk_wallet.address)

    def _require_wallet(self) -> ZkWallet:
        if self.zk_wallet is None:
            raise WalletNotInitializedError()
        return self.zk_wallet

    # Artifacts

    def load_artifact(self, contract_name_or_fully_qualified_name: str) -> ZkSyncArtifact:
        """
        Load an artifact and verify it was compiled by zksolc or zkvyper.

        Args:
            contract_name_or_fully_qualified_name: "Token" if unique in the
                project, else "contracts/token.sol:Token"

        Raises:
            ArtifactNotFoundError: If no artifact matches
            AmbiguousArtifactError: If a bare name matches several artifacts
            ContractIdentityError: If the artifact has a non-zkSync format tag
        """
        artifact = self.artifacts.read_artifact(contract_name_or_fully_qualified_name)
        return validate_artifact_format(artifact, contract_name_or_fully_qualified_name)

    def extract_factory_deps(self, artifact: ZkSyncArtifact) -> List[str]:
        """Bytecodes the artifact's constructor needs, in traversal order."""
        return extract_factory_deps(artifact, self.load_artifact)

    # Estimation

    def estimate_deploy_fee(self, artifact: ZkSyncArtifact, constructor_arguments: List[Any]) -> int:
        """
        Estimate the price of a deploy transaction in wei.

        Gas price is read from the layer-2 provider on every call.

        Raises:
            WalletNotInitializedError: If no wallet is set
        """
        gas = self.estimate_deploy_gas(artifact, constructor_arguments)
        gas_price = self._require_wallet().require_provider().get_gas_price()
        return gas * gas_price

    def estimate_deploy_gas(self, artifact: ZkSyncArtifact, constructor_arguments: List[Any]) -> int:
        """
        Estimate the gas needed to execute a deploy transaction.

        Raises:
            WalletNotInitializedError: If no wallet is set
        """
        wallet = self._require_wallet()

        factory_deps = self.extract_factory_deps(artifact)
        factory = ContractFactory(artifact.abi, artifact.bytecode, wallet)

        # Encode deploy transaction so it can be estimated
        deploy_tx = factory.get_deploy_transaction(
            *constructor_arguments, overrides={"customData": {"factoryDeps": factory_deps}}
        )
        deploy_tx["from"] = wallet.address

        return wallet.require_provider().estimate_gas(deploy_tx)

    # Deployment

    def deploy(
        self,
        contract: Union[str, ZkSyncArtifact],
        options: Optional[DeployOptions] = None,
    ) -> DeployedContract:
        """
        Deploy a contract and wait for confirmation.

        Args:
            contract: Contract name, fully qualified name, or loaded artifact
            options: DeployOptions; options.artifact takes precedence over
                     a name in `contract`

        Returns:
            DeployedContract handle

        Raises:
            WalletNotInitializedError: If no wallet is set and options.from_ is empty
            ContractIdentityError: If the artifact or a dependency cannot be used
            RpcError: If the node rejects the transaction or it reverts
        """
        options = options or DeployOptions()

        if options.from_ is not None:
            self.set_wallet_from_private_key(options.from_)

        wallet = self._require_wallet()

        if options.artifact is not None:
            artifact = options.artifact
        elif isinstance(contract, ZkSyncArtifact):
            artifact = contract
        else:
            artifact = self.load_artifact(contract)

        base_deps = self.extract_factory_deps(artifact)
        additional_deps = [hexlify(dep) for dep in options.additional_factory_deps]
        factory_deps = base_deps + additional_deps

        overrides = dict(options.overrides)
        custom_data = overrides.pop("customData", None) or {}
        overrides["customData"] = {**custom_data, "factoryDeps": factory_deps}

        logger.info(
            "Deploying %s with %d factory dep(s) from %s",
            artifact.qualified_name,
            len(factory_deps),
            wallet.address,
        )
        factory = ContractFactory(artifact.abi, artifact.bytecode, wallet)

        # Encode and send the deploy transaction providing factory dependencies
        return factory.deploy(*options.constructor_arguments, overrides=overrides)
