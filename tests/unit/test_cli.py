"""Unit tests for the command line entry point."""

import json
from pathlib import Path

import pytest

from zksync_deploy.cli import build_parser, main, parse_constructor_args

from tests.helpers import DEPLOYED_ADDRESS, TEST_PRIVATE_KEY, ZK_RPC_URL, make_bytecode


@pytest.fixture
def cli_project(tmp_path: Path, artifacts_root: Path, write_artifact) -> Path:
    """Config file pointing at the fake node plus one artifact."""
    write_artifact("contracts/Greeter.sol", "Greeter", make_bytecode("aa"))
    config_path = tmp_path / "zksync.config.json"
    config_path.write_text(json.dumps({
        "defaultNetwork": "zkTest",
        "networks": {"zkTest": {"url": ZK_RPC_URL, "ethNetwork": "localhost", "zksync": True}},
    }))
    return config_path


def run(config_path: Path, artifacts_root: Path, *args: str) -> int:
    return main(["--config", str(config_path), "--artifacts", str(artifacts_root), *args])


class TestParseConstructorArgs:
    """Test the parse_constructor_args function."""

    def test_json_values_are_decoded(self):
        assert parse_constructor_args(["1", "true", "[1, 2]", '"quoted"']) == [1, True, [1, 2], "quoted"]

    def test_plain_strings_are_kept(self):
        assert parse_constructor_args(["hello", "0xabc"]) == ["hello", "0xabc"]


class TestParser:
    """Test argument parsing."""

    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_repeatable_factory_dep(self):
        args = build_parser().parse_args(
            ["deploy", "Greeter", "--factory-dep", "0x01", "--factory-dep", "0x02"]
        )
        assert args.factory_deps == ["0x01", "0x02"]


class TestMain:
    """Test the main function."""

    @pytest.fixture(autouse=True)
    def clear_env(self, monkeypatch):
        monkeypatch.delenv("ZKSYNC_PRIVATE_KEY", raising=False)
        monkeypatch.delenv("ZKSYNC_NETWORK", raising=False)

    def test_missing_private_key(self, cli_project: Path, artifacts_root: Path, capsys):
        assert run(cli_project, artifacts_root, "estimate", "Greeter") == 1
        assert "private key required" in capsys.readouterr().err

    def test_estimate(self, cli_project: Path, artifacts_root: Path, zk_node, capsys):
        code = run(cli_project, artifacts_root, "estimate", "Greeter", "--private-key", TEST_PRIVATE_KEY)

        assert code == 0
        out = capsys.readouterr().out
        assert f"gas: {zk_node.gas_estimate}" in out
        assert f"fee: {zk_node.gas_estimate * zk_node.gas_price} wei" in out

    def test_estimate_queries_node_once_per_value(
        self, cli_project: Path, artifacts_root: Path, zk_node, capsys
    ):
        """Test that the printed fee is the printed gas times a single gas price."""
        run(cli_project, artifacts_root, "estimate", "Greeter", "--private-key", TEST_PRIVATE_KEY)

        assert zk_node.methods().count("eth_estimateGas") == 1
        assert zk_node.methods().count("eth_gasPrice") == 1

    def test_deploy_with_env_key(self, cli_project: Path, artifacts_root: Path, zk_node, capsys, monkeypatch):
        monkeypatch.setenv("ZKSYNC_PRIVATE_KEY", TEST_PRIVATE_KEY)

        assert run(cli_project, artifacts_root, "deploy", "Greeter") == 0
        assert DEPLOYED_ADDRESS in capsys.readouterr().out

    def test_deploy_error_exits_nonzero(self, cli_project: Path, artifacts_root: Path, zk_node, capsys):
        code = run(cli_project, artifacts_root, "deploy", "Missing", "--private-key", TEST_PRIVATE_KEY)

        assert code == 1
        assert "Missing" in capsys.readouterr().err
        assert zk_node.calls == []
