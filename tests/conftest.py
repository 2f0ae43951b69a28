"""Shared pytest fixtures for zksync-deploy tests."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest
import responses

from tests.helpers import ZK_RPC_URL, FakeZkNode, artifact_document


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_config_path(fixtures_dir: Path) -> Path:
    """Return path to the sample network config file."""
    return fixtures_dir / "zksync.config.json"


@pytest.fixture
def artifacts_root(tmp_path: Path) -> Path:
    """Create a temporary artifacts directory."""
    root = tmp_path / "artifacts-zk"
    root.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture
def write_artifact(artifacts_root: Path) -> Callable[..., Path]:
    """Return a helper that writes an artifact file under artifacts_root."""

    def _write(source_name: str, contract_name: str, bytecode: str, **kwargs: Any) -> Path:
        path = artifacts_root / source_name / f"{contract_name}.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(artifact_document(source_name, contract_name, bytecode, **kwargs), f, indent=2)
        return path

    return _write


@pytest.fixture
def zk_node():
    """Fake zkSync node at ZK_RPC_URL; any other HTTP request fails."""
    node = FakeZkNode()
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add_callback(
            responses.POST,
            ZK_RPC_URL,
            callback=node.handle,
            content_type="application/json",
        )
        yield node
