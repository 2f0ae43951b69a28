"""Compiled artifact loading for zksync-deploy library."""

import json
import logging
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union

from .constants import SUPPORTED_ARTIFACT_FORMATS
from .exceptions import AmbiguousArtifactError, ArtifactNotFoundError, ContractIdentityError
from .paths import get_artifact_path, get_default_artifacts_dir
from .types import ZkSyncArtifact

logger = logging.getLogger(__name__)


class ArtifactLoader(Protocol):
    """Anything that resolves a contract name to its compiled artifact."""

    def read_artifact(self, name: str) -> ZkSyncArtifact: ...


def parse_artifact(data: Any) -> ZkSyncArtifact:
    """
    Build a ZkSyncArtifact from a decoded artifact JSON document.

    The format tag is copied as-is; use validate_artifact_format() to reject
    artifacts not produced by a zkSync compiler.

    Args:
        data: Decoded artifact JSON

    Returns:
        ZkSyncArtifact with factory_deps in document order

    Raises:
        ContractIdentityError: If the document is not an object or a required
                               field is missing
    """
    if not isinstance(data, dict):
        raise ContractIdentityError(
            f"Artifact must be a JSON object, got {type(data).__name__}"
        )

    try:
        artifact = ZkSyncArtifact(
            format=data["_format"],
            contract_name=data["contractName"],
            source_name=data["sourceName"],
            abi=data["abi"],
            bytecode=data["bytecode"],
        )
    except KeyError as e:
        raise ContractIdentityError(f"Artifact is missing required field {e}") from e

    # Extract optional fields if present
    if "deployedBytecode" in data:
        artifact.deployed_bytecode = data["deployedBytecode"]
    if data.get("factoryDeps"):
        artifact.factory_deps = dict(data["factoryDeps"])
    if data.get("linkReferences"):
        artifact.link_references = data["linkReferences"]
    if data.get("deployedLinkReferences"):
        artifact.deployed_link_references = data["deployedLinkReferences"]

    return artifact


def validate_artifact_format(artifact: ZkSyncArtifact, name: str) -> ZkSyncArtifact:
    """
    Check that an artifact was compiled by zksolc or zkvyper.

    Raises:
        ContractIdentityError: If the format tag is not a zkSync one
    """
    if artifact.format not in SUPPORTED_ARTIFACT_FORMATS:
        raise ContractIdentityError(
            f"Artifact {name} was not compiled by zksolc or zkvyper"
        )
    return artifact


def split_qualified_name(name: str) -> tuple[Optional[str], str]:
    """
    Split "contracts/A.sol:A" into ("contracts/A.sol", "A").

    Bare names return (None, name).
    """
    if ":" not in name:
        return None, name
    source_name, _, contract_name = name.rpartition(":")
    return source_name, contract_name


class ArtifactStore:
    """Reads artifacts from a compiler output directory."""

    def __init__(self, artifacts_root: Optional[Union[Path, str]] = None):
        """
        Initialize the artifact store.

        Args:
            artifacts_root: Compiler output directory laid out as
                            <root>/<sourceName>/<ContractName>.json
                            If None, uses ./artifacts-zk
        """
        if artifacts_root is None:
            artifacts_root = get_default_artifacts_dir()
        self.root = Path(artifacts_root).absolute()

    def read_artifact(self, name: str) -> ZkSyncArtifact:
        """
        Load an artifact by bare or fully qualified contract name.

        Args:
            name: "Greeter" if unique, or "contracts/Greeter.sol:Greeter"

        Returns:
            Parsed artifact (format tag not validated)

        Raises:
            ArtifactNotFoundError: If no artifact matches
            AmbiguousArtifactError: If a bare name matches several artifacts
        """
        source_name, contract_name = split_qualified_name(name)

        if source_name is not None:
            artifact_path = get_artifact_path(source_name, contract_name, self.root)
            if not artifact_path.is_file():
                raise ArtifactNotFoundError(
                    f'Artifact for contract "{name}" not found in {self.root}'
                )
        else:
            candidates = self._find_by_contract_name(contract_name)
            if not candidates:
                raise ArtifactNotFoundError(
                    f'Artifact for contract "{name}" not found in {self.root}'
                )
            if len(candidates) > 1:
                qualified = sorted(self._qualified_name_of(path) for path in candidates)
                raise AmbiguousArtifactError(
                    f'There are multiple artifacts for contract "{name}", '
                    "please use a fully qualified name instead:\n"
                    + "\n".join(f"  * {q}" for q in qualified)
                )
            artifact_path = candidates[0]

        logger.debug("Reading artifact %s from %s", name, artifact_path)
        with open(artifact_path) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ContractIdentityError(
                    f'Artifact for contract "{name}" at {artifact_path} is not valid JSON: {e}'
                ) from e

        return parse_artifact(data)

    def _find_by_contract_name(self, contract_name: str) -> List[Path]:
        if not self.root.exists():
            return []
        return [
            path
            for path in self.root.rglob(f"{contract_name}.json")
            if "build-info" not in path.relative_to(self.root).parts
        ]

    def _qualified_name_of(self, artifact_path: Path) -> str:
        source_name = artifact_path.parent.relative_to(self.root).as_posix()
        return f"{source_name}:{artifact_path.stem}"
