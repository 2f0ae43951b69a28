"""Path management utilities for zksync-deploy library."""

from pathlib import Path
from typing import Optional, Union


def get_default_config_path() -> Path:
    """
    Get default network config path.

    Returns:
        Path to ./zksync.config.json
    """
    return Path.cwd() / "zksync.config.json"


def get_default_artifacts_dir() -> Path:
    """
    Get default compiler output directory.

    Returns:
        Path to ./artifacts-zk
    """
    return Path.cwd() / "artifacts-zk"


def get_artifact_path(
    source_name: str,
    contract_name: str,
    artifacts_root: Optional[Union[Path, str]] = None,
) -> Path:
    """
    Get the artifact file path for a fully qualified contract.

    Args:
        source_name: Source file path, e.g. "contracts/Greeter.sol"
        contract_name: Contract identifier, e.g. "Greeter"
        artifacts_root: Custom artifacts directory (defaults to ./artifacts-zk)

    Returns:
        Path to <artifacts_root>/<source_name>/<contract_name>.json
    """
    if artifacts_root is None:
        artifacts_root = get_default_artifacts_dir()
    else:
        artifacts_root = Path(artifacts_root).absolute()

    return artifacts_root / source_name / f"{contract_name}.json"
