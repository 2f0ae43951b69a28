"""Factory dependency resolution for zksync-deploy library."""

import logging
from typing import Callable, List, Set

from .types import ZkSyncArtifact

logger = logging.getLogger(__name__)


def extract_factory_deps(
    artifact: ZkSyncArtifact, load_artifact: Callable[[str], ZkSyncArtifact]
) -> List[str]:
    """
    Collect the bytecode of every contract the artifact's constructor may deploy.

    Traversal is depth-first in factoryDeps order. A dependency's bytecode is
    appended once per edge, so a contract referenced from two places appears
    twice; each qualified name is expanded at most once, which also stops
    cycles.

    Args:
        artifact: Root artifact
        load_artifact: Resolves a qualified contract name to a validated artifact

    Returns:
        Bytecode strings; empty if the artifact has no factory deps

    Raises:
        ContractIdentityError: If any dependency cannot be loaded or is not a
                               zkSync artifact; no partial list is returned
    """
    visited: Set[str] = {artifact.qualified_name}
    return _extract_factory_deps_recursive(artifact, load_artifact, visited)


def _extract_factory_deps_recursive(
    artifact: ZkSyncArtifact,
    load_artifact: Callable[[str], ZkSyncArtifact],
    visited: Set[str],
) -> List[str]:
    factory_deps: List[str] = []

    for dependency_hash, dependency_contract in artifact.factory_deps.items():
        logger.debug(
            "%s depends on %s (%s)", artifact.qualified_name, dependency_contract, dependency_hash
        )
        dependency_artifact = load_artifact(dependency_contract)
        factory_deps.append(dependency_artifact.bytecode)

        if dependency_contract not in visited:
            visited.add(dependency_contract)
            factory_deps.extend(
                _extract_factory_deps_recursive(dependency_artifact, load_artifact, visited)
            )

    return factory_deps
