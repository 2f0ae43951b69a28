"""Data types and dataclasses for zksync-deploy library."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

BytesLike = Union[str, bytes]


@dataclass
class ZkSyncArtifact:
    """Compiled contract record produced by zksolc or zkvyper."""

    # Required fields
    format: str  # e.g., "hh-zksolc-artifact-1"
    contract_name: str  # e.g., "Greeter"
    source_name: str  # e.g., "contracts/Greeter.sol"
    abi: List[Dict[str, Any]]
    bytecode: str  # 0x-prefixed hex

    # Optional fields
    deployed_bytecode: Optional[str] = None
    # Bytecode hash -> qualified contract name, in file order
    factory_deps: Dict[str, str] = field(default_factory=dict)
    link_references: Dict[str, Any] = field(default_factory=dict)
    deployed_link_references: Dict[str, Any] = field(default_factory=dict)

    @property
    def qualified_name(self) -> str:
        """Source file path plus contract name, e.g. ``contracts/A.sol:A``."""
        return f"{self.source_name}:{self.contract_name}"


@dataclass(frozen=True)
class NetworkConfig:
    """One entry of the ``networks`` section of the config file."""

    url: Optional[str] = None  # HTTP RPC URL; None for non-HTTP networks
    eth_network: Optional[str] = None  # Layer-1 target: known name, "localhost" or URL
    zksync: bool = False


@dataclass(frozen=True)
class ActiveNetwork:
    """The network selected for this run."""

    name: str
    config: NetworkConfig

    @property
    def eth_network(self) -> Optional[str]:
        return self.config.eth_network


@dataclass
class DeployConfig:
    """Parsed network configuration file."""

    networks: Dict[str, NetworkConfig]
    default_network: Optional[str] = None


@dataclass(frozen=True)
class NetworkEndpoints:
    """Layer-1 and layer-2 RPC URLs chosen for a deployer."""

    l1_url: str
    l2_url: str


@dataclass
class DeployOptions:
    """Options accepted by ``Deployer.deploy``."""

    # Private key that replaces the deployer's wallet before deploying
    from_: Optional[Any] = None
    # Pre-loaded artifact; skips lookup by name
    artifact: Optional[ZkSyncArtifact] = None
    constructor_arguments: List[Any] = field(default_factory=list)
    additional_factory_deps: List[BytesLike] = field(default_factory=list)
    # Transaction overrides; customData.factoryDeps is always replaced
    overrides: Dict[str, Any] = field(default_factory=dict)


@dataclass
class DeployedContract:
    """Handle to a contract whose deployment was confirmed."""

    address: str  # Checksummed address
    abi: List[Dict[str, Any]]
    transaction_hash: str
    receipt: Dict[str, Any]

    @property
    def block_number(self) -> Optional[int]:
        block = self.receipt.get("blockNumber")
        if isinstance(block, str):
            return int(block, 16)
        return block
