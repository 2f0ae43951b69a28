"""
zksync-deploy: Python library for deploying contracts to zkSync networks
"""

from importlib.metadata import PackageNotFoundError, version

from .artifacts import ArtifactStore
from .config import load_deploy_config, select_network
from .deployer import Deployer
from .exceptions import (
    AmbiguousArtifactError,
    ArtifactNotFoundError,
    ConfigurationError,
    ContractIdentityError,
    DeployError,
    InvalidBytecodeError,
    RpcError,
    TransactionTimeoutError,
    WalletNotInitializedError,
)
from .factory import ContractFactory
from .provider import ZkSyncProvider
from .types import (
    ActiveNetwork,
    DeployConfig,
    DeployedContract,
    DeployOptions,
    NetworkConfig,
    NetworkEndpoints,
    ZkSyncArtifact,
)
from .wallet import EthWallet, ZkWallet

try:
    __version__ = version("zksync-deploy")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "Deployer",
    "ArtifactStore",
    "ContractFactory",
    "ZkSyncProvider",
    "ZkWallet",
    "EthWallet",
    "load_deploy_config",
    "select_network",
    "ActiveNetwork",
    "DeployConfig",
    "DeployedContract",
    "DeployOptions",
    "NetworkConfig",
    "NetworkEndpoints",
    "ZkSyncArtifact",
    "DeployError",
    "ConfigurationError",
    "WalletNotInitializedError",
    "ContractIdentityError",
    "ArtifactNotFoundError",
    "AmbiguousArtifactError",
    "InvalidBytecodeError",
    "RpcError",
    "TransactionTimeoutError",
]
