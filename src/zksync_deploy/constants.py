"""Configuration constants for zksync-deploy library."""

# Artifact format tags written by the zkSync compiler plugins
ZKSOLC_ARTIFACT_FORMAT_VERSION = "hh-zksolc-artifact-1"
ZKVYPER_ARTIFACT_FORMAT_VERSION = "hh-zkvyper-artifact-1"
SUPPORTED_ARTIFACT_FORMATS = (
    ZKSOLC_ARTIFACT_FORMAT_VERSION,
    ZKVYPER_ARTIFACT_FORMAT_VERSION,
)

# Name of the built-in simulated network; never needs a config entry
DEFAULT_NETWORK_NAME = "hardhat"

# Layer-1 target that means "the local node"
LOCALHOST_ETH_NETWORK = "localhost"

ETH_DEFAULT_NETWORK_RPC_URL = "http://localhost:8545"
ZKSYNC_DEFAULT_NETWORK_RPC_URL = "http://localhost:3050"

# Public endpoints used when a recognized layer-1 network is named but not configured
PUBLIC_L1_RPC_URLS = {
    "mainnet": "https://cloudflare-eth.com",
    "goerli": "https://rpc.ankr.com/eth_goerli",
    "sepolia": "https://rpc.sepolia.org",
    "rinkeby": "https://rpc.ankr.com/eth_rinkeby",
    "ropsten": "https://rpc.ankr.com/eth_ropsten",
    "kovan": "https://kovan.poa.network",
}

# zkSync system contract that performs contract creation
CONTRACT_DEPLOYER_ADDRESS = "0x0000000000000000000000000000000000008006"
CONTRACT_DEPLOYER_CREATE_SIGNATURE = "create(bytes32,bytes32,bytes)"
CONTRACT_DEPLOYED_EVENT_SIGNATURE = "ContractDeployed(address,bytes32,address)"

EIP712_TX_TYPE = 0x71
DEFAULT_GAS_PER_PUBDATA_LIMIT = 50000

# EIP-712 domain for zkSync transactions
EIP712_DOMAIN_NAME = "zkSync"
EIP712_DOMAIN_VERSION = "2"

# Environment variables read by the CLI and config helpers
NETWORK_ENV = "ZKSYNC_NETWORK"
PRIVATE_KEY_ENV = "ZKSYNC_PRIVATE_KEY"
