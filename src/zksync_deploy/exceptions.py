"""Custom exception classes for zksync-deploy library."""


class DeployError(Exception):
    """Base exception for deployment-related errors."""

    pass


class ConfigurationError(DeployError, ValueError):
    """Raised when network configuration lacks a required value."""

    pass


class WalletNotInitializedError(DeployError, RuntimeError):
    """Raised when a signing operation runs before any wallet was set."""

    def __init__(self, message: str = "Wallet is not initialized"):
        super().__init__(message)


class ContractIdentityError(DeployError, ValueError):
    """Raised when an artifact cannot be used as a zkSync contract."""

    pass


class ArtifactNotFoundError(ContractIdentityError, LookupError):
    """Raised when no artifact matches the requested contract name."""

    pass


class AmbiguousArtifactError(ContractIdentityError, LookupError):
    """Raised when a bare contract name matches several artifacts."""

    pass


class InvalidBytecodeError(DeployError, ValueError):
    """Raised when bytecode cannot be hashed for zkSync."""

    pass


class RpcError(DeployError, RuntimeError):
    """Raised when a JSON-RPC call fails or a transaction is rejected."""

    pass


class TransactionTimeoutError(RpcError, TimeoutError):
    """Raised when a transaction receipt does not appear in time."""

    pass
