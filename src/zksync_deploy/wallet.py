"""Signing wallets for zksync-deploy library."""

import logging
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.messages import encode_typed_data
from web3 import Web3

from .constants import DEFAULT_GAS_PER_PUBDATA_LIMIT, EIP712_TX_TYPE
from .exceptions import ConfigurationError
from .provider import ZkSyncProvider
from .utils import eip712_typed_data, serialize_eip712

logger = logging.getLogger(__name__)


class EthWallet:
    """A layer-1 account bound to a Web3 provider."""

    def __init__(self, private_key: Any, web3: Optional[Web3] = None):
        self.account = Account.from_key(private_key)
        self.web3 = web3

    @property
    def address(self) -> str:
        return self.account.address

    @property
    def key(self) -> bytes:
        return self.account.key

    def get_balance(self) -> int:
        if self.web3 is None:
            raise ConfigurationError("Layer-1 provider is not set for this wallet")
        return self.web3.eth.get_balance(self.address)


class ZkWallet:
    """
    A layer-2 signer.

    Holds one private key; the layer-1 counterpart returned by eth_wallet()
    always shares it.
    """

    def __init__(
        self,
        private_key: Any,
        provider: Optional[ZkSyncProvider] = None,
        eth_provider: Optional[Web3] = None,
    ):
        """
        Args:
            private_key: Hex string, bytes, or an eth_keys PrivateKey
            provider: Layer-2 provider used to populate and send transactions
            eth_provider: Layer-1 Web3 instance
        """
        self._account = Account.from_key(private_key)
        self.provider = provider
        self.eth_provider = eth_provider

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def key(self) -> bytes:
        return self._account.key

    def connect(self, provider: ZkSyncProvider) -> "ZkWallet":
        """Return a copy bound to another layer-2 provider."""
        return ZkWallet(self._account.key, provider, self.eth_provider)

    def connect_to_l1(self, eth_provider: Web3) -> "ZkWallet":
        """Return a copy bound to another layer-1 provider."""
        return ZkWallet(self._account.key, self.provider, eth_provider)

    def eth_wallet(self) -> EthWallet:
        """Layer-1 wallet with the same private key."""
        if self.eth_provider is None:
            raise ConfigurationError("Layer-1 provider is not set for this wallet")
        return EthWallet(self._account.key, self.eth_provider)

    def require_provider(self) -> ZkSyncProvider:
        if self.provider is None:
            raise ConfigurationError("Layer-2 provider is not set for this wallet")
        return self.provider

    def populate_transaction(self, tx: Dict[str, Any]) -> Dict[str, Any]:
        """
        Fill sender, nonce, chain id, fees and gas limit where missing.

        A legacy ``gasPrice`` override is used for both EIP-1559 fee fields.
        """
        provider = self.require_provider()
        populated = dict(tx)
        populated["from"] = self.address
        populated["type"] = EIP712_TX_TYPE
        populated.setdefault("value", 0)

        custom_data = dict(populated.get("customData") or {})
        custom_data.setdefault("gasPerPubdata", DEFAULT_GAS_PER_PUBDATA_LIMIT)
        custom_data.setdefault("factoryDeps", [])
        populated["customData"] = custom_data

        if populated.get("nonce") is None:
            populated["nonce"] = provider.get_transaction_count(self.address, "pending")
        if populated.get("chainId") is None:
            populated["chainId"] = provider.get_chain_id()

        gas_price = populated.pop("gasPrice", None)
        if populated.get("maxFeePerGas") is None:
            populated["maxFeePerGas"] = gas_price if gas_price is not None else provider.get_gas_price()
        if populated.get("maxPriorityFeePerGas") is None:
            populated["maxPriorityFeePerGas"] = populated["maxFeePerGas"]

        if populated.get("gas") is None:
            populated["gas"] = provider.estimate_gas(populated)

        return populated

    def sign_transaction(self, tx: Dict[str, Any]) -> bytes:
        """Sign a populated transaction and return the raw serialized form."""
        signable = encode_typed_data(full_message=eip712_typed_data(tx))
        signed = self._account.sign_message(signable)
        return serialize_eip712(tx, bytes(signed.signature))

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """Populate, sign and broadcast; returns the transaction hash."""
        populated = self.populate_transaction(tx)
        raw_tx = self.sign_transaction(populated)
        tx_hash = self.require_provider().send_raw_transaction(raw_tx)
        logger.info("Sent transaction %s from %s", tx_hash, self.address)
        return tx_hash
