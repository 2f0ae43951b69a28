"""Layer-2 JSON-RPC transport for zksync-deploy library."""

import itertools
import logging
import time
from typing import Any, Dict, List, Optional

import requests

from .constants import DEFAULT_GAS_PER_PUBDATA_LIMIT, EIP712_TX_TYPE, ZKSYNC_DEFAULT_NETWORK_RPC_URL
from .exceptions import RpcError, TransactionTimeoutError
from .utils import arrayify, hexlify

logger = logging.getLogger(__name__)


def format_transaction_request(tx: Dict[str, Any]) -> Dict[str, Any]:
    """
    Convert a transaction dict to JSON-RPC call parameters.

    zkSync-specific fields from customData travel in ``eip712Meta``, with
    factory dependencies sent as arrays of byte values.
    """
    result: Dict[str, Any] = {}

    for key in ("from", "to"):
        if tx.get(key):
            result[key] = tx[key]
    for key in ("gas", "gasPrice", "maxFeePerGas", "maxPriorityFeePerGas", "value", "nonce"):
        if tx.get(key) is not None:
            result[key] = hex(int(tx[key]))
    if tx.get("data"):
        result["data"] = hexlify(tx["data"])

    custom_data = tx.get("customData")
    if custom_data is not None or tx.get("type") == EIP712_TX_TYPE:
        custom_data = custom_data or {}
        result["type"] = hex(EIP712_TX_TYPE)
        meta: Dict[str, Any] = {
            "gasPerPubdata": hex(int(custom_data.get("gasPerPubdata", DEFAULT_GAS_PER_PUBDATA_LIMIT))),
            "factoryDeps": [list(arrayify(dep)) for dep in custom_data.get("factoryDeps", [])],
        }
        if custom_data.get("customSignature"):
            meta["customSignature"] = hexlify(custom_data["customSignature"])
        paymaster_params = custom_data.get("paymasterParams")
        if paymaster_params:
            meta["paymasterParams"] = {
                "paymaster": paymaster_params["paymaster"],
                "paymasterInput": list(arrayify(paymaster_params.get("paymasterInput") or b"")),
            }
        result["eip712Meta"] = meta

    return result


class ZkSyncProvider:
    """
    Minimal zkSync JSON-RPC client.

    Each call is a single HTTP POST; failures are raised as RpcError and
    never retried here.
    """

    def __init__(self, url: str, timeout: float = 30, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    @classmethod
    def default(cls) -> "ZkSyncProvider":
        """Provider bound to the local zkSync node."""
        return cls(ZKSYNC_DEFAULT_NETWORK_RPC_URL)

    def __repr__(self) -> str:
        return f"ZkSyncProvider({self.url!r})"

    def request(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Perform a JSON-RPC call.

        Returns:
            The "result" member of the response

        Raises:
            RpcError: On transport failure, non-200 status, a body that is not
                      JSON, or an RPC error object
        """
        logger.debug("RPC %s -> %s", method, self.url)
        try:
            response = self.session.post(
                self.url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params or [],
                    "id": next(self._ids),
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcError(f"Network error during RPC call {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcError(f"RPC request {method} failed with status {response.status_code}")

        try:
            result = response.json()
        except requests.exceptions.JSONDecodeError as e:
            raise RpcError(f"RPC response to {method} is not valid JSON") from e

        # Check for RPC errors
        if "error" in result:
            raise RpcError(f"RPC error in {method}: {result['error']}")

        return result.get("result")

    def get_chain_id(self) -> int:
        return int(self.request("eth_chainId"), 16)

    def get_gas_price(self) -> int:
        return int(self.request("eth_gasPrice"), 16)

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        return int(self.request("eth_getTransactionCount", [address, block]), 16)

    def estimate_gas(self, tx: Dict[str, Any]) -> int:
        """Estimate gas for a transaction dict (customData honoured)."""
        return int(self.request("eth_estimateGas", [format_transaction_request(tx)]), 16)

    def send_raw_transaction(self, raw_tx: bytes) -> str:
        """Broadcast a signed transaction; returns its hash."""
        return self.request("eth_sendRawTransaction", [hexlify(raw_tx)])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        return self.request("eth_getTransactionReceipt", [tx_hash])

    def wait_for_transaction_receipt(
        self, tx_hash: str, timeout: float = 120, poll_latency: float = 1.0
    ) -> Dict[str, Any]:
        """
        Poll until the transaction is included.

        Raises:
            TransactionTimeoutError: If no receipt appears within timeout
            RpcError: If the transaction reverted (status 0)
        """
        deadline = time.monotonic() + timeout
        while True:
            receipt = self.get_transaction_receipt(tx_hash)
            if receipt is not None and receipt.get("blockNumber") is not None:
                break
            if time.monotonic() >= deadline:
                raise TransactionTimeoutError(
                    f"Transaction {tx_hash} not mined after {timeout} seconds"
                )
            time.sleep(poll_latency)

        status = receipt.get("status", 1)
        if isinstance(status, str):
            status = int(status, 16)
        if status == 0:
            raise RpcError(f"Transaction {tx_hash} reverted")

        logger.debug("Transaction %s mined in block %s", tx_hash, receipt["blockNumber"])
        return receipt
