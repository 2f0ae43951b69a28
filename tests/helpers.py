"""Test helpers shared across zksync-deploy test modules."""

import json
from typing import Any, Dict, List, Optional

from zksync_deploy.constants import CONTRACT_DEPLOYER_ADDRESS, ZKSOLC_ARTIFACT_FORMAT_VERSION
from zksync_deploy.factory import CONTRACT_DEPLOYED_TOPIC

# Hardhat / anvil default account #0
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Hardhat / anvil default account #1
OTHER_PRIVATE_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
OTHER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

ZK_RPC_URL = "http://zksync-rpc.example.com"
DEPLOYED_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


def make_bytecode(fill: str, words: int = 1) -> str:
    """Hex bytecode of `words` 32-byte words, every byte equal to `fill`."""
    return "0x" + fill * 32 * words


def artifact_document(
    source_name: str,
    contract_name: str,
    bytecode: str,
    factory_deps: Optional[Dict[str, str]] = None,
    fmt: str = ZKSOLC_ARTIFACT_FORMAT_VERSION,
    abi: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "_format": fmt,
        "contractName": contract_name,
        "sourceName": source_name,
        "abi": abi or [],
        "bytecode": bytecode,
        "deployedBytecode": bytecode,
        "linkReferences": {},
        "deployedLinkReferences": {},
        "factoryDeps": factory_deps or {},
    }


class FakeZkNode:
    """Answers zkSync JSON-RPC calls and records every request."""

    def __init__(
        self,
        chain_id: int = 280,
        gas_price: int = 250_000_000,
        gas_estimate: int = 1_000_000,
        nonce: int = 7,
    ):
        self.chain_id = chain_id
        self.gas_price = gas_price
        self.gas_estimate = gas_estimate
        self.nonce = nonce
        self.tx_hash = "0x" + "ab" * 32
        self.receipt_status = "0x1"
        self.calls: List[Dict[str, Any]] = []

    def methods(self) -> List[str]:
        return [call["method"] for call in self.calls]

    def params_of(self, method: str) -> List[List[Any]]:
        return [call["params"] for call in self.calls if call["method"] == method]

    def receipt(self) -> Dict[str, Any]:
        return {
            "transactionHash": self.tx_hash,
            "blockNumber": "0x10",
            "status": self.receipt_status,
            "contractAddress": None,
            "logs": [
                {
                    "address": CONTRACT_DEPLOYER_ADDRESS,
                    "topics": [
                        CONTRACT_DEPLOYED_TOPIC,
                        "0x" + "00" * 12 + TEST_ADDRESS[2:].lower(),
                        "0x" + "11" * 32,
                        "0x" + "00" * 12 + DEPLOYED_ADDRESS[2:].lower(),
                    ],
                }
            ],
        }

    def handle(self, request: Any):
        body = json.loads(request.body)
        self.calls.append(body)

        results = {
            "eth_chainId": hex(self.chain_id),
            "eth_gasPrice": hex(self.gas_price),
            "eth_estimateGas": hex(self.gas_estimate),
            "eth_getTransactionCount": hex(self.nonce),
            "eth_sendRawTransaction": self.tx_hash,
            "eth_getTransactionReceipt": self.receipt(),
        }
        if body["method"] in results:
            payload = {"jsonrpc": "2.0", "id": body["id"], "result": results[body["method"]]}
        else:
            payload = {
                "jsonrpc": "2.0",
                "id": body["id"],
                "error": {"code": -32601, "message": "method not found"},
            }
        return (200, {}, json.dumps(payload))
