"""Deployment transaction construction for zksync-deploy library."""

import logging
from typing import Any, Dict, List, Optional

from eth_utils import keccak, to_checksum_address

from .constants import (
    CONTRACT_DEPLOYED_EVENT_SIGNATURE,
    CONTRACT_DEPLOYER_ADDRESS,
    DEFAULT_GAS_PER_PUBDATA_LIMIT,
    EIP712_TX_TYPE,
)
from .exceptions import RpcError
from .types import DeployedContract
from .utils import encode_constructor_args, encode_create_calldata, hash_bytecode, hexlify
from .wallet import ZkWallet

logger = logging.getLogger(__name__)

CONTRACT_DEPLOYED_TOPIC = hexlify(keccak(text=CONTRACT_DEPLOYED_EVENT_SIGNATURE))


def deployed_address_from_receipt(receipt: Dict[str, Any]) -> str:
    """
    Extract the created contract address from a deployment receipt.

    Uses the deployer's ContractDeployed event, falling back to the
    receipt's contractAddress field.

    Raises:
        RpcError: If neither source names an address
    """
    deployer = CONTRACT_DEPLOYER_ADDRESS.lower()
    for log in receipt.get("logs", []):
        topics = log.get("topics", [])
        if (
            log.get("address", "").lower() == deployer
            and len(topics) == 4
            and topics[0].lower() == CONTRACT_DEPLOYED_TOPIC
        ):
            return to_checksum_address("0x" + topics[3][-40:])

    if receipt.get("contractAddress"):
        return to_checksum_address(receipt["contractAddress"])

    raise RpcError(
        f"Deployment receipt {receipt.get('transactionHash')} has no deployed address"
    )


class ContractFactory:
    """Builds and sends zkSync contract deployment transactions."""

    def __init__(self, abi: List[Dict[str, Any]], bytecode: str, wallet: ZkWallet):
        self.abi = abi
        self.bytecode = hexlify(bytecode)
        self.wallet = wallet

    def get_deploy_transaction(
        self, *args: Any, overrides: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Build an unsigned deployment transaction.

        The transaction calls ContractDeployer.create with a zero salt. The
        contract's own bytecode is appended to customData.factoryDeps when
        not already listed.
        """
        tx = dict(overrides or {})
        custom_data = dict(tx.get("customData") or {})

        constructor_calldata = encode_constructor_args(self.abi, args)
        tx["type"] = EIP712_TX_TYPE
        tx["to"] = CONTRACT_DEPLOYER_ADDRESS
        tx["data"] = hexlify(encode_create_calldata(hash_bytecode(self.bytecode), constructor_calldata))

        factory_deps = list(custom_data.get("factoryDeps") or [])
        if self.bytecode not in factory_deps:
            factory_deps.append(self.bytecode)
        custom_data["factoryDeps"] = factory_deps
        custom_data.setdefault("gasPerPubdata", DEFAULT_GAS_PER_PUBDATA_LIMIT)
        tx["customData"] = custom_data

        return tx

    def deploy(self, *args: Any, overrides: Optional[Dict[str, Any]] = None) -> DeployedContract:
        """
        Send the deployment transaction and wait for it to be mined.

        Raises:
            RpcError: If submission fails or the transaction reverts
        """
        tx = self.get_deploy_transaction(*args, overrides=overrides)
        tx_hash = self.wallet.send_transaction(tx)
        receipt = self.wallet.require_provider().wait_for_transaction_receipt(tx_hash)

        address = deployed_address_from_receipt(receipt)
        logger.info("Contract deployed at %s (tx %s)", address, tx_hash)
        return DeployedContract(
            address=address,
            abi=self.abi,
            transaction_hash=tx_hash,
            receipt=receipt,
        )
