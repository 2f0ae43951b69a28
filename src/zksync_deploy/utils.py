"""Encoding helpers for zksync-deploy library."""

import hashlib
from typing import Any, Dict, List, Optional, Sequence

import rlp
from eth_abi import encode as abi_encode
from eth_utils import (
    function_signature_to_4byte_selector,
    to_bytes,
    to_canonical_address,
    to_hex,
)
from eth_utils.abi import collapse_if_tuple

from .constants import (
    CONTRACT_DEPLOYER_CREATE_SIGNATURE,
    DEFAULT_GAS_PER_PUBDATA_LIMIT,
    EIP712_DOMAIN_NAME,
    EIP712_DOMAIN_VERSION,
    EIP712_TX_TYPE,
)
from .exceptions import InvalidBytecodeError
from .types import BytesLike

MAX_BYTECODE_WORDS = 2**16


def hexlify(value: Any) -> str:
    """Normalize bytes, int or hex string to lowercase 0x-prefixed hex."""
    if isinstance(value, str):
        return to_hex(hexstr=value)
    return to_hex(value)


def arrayify(value: BytesLike) -> bytes:
    if isinstance(value, str):
        return to_bytes(hexstr=value)
    return bytes(value)


def hash_bytecode(bytecode: BytesLike) -> bytes:
    """
    Compute the zkSync bytecode hash.

    Layout: 2 bytes version (0x0100), 2 bytes length in 32-byte words,
    then the last 28 bytes of sha256(bytecode).

    Raises:
        InvalidBytecodeError: If the length is not an odd number of 32-byte words
    """
    code = arrayify(bytecode)

    if len(code) % 32 != 0:
        raise InvalidBytecodeError("The bytecode length in bytes must be divisible by 32")

    words = len(code) // 32
    if words >= MAX_BYTECODE_WORDS:
        raise InvalidBytecodeError(f"Bytecode length must be less than {MAX_BYTECODE_WORDS} words")
    if words % 2 == 0:
        raise InvalidBytecodeError("Bytecode length in 32-byte words must be odd")

    digest = hashlib.sha256(code).digest()
    return bytes([1, 0]) + words.to_bytes(2, "big") + digest[4:]


def encode_constructor_args(abi: List[Dict[str, Any]], args: Sequence[Any]) -> bytes:
    """
    ABI-encode constructor arguments.

    Raises:
        TypeError: If the argument count does not match the constructor
    """
    constructor = next((item for item in abi if item.get("type") == "constructor"), None)
    inputs = constructor.get("inputs", []) if constructor else []

    if len(inputs) != len(args):
        raise TypeError(
            f"Constructor expects {len(inputs)} argument(s), got {len(args)}"
        )
    if not inputs:
        return b""

    types = [collapse_if_tuple(item) for item in inputs]
    return abi_encode(types, list(args))


def encode_create_calldata(bytecode_hash: bytes, constructor_calldata: bytes, salt: bytes = b"\x00" * 32) -> bytes:
    """Calldata for ContractDeployer.create(salt, bytecodeHash, input)."""
    selector = function_signature_to_4byte_selector(CONTRACT_DEPLOYER_CREATE_SIGNATURE)
    return selector + abi_encode(
        ["bytes32", "bytes32", "bytes"], [salt, bytecode_hash, constructor_calldata]
    )


def _as_int(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, str):
        return int(value, 16)
    return int(value)


def _address_as_int(address: Optional[str]) -> int:
    return int(address, 16) if address else 0


def eip712_typed_data(tx: Dict[str, Any]) -> Dict[str, Any]:
    """
    Build the EIP-712 document a zkSync transaction is signed over.

    Factory dependencies are signed as their bytecode hashes.
    """
    custom_data = tx.get("customData") or {}
    paymaster_params = custom_data.get("paymasterParams") or {}

    return {
        "types": {
            "EIP712Domain": [
                {"name": "name", "type": "string"},
                {"name": "version", "type": "string"},
                {"name": "chainId", "type": "uint256"},
            ],
            "Transaction": [
                {"name": "txType", "type": "uint256"},
                {"name": "from", "type": "uint256"},
                {"name": "to", "type": "uint256"},
                {"name": "gasLimit", "type": "uint256"},
                {"name": "gasPerPubdataByteLimit", "type": "uint256"},
                {"name": "maxFeePerGas", "type": "uint256"},
                {"name": "maxPriorityFeePerGas", "type": "uint256"},
                {"name": "paymaster", "type": "uint256"},
                {"name": "nonce", "type": "uint256"},
                {"name": "value", "type": "uint256"},
                {"name": "data", "type": "bytes"},
                {"name": "factoryDeps", "type": "bytes32[]"},
                {"name": "paymasterInput", "type": "bytes"},
            ],
        },
        "primaryType": "Transaction",
        "domain": {
            "name": EIP712_DOMAIN_NAME,
            "version": EIP712_DOMAIN_VERSION,
            "chainId": _as_int(tx["chainId"]),
        },
        "message": {
            "txType": EIP712_TX_TYPE,
            "from": _address_as_int(tx["from"]),
            "to": _address_as_int(tx.get("to")),
            "gasLimit": _as_int(tx.get("gas")),
            "gasPerPubdataByteLimit": _as_int(
                custom_data.get("gasPerPubdata", DEFAULT_GAS_PER_PUBDATA_LIMIT)
            ),
            "maxFeePerGas": _as_int(tx.get("maxFeePerGas")),
            "maxPriorityFeePerGas": _as_int(tx.get("maxPriorityFeePerGas")),
            "paymaster": _address_as_int(paymaster_params.get("paymaster")),
            "nonce": _as_int(tx.get("nonce")),
            "value": _as_int(tx.get("value")),
            "data": arrayify(tx.get("data") or b""),
            "factoryDeps": [hash_bytecode(dep) for dep in custom_data.get("factoryDeps", [])],
            "paymasterInput": arrayify(paymaster_params.get("paymasterInput") or b""),
        },
    }


def serialize_eip712(tx: Dict[str, Any], signature: Optional[bytes] = None) -> bytes:
    """
    RLP-serialize a zkSync EIP-712 transaction, prefixed with the type byte.

    Args:
        tx: Populated transaction (from, to, nonce, gas, fees, chainId, customData)
        signature: 65-byte r || s || v signature; None for an unsigned payload
    """
    custom_data = tx.get("customData") or {}
    chain_id = _as_int(tx["chainId"])

    fields: List[Any] = [
        _as_int(tx.get("nonce")),
        _as_int(tx.get("maxPriorityFeePerGas")),
        _as_int(tx.get("maxFeePerGas")),
        _as_int(tx.get("gas")),
        to_canonical_address(tx["to"]) if tx.get("to") else b"",
        _as_int(tx.get("value")),
        arrayify(tx.get("data") or b""),
    ]

    if signature is not None:
        r = int.from_bytes(signature[0:32], "big")
        s = int.from_bytes(signature[32:64], "big")
        v = signature[64]
        fields.extend([v - 27 if v >= 27 else v, r, s])
    else:
        fields.extend([chain_id, b"", b""])

    fields.append(chain_id)
    fields.append(to_canonical_address(tx["from"]))
    fields.append(_as_int(custom_data.get("gasPerPubdata", DEFAULT_GAS_PER_PUBDATA_LIMIT)))
    fields.append([arrayify(dep) for dep in custom_data.get("factoryDeps", [])])

    custom_signature = custom_data.get("customSignature")
    if custom_signature:
        fields.append(arrayify(custom_signature))
    else:
        fields.append(signature or b"")

    paymaster_params = custom_data.get("paymasterParams")
    if paymaster_params:
        fields.append([
            to_canonical_address(paymaster_params["paymaster"]),
            arrayify(paymaster_params.get("paymasterInput") or b""),
        ])
    else:
        fields.append([])

    return bytes([EIP712_TX_TYPE]) + rlp.encode(fields)
