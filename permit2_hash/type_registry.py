"""
Canonical type descriptors and type hashes for the Permit2 schema.

Descriptors follow the SNIP-12 (revision 1) grammar:

    "Name"("field1":"Type1","field2":"Type2",...)

followed by the descriptor of every referenced struct type, each appended
once, depth-first in the order it is first seen. A trailing ``*`` on a
field type marks an array of that struct.

All fixed type hashes are computed once at import time. The witness
variants are not in this table, see ``permit2_hash.witness``.
"""

from typing import Dict, List

from .errors import UnknownStructTypeError
from .selector import selector

PRIMITIVE_TYPES = {"felt", "ContractAddress", "u128", "shortstring"}

# Field declaration order is the hashing order.
TYPES: Dict[str, List[Dict[str, str]]] = {
    "u256": [
        {"name": "low", "type": "u128"},
        {"name": "high", "type": "u128"},
    ],
    "TokenPermissions": [
        {"name": "token", "type": "ContractAddress"},
        {"name": "amount", "type": "u256"},
    ],
    "PermitDetails": [
        {"name": "token", "type": "ContractAddress"},
        {"name": "amount", "type": "u256"},
        {"name": "expiration", "type": "u128"},
        {"name": "nonce", "type": "u128"},
    ],
    "PermitSingle": [
        {"name": "details", "type": "PermitDetails"},
        {"name": "spender", "type": "ContractAddress"},
        {"name": "sig_deadline", "type": "u256"},
    ],
    "PermitBatch": [
        {"name": "details", "type": "PermitDetails*"},
        {"name": "spender", "type": "ContractAddress"},
        {"name": "sig_deadline", "type": "u256"},
    ],
    # spender is not stored in the struct; it is the caller at hash time
    "PermitTransferFrom": [
        {"name": "permitted", "type": "TokenPermissions"},
        {"name": "spender", "type": "ContractAddress"},
        {"name": "nonce", "type": "felt"},
        {"name": "deadline", "type": "u256"},
    ],
    "PermitBatchTransferFrom": [
        {"name": "permitted", "type": "TokenPermissions*"},
        {"name": "spender", "type": "ContractAddress"},
        {"name": "nonce", "type": "felt"},
        {"name": "deadline", "type": "u256"},
    ],
}


def base_type(type_name: str) -> str:
    return type_name[:-1] if type_name.endswith("*") else type_name


def encode_struct(primary_type: str, types: Dict[str, List[Dict[str, str]]] = TYPES) -> str:
    """Encode a single struct header, without referenced types"""
    if primary_type not in types:
        raise UnknownStructTypeError(f"Unknown struct type: {primary_type}")
    fields = ",".join(f'"{f["name"]}":"{f["type"]}"' for f in types[primary_type])
    return f'"{primary_type}"({fields})'


def referenced_types(primary_type: str, types: Dict[str, List[Dict[str, str]]] = TYPES) -> List[str]:
    """Struct types referenced by primary_type, depth-first, first-seen order"""
    if primary_type not in types:
        raise UnknownStructTypeError(f"Unknown struct type: {primary_type}")
    seen: List[str] = []

    def visit(name: str) -> None:
        for field in types[name]:
            dep = base_type(field["type"])
            if dep in PRIMITIVE_TYPES or dep == primary_type or dep in seen:
                continue
            if dep not in types:
                raise UnknownStructTypeError(f"{name}.{field['name']} references unknown type {dep}")
            seen.append(dep)
            visit(dep)

    visit(primary_type)
    return seen


def encode_type(primary_type: str, types: Dict[str, List[Dict[str, str]]] = TYPES) -> str:
    """Full canonical descriptor: the struct header then each referenced type"""
    deps = referenced_types(primary_type, types)
    return encode_struct(primary_type, types) + "".join(encode_struct(dep, types) for dep in deps)


def type_hash(primary_type: str, types: Dict[str, List[Dict[str, str]]] = TYPES) -> int:
    return selector(encode_type(primary_type, types))


U256_TYPE_STRING = encode_type("u256")
TOKEN_PERMISSIONS_TYPE_STRING = encode_type("TokenPermissions")
PERMIT_DETAILS_TYPE_STRING = encode_type("PermitDetails")
PERMIT_SINGLE_TYPE_STRING = encode_type("PermitSingle")
PERMIT_BATCH_TYPE_STRING = encode_type("PermitBatch")
PERMIT_TRANSFER_FROM_TYPE_STRING = encode_type("PermitTransferFrom")
PERMIT_BATCH_TRANSFER_FROM_TYPE_STRING = encode_type("PermitBatchTransferFrom")

U256_TYPE_HASH = selector(U256_TYPE_STRING)
TOKEN_PERMISSIONS_TYPE_HASH = selector(TOKEN_PERMISSIONS_TYPE_STRING)
PERMIT_DETAILS_TYPE_HASH = selector(PERMIT_DETAILS_TYPE_STRING)
PERMIT_SINGLE_TYPE_HASH = selector(PERMIT_SINGLE_TYPE_STRING)
PERMIT_BATCH_TYPE_HASH = selector(PERMIT_BATCH_TYPE_STRING)
PERMIT_TRANSFER_FROM_TYPE_HASH = selector(PERMIT_TRANSFER_FROM_TYPE_STRING)
PERMIT_BATCH_TRANSFER_FROM_TYPE_HASH = selector(PERMIT_BATCH_TRANSFER_FROM_TYPE_STRING)

# name -> (descriptor, type hash)
TYPE_HASHES = {
    "u256": (U256_TYPE_STRING, U256_TYPE_HASH),
    "TokenPermissions": (TOKEN_PERMISSIONS_TYPE_STRING, TOKEN_PERMISSIONS_TYPE_HASH),
    "PermitDetails": (PERMIT_DETAILS_TYPE_STRING, PERMIT_DETAILS_TYPE_HASH),
    "PermitSingle": (PERMIT_SINGLE_TYPE_STRING, PERMIT_SINGLE_TYPE_HASH),
    "PermitBatch": (PERMIT_BATCH_TYPE_STRING, PERMIT_BATCH_TYPE_HASH),
    "PermitTransferFrom": (PERMIT_TRANSFER_FROM_TYPE_STRING, PERMIT_TRANSFER_FROM_TYPE_HASH),
    "PermitBatchTransferFrom": (PERMIT_BATCH_TRANSFER_FROM_TYPE_STRING, PERMIT_BATCH_TRANSFER_FROM_TYPE_HASH),
}
