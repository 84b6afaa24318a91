"""
Struct hashing for Permit2 values.

Each struct hash is a Poseidon sponge over the struct's type hash followed
by its fields in declaration order:

- scalar fields (felt, ContractAddress, u128) are absorbed as-is
- u256 fields and nested structs are absorbed as their own struct hash
- struct arrays are absorbed as poseidon_hash_many of the element hashes,
  in list order; an empty array still contributes poseidon_hash_many([])

Transfer-from permits have no stored spender: the identity of the current
caller is absorbed in its place and must be passed in explicitly.
"""

from typing import Iterable, Optional

from poseidon_py.poseidon_hash import poseidon_hash_many

from .errors import MissingCallerError, UnknownStructTypeError
from .permit_types import (
    PermitBatch,
    PermitBatchTransferFrom,
    PermitDetails,
    PermitSingle,
    PermitTransferFrom,
    TokenPermissions,
    U256,
)
from .type_registry import (
    PERMIT_BATCH_TRANSFER_FROM_TYPE_HASH,
    PERMIT_BATCH_TYPE_HASH,
    PERMIT_DETAILS_TYPE_HASH,
    PERMIT_SINGLE_TYPE_HASH,
    PERMIT_TRANSFER_FROM_TYPE_HASH,
    TOKEN_PERMISSIONS_TYPE_HASH,
    U256_TYPE_HASH,
)


def hash_array(element_hashes: Iterable[int]) -> int:
    """Aggregate digest of an ordered sequence of struct hashes"""
    return poseidon_hash_many(list(element_hashes))


def hash_u256(value: U256) -> int:
    return poseidon_hash_many([U256_TYPE_HASH, value.low, value.high])


def hash_token_permissions(permissions: TokenPermissions) -> int:
    return poseidon_hash_many([
        TOKEN_PERMISSIONS_TYPE_HASH,
        permissions.token,
        hash_u256(permissions.amount),
    ])


def hash_permit_details(details: PermitDetails) -> int:
    return poseidon_hash_many([
        PERMIT_DETAILS_TYPE_HASH,
        details.token,
        hash_u256(details.amount),
        details.expiration,
        details.nonce,
    ])


def hash_permit_single(permit: PermitSingle) -> int:
    return poseidon_hash_many([
        PERMIT_SINGLE_TYPE_HASH,
        hash_permit_details(permit.details),
        permit.spender,
        hash_u256(permit.sig_deadline),
    ])


def hash_permit_batch(permit: PermitBatch) -> int:
    return poseidon_hash_many([
        PERMIT_BATCH_TYPE_HASH,
        hash_array(hash_permit_details(d) for d in permit.details),
        permit.spender,
        hash_u256(permit.sig_deadline),
    ])


def transfer_from_fields(permit: PermitTransferFrom, caller: int) -> list:
    """Absorbed fields of a PermitTransferFrom, after its type hash"""
    return [
        hash_token_permissions(permit.permitted),
        caller,
        permit.nonce,
        hash_u256(permit.deadline),
    ]


def batch_transfer_from_fields(permit: PermitBatchTransferFrom, caller: int) -> list:
    """Absorbed fields of a PermitBatchTransferFrom, after its type hash"""
    return [
        hash_array(hash_token_permissions(p) for p in permit.permitted),
        caller,
        permit.nonce,
        hash_u256(permit.deadline),
    ]


def hash_permit_transfer_from(permit: PermitTransferFrom, caller: int) -> int:
    return poseidon_hash_many([PERMIT_TRANSFER_FROM_TYPE_HASH] + transfer_from_fields(permit, caller))


def hash_permit_batch_transfer_from(permit: PermitBatchTransferFrom, caller: int) -> int:
    return poseidon_hash_many([PERMIT_BATCH_TRANSFER_FROM_TYPE_HASH] + batch_transfer_from_fields(permit, caller))


def hash_struct(value, caller: Optional[int] = None) -> int:
    """Compute the struct hash of any Permit2 value.

    caller is required for PermitTransferFrom and PermitBatchTransferFrom,
    and ignored for everything else.
    """
    if isinstance(value, U256):
        return hash_u256(value)
    elif isinstance(value, TokenPermissions):
        return hash_token_permissions(value)
    elif isinstance(value, PermitDetails):
        return hash_permit_details(value)
    elif isinstance(value, PermitSingle):
        return hash_permit_single(value)
    elif isinstance(value, PermitBatch):
        return hash_permit_batch(value)
    elif isinstance(value, PermitTransferFrom):
        if caller is None:
            raise MissingCallerError("PermitTransferFrom hash needs the current caller")
        return hash_permit_transfer_from(value, caller)
    elif isinstance(value, PermitBatchTransferFrom):
        if caller is None:
            raise MissingCallerError("PermitBatchTransferFrom hash needs the current caller")
        return hash_permit_batch_transfer_from(value, caller)
    else:
        raise UnknownStructTypeError(f"Unsupported struct type: {type(value).__name__}")
