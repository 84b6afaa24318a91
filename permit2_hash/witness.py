"""
Witness extension for transfer-from permits.

A witness permit binds extra application data to the signature. The
application supplies the hash of its data (the witness commitment) and a
type string fragment describing that data's shape. The fragment is
appended to a fixed stub to form the full descriptor, so the type hash
here is computed on every call and never cached: each witness shape gets
its own type hash.

A fragment for an application ``Order`` struct looks like::

    "witness":"Order")"Order"("id":"felt")"TokenPermissions"(...)"u256"(...)
"""

import logging

from poseidon_py.poseidon_hash import poseidon_hash_many

from .errors import InvalidWitnessTypeString, MissingCallerError, UnknownStructTypeError
from .permit_types import PermitBatchTransferFrom, PermitTransferFrom, Witness
from .selector import selector
from .struct_hash import batch_transfer_from_fields, transfer_from_fields

logger = logging.getLogger(__name__)

PERMIT_WITNESS_TRANSFER_FROM_TYPE_STUB = (
    '"PermitWitnessTransferFrom"('
    '"permitted":"TokenPermissions",'
    '"spender":"ContractAddress",'
    '"nonce":"felt",'
    '"deadline":"u256",'
)

PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPE_STUB = (
    '"PermitBatchWitnessTransferFrom"('
    '"permitted":"TokenPermissions*",'
    '"spender":"ContractAddress",'
    '"nonce":"felt",'
    '"deadline":"u256",'
)


def validate_witness_type_string(type_string: str) -> str:
    """Reject fragments that cannot complete a witness descriptor.

    The fragment must be non-empty ASCII, start with a quoted field name
    and close the witness struct with ``)``.
    """
    if not isinstance(type_string, str) or not type_string:
        raise InvalidWitnessTypeString("Witness type string is empty")
    if not type_string.isascii():
        raise InvalidWitnessTypeString(f"Witness type string must be ASCII: {type_string!r}")
    if not type_string.startswith('"'):
        raise InvalidWitnessTypeString(f"Witness type string must start with a quoted field name: {type_string!r}")
    if ")" not in type_string:
        raise InvalidWitnessTypeString(f"Witness type string never closes the permit struct: {type_string!r}")
    return type_string


def _stub_for(permit_type) -> str:
    if permit_type is PermitTransferFrom:
        return PERMIT_WITNESS_TRANSFER_FROM_TYPE_STUB
    elif permit_type is PermitBatchTransferFrom:
        return PERMIT_BATCH_WITNESS_TRANSFER_FROM_TYPE_STUB
    raise UnknownStructTypeError(f"{getattr(permit_type, '__name__', permit_type)} has no witness variant")


def witness_type_string(permit_type, type_string: str) -> str:
    """Full witness descriptor: the stub for permit_type followed by the fragment"""
    return _stub_for(permit_type) + validate_witness_type_string(type_string)


def witness_type_hash(permit_type, type_string: str) -> int:
    """Type hash of the witness variant of permit_type (computed per call)"""
    descriptor = witness_type_string(permit_type, type_string)
    type_hash = selector(descriptor)
    logger.debug("witness type hash %s for %s", hex(type_hash), descriptor)
    return type_hash


def permit_witness_type_hash(type_string: str) -> int:
    return witness_type_hash(PermitTransferFrom, type_string)


def permit_batch_witness_type_hash(type_string: str) -> int:
    return witness_type_hash(PermitBatchTransferFrom, type_string)


def hash_with_witness(value, witness: int, type_string: str, caller: int) -> int:
    """Struct hash of a transfer-from permit extended with a witness.

    Same fields as the plain struct hash, under the witness type hash, with
    the witness commitment absorbed last.
    """
    if caller is None:
        raise MissingCallerError(f"{type(value).__name__} witness hash needs the current caller")
    if isinstance(value, PermitTransferFrom):
        fields = transfer_from_fields(value, caller)
    elif isinstance(value, PermitBatchTransferFrom):
        fields = batch_transfer_from_fields(value, caller)
    else:
        raise UnknownStructTypeError(f"{type(value).__name__} has no witness variant")
    type_hash = witness_type_hash(type(value), type_string)
    return poseidon_hash_many([type_hash] + fields + [witness])


def hash_witness(value, witness: Witness, caller: int) -> int:
    return hash_with_witness(value, witness.commitment, witness.type_string, caller)
