"""
SNIP-12 struct hashing for Starknet Permit2 permits.
"""

from .domain import Permit2Domain, compute_domain_separator, get_permit_message_hash, message_hash
from .errors import PermitHashError
from .permit_types import (
    PermitBatch,
    PermitBatchTransferFrom,
    PermitDetails,
    PermitSingle,
    PermitTransferFrom,
    SignatureTransferDetails,
    TokenPermissions,
    U256,
    Witness,
)
from .selector import selector
from .struct_hash import hash_struct
from .witness import hash_with_witness, witness_type_hash

__version__ = "0.1.0"

__all__ = [
    "Permit2Domain",
    "PermitBatch",
    "PermitBatchTransferFrom",
    "PermitDetails",
    "PermitHashError",
    "PermitSingle",
    "PermitTransferFrom",
    "SignatureTransferDetails",
    "TokenPermissions",
    "U256",
    "Witness",
    "compute_domain_separator",
    "get_permit_message_hash",
    "hash_struct",
    "hash_with_witness",
    "message_hash",
    "selector",
    "witness_type_hash",
]
