"""
SNIP-12 (revision 1) domain separation and the final off-chain message hash.

    domain_hash  = poseidon(DOMAIN_TYPE_HASH, name, version, chain_id, revision)
    message_hash = poseidon('StarkNet Message', domain_hash, signer, struct_hash)

name, version and chain_id are shortstring values: a felt, a 0x or decimal
string read as a number, or text packed into a short string.

The signer is the account whose signature is checked; it is not the caller
bound inside transfer permits.
"""

from dataclasses import dataclass, field
from typing import Optional, Union

from poseidon_py.poseidon_hash import poseidon_hash_many

from .encoding import to_felt
from .permit_types import Witness
from .selector import check_felt, encode_shortstring, selector
from .struct_hash import hash_struct
from .witness import hash_witness

STARKNET_DOMAIN_TYPE_STRING = (
    '"StarknetDomain"('
    '"name":"shortstring",'
    '"version":"shortstring",'
    '"chainId":"shortstring",'
    '"revision":"shortstring")'
)
STARKNET_DOMAIN_TYPE_HASH = selector(STARKNET_DOMAIN_TYPE_STRING)

STARKNET_MESSAGE_PREFIX = encode_shortstring("StarkNet Message")

REVISION = 1

PERMIT2_DOMAIN_NAME = "Permit2"
PERMIT2_DOMAIN_VERSION = "v1"


def shortstring_to_felt(value: Union[int, str], name: str = "value") -> int:
    if isinstance(value, str):
        if value.startswith("0x") or (value.isascii() and value.isdigit()):
            return to_felt(value)
        return encode_shortstring(value)
    return check_felt(value, name)


def chain_id_to_felt(chain_id: Union[int, str]) -> int:
    """Chain ids are given either as a felt or as a short string like 'SN_MAIN'"""
    return shortstring_to_felt(chain_id, "chain_id")


def compute_domain_separator(name: str, version: str, chain_id: Union[int, str], revision: int = REVISION) -> int:
    return poseidon_hash_many([
        STARKNET_DOMAIN_TYPE_HASH,
        shortstring_to_felt(name, "name"),
        shortstring_to_felt(version, "version"),
        chain_id_to_felt(chain_id),
        revision,
    ])


@dataclass(frozen=True)
class Permit2Domain:
    """Signing domain. The separator is computed once, at construction.

    chain_id may be given as a short string ('SN_MAIN') or a felt; it is stored
    as the felt, so both spellings give equal domains.
    """
    chain_id: Union[int, str]
    name: str = PERMIT2_DOMAIN_NAME
    version: str = PERMIT2_DOMAIN_VERSION
    revision: int = REVISION
    separator: int = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "chain_id", chain_id_to_felt(self.chain_id))
        object.__setattr__(
            self, "separator",
            compute_domain_separator(self.name, self.version, self.chain_id, self.revision),
        )


def message_hash(struct_commitment: int, signer: int, domain: Permit2Domain) -> int:
    """Digest actually signed off-chain and recomputed by the verifier"""
    return poseidon_hash_many([
        STARKNET_MESSAGE_PREFIX,
        domain.separator,
        signer,
        struct_commitment,
    ])


def get_permit_message_hash(
    permit,
    signer: int,
    domain: Permit2Domain,
    caller: Optional[int] = None,
    witness: Optional[Witness] = None,
) -> int:
    """Struct hash (with optional witness) bound to domain and signer.

    caller is the account that will submit the permit; it is required for
    transfer-from permits and ignored otherwise.
    """
    if witness is not None:
        commitment = hash_witness(permit, witness, caller)
    else:
        commitment = hash_struct(permit, caller=caller)
    return message_hash(commitment, signer, domain)
