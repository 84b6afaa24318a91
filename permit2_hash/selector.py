"""
Field constants, the Starknet selector function and short string packing.

The selector maps a canonical ASCII type descriptor to a felt:
keccak256 of the descriptor bytes, truncated to the low 250 bits
(Starknet's sn_keccak).
"""

from typing import Union

from eth_utils import big_endian_to_int, keccak

from .errors import InvalidFeltError, InvalidShortStringError

# STARK prime
FIELD_PRIME = 2**251 + 17 * 2**192 + 1

MASK_250 = 2**250 - 1

SHORT_STRING_MAX_LEN = 31


def selector(type_descriptor: Union[str, bytes]) -> int:
    """Compute sn_keccak(type_descriptor) as a felt"""
    if isinstance(type_descriptor, str):
        type_descriptor = type_descriptor.encode("ascii")
    return big_endian_to_int(keccak(type_descriptor)) & MASK_250


def encode_shortstring(text: str) -> int:
    """Pack up to 31 ASCII characters into a felt (big-endian)"""
    if not isinstance(text, str):
        raise InvalidShortStringError(f"Short string must be a str, got {type(text).__name__}")
    if len(text) > SHORT_STRING_MAX_LEN:
        raise InvalidShortStringError(f"Short string too long ({len(text)} > {SHORT_STRING_MAX_LEN}): {text!r}")
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError as e:
        raise InvalidShortStringError(f"Short string must be ASCII: {text!r}") from e
    return big_endian_to_int(raw) if raw else 0


def check_felt(value: int, name: str = "value") -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidFeltError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value < FIELD_PRIME:
        raise InvalidFeltError(f"{name} out of field range: {hex(value)}")
    return value
