"""
Unordered nonce bitmaps for signature transfers.

A nonce selects one bit in one bitmap word: ``nonce_space`` picks the word
and ``bit_pos`` the bit inside it. Words hold 251 bits so that any bitmap
is a valid felt. These helpers are pure; storing the words is the
caller's job.
"""

from typing import Tuple

from .errors import InvalidNonceError
from .selector import check_felt

BITMAP_WORD_BITS = 251


def bitmap_positions(nonce: int) -> Tuple[int, int]:
    check_felt(nonce, "nonce")
    return nonce // BITMAP_WORD_BITS, nonce % BITMAP_WORD_BITS


def nonce_mask(nonce: int) -> int:
    _, bit_pos = bitmap_positions(nonce)
    return 1 << bit_pos


def is_nonce_usable(bitmap: int, nonce: int) -> bool:
    return bitmap & nonce_mask(nonce) == 0


def use_nonce(bitmap: int, nonce: int) -> int:
    """Flip the nonce's bit on, returning the new bitmap word"""
    mask = nonce_mask(nonce)
    if bitmap & mask:
        raise InvalidNonceError(f"Nonce {nonce} already used")
    return bitmap | mask


def invalidate_unordered_nonces(bitmap: int, mask: int) -> int:
    if not 0 <= mask < 2**BITMAP_WORD_BITS:
        raise InvalidNonceError(f"Mask wider than a bitmap word: {hex(mask)}")
    return bitmap | mask
