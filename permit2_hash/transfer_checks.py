"""
Checks a verifier runs on a signature transfer before recomputing its hash.
"""

from typing import Sequence

from .errors import InvalidAmountError, LengthMismatchError, SignatureExpiredError
from .permit_types import PermitBatchTransferFrom, SignatureTransferDetails, TokenPermissions


def check_deadline(deadline, now: int) -> None:
    if now > int(deadline):
        raise SignatureExpiredError(int(deadline), now)


def check_requested_amount(permitted: TokenPermissions, details: SignatureTransferDetails) -> None:
    requested = int(details.requested_amount)
    allowed = int(permitted.amount)
    if requested > allowed:
        raise InvalidAmountError(allowed, requested)


def check_batch_lengths(permit: PermitBatchTransferFrom, details: Sequence[SignatureTransferDetails]) -> None:
    if len(permit.permitted) != len(details):
        raise LengthMismatchError(
            f"Length mismatch: {len(permit.permitted)} permitted tokens, {len(details)} transfer details"
        )


def check_batch_transfer(permit: PermitBatchTransferFrom, details: Sequence[SignatureTransferDetails], now: int) -> None:
    check_deadline(permit.deadline, now)
    check_batch_lengths(permit, details)
    for permitted, detail in zip(permit.permitted, details):
        check_requested_amount(permitted, detail)
