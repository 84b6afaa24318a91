import pytest

from permit2_hash.domain import Permit2Domain
from permit2_hash.permit_types import (
    PermitBatch,
    PermitBatchTransferFrom,
    PermitDetails,
    PermitSingle,
    PermitTransferFrom,
    TokenPermissions,
)

TOKEN_A = 0xA
TOKEN_B = 0xB
SPENDER = 0x5B0B
CALLER = 0xCA11E4
OTHER_CALLER = 0xCA11E5
SIGNER = 0x519E4

ORDER_WITNESS_TYPE_STRING = (
    '"witness":"Order")'
    '"Order"("id":"felt","fill_deadline":"u128")'
    '"TokenPermissions"("token":"ContractAddress","amount":"u256")'
    '"u256"("low":"u128","high":"u128")'
)


@pytest.fixture
def domain():
    return Permit2Domain(chain_id="SN_SEPOLIA")


@pytest.fixture
def details_a():
    return PermitDetails(token=TOKEN_A, amount=100, expiration=1_800_000_000, nonce=0)


@pytest.fixture
def details_b():
    return PermitDetails(token=TOKEN_B, amount=2**200, expiration=1_800_000_000, nonce=3)


@pytest.fixture
def permit_single(details_a):
    return PermitSingle(details=details_a, spender=SPENDER, sig_deadline=1_700_000_000)


@pytest.fixture
def permit_batch(details_a, details_b):
    return PermitBatch(details=[details_a, details_b], spender=SPENDER, sig_deadline=1_700_000_000)


@pytest.fixture
def transfer_from():
    return PermitTransferFrom(
        permitted=TokenPermissions(token=TOKEN_A, amount=100),
        nonce=7,
        deadline=1_700_000_000,
    )


@pytest.fixture
def batch_transfer_from():
    return PermitBatchTransferFrom(
        permitted=[TokenPermissions(token=TOKEN_A, amount=100), TokenPermissions(token=TOKEN_B, amount=5)],
        nonce=8,
        deadline=1_700_000_000,
    )
