import pytest

from conftest import CALLER
from permit2_hash.encoding import permit_from_dict, to_felt, to_int_value, to_u256, witness_from_dict
from permit2_hash.errors import InvalidFeltError, PermitHashError, UnknownStructTypeError
from permit2_hash.permit_types import PermitBatchTransferFrom, PermitSingle, TokenPermissions, U256
from permit2_hash.struct_hash import hash_struct


def test_to_int_value():
    assert to_int_value(10) == 10
    assert to_int_value("0xA") == 10
    assert to_int_value(" 10 ") == 10
    with pytest.raises(PermitHashError):
        to_int_value("ten")
    with pytest.raises(PermitHashError):
        to_int_value(True)
    with pytest.raises(PermitHashError):
        to_int_value(1.5)


def test_to_felt_range():
    with pytest.raises(InvalidFeltError):
        to_felt("0x" + "f" * 64)


def test_to_u256_forms():
    assert to_u256("0x100") == U256(low=256)
    assert to_u256({"low": "1", "high": "0x2"}) == U256(low=1, high=2)
    assert to_u256({"low": 5}) == U256(low=5)


def test_permit_single_from_dict(permit_single):
    decoded = permit_from_dict("PermitSingle", {
        "details": {"token": "0xa", "amount": "100", "expiration": 1_800_000_000, "nonce": 0},
        "spender": hex(permit_single.spender),
        "sig_deadline": 1_700_000_000,
    })
    assert isinstance(decoded, PermitSingle)
    assert decoded == permit_single


def test_batch_transfer_from_dict(batch_transfer_from):
    decoded = permit_from_dict("PermitBatchTransferFrom", {
        "permitted": [{"token": "0xa", "amount": 100}, {"token": "0xb", "amount": "5"}],
        "nonce": "8",
        "deadline": "1700000000",
    })
    assert isinstance(decoded, PermitBatchTransferFrom)
    assert hash_struct(decoded, caller=CALLER) == hash_struct(batch_transfer_from, caller=CALLER)


def test_leaf_types_from_dict():
    assert permit_from_dict("TokenPermissions", {"token": 1, "amount": 2}) == TokenPermissions(token=1, amount=2)


def test_missing_field_and_unknown_type():
    with pytest.raises(PermitHashError, match="nonce"):
        permit_from_dict("PermitTransferFrom", {"permitted": {"token": 1, "amount": 1}, "deadline": 1})
    with pytest.raises(UnknownStructTypeError):
        permit_from_dict("PermitWitnessTransferFrom", {})


def test_witness_from_dict():
    witness = witness_from_dict({"commitment": "0x99", "type_string": '"witness":"X")'})
    assert witness.commitment == 0x99
    with pytest.raises(PermitHashError):
        witness_from_dict({"commitment": 1})


def test_misshapen_fields_raise_permit_errors():
    with pytest.raises(PermitHashError, match="details must be a list"):
        permit_from_dict("PermitBatch", {"details": 5, "spender": 1, "sig_deadline": 1})
    with pytest.raises(PermitHashError, match="PermitDetails must be an object"):
        permit_from_dict("PermitSingle", {"details": "0x1", "spender": 1, "sig_deadline": 1})
    with pytest.raises(PermitHashError, match="TokenPermissions must be an object"):
        permit_from_dict("PermitBatchTransferFrom", {"permitted": [5], "nonce": 1, "deadline": 1})
    with pytest.raises(PermitHashError):
        permit_from_dict("PermitTransferFrom", [1, 2])
    with pytest.raises(PermitHashError):
        witness_from_dict("0x99")
