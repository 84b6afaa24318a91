from itertools import combinations

import pytest

from permit2_hash import type_registry as tr
from permit2_hash.errors import UnknownStructTypeError

U256_DESCRIPTOR = '"u256"("low":"u128","high":"u128")'
TOKEN_PERMISSIONS_DESCRIPTOR = '"TokenPermissions"("token":"ContractAddress","amount":"u256")'
PERMIT_DETAILS_DESCRIPTOR = (
    '"PermitDetails"("token":"ContractAddress","amount":"u256","expiration":"u128","nonce":"u128")'
)

GOLDEN_TYPE_HASHES = {
    "u256": 0x3B143BE38B811560B45593FB2A071EC4DDD0A020E10782BE62FFE6F39E0E82C,
    "TokenPermissions": 0x1E978DE906CDAACA9731EE21B1D1900D35C08B485E472D1095EE283E6B94D9D,
    "PermitDetails": 0x10C3D6098F5BA8EE14E101DC4767CBBB34914CE38F036D5E9CA3667ABA5DEC0,
    "PermitSingle": 0xC7541B807A1156F4B132D94A2D299ACCCE31A81F98B5ACCEF4DEF6FF95B0A7,
    "PermitBatch": 0x3ED2F4CAB78E16FB175D0603366EF24AC0A500200DB7537671DC6FC22676DAC,
    "PermitTransferFrom": 0x37E2436D7D01F165D7DB2B3D49EF6FE56B0BC0220DD6BA3C8E3AFF93F2A83FB,
    "PermitBatchTransferFrom": 0x44FDDAB63BF0CD6B762A3C22A1613EE41DD6AF171AD0AEA4377FC8A4C234B1,
}


def test_leaf_descriptors():
    assert tr.U256_TYPE_STRING == U256_DESCRIPTOR
    assert tr.TOKEN_PERMISSIONS_TYPE_STRING == TOKEN_PERMISSIONS_DESCRIPTOR + U256_DESCRIPTOR
    assert tr.PERMIT_DETAILS_TYPE_STRING == PERMIT_DETAILS_DESCRIPTOR + U256_DESCRIPTOR


def test_composite_descriptors_append_dependencies_once():
    assert tr.PERMIT_SINGLE_TYPE_STRING == (
        '"PermitSingle"("details":"PermitDetails","spender":"ContractAddress","sig_deadline":"u256")'
        + PERMIT_DETAILS_DESCRIPTOR
        + U256_DESCRIPTOR
    )
    assert tr.PERMIT_SINGLE_TYPE_STRING.count('"u256"(') == 1


def test_array_fields_are_starred():
    assert tr.PERMIT_BATCH_TYPE_STRING.startswith('"PermitBatch"("details":"PermitDetails*",')
    assert tr.PERMIT_BATCH_TRANSFER_FROM_TYPE_STRING.startswith(
        '"PermitBatchTransferFrom"("permitted":"TokenPermissions*","spender":"ContractAddress",'
    )
    assert tr.PERMIT_BATCH_TRANSFER_FROM_TYPE_STRING.endswith(TOKEN_PERMISSIONS_DESCRIPTOR + U256_DESCRIPTOR)


def test_transfer_from_descriptor_has_spender_after_permitted():
    assert tr.PERMIT_TRANSFER_FROM_TYPE_STRING == (
        '"PermitTransferFrom"("permitted":"TokenPermissions","spender":"ContractAddress",'
        '"nonce":"felt","deadline":"u256")'
        + TOKEN_PERMISSIONS_DESCRIPTOR
        + U256_DESCRIPTOR
    )


@pytest.mark.parametrize("name,expected", sorted(GOLDEN_TYPE_HASHES.items()))
def test_golden_type_hashes(name, expected):
    assert tr.TYPE_HASHES[name][1] == expected
    assert tr.type_hash(name) == expected


def test_fixed_type_hashes_are_pairwise_distinct():
    hashes = [type_hash for _, type_hash in tr.TYPE_HASHES.values()]
    assert len(hashes) == 7
    for a, b in combinations(hashes, 2):
        assert a != b


def test_referenced_types_depth_first():
    types = {
        "Outer": [{"name": "a", "type": "Mid"}, {"name": "b", "type": "Leaf*"}],
        "Mid": [{"name": "x", "type": "Leaf"}, {"name": "y", "type": "felt"}],
        "Leaf": [{"name": "v", "type": "u128"}],
    }
    assert tr.referenced_types("Outer", types) == ["Mid", "Leaf"]
    assert tr.encode_type("Outer", types) == (
        '"Outer"("a":"Mid","b":"Leaf*")"Mid"("x":"Leaf","y":"felt")"Leaf"("v":"u128")'
    )


def test_unknown_types_raise():
    with pytest.raises(UnknownStructTypeError):
        tr.encode_type("Nope")
    with pytest.raises(UnknownStructTypeError):
        tr.type_hash("Nope")
    with pytest.raises(UnknownStructTypeError):
        tr.referenced_types("Nope")
    with pytest.raises(UnknownStructTypeError):
        tr.encode_type("Broken", {"Broken": [{"name": "z", "type": "Missing"}]})
