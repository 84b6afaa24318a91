"""
Build permit values from JSON-style dicts.

Numbers may be ints, 0x-prefixed hex strings or decimal strings. A u256
may also be given as {"low": ..., "high": ...}.
"""

from typing import Any, Dict, List, Union

from eth_utils import is_0x_prefixed, to_int

from .errors import PermitHashError, UnknownStructTypeError
from .permit_types import (
    PermitBatch,
    PermitBatchTransferFrom,
    PermitDetails,
    PermitSingle,
    PermitTransferFrom,
    TokenPermissions,
    U256,
    Witness,
)
from .selector import check_felt


def to_int_value(value: Union[int, str]) -> int:
    if isinstance(value, bool):
        raise PermitHashError(f"Expected a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        value = value.strip()
        try:
            if is_0x_prefixed(value):
                return to_int(hexstr=value)
            return int(value, 10)
        except ValueError as e:
            raise PermitHashError(f"Cannot parse number: {value!r}") from e
    raise PermitHashError(f"Expected a number, got {type(value).__name__}")


def require_dict(value: Any, name: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise PermitHashError(f"{name} must be an object, got {type(value).__name__}")
    return value


def require_list(value: Any, name: str) -> List[Any]:
    if not isinstance(value, list):
        raise PermitHashError(f"{name} must be a list, got {type(value).__name__}")
    return value


def to_felt(value: Union[int, str]) -> int:
    return check_felt(to_int_value(value))


def to_u256(value: Any) -> U256:
    if isinstance(value, dict):
        return U256(low=to_int_value(value["low"]), high=to_int_value(value.get("high", 0)))
    return U256.from_int(to_int_value(value))


def token_permissions_from_dict(data: Dict[str, Any]) -> TokenPermissions:
    require_dict(data, "TokenPermissions")
    return TokenPermissions(token=to_felt(data["token"]), amount=to_u256(data["amount"]))


def permit_details_from_dict(data: Dict[str, Any]) -> PermitDetails:
    require_dict(data, "PermitDetails")
    return PermitDetails(
        token=to_felt(data["token"]),
        amount=to_u256(data["amount"]),
        expiration=to_int_value(data["expiration"]),
        nonce=to_int_value(data["nonce"]),
    )


def permit_from_dict(type_name: str, data: Dict[str, Any]):
    """Decode a permit of the named type"""
    try:
        require_dict(data, type_name)
        if type_name == "TokenPermissions":
            return token_permissions_from_dict(data)
        elif type_name == "PermitDetails":
            return permit_details_from_dict(data)
        elif type_name == "PermitSingle":
            return PermitSingle(
                details=permit_details_from_dict(data["details"]),
                spender=to_felt(data["spender"]),
                sig_deadline=to_u256(data["sig_deadline"]),
            )
        elif type_name == "PermitBatch":
            return PermitBatch(
                details=[permit_details_from_dict(d) for d in require_list(data["details"], "details")],
                spender=to_felt(data["spender"]),
                sig_deadline=to_u256(data["sig_deadline"]),
            )
        elif type_name == "PermitTransferFrom":
            return PermitTransferFrom(
                permitted=token_permissions_from_dict(data["permitted"]),
                nonce=to_felt(data["nonce"]),
                deadline=to_u256(data["deadline"]),
            )
        elif type_name == "PermitBatchTransferFrom":
            return PermitBatchTransferFrom(
                permitted=[token_permissions_from_dict(p) for p in require_list(data["permitted"], "permitted")],
                nonce=to_felt(data["nonce"]),
                deadline=to_u256(data["deadline"]),
            )
    except KeyError as e:
        raise PermitHashError(f"{type_name} is missing field {e.args[0]!r}") from e
    raise UnknownStructTypeError(f"Unsupported permit type: {type_name}")


def witness_from_dict(data: Dict[str, Any]) -> Witness:
    try:
        require_dict(data, "witness")
        return Witness(commitment=to_felt(data["commitment"]), type_string=data["type_string"])
    except KeyError as e:
        raise PermitHashError(f"witness is missing field {e.args[0]!r}") from e
