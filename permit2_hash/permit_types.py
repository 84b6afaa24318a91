"""
Permit2 value types.

Every value validates its fields on construction, so the hashing code can
assume well-typed input. Fields that hold a u256 accept a plain int and
split it into limbs.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from .errors import InvalidFieldTypeError, InvalidIntegerError, InvalidU256Error
from .selector import check_felt

U128_MAX = 2**128 - 1
U256_MAX = 2**256 - 1


def check_uint(value: int, bits: int, name: str = "value") -> int:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidIntegerError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value < 2**bits:
        raise InvalidIntegerError(f"{name} out of u{bits} range: {value}")
    return value


def check_instance(value, cls, name: str):
    if not isinstance(value, cls):
        raise InvalidFieldTypeError(f"{name} must be a {cls.__name__}, got {type(value).__name__}")
    return value


def check_sequence(values, cls, name: str) -> tuple:
    if not isinstance(values, (list, tuple)):
        raise InvalidFieldTypeError(f"{name} must be a sequence of {cls.__name__}, got {type(values).__name__}")
    for i, value in enumerate(values):
        check_instance(value, cls, f"{name}[{i}]")
    return tuple(values)


@dataclass(frozen=True)
class U256:
    low: int
    high: int = 0

    def __post_init__(self):
        for name in ("low", "high"):
            limb = getattr(self, name)
            if not isinstance(limb, int) or isinstance(limb, bool) or not 0 <= limb <= U128_MAX:
                raise InvalidU256Error(f"u256 {name} limb out of u128 range: {limb!r}")

    @classmethod
    def from_int(cls, value: int) -> "U256":
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U256_MAX:
            raise InvalidU256Error(f"Value out of u256 range: {value!r}")
        return cls(low=value & U128_MAX, high=value >> 128)

    def __int__(self) -> int:
        return (self.high << 128) | self.low


U256Like = Union[U256, int]


def as_u256(value: U256Like) -> U256:
    return value if isinstance(value, U256) else U256.from_int(value)


@dataclass(frozen=True)
class TokenPermissions:
    token: int
    amount: U256Like

    def __post_init__(self):
        check_felt(self.token, "token")
        object.__setattr__(self, "amount", as_u256(self.amount))


@dataclass(frozen=True)
class PermitDetails:
    token: int
    amount: U256Like
    expiration: int
    nonce: int

    def __post_init__(self):
        check_felt(self.token, "token")
        object.__setattr__(self, "amount", as_u256(self.amount))
        check_uint(self.expiration, 128, "expiration")
        check_uint(self.nonce, 128, "nonce")


@dataclass(frozen=True)
class PermitSingle:
    details: PermitDetails
    spender: int
    sig_deadline: U256Like

    def __post_init__(self):
        check_instance(self.details, PermitDetails, "details")
        check_felt(self.spender, "spender")
        object.__setattr__(self, "sig_deadline", as_u256(self.sig_deadline))


@dataclass(frozen=True)
class PermitBatch:
    details: Tuple[PermitDetails, ...]
    spender: int
    sig_deadline: U256Like

    def __post_init__(self):
        object.__setattr__(self, "details", check_sequence(self.details, PermitDetails, "details"))
        check_felt(self.spender, "spender")
        object.__setattr__(self, "sig_deadline", as_u256(self.sig_deadline))


@dataclass(frozen=True)
class PermitTransferFrom:
    permitted: TokenPermissions
    nonce: int
    deadline: U256Like

    def __post_init__(self):
        check_instance(self.permitted, TokenPermissions, "permitted")
        check_felt(self.nonce, "nonce")
        object.__setattr__(self, "deadline", as_u256(self.deadline))


@dataclass(frozen=True)
class PermitBatchTransferFrom:
    permitted: Tuple[TokenPermissions, ...]
    nonce: int
    deadline: U256Like

    def __post_init__(self):
        object.__setattr__(self, "permitted", check_sequence(self.permitted, TokenPermissions, "permitted"))
        check_felt(self.nonce, "nonce")
        object.__setattr__(self, "deadline", as_u256(self.deadline))


@dataclass(frozen=True)
class SignatureTransferDetails:
    """Where a signature transfer goes and how much of the permitted amount it takes"""
    to: int
    requested_amount: U256Like

    def __post_init__(self):
        check_felt(self.to, "to")
        object.__setattr__(self, "requested_amount", as_u256(self.requested_amount))


@dataclass(frozen=True)
class Witness:
    """Application data bound into a witness transfer permit.

    commitment is the already-hashed application struct; type_string is the
    descriptor fragment that completes the witness permit type.
    """
    commitment: int
    type_string: str

    def __post_init__(self):
        check_felt(self.commitment, "witness commitment")
