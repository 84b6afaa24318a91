"""
Exceptions raised while building permit values and their inputs.

Hashing itself never fails for well-typed values; everything here is
raised at construction or validation time.
"""


class PermitHashError(ValueError):
    """Base class for all permit hashing errors"""


class InvalidFeltError(PermitHashError):
    """Value does not fit in the STARK field"""


class InvalidIntegerError(PermitHashError):
    """Value is outside the range of a fixed-width unsigned integer"""


class InvalidU256Error(InvalidIntegerError):
    """u256 value or one of its limbs is out of range"""


class InvalidShortStringError(PermitHashError):
    """String cannot be packed into a single felt"""


class InvalidWitnessTypeString(PermitHashError):
    """Witness type string fragment is empty or malformed"""


class UnknownStructTypeError(PermitHashError):
    """No struct hash is defined for this value or type name"""


class InvalidFieldTypeError(PermitHashError):
    """Nested field holds a value of the wrong permit type"""


class MissingCallerError(PermitHashError):
    """A transfer permit was hashed without the current caller identity"""


class InvalidNonceError(PermitHashError):
    """Unordered nonce has already been used"""


class SignatureExpiredError(PermitHashError):
    """Permit deadline has passed"""

    def __init__(self, deadline: int, now: int):
        super().__init__(f"Signature expired: deadline {deadline} < now {now}")
        self.deadline = deadline
        self.now = now


class InvalidAmountError(PermitHashError):
    """Requested amount exceeds the permitted amount"""

    def __init__(self, permitted: int, requested: int):
        super().__init__(f"Invalid amount: requested {requested} > permitted {permitted}")
        self.permitted = permitted
        self.requested = requested


class LengthMismatchError(PermitHashError):
    """Batch permit and transfer details have different lengths"""
