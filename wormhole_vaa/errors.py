from typing import Any

__all__ = [
    "BufferUnderrun",
    "DuplicateField",
    "InvalidDiscriminant",
    "InvalidSignatureOrder",
    "InvalidValue",
    "LengthExceeded",
    "MissingField",
    "PayloadError",
    "PrematurePayload",
    "TrailingBytes",
    "UnknownAction",
    "UnknownModule",
    "VaaError",
    "VerificationError",
]


class VaaError(Exception):
    """Base class for every error raised while encoding, decoding or verifying a VAA"""


class MissingField(VaaError):
    def __init__(self, name: str):
        self.name = name

    def __str__(self) -> str:
        return f"missing field `{self.name}`"


class BufferUnderrun(MissingField):
    """The buffer ended before `field` could be read"""

    def __init__(self, field: str, needed: int, available: int):
        super().__init__(field)
        self.field = field
        self.needed = needed
        self.available = available

    def __str__(self) -> str:
        return (
            f"missing field `{self.field}`: "
            f"needed {self.needed} bytes but only {self.available} remain"
        )


class InvalidDiscriminant(VaaError):
    def __init__(self, field: str, observed: Any, expected: tuple[Any, ...]):
        self.field = field
        self.observed = observed
        self.expected = expected

    def __str__(self) -> str:
        choices = ", ".join(str(e) for e in self.expected)
        return f"invalid {self.field}: {self.observed}, expected one of: {choices}"


class UnknownAction(InvalidDiscriminant):
    def __init__(self, code: int, expected: tuple[int, ...]):
        super().__init__("action", code, expected)
        self.code = code


class LengthExceeded(VaaError):
    def __init__(self, field: str, limit: int, actual: int):
        self.field = field
        self.limit = limit
        self.actual = actual

    def __str__(self) -> str:
        return f"{self.field} is {self.actual} bytes long, limit is {self.limit}"


class InvalidValue(VaaError):
    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value

    def __str__(self) -> str:
        return f"value {self.value!r} cannot be encoded as `{self.field}`"


class UnknownModule(VaaError):
    def __init__(self, observed: bytes, expected: bytes):
        self.observed = observed
        self.expected = expected

    def __str__(self) -> str:
        return (
            f"governance packet is for module {self.observed.hex()}, "
            f"expected {self.expected.hex()}"
        )


class DuplicateField(VaaError):
    def __init__(self, name: str):
        self.name = name

    def __str__(self) -> str:
        return f"duplicate field `{self.name}`"


class PrematurePayload(VaaError):
    def __str__(self) -> str:
        return "`action` must be known before deserializing `payload`"


class PayloadError(VaaError):
    """The VAA envelope decoded but its payload did not"""

    def __init__(self, inner: Exception):
        self.inner = inner

    def __str__(self) -> str:
        return f"failed to decode payload: {self.inner}"


class TrailingBytes(VaaError):
    def __init__(self, count: int):
        self.count = count

    def __str__(self) -> str:
        return f"{self.count} trailing bytes left after decoding"


class InvalidSignatureOrder(VaaError):
    def __init__(self, previous: int, index: int):
        self.previous = previous
        self.index = index

    def __str__(self) -> str:
        return (
            f"signature for guardian {self.index} follows guardian {self.previous}, "
            "signatures must be sorted by guardian index"
        )


class VerificationError(VaaError):
    def __init__(self, reason: str):
        self.reason = reason

    def __str__(self) -> str:
        return f"VAA verification failed: {self.reason}"
