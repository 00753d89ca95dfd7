"""Primitive wire codec

The VAA wire format is positional: nothing is length prefixed or tagged unless a
record says so, so every value is read and written through a `Reader` or
`Writer` that knows the width of each field. Integers and fixed arrays go
through the ABI codecs from algosdk, which encode big-endian with no framing.
"""
from collections.abc import Callable, Iterable
from functools import cache
from typing import Any, ClassVar, Protocol, TypeVar

from algosdk import encoding
from algosdk.abi import ABIType
from algosdk.error import ABIEncodingError

from wormhole_vaa.chain import Chain
from wormhole_vaa.consts import (
    ADDRESS_SIZE,
    AMOUNT_SIZE,
    ARRAY_STRING_SIZE,
    GUARDIAN_ADDRESS_SIZE,
)
from wormhole_vaa.errors import (
    BufferUnderrun,
    InvalidValue,
    LengthExceeded,
    TrailingBytes,
)
from wormhole_vaa.options import DEFAULT_OPTIONS, DecodeOptions

__all__ = [
    "Address",
    "Amount",
    "Encodable",
    "FixedBytes",
    "GuardianAddress",
    "Reader",
    "Writer",
    "from_bytes",
    "from_bytes_with_payload",
    "pad_array_string",
    "to_bytes",
]

T = TypeVar("T")
FB = TypeVar("FB", bound="FixedBytes")

UINT8 = ABIType.from_string("uint8")
UINT16 = ABIType.from_string("uint16")
UINT32 = ABIType.from_string("uint32")
UINT64 = ABIType.from_string("uint64")


@cache
def byte_array(size: int) -> ABIType:
    """returns the codec for a static byte array of `size` bytes"""
    return ABIType.from_string(f"byte[{size}]")


class FixedBytes(bytes):
    """Raw bytes of a width known to the schema, written with no length prefix"""

    size: ClassVar[int]

    def __new__(cls: type[FB], value: bytes | bytearray | Iterable[int]) -> FB:
        raw = bytes(value)
        if len(raw) != cls.size:
            raise InvalidValue(cls.__name__, raw)
        return super().__new__(cls, raw)

    @classmethod
    def zero(cls: type[FB]) -> FB:
        return cls(bytes(cls.size))

    @classmethod
    def from_hex(cls: type[FB], value: str) -> FB:
        return cls(bytes.fromhex(value.removeprefix("0x")))

    @classmethod
    def left_pad(cls: type[FB], native: bytes) -> FB:
        """left pads a shorter native value with zero bytes"""
        if len(native) > cls.size:
            raise LengthExceeded(cls.__name__, cls.size, len(native))
        return cls(bytes(cls.size - len(native)) + native)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.hex()})"


class Address(FixedBytes):
    """A 32 byte emitter, token, contract or recipient address"""

    size = ADDRESS_SIZE

    @classmethod
    def from_algorand(cls, address: str) -> "Address":
        return cls(encoding.decode_address(address))

    def to_algorand(self) -> str:
        return encoding.encode_address(bytes(self))


class Amount(FixedBytes):
    """A big-endian uint256, carried verbatim"""

    size = AMOUNT_SIZE


class GuardianAddress(FixedBytes):
    size = GUARDIAN_ADDRESS_SIZE


def pad_array_string(value: str | bytes, field: str = "string") -> bytes:
    """left pad `value` with zero bytes to the fixed string width"""
    raw = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    if len(raw) > ARRAY_STRING_SIZE:
        raise LengthExceeded(field, ARRAY_STRING_SIZE, len(raw))
    return bytes(ARRAY_STRING_SIZE - len(raw)) + raw


class Writer:
    """Byte sink the records encode themselves into"""

    def __init__(self) -> None:
        self._buf = bytearray()

    def __len__(self) -> int:
        return len(self._buf)

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    def write_next(self, codec: ABIType, value: Any, field: str) -> None:
        try:
            self._buf += codec.encode(value)
        except ABIEncodingError as e:
            raise InvalidValue(field, value) from e

    def u8(self, value: int, field: str) -> None:
        self.write_next(UINT8, value, field)

    def u16(self, value: int, field: str) -> None:
        self.write_next(UINT16, value, field)

    def u32(self, value: int, field: str) -> None:
        self.write_next(UINT32, value, field)

    def u64(self, value: int, field: str) -> None:
        self.write_next(UINT64, value, field)

    def chain(self, value: Chain, field: str) -> None:
        self.u16(int(value), field)

    def fixed(self, value: bytes, size: int, field: str) -> None:
        if len(value) != size:
            raise LengthExceeded(field, size, len(value))
        self.write_next(byte_array(size), list(value), field)

    def array_string(self, value: str | bytes, field: str) -> None:
        self.raw(pad_array_string(value, field))

    def raw(self, data: bytes) -> None:
        self._buf += data


class Reader:
    """Cursor over a caller owned buffer, every read names the field it expects"""

    def __init__(self, data: bytes, options: DecodeOptions = DEFAULT_OPTIONS):
        self._data = bytes(data)
        self.offset = 0
        self.options = options

    @property
    def remaining(self) -> int:
        return len(self._data) - self.offset

    def take(self, size: int, field: str) -> bytes:
        if size > self.remaining:
            raise BufferUnderrun(field, size, self.remaining)
        chunk = self._data[self.offset : self.offset + size]
        self.offset += size
        return chunk

    def read_next(self, codec: ABIType, field: str) -> Any:
        return codec.decode(self.take(codec.byte_len(), field))

    def u8(self, field: str) -> int:
        return self.read_next(UINT8, field)

    def u16(self, field: str) -> int:
        return self.read_next(UINT16, field)

    def u32(self, field: str) -> int:
        return self.read_next(UINT32, field)

    def u64(self, field: str) -> int:
        return self.read_next(UINT64, field)

    def chain(self, field: str) -> Chain:
        return Chain.from_u16(self.u16(field))

    def fixed(self, cls: type[FB], field: str) -> FB:
        return cls(self.read_next(byte_array(cls.size), field))

    def array_string(self, field: str) -> bytes:
        # A value starting with zero bytes is indistinguishable from padding
        return self.take(ARRAY_STRING_SIZE, field).lstrip(b"\x00")

    def rest(self) -> bytes:
        return self.take(self.remaining, "remainder")


class Encodable(Protocol):
    def encode(self, w: Writer) -> None:
        ...


def to_bytes(value: Encodable) -> bytes:
    w = Writer()
    value.encode(w)
    return w.getvalue()


def from_bytes(
    data: bytes,
    decode: Callable[[Reader], T],
    options: DecodeOptions = DEFAULT_OPTIONS,
) -> T:
    """decode a value that must account for every byte in `data`"""
    r = Reader(data, options)
    value = decode(r)
    if r.remaining and not options.allow_trailing_bytes:
        raise TrailingBytes(r.remaining)
    return value


def from_bytes_with_payload(
    data: bytes,
    decode: Callable[[Reader], T],
    options: DecodeOptions = DEFAULT_OPTIONS,
) -> tuple[T, bytes]:
    """decode a value from the front of `data` and return the bytes it left over"""
    r = Reader(data, options)
    value = decode(r)
    return value, r.rest()
