import dataclasses
from collections.abc import Callable
from typing import Protocol, TypeVar

from wormhole_vaa.codec import Reader, Writer

__all__ = [
    "Payload",
    "PayloadDecoder",
    "RawPayload",
]


class Payload(Protocol):
    """Anything that can sit at the end of a VAA body

    A payload writes exactly its own bytes, with no framing; the matching
    `PayloadDecoder` reads them back from a `Reader` positioned right after the
    body's fixed fields.
    """

    def encode(self, w: Writer) -> None:
        ...


P = TypeVar("P", bound=Payload)

#: reads a payload from the cursor, consuming only the bytes that belong to it
PayloadDecoder = Callable[[Reader], P]


@dataclasses.dataclass(frozen=True)
class RawPayload:
    """Payload kept as opaque bytes, used when the payload family is unknown"""

    data: bytes = b""

    def encode(self, w: Writer) -> None:
        w.raw(self.data)

    @classmethod
    def decode(cls, r: Reader) -> "RawPayload":
        return cls(r.rest())
