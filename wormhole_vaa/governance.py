"""Governance packets

A governance packet is laid out as

    module tag (32) | action code (1) | target chain (2) | action fields

The action fields carry no tag of their own, so the action code has to be
decoded before the rest of the record means anything. Both decoders below are
explicitly two-phase: resolve the action code, then dispatch on it.
"""
import logging
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import ClassVar, Generic, Protocol, TypeVar

from wormhole_vaa.chain import Chain
from wormhole_vaa.codec import Reader, Writer, from_bytes, pad_array_string
from wormhole_vaa.consts import MODULE_SIZE
from wormhole_vaa.errors import (
    DuplicateField,
    InvalidDiscriminant,
    MissingField,
    PrematurePayload,
    UnknownAction,
    UnknownModule,
)

__all__ = [
    "FIELDS",
    "GovernanceAction",
    "GovernanceModule",
]

logger = logging.getLogger(__name__)

#: Keys of the keyed (unordered) form of a governance packet
FIELDS = ("module", "action", "chain", "payload")


class GovernanceAction(Protocol):
    #: Action code written after the module tag
    code: ClassVar[int]

    def encode(self, w: Writer) -> None:
        ...

    @classmethod
    def decode(cls, r: Reader) -> "GovernanceAction":
        ...


A = TypeVar("A", bound=GovernanceAction)


def _field(write: Callable[[Writer], None]) -> bytes:
    w = Writer()
    write(w)
    return w.getvalue()


class GovernanceModule(Generic[A]):
    """The set of governance actions understood by one module

    Args:
        name: module name, written zero left padded as the 32 byte module tag
        actions: action record types, each carrying its own `code`
    """

    def __init__(self, name: str, actions: Iterable[type[A]]):
        self.name = name
        self.tag = pad_array_string(name, "module")

        table: dict[int, type[A]] = {}
        for action in actions:
            if action.code in table:
                raise ValueError(
                    f"{name} assigns action code {action.code} to both "
                    f"{table[action.code].__name__} and {action.__name__}"
                )
            table[action.code] = action
        self.actions: Mapping[int, type[A]] = MappingProxyType(table)

    def __repr__(self) -> str:
        return f"GovernanceModule({self.name!r})"

    def action_type(self, code: int) -> type[A]:
        try:
            return self.actions[code]
        except KeyError:
            raise UnknownAction(code, tuple(self.actions)) from None

    def check_module(self, tag: bytes) -> None:
        if tag != self.tag:
            raise UnknownModule(tag, self.tag)

    def encode_packet(self, w: Writer, chain: Chain, action: A) -> None:
        w.fixed(self.tag, MODULE_SIZE, "module")
        w.u8(action.code, "action")
        w.chain(chain, "chain")
        action.encode(w)

    def decode_packet(self, r: Reader) -> tuple[Chain, A]:
        """positional decode, fields arrive in wire order"""
        self.check_module(r.take(MODULE_SIZE, "module"))
        code = r.u8("action")
        chain = r.chain("chain")
        action = self.action_type(code).decode(r)
        return chain, action

    def encode_fields(self, chain: Chain, action: A) -> list[tuple[str, bytes]]:
        """the keyed form of a packet, one raw value per key in wire order"""
        return [
            ("module", self.tag),
            ("action", _field(lambda w: w.u8(action.code, "action"))),
            ("chain", _field(lambda w: w.chain(chain, "chain"))),
            ("payload", _field(action.encode)),
        ]

    def decode_fields(self, pairs: Iterable[tuple[str, bytes]]) -> tuple[Chain, A]:
        """keyed decode, (key, raw value) pairs in arrival order

        `payload` cannot be interpreted until `action` has been seen, a payload
        that arrives first is rejected rather than buffered.
        """
        seen: set[str] = set()
        code: int | None = None
        chain: Chain | None = None
        action: A | None = None

        for key, raw in pairs:
            if key not in FIELDS:
                raise InvalidDiscriminant("key", key, FIELDS)
            if key in seen:
                raise DuplicateField(key)
            seen.add(key)

            match key:
                case "module":
                    self.check_module(
                        from_bytes(raw, lambda r: r.take(MODULE_SIZE, "module"))
                    )
                case "action":
                    code = from_bytes(raw, lambda r: r.u8("action"))
                case "chain":
                    chain = from_bytes(raw, lambda r: r.chain("chain"))
                case "payload":
                    if code is None:
                        logger.debug("%s payload arrived before its action", self.name)
                        raise PrematurePayload()
                    action = from_bytes(raw, self.action_type(code).decode)

        if "module" not in seen:
            raise MissingField("module")
        if chain is None:
            raise MissingField("chain")
        if action is None:
            raise MissingField("payload")
        return chain, action
