"""Token bridge payloads

Token bridging relies on VAAs that record custody, lockup or burn events so token
supply stays consistent across chains. This module reads and writes those
messages, and the governance actions the token bridge accepts: chain
registrations and contract upgrades.
"""
import dataclasses
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import ClassVar, TypeAlias

from wormhole_vaa.chain import Chain
from wormhole_vaa.codec import (
    Address,
    Amount,
    Reader,
    Writer,
    from_bytes,
    from_bytes_with_payload,
    to_bytes,
)
from wormhole_vaa.consts import TOKEN_BRIDGE_MODULE
from wormhole_vaa.errors import InvalidDiscriminant
from wormhole_vaa.governance import GovernanceModule

__all__ = [
    "Action",
    "AssetMeta",
    "ContractUpgrade",
    "GovernancePacket",
    "MODULE",
    "Message",
    "RegisterChain",
    "Transfer",
    "TransferWithPayload",
    "decode_message",
    "parse_message",
    "parse_message_with_payload",
]


def _check_tag(r: Reader, expected: int) -> None:
    tag = r.u8("message type")
    if tag != expected:
        raise InvalidDiscriminant("message type", tag, (expected,))


@dataclasses.dataclass(frozen=True)
class Transfer:
    tag: ClassVar[int] = 1

    #: amount of transfer
    amount: Amount
    #: asset transferred
    token_address: Address
    #: Id of the chain the token originated
    token_chain: Chain
    #: Receiver of the token transfer
    recipient: Address
    #: Id of the chain where the token transfer should be redeemed
    recipient_chain: Chain
    #: Amount to pay relayer
    fee: Amount

    def encode(self, w: Writer) -> None:
        w.u8(self.tag, "message type")
        w.fixed(self.amount, Amount.size, "amount")
        w.fixed(self.token_address, Address.size, "token_address")
        w.chain(self.token_chain, "token_chain")
        w.fixed(self.recipient, Address.size, "recipient")
        w.chain(self.recipient_chain, "recipient_chain")
        w.fixed(self.fee, Amount.size, "fee")

    @classmethod
    def decode(cls, r: Reader) -> "Transfer":
        _check_tag(r, cls.tag)
        return cls._decode_fields(r)

    @classmethod
    def _decode_fields(cls, r: Reader) -> "Transfer":
        return cls(
            amount=r.fixed(Amount, "amount"),
            token_address=r.fixed(Address, "token_address"),
            token_chain=r.chain("token_chain"),
            recipient=r.fixed(Address, "recipient"),
            recipient_chain=r.chain("recipient_chain"),
            fee=r.fixed(Amount, "fee"),
        )


@dataclasses.dataclass(frozen=True)
class AssetMeta:
    """Attestation of a token, sent once so the token can be wrapped elsewhere"""

    tag: ClassVar[int] = 2

    token_address: Address
    token_chain: Chain
    decimals: int
    #: zero padded to 32 bytes on the wire
    symbol: bytes
    #: zero padded to 32 bytes on the wire
    name: bytes

    def __post_init__(self) -> None:
        for field in ("symbol", "name"):
            value = getattr(self, field)
            if isinstance(value, str):
                object.__setattr__(self, field, value.encode("utf-8"))

    def encode(self, w: Writer) -> None:
        w.u8(self.tag, "message type")
        w.fixed(self.token_address, Address.size, "token_address")
        w.chain(self.token_chain, "token_chain")
        w.u8(self.decimals, "decimals")
        w.array_string(self.symbol, "symbol")
        w.array_string(self.name, "name")

    @classmethod
    def decode(cls, r: Reader) -> "AssetMeta":
        _check_tag(r, cls.tag)
        return cls._decode_fields(r)

    @classmethod
    def _decode_fields(cls, r: Reader) -> "AssetMeta":
        return cls(
            token_address=r.fixed(Address, "token_address"),
            token_chain=r.chain("token_chain"),
            decimals=r.u8("decimals"),
            symbol=r.array_string("symbol"),
            name=r.array_string("name"),
        )


@dataclasses.dataclass(frozen=True)
class TransferWithPayload:
    """A transfer followed by an arbitrary payload for the recipient contract

    The payload is appended directly after `sender_address` and belongs to no
    field here; decode with `parse_message_with_payload` or
    `Vaa.from_bytes_with_payload` to get it back.
    """

    tag: ClassVar[int] = 3

    amount: Amount
    token_address: Address
    token_chain: Chain
    recipient: Address
    recipient_chain: Chain
    #: Address that sent the transfer
    sender_address: Address

    def encode(self, w: Writer) -> None:
        w.u8(self.tag, "message type")
        w.fixed(self.amount, Amount.size, "amount")
        w.fixed(self.token_address, Address.size, "token_address")
        w.chain(self.token_chain, "token_chain")
        w.fixed(self.recipient, Address.size, "recipient")
        w.chain(self.recipient_chain, "recipient_chain")
        w.fixed(self.sender_address, Address.size, "sender_address")

    @classmethod
    def decode(cls, r: Reader) -> "TransferWithPayload":
        _check_tag(r, cls.tag)
        return cls._decode_fields(r)

    @classmethod
    def _decode_fields(cls, r: Reader) -> "TransferWithPayload":
        return cls(
            amount=r.fixed(Amount, "amount"),
            token_address=r.fixed(Address, "token_address"),
            token_chain=r.chain("token_chain"),
            recipient=r.fixed(Address, "recipient"),
            recipient_chain=r.chain("recipient_chain"),
            sender_address=r.fixed(Address, "sender_address"),
        )


Message: TypeAlias = Transfer | AssetMeta | TransferWithPayload

MESSAGE_TYPES: Mapping[int, type[Message]] = MappingProxyType(
    {t.tag: t for t in (Transfer, AssetMeta, TransferWithPayload)}
)


def decode_message(r: Reader) -> Message:
    tag = r.u8("message type")
    try:
        message_type = MESSAGE_TYPES[tag]
    except KeyError:
        raise InvalidDiscriminant("message type", tag, tuple(MESSAGE_TYPES)) from None
    return message_type._decode_fields(r)


def parse_message(data: bytes) -> Message:
    return from_bytes(data, decode_message)


def parse_message_with_payload(data: bytes) -> tuple[Message, bytes]:
    return from_bytes_with_payload(data, decode_message)


@dataclasses.dataclass(frozen=True)
class RegisterChain:
    code: ClassVar[int] = 1

    #: chain the registered token bridge lives on
    chain: Chain
    #: address of that token bridge
    emitter_address: Address

    def encode(self, w: Writer) -> None:
        w.chain(self.chain, "emitter_chain")
        w.fixed(self.emitter_address, Address.size, "emitter_address")

    @classmethod
    def decode(cls, r: Reader) -> "RegisterChain":
        return cls(
            chain=r.chain("emitter_chain"),
            emitter_address=r.fixed(Address, "emitter_address"),
        )


@dataclasses.dataclass(frozen=True)
class ContractUpgrade:
    code: ClassVar[int] = 2

    new_contract: Address

    def encode(self, w: Writer) -> None:
        w.fixed(self.new_contract, Address.size, "new_contract")

    @classmethod
    def decode(cls, r: Reader) -> "ContractUpgrade":
        return cls(new_contract=r.fixed(Address, "new_contract"))


Action: TypeAlias = RegisterChain | ContractUpgrade

MODULE: GovernanceModule[Action] = GovernanceModule(
    TOKEN_BRIDGE_MODULE, (RegisterChain, ContractUpgrade)
)


@dataclasses.dataclass(frozen=True)
class GovernancePacket:
    #: chain the action is addressed to, ANY for every chain
    chain: Chain
    action: Action

    def encode(self, w: Writer) -> None:
        MODULE.encode_packet(w, self.chain, self.action)

    @classmethod
    def decode(cls, r: Reader) -> "GovernancePacket":
        chain, action = MODULE.decode_packet(r)
        return cls(chain=chain, action=action)

    def to_bytes(self) -> bytes:
        return to_bytes(self)

    @classmethod
    def from_bytes(cls, data: bytes) -> "GovernancePacket":
        return from_bytes(data, cls.decode)

    def to_fields(self) -> list[tuple[str, bytes]]:
        return MODULE.encode_fields(self.chain, self.action)

    @classmethod
    def from_fields(cls, pairs: Iterable[tuple[str, bytes]]) -> "GovernancePacket":
        chain, action = MODULE.decode_fields(pairs)
        return cls(chain=chain, action=action)
