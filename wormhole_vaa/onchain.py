"""PyTeal readers for VAAs received by Algorand applications

The same wire layout as `wormhole_vaa.vaa` and `wormhole_vaa.token_bridge`,
read inside the AVM. Fields carry the names of their Python counterparts.
Signatures are skipped rather than decoded, the core bridge contract is
expected to have checked them already.
"""
from collections.abc import Sequence
from typing import Literal

from pyteal import Assert, Expr, Int, ScratchVar, Seq, Suffix, abi

from wormhole_vaa.consts import SIGNATURE_RECORD_SIZE
from wormhole_vaa.token_bridge import TransferWithPayload

__all__ = [
    "Bytes32",
    "Field",
    "TransferVAA",
    "field_offsets",
    "read_fields",
]

Bytes32 = abi.StaticBytes[Literal[32]]

#: a wire field name and the ABI value it decodes into
Field = tuple[str, abi.BaseType]


def field_offsets(fields: Sequence[Field]) -> list[tuple[str, int, int]]:
    """(name, offset, width) of each field, offsets relative to the first one"""
    layout = []
    offset = 0
    for name, value in fields:
        width = value.type_spec().byte_length_static()
        layout.append((name, offset, width))
        offset += width
    return layout


def read_fields(vaa: Expr, offset: ScratchVar, fields: Sequence[Field]) -> Expr:
    """decode consecutive fixed width fields starting at `offset`, then move
    `offset` past the last of them"""
    layout = field_offsets(fields)
    reads = [
        value.decode(vaa, start_index=offset.load() + Int(start), length=Int(width))
        for (_, value), (_, start, width) in zip(fields, layout)
    ]
    _, last, last_width = layout[-1]
    return Seq(*reads, offset.store(offset.load() + Int(last + last_width)))


class TransferVAA:
    """A token bridge transfer with payload, as delivered to the recipient app"""

    def __init__(self) -> None:
        self.version = abi.Uint8()
        self.guardian_set_index = abi.Uint32()
        self.signature_count = abi.Uint8()

        self.timestamp = abi.Uint32()
        self.nonce = abi.Uint32()
        self.emitter_chain = abi.Uint16()
        self.emitter_address = abi.Address()
        self.sequence = abi.Uint64()
        self.consistency_level = abi.Uint8()

        self.message_type = abi.Uint8()
        self.amount = abi.make(Bytes32)
        self.token_address = abi.Address()
        self.token_chain = abi.Uint16()
        self.recipient = abi.Address()
        self.recipient_chain = abi.Uint16()
        self.sender_address = abi.Address()

        #: bytes after the transfer, addressed to the recipient app
        self.payload = abi.DynamicBytes()

    def header_fields(self) -> list[Field]:
        return [
            ("version", self.version),
            ("guardian_set_index", self.guardian_set_index),
            ("signature_count", self.signature_count),
        ]

    def body_fields(self) -> list[Field]:
        return [
            ("timestamp", self.timestamp),
            ("nonce", self.nonce),
            ("emitter_chain", self.emitter_chain),
            ("emitter_address", self.emitter_address),
            ("sequence", self.sequence),
            ("consistency_level", self.consistency_level),
        ]

    def transfer_fields(self) -> list[Field]:
        return [
            ("message_type", self.message_type),
            ("amount", self.amount),
            ("token_address", self.token_address),
            ("token_chain", self.token_chain),
            ("recipient", self.recipient),
            ("recipient_chain", self.recipient_chain),
            ("sender_address", self.sender_address),
        ]

    def decode(self, vaa: Expr) -> Expr:
        offset = ScratchVar()
        return Seq(
            offset.store(Int(0)),
            read_fields(vaa, offset, self.header_fields()),
            offset.store(
                offset.load()
                + self.signature_count.get() * Int(SIGNATURE_RECORD_SIZE)
            ),
            read_fields(vaa, offset, self.body_fields()),
            read_fields(vaa, offset, self.transfer_fields()),
            Assert(self.message_type.get() == Int(TransferWithPayload.tag)),
            self.payload.set(Suffix(vaa, offset.load())),
        )
