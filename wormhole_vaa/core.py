"""Core bridge governance

Actions addressed to the core bridge contract: upgrading it, rotating the
guardian set, and managing message fees.
"""
import dataclasses
from collections.abc import Iterable
from typing import ClassVar, TypeAlias

from wormhole_vaa.chain import Chain
from wormhole_vaa.codec import Address, Amount, Reader, Writer, from_bytes, to_bytes
from wormhole_vaa.consts import CORE_MODULE
from wormhole_vaa.governance import GovernanceModule
from wormhole_vaa.guardian import GuardianSetInfo

__all__ = [
    "Action",
    "ContractUpgrade",
    "GovernancePacket",
    "GuardianSetUpgrade",
    "MODULE",
    "SetMessageFee",
    "TransferFees",
]


@dataclasses.dataclass(frozen=True)
class ContractUpgrade:
    code: ClassVar[int] = 1

    new_contract: Address

    def encode(self, w: Writer) -> None:
        w.fixed(self.new_contract, Address.size, "new_contract")

    @classmethod
    def decode(cls, r: Reader) -> "ContractUpgrade":
        return cls(new_contract=r.fixed(Address, "new_contract"))


@dataclasses.dataclass(frozen=True)
class GuardianSetUpgrade:
    code: ClassVar[int] = 2

    new_guardian_set_index: int
    new_guardian_set: GuardianSetInfo

    def encode(self, w: Writer) -> None:
        w.u32(self.new_guardian_set_index, "new_guardian_set_index")
        self.new_guardian_set.encode(w)

    @classmethod
    def decode(cls, r: Reader) -> "GuardianSetUpgrade":
        return cls(
            new_guardian_set_index=r.u32("new_guardian_set_index"),
            new_guardian_set=GuardianSetInfo.decode(r),
        )


@dataclasses.dataclass(frozen=True)
class SetMessageFee:
    code: ClassVar[int] = 3

    fee: Amount

    def encode(self, w: Writer) -> None:
        w.fixed(self.fee, Amount.size, "fee")

    @classmethod
    def decode(cls, r: Reader) -> "SetMessageFee":
        return cls(fee=r.fixed(Amount, "fee"))


@dataclasses.dataclass(frozen=True)
class TransferFees:
    code: ClassVar[int] = 4

    amount: Amount
    recipient: Address

    def encode(self, w: Writer) -> None:
        w.fixed(self.amount, Amount.size, "amount")
        w.fixed(self.recipient, Address.size, "recipient")

    @classmethod
    def decode(cls, r: Reader) -> "TransferFees":
        return cls(
            amount=r.fixed(Amount, "amount"),
            recipient=r.fixed(Address, "recipient"),
        )


Action: TypeAlias = ContractUpgrade | GuardianSetUpgrade | SetMessageFee | TransferFees

MODULE: GovernanceModule[Action] = GovernanceModule(
    CORE_MODULE, (ContractUpgrade, GuardianSetUpgrade, SetMessageFee, TransferFees)
)


@dataclasses.dataclass(frozen=True)
class GovernancePacket:
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
