from enum import IntEnum
from typing import Any

__all__ = [
    "Chain",
]

U16_MAX = 0xFFFF


class Chain(IntEnum):
    """Wormhole chain ids

    Ids that are not listed here still decode, as a `Chain` named UNKNOWN
    carrying the raw id, so messages from chains added after this release
    can be read and re-encoded unchanged.
    """

    ANY = 0
    SOLANA = 1
    ETHEREUM = 2
    TERRA = 3
    BSC = 4
    POLYGON = 5
    AVALANCHE = 6
    OASIS = 7
    ALGORAND = 8
    AURORA = 9
    FANTOM = 10
    KARURA = 11
    ACALA = 12
    KLAYTN = 13
    CELO = 14
    NEAR = 15
    MOONBEAM = 16
    NEON = 17
    TERRA2 = 18
    INJECTIVE = 19
    OSMOSIS = 20
    SUI = 21
    APTOS = 22
    ARBITRUM = 23
    OPTIMISM = 24
    GNOSIS = 25
    PYTHNET = 26
    XPLA = 28
    BTC = 29
    BASE = 30
    SEI = 32
    WORMCHAIN = 3104
    SEPOLIA = 10002

    @classmethod
    def _missing_(cls, value: Any) -> "Chain | None":
        if isinstance(value, int) and 0 <= value <= U16_MAX:
            unknown = int.__new__(cls, value)
            unknown._name_ = "UNKNOWN"
            unknown._value_ = value
            return unknown
        return None

    @classmethod
    def from_u16(cls, value: int) -> "Chain":
        """map a wire id to a chain, ids without a name become UNKNOWN"""
        return cls(value)

    @classmethod
    def parse(cls, text: str) -> "Chain":
        """parse a chain from its name (any case) or its decimal id"""
        text = text.strip()
        if text.isdigit():
            return cls.from_u16(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"unknown chain: {text!r}") from None

    def to_u16(self) -> int:
        return int(self)

    @property
    def is_known(self) -> bool:
        return self._name_ != "UNKNOWN"
