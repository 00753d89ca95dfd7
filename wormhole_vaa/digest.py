import dataclasses

from Cryptodome.Hash import keccak

__all__ = [
    "Digest",
    "keccak256",
]


def keccak256(data: bytes) -> bytes:
    m = keccak.new(digest_bits=256)
    m.update(data)
    return m.digest()


@dataclasses.dataclass(frozen=True)
class Digest:
    """The hash guardians sign over a serialized body

    `secp256k_hash` is `hash` hashed once more, which is the value the
    secp256k1 recovery primitive actually operates on.
    """

    #: keccak256 of the serialized body
    hash: bytes
    #: keccak256 of `hash`
    secp256k_hash: bytes

    @classmethod
    def of(cls, body: bytes) -> "Digest":
        h = keccak256(body)
        return cls(hash=h, secp256k_hash=keccak256(h))
