import dataclasses
import logging
from typing import Generic

from wormhole_vaa.chain import Chain
from wormhole_vaa.codec import Address, Reader, Writer, from_bytes, to_bytes
from wormhole_vaa.codec import from_bytes_with_payload
from wormhole_vaa.consts import MAX_SIGNATURES, SIGNATURE_SIZE
from wormhole_vaa.digest import Digest
from wormhole_vaa.errors import (
    InvalidSignatureOrder,
    InvalidValue,
    LengthExceeded,
    PayloadError,
)
from wormhole_vaa.options import DEFAULT_OPTIONS, DecodeOptions
from wormhole_vaa.payload import P, PayloadDecoder

__all__ = [
    "Body",
    "Header",
    "Signature",
    "Vaa",
    "signed_digest",
]

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Signature:
    #: Position of the signer in the guardian set
    index: int
    #: Recoverable secp256k1 signature, r ++ s ++ v
    signature: bytes

    def __post_init__(self) -> None:
        if len(self.signature) != SIGNATURE_SIZE:
            raise InvalidValue("signature", self.signature)

    def encode(self, w: Writer) -> None:
        w.u8(self.index, "signature index")
        w.fixed(self.signature, SIGNATURE_SIZE, "signature")

    @classmethod
    def decode(cls, r: Reader) -> "Signature":
        index = r.u8("signature index")
        return cls(index=index, signature=r.take(SIGNATURE_SIZE, "signature"))


@dataclasses.dataclass(frozen=True)
class Header:
    #: Version of VAA
    version: int
    #: Which guardian set to be validated against
    guardian_set_index: int
    #: Signatures in the order they appear on the wire
    signatures: tuple[Signature, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "signatures", tuple(self.signatures))

    def encode(self, w: Writer) -> None:
        if len(self.signatures) > MAX_SIGNATURES:
            raise LengthExceeded("signatures", MAX_SIGNATURES, len(self.signatures))

        w.u8(self.version, "version")
        w.u32(self.guardian_set_index, "guardian_set_index")
        w.u8(len(self.signatures), "signature count")
        for sig in self.signatures:
            sig.encode(w)

    @classmethod
    def decode(cls, r: Reader) -> "Header":
        version = r.u8("version")
        guardian_set_index = r.u32("guardian_set_index")
        # The count has to be read first, it is the only thing that tells us
        # where the header stops and the body begins
        count = r.u8("signature count")
        signatures = tuple(Signature.decode(r) for _ in range(count))

        if r.options.require_sorted_signatures:
            for prev, sig in zip(signatures, signatures[1:]):
                if sig.index <= prev.index:
                    raise InvalidSignatureOrder(prev.index, sig.index)

        return cls(
            version=version,
            guardian_set_index=guardian_set_index,
            signatures=signatures,
        )

    def to_bytes(self) -> bytes:
        return to_bytes(self)

    @classmethod
    def from_bytes(
        cls, data: bytes, options: DecodeOptions = DEFAULT_OPTIONS
    ) -> "Header":
        return from_bytes(data, cls.decode, options)


def _decode_payload(r: Reader, decode_payload: PayloadDecoder[P]) -> P:
    start = r.offset
    # any failure of the payload decoder, VaaError or not, is a payload error
    try:
        return decode_payload(r)
    except Exception as e:
        logger.debug("payload decode failed at offset %d: %s", start, e)
        raise PayloadError(e) from e


@dataclasses.dataclass(frozen=True)
class Body(Generic[P]):
    """The signed part of a VAA"""

    #: TS of message
    timestamp: int
    #: Uniquifying
    nonce: int
    #: The Id of the chain where the message originated
    emitter_chain: Chain
    #: The address of the contract that emitted this message on the origin chain
    emitter_address: Address
    #: Unique integer representing the index, used for dedupe/ordering
    sequence: int
    #: How final the source chain state was when the message was observed
    consistency_level: int
    payload: P

    def __post_init__(self) -> None:
        object.__setattr__(self, "emitter_chain", Chain.from_u16(self.emitter_chain))
        object.__setattr__(self, "emitter_address", Address(self.emitter_address))

    def encode(self, w: Writer) -> None:
        w.u32(self.timestamp, "timestamp")
        w.u32(self.nonce, "nonce")
        w.chain(self.emitter_chain, "emitter_chain")
        w.fixed(self.emitter_address, Address.size, "emitter_address")
        w.u64(self.sequence, "sequence")
        w.u8(self.consistency_level, "consistency_level")
        self.payload.encode(w)

    @classmethod
    def decode(cls, r: Reader, decode_payload: PayloadDecoder[P]) -> "Body[P]":
        return cls(
            timestamp=r.u32("timestamp"),
            nonce=r.u32("nonce"),
            emitter_chain=r.chain("emitter_chain"),
            emitter_address=r.fixed(Address, "emitter_address"),
            sequence=r.u64("sequence"),
            consistency_level=r.u8("consistency_level"),
            payload=_decode_payload(r, decode_payload),
        )

    def to_bytes(self) -> bytes:
        return to_bytes(self)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        decode_payload: PayloadDecoder[P],
        options: DecodeOptions = DEFAULT_OPTIONS,
    ) -> "Body[P]":
        return from_bytes(data, lambda r: cls.decode(r, decode_payload), options)

    def digest(self, extra: bytes = b"") -> Digest:
        """hash of the serialized body followed by `extra`

        `extra` carries trailing bytes the payload type does not own, such as the
        opaque tail of a token bridge transfer with payload.
        """
        return Digest.of(self.to_bytes() + extra)


@dataclasses.dataclass(frozen=True)
class Vaa(Generic[P]):
    """A header and a body, concatenated with no boundary marker"""

    version: int
    guardian_set_index: int
    signatures: tuple[Signature, ...]
    timestamp: int
    nonce: int
    emitter_chain: Chain
    emitter_address: Address
    sequence: int
    consistency_level: int
    payload: P

    def __post_init__(self) -> None:
        object.__setattr__(self, "signatures", tuple(self.signatures))
        object.__setattr__(self, "emitter_chain", Chain.from_u16(self.emitter_chain))
        object.__setattr__(self, "emitter_address", Address(self.emitter_address))

    @classmethod
    def from_parts(cls, header: Header, body: Body[P]) -> "Vaa[P]":
        return cls(
            version=header.version,
            guardian_set_index=header.guardian_set_index,
            signatures=header.signatures,
            timestamp=body.timestamp,
            nonce=body.nonce,
            emitter_chain=body.emitter_chain,
            emitter_address=body.emitter_address,
            sequence=body.sequence,
            consistency_level=body.consistency_level,
            payload=body.payload,
        )

    def header(self) -> Header:
        return Header(
            version=self.version,
            guardian_set_index=self.guardian_set_index,
            signatures=self.signatures,
        )

    def body(self) -> Body[P]:
        return Body(
            timestamp=self.timestamp,
            nonce=self.nonce,
            emitter_chain=self.emitter_chain,
            emitter_address=self.emitter_address,
            sequence=self.sequence,
            consistency_level=self.consistency_level,
            payload=self.payload,
        )

    def encode(self, w: Writer) -> None:
        self.header().encode(w)
        self.body().encode(w)

    @classmethod
    def decode(cls, r: Reader, decode_payload: PayloadDecoder[P]) -> "Vaa[P]":
        header = Header.decode(r)
        body = Body.decode(r, decode_payload)
        return cls.from_parts(header, body)

    def to_bytes(self) -> bytes:
        return to_bytes(self)

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        decode_payload: PayloadDecoder[P],
        options: DecodeOptions = DEFAULT_OPTIONS,
    ) -> "Vaa[P]":
        return from_bytes(data, lambda r: cls.decode(r, decode_payload), options)

    @classmethod
    def from_bytes_with_payload(
        cls,
        data: bytes,
        decode_payload: PayloadDecoder[P],
        options: DecodeOptions = DEFAULT_OPTIONS,
    ) -> tuple["Vaa[P]", bytes]:
        """decode a VAA whose payload leaves an opaque tail, returned alongside it"""
        return from_bytes_with_payload(
            data, lambda r: cls.decode(r, decode_payload), options
        )

    def digest(self, extra: bytes = b"") -> Digest:
        return self.body().digest(extra)


def signed_digest(data: bytes) -> Digest:
    """digest of an encoded VAA, computed over the body bytes exactly as received"""
    r = Reader(data)
    Header.decode(r)
    return Digest.of(r.rest())
