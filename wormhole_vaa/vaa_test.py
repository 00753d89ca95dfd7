import dataclasses

import pytest

from wormhole_vaa.chain import Chain
from wormhole_vaa.codec import Address, Reader
from wormhole_vaa.consts import GOVERNANCE_EMITTER
from wormhole_vaa.digest import Digest, keccak256
from wormhole_vaa.errors import (
    BufferUnderrun,
    InvalidSignatureOrder,
    InvalidValue,
    LengthExceeded,
    PayloadError,
    TrailingBytes,
    UnknownModule,
)
from wormhole_vaa.options import DecodeOptions
from wormhole_vaa.payload import RawPayload
from wormhole_vaa.token_bridge import GovernancePacket, RegisterChain
from wormhole_vaa.vaa import Body, Header, Signature, Vaa, signed_digest


def make_signature(index: int) -> Signature:
    return Signature(index=index, signature=bytes([index]) * 65)


def make_vaa(payload=RawPayload(b"hello wormhole"), signers=(0, 1, 2)) -> Vaa:
    return Vaa(
        version=1,
        guardian_set_index=3,
        signatures=[make_signature(i) for i in signers],
        timestamp=1_650_000_000,
        nonce=42,
        emitter_chain=Chain.ETHEREUM,
        emitter_address=Address.left_pad(
            bytes.fromhex("3ee18b2214aff97000d974cf647e7c347e8fa585")
        ),
        sequence=2**40 + 7,
        consistency_level=15,
        payload=payload,
    )


def test_header_layout():
    header = Header(
        version=1, guardian_set_index=0x01020304, signatures=[make_signature(9)]
    )
    encoded = header.to_bytes()
    assert encoded[:6] == bytes.fromhex("01" "01020304" "01")
    assert encoded[6] == 9
    assert encoded[7:] == bytes([9]) * 65
    assert Header.from_bytes(encoded) == header


def test_body_layout():
    body = make_vaa().body()
    encoded = body.to_bytes()
    assert encoded[:4] == (1_650_000_000).to_bytes(4, "big")
    assert encoded[4:8] == (42).to_bytes(4, "big")
    assert encoded[8:10] == b"\x00\x02"
    assert encoded[10:42] == body.emitter_address
    assert encoded[42:50] == (2**40 + 7).to_bytes(8, "big")
    assert encoded[50] == 15
    assert encoded[51:] == b"hello wormhole"
    assert Body.from_bytes(encoded, RawPayload.decode) == body


def test_vaa_round_trip():
    vaa = make_vaa()
    encoded = vaa.to_bytes()
    decoded = Vaa.from_bytes(encoded, RawPayload.decode)
    assert decoded == vaa
    assert decoded.to_bytes() == encoded


def test_flattened_matches_separate_chunks():
    vaa = make_vaa()
    assert vaa.to_bytes() == vaa.header().to_bytes() + vaa.body().to_bytes()
    assert Vaa.from_parts(vaa.header(), vaa.body()) == vaa


def test_empty_signatures():
    vaa = make_vaa(signers=())
    encoded = vaa.to_bytes()
    assert encoded[5] == 0
    assert Vaa.from_bytes(encoded, RawPayload.decode) == vaa


def test_constructor_normalizes_fields():
    vaa = make_vaa()
    assert isinstance(vaa.signatures, tuple)
    assert isinstance(vaa.emitter_chain, Chain)
    assert isinstance(vaa.emitter_address, Address)

    with pytest.raises(InvalidValue):
        dataclasses.replace(vaa, emitter_address=b"\x01" * 20)
    with pytest.raises(InvalidValue):
        Signature(index=0, signature=bytes(64))


def test_too_many_signatures():
    vaa = make_vaa(signers=[i % 256 for i in range(256)])
    with pytest.raises(LengthExceeded):
        vaa.to_bytes()


TRUNCATION_TESTS = [
    (0, "version"),
    (3, "guardian_set_index"),
    (5, "signature count"),
    (20, "signature"),
    (206, "timestamp"),
    (220, "emitter_address"),
]


@pytest.mark.parametrize("cut, field", TRUNCATION_TESTS)
def test_truncated_vaa_names_missing_field(cut: int, field: str):
    encoded = make_vaa().to_bytes()
    with pytest.raises(BufferUnderrun) as e:
        Vaa.from_bytes(encoded[:cut], RawPayload.decode)
    assert e.value.field == field


def test_payload_failure_is_wrapped():
    encoded = make_vaa().to_bytes()
    with pytest.raises(PayloadError) as e:
        Vaa.from_bytes(encoded, GovernancePacket.decode)
    assert isinstance(e.value.inner, (UnknownModule, BufferUnderrun))


def strict_utf8_payload(r: Reader) -> RawPayload:
    data = r.rest()
    data.decode("utf-8")
    return RawPayload(data)


def test_foreign_payload_failure_is_wrapped():
    encoded = make_vaa(payload=RawPayload(b"\xff\xfe")).to_bytes()
    with pytest.raises(PayloadError) as e:
        Vaa.from_bytes(encoded, strict_utf8_payload)
    assert isinstance(e.value.inner, UnicodeDecodeError)
    assert isinstance(e.value.__cause__, ValueError)

    # envelope errors are still raised as they are
    with pytest.raises(BufferUnderrun):
        Vaa.from_bytes(encoded[:10], strict_utf8_payload)


def test_truncated_payload_is_a_payload_error():
    packet = GovernancePacket(
        chain=Chain.ANY,
        action=RegisterChain(chain=Chain.SOLANA, emitter_address=Address.zero()),
    )
    encoded = make_vaa(payload=packet).to_bytes()
    with pytest.raises(PayloadError) as e:
        Vaa.from_bytes(encoded[:-1], GovernancePacket.decode)
    assert isinstance(e.value.inner, BufferUnderrun)
    assert e.value.inner.field == "emitter_address"


def test_trailing_bytes():
    packet = GovernancePacket(
        chain=Chain.ANY,
        action=RegisterChain(chain=Chain.SOLANA, emitter_address=Address.zero()),
    )
    encoded = make_vaa(payload=packet).to_bytes() + b"\xff"
    with pytest.raises(TrailingBytes):
        Vaa.from_bytes(encoded, GovernancePacket.decode)

    decoded, rest = Vaa.from_bytes_with_payload(encoded, GovernancePacket.decode)
    assert decoded.payload == packet
    assert rest == b"\xff"


def test_signature_order_is_preserved():
    vaa = make_vaa(signers=(4, 1, 2))
    decoded = Vaa.from_bytes(vaa.to_bytes(), RawPayload.decode)
    assert [s.index for s in decoded.signatures] == [4, 1, 2]

    strict = DecodeOptions(require_sorted_signatures=True)
    with pytest.raises(InvalidSignatureOrder) as e:
        Vaa.from_bytes(vaa.to_bytes(), RawPayload.decode, strict)
    assert (e.value.previous, e.value.index) == (4, 1)

    with pytest.raises(InvalidSignatureOrder):
        Header.from_bytes(make_vaa(signers=(1, 1)).header().to_bytes(), strict)

    ordered = make_vaa(signers=(0, 5, 18))
    assert Vaa.from_bytes(ordered.to_bytes(), RawPayload.decode, strict) == ordered


def test_digest():
    vaa = make_vaa()
    digest = vaa.digest()
    assert digest == Digest(
        hash=keccak256(vaa.body().to_bytes()),
        secp256k_hash=keccak256(keccak256(vaa.body().to_bytes())),
    )
    assert vaa.digest() == digest
    assert vaa.body().digest() == digest
    assert len(digest.hash) == 32
    assert len(digest.secp256k_hash) == 32


def test_digest_ignores_header():
    vaa = make_vaa()
    resigned = dataclasses.replace(
        vaa, guardian_set_index=4, signatures=[make_signature(7)]
    )
    assert resigned.digest() == vaa.digest()


def test_digest_changes_with_emitter():
    vaa = make_vaa()
    flipped = bytearray(vaa.emitter_address)
    flipped[-1] ^= 0x01
    other = dataclasses.replace(vaa, emitter_address=bytes(flipped))
    assert other.digest().hash != vaa.digest().hash
    assert other.digest().secp256k_hash != vaa.digest().secp256k_hash


def test_digest_extra():
    vaa = make_vaa(payload=RawPayload(b"ab"))
    split = make_vaa(payload=RawPayload(b"a"))
    assert split.digest(b"b") == vaa.digest()


def test_signed_digest():
    vaa = make_vaa()
    assert signed_digest(vaa.to_bytes()) == vaa.digest()
    assert signed_digest(vaa.to_bytes() + b"tail") == vaa.digest(b"tail")


def test_governance_vaa():
    packet = GovernancePacket(
        chain=Chain.ANY,
        action=RegisterChain(
            chain=Chain.ALGORAND, emitter_address=Address(bytes(range(32)))
        ),
    )
    vaa = dataclasses.replace(
        make_vaa(payload=packet),
        emitter_chain=Chain.SOLANA,
        emitter_address=GOVERNANCE_EMITTER,
    )
    r = Reader(vaa.to_bytes())
    decoded = Vaa.decode(r, GovernancePacket.decode)
    assert r.remaining == 0
    assert decoded == vaa
    assert decoded.payload.action.chain is Chain.ALGORAND
