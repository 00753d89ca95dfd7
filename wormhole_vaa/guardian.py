import dataclasses
import logging
from collections.abc import Callable

from wormhole_vaa.codec import GuardianAddress, Reader, Writer
from wormhole_vaa.consts import MAX_SIGNATURES
from wormhole_vaa.digest import Digest
from wormhole_vaa.errors import LengthExceeded, VerificationError
from wormhole_vaa.vaa import Vaa

__all__ = [
    "GuardianSetInfo",
    "Recover",
    "quorum",
    "verify_signatures",
]

logger = logging.getLogger(__name__)

#: recovers the signer of a 65 byte signature over a 32 byte prehashed message
Recover = Callable[[bytes, bytes], bytes]


def quorum(num_guardians: int) -> int:
    """minimum number of signatures for a VAA to be valid

    More than two thirds of the guardians must sign. Integer arithmetic only,
    the rounding here is what the deployed contracts use.
    """
    if num_guardians < 0:
        raise ValueError(f"guardian set size cannot be negative: {num_guardians}")
    if num_guardians == 0:
        return 0
    return ((num_guardians * 10 // 3) * 2 // 10) + 1


@dataclasses.dataclass(frozen=True)
class GuardianSetInfo:
    #: guardian keys, a signature's index points into this tuple
    addresses: tuple[GuardianAddress, ...]
    #: unix time after which the set may no longer sign, 0 for never.
    #: Local bookkeeping only, it is not part of the wire encoding
    expiration_time: int = dataclasses.field(default=0, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "addresses", tuple(GuardianAddress(a) for a in self.addresses)
        )

    def __len__(self) -> int:
        return len(self.addresses)

    def quorum(self) -> int:
        return quorum(len(self.addresses))

    def encode(self, w: Writer) -> None:
        if len(self.addresses) > MAX_SIGNATURES:
            raise LengthExceeded("guardian set", MAX_SIGNATURES, len(self.addresses))
        w.u8(len(self.addresses), "guardian count")
        for address in self.addresses:
            w.fixed(address, GuardianAddress.size, "guardian address")

    @classmethod
    def decode(cls, r: Reader) -> "GuardianSetInfo":
        count = r.u8("guardian count")
        return cls(
            addresses=tuple(
                r.fixed(GuardianAddress, "guardian address") for _ in range(count)
            )
        )


def verify_signatures(
    vaa: Vaa,
    guardian_set: GuardianSetInfo,
    recover: Recover | None = None,
    *,
    now: int | None = None,
    extra: bytes = b"",
) -> Digest:
    """check a VAA's signatures against a guardian set

    Args:
        vaa: the VAA to check
        guardian_set: the set named by `vaa.guardian_set_index`
        recover: returns the guardian address that produced a signature over
            `Digest.secp256k_hash`. Recovery is supplied by the integrator, without
            it only the structure of the signatures is checked
        now: current unix time, compared with the set's expiration
        extra: opaque payload bytes that follow the body, they are signed too

    Returns:
        the digest the signatures were checked against
    """
    if guardian_set.expiration_time and now is not None:
        if now >= guardian_set.expiration_time:
            raise VerificationError(
                f"guardian set {vaa.guardian_set_index} expired at "
                f"{guardian_set.expiration_time}"
            )

    if len(guardian_set) == 0:
        raise VerificationError("guardian set is empty")
    if not vaa.signatures:
        raise VerificationError("VAA carries no signatures")

    required = guardian_set.quorum()
    if len(vaa.signatures) < required:
        raise VerificationError(
            f"{len(vaa.signatures)} signatures, quorum is {required}"
        )

    previous = -1
    for sig in vaa.signatures:
        if sig.index <= previous:
            raise VerificationError("signatures are not sorted by guardian index")
        if sig.index >= len(guardian_set):
            raise VerificationError(
                f"signature index {sig.index} out of range "
                f"for {len(guardian_set)} guardians"
            )
        previous = sig.index

    digest = vaa.digest(extra)

    if recover is None:
        logger.warning(
            "no signature recovery configured, "
            "signatures on sequence %d were not checked",
            vaa.sequence,
        )
        return digest

    for sig in vaa.signatures:
        signer = bytes(recover(digest.secp256k_hash, sig.signature))
        if signer != guardian_set.addresses[sig.index]:
            raise VerificationError(
                f"signature {sig.index} was made by {signer.hex()}, "
                f"expected {guardian_set.addresses[sig.index].hex()}"
            )
        logger.debug("signature %d verified", sig.index)

    return digest
