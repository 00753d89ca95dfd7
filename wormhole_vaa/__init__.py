from . import consts, core, errors, onchain, token_bridge
from .chain import Chain
from .codec import (
    Address,
    Amount,
    GuardianAddress,
    Reader,
    Writer,
    from_bytes,
    from_bytes_with_payload,
    to_bytes,
)
from .digest import Digest, keccak256
from .governance import GovernanceModule
from .guardian import GuardianSetInfo, quorum, verify_signatures
from .options import DEFAULT_OPTIONS, DecodeOptions
from .payload import Payload, PayloadDecoder, RawPayload
from .vaa import Body, Header, Signature, Vaa, signed_digest

__all__ = [
    "Address",
    "Amount",
    "Body",
    "Chain",
    "DEFAULT_OPTIONS",
    "DecodeOptions",
    "Digest",
    "GovernanceModule",
    "GuardianAddress",
    "GuardianSetInfo",
    "Header",
    "Payload",
    "PayloadDecoder",
    "RawPayload",
    "Reader",
    "Signature",
    "Vaa",
    "Writer",
    "consts",
    "core",
    "errors",
    "from_bytes",
    "from_bytes_with_payload",
    "keccak256",
    "onchain",
    "quorum",
    "signed_digest",
    "to_bytes",
    "token_bridge",
    "verify_signatures",
]
