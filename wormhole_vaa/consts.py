from typing import Final

#: Size of an emitter, token or contract address on the wire
ADDRESS_SIZE: Final[int] = 32
#: Size of a uint256 amount on the wire
AMOUNT_SIZE: Final[int] = 32
#: Size of a guardian (ethereum style) address
GUARDIAN_ADDRESS_SIZE: Final[int] = 20
#: Size of a recoverable secp256k1 signature (r, s, v)
SIGNATURE_SIZE: Final[int] = 65
#: Size of one signature record in the header, guardian index + signature
SIGNATURE_RECORD_SIZE: Final[int] = 1 + SIGNATURE_SIZE
#: Size of a zero padded string, used for token symbols and names
ARRAY_STRING_SIZE: Final[int] = 32
#: Size of the module tag that prefixes a governance packet
MODULE_SIZE: Final[int] = 32

#: Largest number of signatures a header can carry, the count is a single byte
MAX_SIGNATURES: Final[int] = 0xFF

#: version, guardian_set_index, signature count
HEADER_FIXED_SIZE: Final[int] = 1 + 4 + 1
#: timestamp, nonce, emitter_chain, emitter_address, sequence, consistency_level
BODY_FIXED_SIZE: Final[int] = 4 + 4 + 2 + ADDRESS_SIZE + 8 + 1
#: message type, amount, token address and chain, recipient and chain, sender
TRANSFER_WITH_PAYLOAD_FIXED_SIZE: Final[int] = (
    1 + AMOUNT_SIZE + ADDRESS_SIZE + 2 + ADDRESS_SIZE + 2 + ADDRESS_SIZE
)

#: Only VAA version currently produced by the guardians
VAA_VERSION: Final[int] = 1

#: Governance module handled by the token bridge
TOKEN_BRIDGE_MODULE: Final[str] = "TokenBridge"
#: Governance module handled by the core bridge
CORE_MODULE: Final[str] = "Core"

#: The emitter address of governance VAAs, published from the Solana chain
GOVERNANCE_EMITTER: Final[bytes] = bytes(ADDRESS_SIZE - 1) + b"\x04"
