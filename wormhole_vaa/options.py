import dataclasses

__all__ = [
    "DecodeOptions",
    "DEFAULT_OPTIONS",
]


@dataclasses.dataclass(frozen=True, kw_only=True)
class DecodeOptions:
    allow_trailing_bytes: bool = False
    """When `True`, `from_bytes` ignores bytes left over after the value has been
        decoded instead of raising `TrailingBytes`. Defaults to `False`."""
    require_sorted_signatures: bool = False
    """When `True`, a header whose signatures are not strictly ascending by
        guardian index is rejected with `InvalidSignatureOrder`.
        Signatures are never re-sorted. Defaults to `False`."""


DEFAULT_OPTIONS = DecodeOptions()
