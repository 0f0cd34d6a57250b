"""Error kinds raised by the field-native SHA-256 modules.

All of them are precondition or invariant violations. Only `DecodeError`
(and `CapacityError` when the capacity comes from a user) is expected from
outside input; the invariant errors signal a bug in the caller.
"""

from __future__ import annotations


class FieldShaError(Exception):
    """Base class for every error raised by this package."""


class DecodeError(FieldShaError, ValueError):
    """Input is not valid hexadecimal (odd length or non-hex characters)."""


class CapacityError(FieldShaError, ValueError):
    """Requested `max_bits` cannot hold the minimally padded message."""

    def __init__(self, max_bits: int, required_bits: int) -> None:
        super().__init__(
            f"max_bits={max_bits} is smaller than the minimally padded "
            f"length {required_bits}"
        )
        self.max_bits = max_bits
        self.required_bits = required_bits


class StateShapeError(FieldShaError, ValueError):
    """An initial state is not 8 words of 32 bits."""


class ChunkSizeInvariant(FieldShaError, AssertionError):
    """A chunk handed to the compression core is not exactly 512 bits."""


class AlignmentInvariant(FieldShaError, AssertionError):
    """A padded preimage length is not a multiple of 512 bits."""
