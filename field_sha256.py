"""SHA-256 over field-element bits, one padded preimage at a time.

`FieldSha256` covers both ways the engine is driven:

- resumable: pass `init_state` (an (8, 32) array, e.g. the output of an
  earlier hash) to continue a chain of chunks;
- one-shot: leave it out, or use `FieldSha256.one_shot` / `sha256_field`,
  to start from the standard initial hash values.

Typical use:

    bits = bits_from_hex("00")
    padded, digest_index = sha256_pad(bits, 512)
    state = FieldSha256(padded, digest_index).hash()
    digest_to_hex(state)
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from compress import CHUNK_BITS, initial_state, process_chunk, round_constants
from errors import AlignmentInvariant, StateShapeError
from field import get_field
from field_bits import bits_from_bytes, bits_from_hex, check_state_shape, digest_to_hex
from padding import sha256_pad

logger = logging.getLogger(__name__)


class FieldSha256:
    """SHA-256 hasher over an already padded bit sequence."""

    def __init__(
        self,
        padded_preimage: Sequence[int],
        digest_index: Optional[int] = None,
        init_state=None,
        field=None,
    ) -> None:
        """
        Args:
            padded_preimage: Bits (0/1) whose length is a multiple of 512.
            digest_index: Offset of the 64-bit length field, as returned by
                `sha256_pad`. Kept for callers; compression ignores it.
            init_state: Optional (8, 32) starting state. Its field is used
                when `field` is not given.
            field: Field name, modulus or `galois` field class. Defaults to
                the Pallas base field.
        """
        if init_state is not None:
            check_state_shape(init_state)
            if field is None:
                field = type(init_state)
            elif type(init_state) is not get_field(field):
                raise StateShapeError("init_state is not over the requested field")

        self.field = get_field(field)
        self.padded_preimage = list(padded_preimage)
        self.digest_index = digest_index
        self.state = initial_state(self.field) if init_state is None else init_state.copy()
        self._consumed = False

    @classmethod
    def one_shot(cls, padded_preimage: Sequence[int], field=None) -> "FieldSha256":
        """Hasher that starts from the standard initial hash values."""
        return cls(padded_preimage, field=field)

    def _chunks(self):
        for i in range(0, len(self.padded_preimage), CHUNK_BITS):
            yield self.padded_preimage[i : i + CHUNK_BITS]

    def _run(self, track: bool) -> Tuple[object, List]:
        if self._consumed:
            raise RuntimeError("FieldSha256.hash() can only be called once per instance")
        self._consumed = True

        if len(self.padded_preimage) % CHUNK_BITS != 0:
            raise AlignmentInvariant(
                f"Input must be padded to {CHUNK_BITS}-bit blocks, got {len(self.padded_preimage)} bits"
            )

        ks = round_constants(self.field)
        n_chunks = len(self.padded_preimage) // CHUNK_BITS
        trace = []
        for idx, chunk in enumerate(self._chunks()):
            logger.debug("compressing chunk %d/%d", idx + 1, n_chunks)
            process_chunk(self.state, chunk, ks)
            if track:
                trace.append(self.state.copy())

        return self.state, trace

    def hash(self):
        """Compress every chunk in order and return the final (8, 32) state."""
        state, _ = self._run(track=False)
        return state

    def hash_with_trace(self):
        """Like `hash`, also returning the state after each chunk.

        Returns:
            (final_state, states_per_chunk)
        """
        return self._run(track=True)


def sha256_field(padded_preimage: Sequence[int], field=None):
    """One-shot hash of a padded preimage; returns the (8, 32) state."""
    return FieldSha256.one_shot(padded_preimage, field=field).hash()


def sha256_hex(data: bytes, max_bits: Optional[int] = None, field=None) -> str:
    """Pad, hash and format `data` in one call."""
    padded, _ = sha256_pad(bits_from_bytes(data), max_bits)
    return digest_to_hex(sha256_field(padded, field=field))


def sha256_hex_from_hex(hex_str: str, max_bits: Optional[int] = None, field=None) -> str:
    """Same as `sha256_hex` for hex-encoded input."""
    padded, _ = sha256_pad(bits_from_hex(hex_str), max_bits)
    return digest_to_hex(sha256_field(padded, field=field))
