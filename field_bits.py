"""Conversions between hex, bytes, integers, bit lists and field-element words.

Bit lists are plain Python lists of 0/1 ints, most significant bit first.
Words are `galois` arrays of shape (32,), states are arrays of shape (8, 32).
"""

from __future__ import annotations

import binascii
from typing import List, Sequence

import numpy as np

from errors import DecodeError, StateShapeError

WORD_BITS = 32
STATE_WORDS = 8


def bits_from_bytes(data: bytes) -> List[int]:
    """Expand bytes into bits, most significant bit of each byte first."""
    return [(byte >> i) & 1 for byte in data for i in range(7, -1, -1)]


def bytes_from_hex(hex_str: str) -> bytes:
    """Decode a hex string.

    Raises:
        DecodeError: if `hex_str` has odd length or a non-hex character.
    """
    try:
        return binascii.unhexlify(hex_str)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Invalid hex {hex_str!r}: {exc}") from exc


def bits_from_hex(hex_str: str) -> List[int]:
    """Decode a hex string into bits (big-endian)."""
    return bits_from_bytes(bytes_from_hex(hex_str))


def int_to_bits_be(n: int, width: int) -> List[int]:
    """Encode `n` as `width` big-endian bits.

    Bits above `width` are dropped; callers pick `width` so that
    `n < 2**width`.
    """
    return [(n >> (width - 1 - i)) & 1 for i in range(width)]


def bits_to_field(bits: Sequence[int], n: int, field):
    """Lift the first `n` bits into an array of `n` field elements.

    Positions past the end of `bits` are zero.
    """
    values = [0] * n
    for i, bit in enumerate(bits[:n]):
        values[i] = bit
    return field(values)


def word_from_int(value: int, field):
    """Field-encode a 32-bit unsigned integer as a Word."""
    return bits_to_field(int_to_bits_be(value, WORD_BITS), WORD_BITS, field)


def words_from_ints(values: Sequence[int], field):
    """Field-encode a sequence of 32-bit integers as a (len, 32) array."""
    return field([int_to_bits_be(v, WORD_BITS) for v in values])


def bits_to_u32(word) -> int:
    """Read a Word back as an unsigned 32-bit integer.

    Any non-zero element counts as a 1 bit.
    """
    value = 0
    for i, bit in enumerate(word):
        if int(bit) != 0:
            value |= 1 << (WORD_BITS - 1 - i)
    return value


def check_state_shape(state) -> None:
    """Raise `StateShapeError` unless `state` is 8 words of 32 bits."""
    if np.shape(state) != (STATE_WORDS, WORD_BITS):
        raise StateShapeError(
            f"State must have shape ({STATE_WORDS}, {WORD_BITS}), got {np.shape(state)}"
        )


def state_from_ints(values: Sequence[int], field):
    """Build an 8-word State from eight 32-bit integers."""
    if len(values) != STATE_WORDS:
        raise StateShapeError(f"State must have {STATE_WORDS} words, got {len(values)}")
    for v in values:
        if not 0 <= v <= 0xFFFFFFFF:
            raise StateShapeError(f"State word out of range: {v:#x}")
    return words_from_ints(values, field)


def state_to_ints(state) -> List[int]:
    """Read each word of a State back as an integer."""
    check_state_shape(state)
    return [bits_to_u32(word) for word in state]


def digest_to_hex(state) -> str:
    """Format a final State as the 64-digit lowercase SHA-256 hex digest."""
    return "".join(f"{word:08x}" for word in state_to_ints(state))


def digest_to_bytes(state) -> bytes:
    """Format a final State as the 32-byte SHA-256 digest."""
    return b"".join(word.to_bytes(4, byteorder="big") for word in state_to_ints(state))
