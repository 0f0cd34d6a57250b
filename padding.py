"""SHA-256 message padding at bit granularity.

The message is padded as FIPS 180-4 prescribes (a '1' bit, zeros up to
448 mod 512, the 64-bit big-endian bit length) and then, optionally, with
more zero bits up to a fixed capacity `max_bits`. The second step gives
statically sized buffers; the returned digest index tells where the genuine
padded content stops and the filler begins.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from errors import CapacityError
from field_bits import int_to_bits_be

BLOCK_BITS = 512
LENGTH_FIELD_BITS = 64


def minimal_padded_length(bit_length: int) -> int:
    """Length in bits of a `bit_length`-bit message after minimal padding."""
    # Message, the '1' marker and the length field, rounded up to a block.
    blocks = (bit_length + 1 + LENGTH_FIELD_BITS + BLOCK_BITS - 1) // BLOCK_BITS
    return blocks * BLOCK_BITS


def sha256_pad(input_bits: Sequence[int], max_bits: Optional[int] = None) -> Tuple[List[int], int]:
    """Pad `input_bits` for SHA-256 and zero-fill to `max_bits`.

    Args:
        input_bits: The message bits (0/1 ints), most significant first.
        max_bits: Total length of the returned bit list. Defaults to the
            minimally padded length.

    Returns:
        (padded_bits, digest_index) where `digest_index` is the offset of the
        embedded 64-bit length field.

    Raises:
        CapacityError: if `max_bits` is smaller than the minimally padded
            length of the message.
    """
    padded = list(input_bits)
    bit_length = len(padded)
    padded.append(1)

    while len(padded) % BLOCK_BITS != BLOCK_BITS - LENGTH_FIELD_BITS:
        padded.append(0)
    padded.extend(int_to_bits_be(bit_length, LENGTH_FIELD_BITS))

    assert len(padded) % BLOCK_BITS == 0, "Padding did not complete a block"

    pre_pad_len = len(padded)
    digest_index = pre_pad_len - LENGTH_FIELD_BITS

    if max_bits is None:
        max_bits = pre_pad_len
    if max_bits < pre_pad_len:
        raise CapacityError(max_bits, pre_pad_len)

    padded.extend([0] * (max_bits - pre_pad_len))
    return padded, digest_index
