"""SHA-256 compression over field-element bits.

Each 512-bit chunk goes through:

    W[0..15]  = the chunk split into 16 words
    W[16..63] = σ1(W[i-2]) + W[i-7] + σ0(W[i-15]) + W[i-16]

followed by 64 rounds of

    S1    = (e >>> 6) ^ (e >>> 11) ^ (e >>> 25)
    ch    = (e & f) ^ (~e & g)
    temp1 = h + S1 + ch + k + w

    S0    = (a >>> 2) ^ (a >>> 13) ^ (a >>> 22)
    maj   = (a & b) ^ (a & c) ^ (b & c)
    temp2 = S0 + maj

    (a, b, c, d, e, f, g, h) = (temp1 + temp2, a, b, c, d + temp1, e, f, g)

and finally H[j] += working[j]. Additions are modulo 2**32, and every word is
a (32,) array of field elements holding 0 or 1, see `field_ops`.
"""

from __future__ import annotations

import functools
from typing import Sequence, Tuple

from errors import ChunkSizeInvariant
from field_bits import STATE_WORDS, WORD_BITS, bits_to_field, words_from_ints
from field_ops import (
    big_sigma0,
    big_sigma1,
    ch,
    maj,
    small_sigma0,
    small_sigma1,
    wrapping_add,
)

CHUNK_BITS = 512
ROUNDS = 64

# Standard SHA-256 round constants k[0..63] from FIPS 180-4.
K_VALUES: Tuple[int, ...] = (
    0x428A2F98,
    0x71374491,
    0xB5C0FBCF,
    0xE9B5DBA5,
    0x3956C25B,
    0x59F111F1,
    0x923F82A4,
    0xAB1C5ED5,
    0xD807AA98,
    0x12835B01,
    0x243185BE,
    0x550C7DC3,
    0x72BE5D74,
    0x80DEB1FE,
    0x9BDC06A7,
    0xC19BF174,
    0xE49B69C1,
    0xEFBE4786,
    0x0FC19DC6,
    0x240CA1CC,
    0x2DE92C6F,
    0x4A7484AA,
    0x5CB0A9DC,
    0x76F988DA,
    0x983E5152,
    0xA831C66D,
    0xB00327C8,
    0xBF597FC7,
    0xC6E00BF3,
    0xD5A79147,
    0x06CA6351,
    0x14292967,
    0x27B70A85,
    0x2E1B2138,
    0x4D2C6DFC,
    0x53380D13,
    0x650A7354,
    0x766A0ABB,
    0x81C2C92E,
    0x92722C85,
    0xA2BFE8A1,
    0xA81A664B,
    0xC24B8B70,
    0xC76C51A3,
    0xD192E819,
    0xD6990624,
    0xF40E3585,
    0x106AA070,
    0x19A4C116,
    0x1E376C08,
    0x2748774C,
    0x34B0BCB5,
    0x391C0CB3,
    0x4ED8AA4A,
    0x5B9CCA4F,
    0x682E6FF3,
    0x748F82EE,
    0x78A5636F,
    0x84C87814,
    0x8CC70208,
    0x90BEFFFA,
    0xA4506CEB,
    0xBEF9A3F7,
    0xC67178F2,
)

# Initial hash values (first 32 bits of the fractional parts of the
# square roots of the first 8 primes 2..19), as per FIPS 180-4.
H0_VALUES: Tuple[int, ...] = (
    0x6A09E667,
    0xBB67AE85,
    0x3C6EF372,
    0xA54FF53A,
    0x510E527F,
    0x9B05688C,
    0x1F83D9AB,
    0x5BE0CD19,
)


@functools.lru_cache(maxsize=None)
def round_constants(field):
    """The 64 round constants as a (64, 32) array over `field`.

    Encoded once per field. Callers must not modify the returned array.
    """
    return words_from_ints(K_VALUES, field)


@functools.lru_cache(maxsize=None)
def _initial_state(field):
    return words_from_ints(H0_VALUES, field)


def initial_state(field):
    """A fresh (8, 32) State holding H0..H7 over `field`."""
    return _initial_state(field).copy()


def message_schedule(chunk_words):
    """Expand the 16 words of a chunk into the 64-word schedule W[0..63]."""
    if chunk_words.shape != (16, WORD_BITS):
        raise ChunkSizeInvariant(
            f"Message schedule expects 16 words of {WORD_BITS} bits, got shape {chunk_words.shape}"
        )

    field = type(chunk_words)
    w = field.Zeros((ROUNDS, WORD_BITS))
    w[:16] = chunk_words

    for i in range(16, ROUNDS):
        s0 = small_sigma0(w[i - 15])
        s1 = small_sigma1(w[i - 2])
        w[i] = wrapping_add(wrapping_add(s1, w[i - 7]), wrapping_add(s0, w[i - 16]))

    return w


def compression(working: Sequence, w, k) -> Tuple:
    """Perform one SHA-256 compression round.

    Parameters
    ----------
    working : sequence of 8 words
        The working registers (a, b, c, d, e, f, g, h).
    w : word
        Message schedule word `w[i]`.
    k : word
        Round constant `k[i]`.

    Returns
    -------
    tuple of 8 words
        The registers after the round.
    """
    a, b, c, d, e, f, g, h = working

    temp1 = wrapping_add(
        wrapping_add(wrapping_add(wrapping_add(h, big_sigma1(e)), ch(e, f, g)), k),
        w,
    )
    temp2 = wrapping_add(big_sigma0(a), maj(a, b, c))

    return (
        wrapping_add(temp1, temp2),
        a,
        b,
        c,
        wrapping_add(d, temp1),
        e,
        f,
        g,
    )


def compress64(state, ws, ks):
    """Run the full 64-round loop for one chunk.

    Parameters
    ----------
    state : (8, 32) array
        The hash state the working registers start from. Not modified.
    ws : (64, 32) array
        Message schedule.
    ks : (64, 32) array
        Round constants over the same field.

    Returns
    -------
    (8, 32) array
        The working registers after 64 rounds, before they are added to
        the state.
    """
    if len(ws) != ROUNDS:
        raise ValueError(f"compress64 expects {ROUNDS} message schedule words, got {len(ws)}")

    working = tuple(state[j] for j in range(STATE_WORDS))
    for i in range(ROUNDS):
        working = compression(working, ws[i], ks[i])

    out = type(state).Zeros((STATE_WORDS, WORD_BITS))
    for j, word in enumerate(working):
        out[j] = word
    return out


def process_chunk(state, bits: Sequence[int], ks) -> None:
    """Compress one 512-bit chunk into `state`, updating it in place.

    Raises:
        ChunkSizeInvariant: if `bits` is not exactly 512 bits long.
    """
    if len(bits) != CHUNK_BITS:
        raise ChunkSizeInvariant(f"Chunk must be {CHUNK_BITS} bits, got {len(bits)}")

    field = type(state)
    words = bits_to_field(bits, CHUNK_BITS, field).reshape(16, WORD_BITS)
    ws = message_schedule(words)
    working = compress64(state, ws, ks)

    for j in range(STATE_WORDS):
        state[j] = wrapping_add(working[j], state[j])
