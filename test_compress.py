import hashlib

import galois
import pytest

from compress import (
    H0_VALUES,
    K_VALUES,
    compress64,
    compression,
    initial_state,
    message_schedule,
    process_chunk,
    round_constants,
)
from errors import ChunkSizeInvariant
from field_bits import bits_from_bytes, state_to_ints, words_from_ints
from padding import sha256_pad


MASK32 = 0xFFFFFFFF

GF = galois.GF(2**31 - 1)


def _rotr(x: int, n: int) -> int:
    return ((x >> n) | (x << (32 - n))) & MASK32


def _int_round(state, w, k):
    a, b, c, d, e, f, g, h = state
    S1 = _rotr(e, 6) ^ _rotr(e, 11) ^ _rotr(e, 25)
    ch = (e & f) ^ ((~e) & g)
    temp1 = (h + S1 + ch + k + w) & MASK32
    S0 = _rotr(a, 2) ^ _rotr(a, 13) ^ _rotr(a, 22)
    maj = (a & b) ^ (a & c) ^ (b & c)
    temp2 = (S0 + maj) & MASK32
    return ((temp1 + temp2) & MASK32, a, b, c, (d + temp1) & MASK32, e, f, g)


def _int_schedule(words):
    w = list(words)
    for i in range(16, 64):
        s0 = _rotr(w[i - 15], 7) ^ _rotr(w[i - 15], 18) ^ (w[i - 15] >> 3)
        s1 = _rotr(w[i - 2], 17) ^ _rotr(w[i - 2], 19) ^ (w[i - 2] >> 10)
        w.append((w[i - 16] + s0 + w[i - 7] + s1) & MASK32)
    return w


STATE_VECTORS = [
    (0, 0, 0, 0, 0, 0, 0, 0),
    (1, 2, 3, 4, 5, 6, 7, 8),
    (
        0x01234567,
        0x89ABCDEF,
        0xDEADBEEF,
        0xCAFEBABE,
        0x0F0F0F0F,
        0xF0F0F0F0,
        0xAAAAAAAA,
        0x55555555,
    ),
]


def test_constant_tables():
    ks = round_constants(GF)
    assert ks.shape == (64, 32)
    assert state_to_ints(ks[:8]) == list(K_VALUES[:8])
    assert state_to_ints(initial_state(GF)) == list(H0_VALUES)


def test_initial_state_is_a_fresh_copy():
    state = initial_state(GF)
    state[0] = GF.Zeros(32)
    assert state_to_ints(initial_state(GF)) == list(H0_VALUES)


@pytest.mark.parametrize("state", STATE_VECTORS)
def test_single_round_matches_integer_round(state):
    w, k = 0x12345678, K_VALUES[63]
    working = tuple(words_from_ints(state, GF))
    out = compression(working, words_from_ints([w], GF)[0], words_from_ints([k], GF)[0])

    stacked = GF.Zeros((8, 32))
    for j, word in enumerate(out):
        stacked[j] = word
    assert tuple(state_to_ints(stacked)) == _int_round(state, w, k)


def test_message_schedule_matches_integer_schedule():
    words = [(0x01020304 * (i + 1)) & MASK32 for i in range(16)]
    ws = message_schedule(words_from_ints(words, GF))
    assert ws.shape == (64, 32)
    got = []
    for i in range(0, 64, 8):
        got.extend(state_to_ints(ws[i : i + 8]))
    assert got == _int_schedule(words)


def test_message_schedule_rejects_wrong_shape():
    with pytest.raises(ChunkSizeInvariant):
        message_schedule(GF.Zeros((15, 32)))


def test_compress64_leaves_state_untouched():
    state = initial_state(GF)
    ws = message_schedule(words_from_ints(list(range(16)), GF))
    compress64(state, ws, round_constants(GF))
    assert state_to_ints(state) == list(H0_VALUES)


def test_compress64_requires_64_words():
    with pytest.raises(ValueError):
        compress64(initial_state(GF), GF.Zeros((63, 32)), round_constants(GF))


def test_process_chunk_on_abc_matches_hashlib():
    padded, _ = sha256_pad(bits_from_bytes(b"abc"))
    state = initial_state(GF)
    process_chunk(state, padded, round_constants(GF))
    expected = hashlib.sha256(b"abc").digest()
    assert b"".join(w.to_bytes(4, "big") for w in state_to_ints(state)) == expected


@pytest.mark.parametrize("length", [0, 511, 513, 1024])
def test_process_chunk_rejects_wrong_size(length):
    with pytest.raises(ChunkSizeInvariant):
        process_chunk(initial_state(GF), [0] * length, round_constants(GF))
