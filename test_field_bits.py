import galois
import pytest

from errors import DecodeError, StateShapeError
from field import field_element_to_hex, get_field, pallas_field, random_elements
from field_bits import (
    bits_from_bytes,
    bits_from_hex,
    bits_to_field,
    bits_to_u32,
    digest_to_bytes,
    digest_to_hex,
    int_to_bits_be,
    state_from_ints,
    state_to_ints,
    word_from_int,
)

GF = galois.GF(2**31 - 1)


def test_bits_from_hex_is_msb_first():
    assert bits_from_hex("a5") == [1, 0, 1, 0, 0, 1, 0, 1]
    assert bits_from_hex("00ff") == [0] * 8 + [1] * 8
    assert bits_from_hex("") == []
    assert bits_from_hex("A5") == bits_from_bytes(b"\xa5")


@pytest.mark.parametrize("bad", ["0", "abc", "zz", "0g", "00 11", "é0"])
def test_bits_from_hex_rejects_malformed(bad):
    with pytest.raises(DecodeError):
        bits_from_hex(bad)


def test_int_to_bits_be():
    assert int_to_bits_be(5, 4) == [0, 1, 0, 1]
    assert int_to_bits_be(0, 3) == [0, 0, 0]
    assert int_to_bits_be(8, 64)[-4:] == [1, 0, 0, 0]
    # Modular extraction: only the low `width` bits survive.
    assert int_to_bits_be(0x1F, 4) == [1, 1, 1, 1]


def test_bits_to_field_pads_and_truncates():
    out = bits_to_field([1, 1], 4, GF)
    assert [int(b) for b in out] == [1, 1, 0, 0]
    out = bits_to_field([1, 0, 1, 1, 1], 3, GF)
    assert [int(b) for b in out] == [1, 0, 1]


def test_word_roundtrip():
    for value in (0, 1, 0x80000000, 0xFFFFFFFF, 0x6A09E667):
        assert bits_to_u32(word_from_int(value, GF)) == value


def test_state_helpers():
    values = [0x6A09E667, 0xBB67AE85, 0x3C6EF372, 0xA54FF53A, 0x510E527F, 0x9B05688C, 0x1F83D9AB, 0x5BE0CD19]
    state = state_from_ints(values, GF)
    assert state.shape == (8, 32)
    assert state_to_ints(state) == values
    assert digest_to_hex(state) == "".join(f"{v:08x}" for v in values)
    assert digest_to_bytes(state) == bytes.fromhex(digest_to_hex(state))


@pytest.mark.parametrize("values", [[0] * 7, [0] * 9, [0] * 7 + [1 << 32], [-1] + [0] * 7])
def test_state_from_ints_rejects_bad_states(values):
    with pytest.raises(StateShapeError):
        state_from_ints(values, GF)


def test_state_to_ints_checks_shape():
    with pytest.raises(StateShapeError):
        state_to_ints(GF.Zeros((4, 32)))


def test_get_field():
    assert get_field() is pallas_field()
    assert get_field("pallas") is pallas_field()
    assert get_field("binary").order == 2
    assert get_field("65537").order == 65537
    assert get_field(GF) is GF
    with pytest.raises(ValueError):
        get_field("nonsense")
    with pytest.raises(ValueError):
        get_field(15)


def test_field_element_to_hex_is_little_endian():
    Fp = pallas_field()
    assert field_element_to_hex(Fp(1)) == "01" + "00" * 31
    assert field_element_to_hex(Fp(0x0102)) == "0201" + "00" * 30


def test_random_elements_are_reproducible():
    Fp = pallas_field()
    first = random_elements(Fp, 3, seed=11)
    second = random_elements(Fp, 3, seed=11)
    assert [int(x) for x in first] == [int(x) for x in second]
    assert all(len(field_element_to_hex(x)) == 64 for x in first)
