"""Bitwise logic over field elements that each hold a single bit.

Every operation is a ring expression (+, -, *) over `galois` arrays, so the
same code runs in any field. Given arrays of 0/1 elements, every result is
again an array of 0/1 elements:

    AND(a, b) = a * b
    NOT(a)    = 1 - a
    XOR(a, b) = a + b - 2ab

Words are big-endian: index 0 holds the most significant bit.
"""

from __future__ import annotations

import numpy as np


def and_(a, b):
    """Element-wise AND."""
    return a * b


def not_(a):
    """Element-wise NOT."""
    field = type(a)
    return field(1) - a


def xor(a, b):
    """Element-wise XOR."""
    one = type(a)(1)
    # 2 is built as 1 + 1 so that GF(2), where 2 == 0, works too.
    return a + b - (one + one) * and_(a, b)


def rotate_right(rot: int, word):
    """Rotate a bit array right by `rot` positions.

    The bit at index i moves to index (i + rot) mod N.
    """
    n = len(word)
    return word[(np.arange(n) - rot) % n]


def right_shift(shift: int, word):
    """Logical right shift; vacated high positions become zero."""
    n = len(word)
    shifted = type(word).Zeros(n)
    if shift < n:
        shifted[shift:] = word[: n - shift]
    return shifted


def wrapping_add(a, b):
    """Add two words modulo 2**N, rippling a single carry bit from the LSB.

    At each position the sum a[i] + b[i] + carry is split into a result bit
    and a carry bit exactly as in binary addition. The carry is formed as
    generate + propagate * carry, which is 0/1 because generate and
    propagate are never both 1. The carry out of index 0 is dropped.
    """
    field = type(a)
    n = len(a)
    generate = and_(a, b)
    propagate = xor(a, b)

    carries = field.Zeros(n)
    carry = field(0)
    for i in range(n - 1, -1, -1):
        carries[i] = carry
        carry = generate[i] + propagate[i] * carry

    return xor(propagate, carries)


def ch(e, f, g):
    """Choice: bits of f where e is 1, bits of g where e is 0."""
    return xor(and_(e, f), and_(not_(e), g))


def maj(a, b, c):
    """Majority of three words."""
    return xor(xor(and_(a, b), and_(a, c)), and_(b, c))


def big_sigma0(a):
    """Σ0(a) = ROTR2 ^ ROTR13 ^ ROTR22"""
    return xor(xor(rotate_right(2, a), rotate_right(13, a)), rotate_right(22, a))


def big_sigma1(e):
    """Σ1(e) = ROTR6 ^ ROTR11 ^ ROTR25"""
    return xor(xor(rotate_right(6, e), rotate_right(11, e)), rotate_right(25, e))


def small_sigma0(x):
    """σ0(x) = ROTR7 ^ ROTR18 ^ SHR3, used in the message schedule."""
    return xor(xor(rotate_right(7, x), rotate_right(18, x)), right_shift(3, x))


def small_sigma1(x):
    """σ1(x) = ROTR17 ^ ROTR19 ^ SHR10, used in the message schedule."""
    return xor(xor(rotate_right(17, x), rotate_right(19, x)), right_shift(10, x))
