"""Field selection for the bit-sliced SHA-256 engine.

The engine never looks inside a field element: it only adds, subtracts and
multiplies them. Any `galois` field class can therefore back a run:

- `pallas_field()` is the Pasta `Fp` base field used by the proof system the
  engine is a reference for.
- `galois.GF(2)` is the plain {0,1} integer deployment.
- Small prime fields are handy for fast property tests.
"""

from __future__ import annotations

import functools
import logging
import random
from typing import Type, Union

import galois

logger = logging.getLogger(__name__)


# Pallas base field modulus (Pasta curves), p = 2**254 + 45560315531419706090280762371685220353.
PALLAS_MODULUS = 0x40000000000000000000000000000000224698FC094CF91B992D30ED00000001

# Smallest quadratic non-residue generating Fp*, as fixed by the Pasta curves.
PALLAS_GENERATOR = 5

DEFAULT_FIELD_NAME = "pallas"

FieldClass = Type[galois.FieldArray]


@functools.lru_cache(maxsize=None)
def pallas_field() -> FieldClass:
    """Return the `galois` field class over the Pallas base field."""
    logger.debug("building Pallas field (p=%#x)", PALLAS_MODULUS)
    # Factoring p - 1 to find a primitive root is slow; the generator is known.
    return galois.GF(PALLAS_MODULUS, primitive_element=PALLAS_GENERATOR, verify=False)


@functools.lru_cache(maxsize=None)
def binary_field() -> FieldClass:
    """GF(2): bits as plain machine integers."""
    return galois.GF(2)


def get_field(value: Union[str, int, FieldClass, None] = None) -> FieldClass:
    """Resolve a field name, prime modulus or field class to a field class.

    Accepted values:
        None or "pallas": the Pallas base field (default).
        "binary" or "gf2": GF(2).
        int, or a decimal / 0x-prefixed string: GF(p) for that prime.
        A `galois.FieldArray` subclass: returned unchanged.
    """
    if value is None:
        return pallas_field()
    if isinstance(value, type) and issubclass(value, galois.FieldArray):
        return value
    if isinstance(value, str):
        name = value.strip().lower()
        if name == "pallas":
            return pallas_field()
        if name in ("binary", "gf2"):
            return binary_field()
        try:
            value = int(name, 0)
        except ValueError:
            raise ValueError(f"Unknown field {value!r}") from None
    if isinstance(value, int):
        if value == PALLAS_MODULUS:
            return pallas_field()
        if value < 2 or not galois.is_prime(value):
            raise ValueError(f"Field modulus must be prime, got {value}")
        logger.debug("building GF(%d)", value)
        return galois.GF(value)
    raise TypeError(f"Cannot build a field from {type(value).__name__}")


def element_byte_length(field: FieldClass) -> int:
    """Number of bytes in the canonical serialisation of an element."""
    return (field.characteristic.bit_length() + 7) // 8


def field_element_to_hex(x) -> str:
    """Serialise a field element as fixed-width little-endian hex.

    This is how field elements are turned into hash input when a digest of
    field data is needed (32 bytes, i.e. 64 hex digits, for Pallas).
    """
    field = type(x)
    return int(x).to_bytes(element_byte_length(field), byteorder="little").hex()


def random_elements(field: FieldClass, count: int, seed: int | None = None):
    """Return `count` uniformly random elements of `field`, reproducibly."""
    rng = random.Random(seed)
    return field([rng.randrange(field.order) for _ in range(count)])
