"""Command-line front end for the field-native SHA-256 engine.

Usage:
    python sha256_cli.py "message"
    python sha256_cli.py -f path/to/file
    python sha256_cli.py --hex 00
    python sha256_cli.py --hex 00 --max-bits 1024 --trace trace.yaml
    python sha256_cli.py "abc" --field binary --check

The input is padded (optionally up to `--max-bits`), hashed chunk by chunk
over the chosen field, and the hex digest is printed to stdout. Filler
chunks beyond the minimal padding are compressed too, so only the minimal
capacity reproduces the standard SHA-256 digest.

Initial-state files (`--init-state`) are YAML:

    state: ["6a09e667", "bb67ae85", "3c6ef372", "a54ff53a",
            "510e527f", "9b05688c", "1f83d9ab", "5be0cd19"]

Words are hex strings or plain integers. Quote hex words: YAML reads an
unquoted all-digit word such as 12345678 as a decimal integer.
"""

from __future__ import annotations

import argparse
import hashlib
import logging
import sys
from typing import Dict, List, Optional

import yaml

from errors import FieldShaError, StateShapeError
from field import DEFAULT_FIELD_NAME, get_field
from field_bits import bits_from_bytes, bytes_from_hex, digest_to_hex, state_from_ints, state_to_ints
from field_sha256 import FieldSha256
from padding import sha256_pad

logger = logging.getLogger(__name__)


def _parse_word(value) -> int:
    if isinstance(value, bool):
        raise StateShapeError(f"State word must be hex or an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value, 16)
        except ValueError:
            raise StateShapeError(f"State word is not hex: {value!r}") from None
    raise StateShapeError(f"State word must be hex or an integer, got {value!r}")


def load_state_yaml(path: str, field):
    """Read an 8-word initial state from a YAML file."""
    with open(path, "r") as f:
        doc = yaml.safe_load(f)

    if not isinstance(doc, dict) or "state" not in doc:
        raise StateShapeError(f"{path}: expected a mapping with a 'state' key")
    words = doc["state"]
    if not isinstance(words, list):
        raise StateShapeError(f"{path}: 'state' must be a list of 8 words")

    return state_from_ints([_parse_word(w) for w in words], field)


def _format_state(state) -> List[str]:
    return [f"{w:08x}" for w in state_to_ints(state)]


def write_trace_yaml(path: str, digest_hex: str, digest_index: int, padded_bits: int, states) -> None:
    """Dump the digest and the state after every chunk to a YAML file."""
    doc: Dict = {
        "digest_hex": digest_hex,
        "digest_index": digest_index,
        "padded_bits": padded_bits,
        "chunks": [
            {"chunk_index": idx, "state": _format_state(state)}
            for idx, state in enumerate(states)
        ],
    }
    with open(path, "w") as f:
        yaml.dump(doc, f, default_flow_style=False, sort_keys=False)


def _read_input(args) -> bytes:
    if args.file is not None:
        with open(args.file, "rb") as f:
            return f.read()
    if args.hex is not None:
        return bytes_from_hex(args.hex)
    return args.message.encode("utf-8")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="SHA-256 computed over field elements that each hold one bit"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("message", nargs="?", help="UTF-8 message to hash")
    source.add_argument("-f", "--file", help="Hash the raw bytes of this file")
    source.add_argument("--hex", help="Hash the bytes encoded by this hex string")
    parser.add_argument(
        "--max-bits",
        type=int,
        default=None,
        help="Pad with zero bits up to this capacity (default: minimal padding)",
    )
    parser.add_argument(
        "--field",
        default=DEFAULT_FIELD_NAME,
        help="Field to compute in: pallas, binary or a prime modulus (default: pallas)",
    )
    parser.add_argument(
        "--init-state",
        help="YAML file with an 8-word initial state (default: SHA-256 H0..H7)",
    )
    parser.add_argument("--trace", help="Write the per-chunk states to this YAML file")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Compare the digest with hashlib.sha256 and fail on mismatch",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.check and args.init_state:
        parser.error("--check cannot be combined with --init-state")

    try:
        field = get_field(args.field)
        data = _read_input(args)
        init_state = load_state_yaml(args.init_state, field) if args.init_state else None

        padded, digest_index = sha256_pad(bits_from_bytes(data), args.max_bits)
        logger.debug(
            "padded %d bits to %d (digest index %d)", len(data) * 8, len(padded), digest_index
        )
        hasher = FieldSha256(padded, digest_index, init_state=init_state, field=field)
        state, states = hasher.hash_with_trace()
    except (FieldShaError, ValueError, OSError, yaml.YAMLError) as e:
        sys.stderr.write(f"Error: {e}\n")
        return 1

    digest_hex = digest_to_hex(state)

    if args.trace:
        write_trace_yaml(args.trace, digest_hex, digest_index, len(padded), states)
        logger.info("wrote %d chunk states to %s", len(states), args.trace)

    print(digest_hex)

    if args.check:
        expected = hashlib.sha256(data).hexdigest()
        if digest_hex != expected:
            sys.stderr.write(f"Mismatch: hashlib.sha256 gives {expected}\n")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
