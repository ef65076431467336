"""
Proof Parsing
=============

Loaders for Groth16 proofs and public signals as produced by snarkjs.
Works for both the balance pass and identity pass formats.

No range check against the BN254 field modulus is done here: the
verifier contract rejects out-of-field values.

Version: 0.1.0
"""

import json
import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from privacyx.errors import FormatError
from privacyx.zk.models import Groth16Proof


PROOF_FIELDS = ("pi_a", "pi_b", "pi_c")

_DECIMAL = re.compile(r"[0-9]+")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")


def to_uint(value: Any, label: str = "value") -> int:
    """
    Convert a decimal string, 0x-hex string or integer to a Python int.

    Args:
        value: Raw value from proof / signal JSON
        label: Name used in the error message

    Returns:
        Non-negative integer

    Raises:
        FormatError: If the value is not an unsigned integer
    """
    if isinstance(value, bool):
        raise FormatError(f"Invalid {label}: booleans are not integers")

    try:
        if isinstance(value, int):
            result = value
        elif isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"{value!r} is not integral")
            result = int(value)
        elif isinstance(value, str):
            text = value.strip()
            if _HEX.fullmatch(text):
                result = int(text[2:], 16)
            elif _DECIMAL.fullmatch(text):
                result = int(text, 10)
            else:
                raise ValueError(f"{value!r} is not a decimal or 0x-hex integer")
        else:
            raise TypeError(f"unsupported type {type(value).__name__}")
    except (TypeError, ValueError) as e:
        raise FormatError(f"Invalid {label}: {value!r}", e) from e

    if result < 0:
        raise FormatError(f"Invalid {label}: {value!r} is negative")
    return result


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def parse_proof(raw: Mapping[str, Any] | Groth16Proof) -> Groth16Proof:
    """
    Parse a Groth16 proof (snarkjs JSON) into integers.

    Args:
        raw: Mapping with `pi_a`, `pi_b`, `pi_c` as decimal strings or ints

    Returns:
        Groth16Proof with the same structure and integer leaves

    Raises:
        FormatError: If a field is missing or a coordinate is malformed
    """
    if isinstance(raw, Groth16Proof):
        return raw

    if not isinstance(raw, Mapping):
        raise FormatError("Invalid Groth16 proof format: expected a JSON object")

    for name in PROOF_FIELDS:
        if raw.get(name) is None:
            raise FormatError(f"Invalid Groth16 proof format: missing {name}")

    pi_a, pi_b, pi_c = (raw[name] for name in PROOF_FIELDS)

    if not _is_sequence(pi_a) or not _is_sequence(pi_c):
        raise FormatError("Invalid Groth16 proof format: pi_a and pi_c must be arrays")
    if not _is_sequence(pi_b) or not all(_is_sequence(row) for row in pi_b):
        raise FormatError("Invalid Groth16 proof format: pi_b must be an array of arrays")

    try:
        return Groth16Proof(
            pi_a=[to_uint(x, "pi_a coordinate") for x in pi_a],
            pi_b=[[to_uint(x, "pi_b coordinate") for x in row] for row in pi_b],
            pi_c=[to_uint(x, "pi_c coordinate") for x in pi_c],
            protocol=raw.get("protocol") or "groth16",
            curve=raw.get("curve") or "bn128",
        )
    except ValidationError as e:
        raise FormatError("Invalid Groth16 proof format", e) from e


def parse_public_signals(
    raw: Sequence[Any],
    expected_length: int | None = None,
) -> list[int]:
    """
    Parse public signals (array of decimal strings) into integers.

    Args:
        raw: Sequence of decimal strings or ints
        expected_length: Required number of signals, if any

    Returns:
        List of integers in the original order

    Raises:
        FormatError: If `raw` is not an array, has the wrong length
            or holds a non-integer element
    """
    if not _is_sequence(raw):
        raise FormatError("Public signals must be an array")

    if expected_length and len(raw) != expected_length:
        raise FormatError(
            f"Expected {expected_length} public signals, got {len(raw)}"
        )

    return [to_uint(v, f"public signal [{i}]") for i, v in enumerate(raw)]


def _read_json(path: str | Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise FormatError(f"Cannot read {path}", e) from e
    except json.JSONDecodeError as e:
        raise FormatError(f"Invalid JSON in {path}", e) from e


def load_proof(path: str | Path) -> Groth16Proof:
    """
    Load and parse a snarkjs `proof.json`.

    A `{"proof": {...}}` wrapper is accepted as well.
    """
    data = _read_json(path)
    if isinstance(data, Mapping) and isinstance(data.get("proof"), Mapping):
        data = data["proof"]
    return parse_proof(data)


def load_public_signals(
    path: str | Path,
    expected_length: int | None = None,
) -> list[int]:
    """Load and parse a snarkjs `public.json`."""
    return parse_public_signals(_read_json(path), expected_length)
