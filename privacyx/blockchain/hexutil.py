"""
bytes32 helpers for contract arguments and event fields.
"""

from typing import Any

from eth_utils import is_0x_prefixed, is_hex, remove_0x_prefix

from privacyx.errors import FormatError


BYTES32_HEX_LENGTH = 64
UINT256_MAX = 2**256 - 1


def to_bytes32(label: str, value: Any) -> str:
    """
    Validate a 0x-prefixed hex string and left-pad it to 32 bytes.

    Args:
        label: Argument name used in the error message
        value: Hex string such as "0x1" or a full 32-byte value

    Returns:
        Lowercase 0x-prefixed 32-byte hex string

    Raises:
        FormatError: If the value is not 0x-prefixed hex or exceeds 32 bytes
    """
    if not isinstance(value, str) or not is_0x_prefixed(value) or not is_hex(value):
        raise FormatError(f"Invalid {label} hex string (expected 0x-prefixed hex): {value!r}")

    digits = remove_0x_prefix(value).lower()
    if len(digits) > BYTES32_HEX_LENGTH:
        raise FormatError(f"Invalid {label} hex string: longer than 32 bytes")

    return "0x" + digits.rjust(BYTES32_HEX_LENGTH, "0")


def int_to_bytes32(value: int) -> str:
    """Encode an unsigned integer (e.g. a public signal) as a 32-byte hex string."""
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= UINT256_MAX:
        raise FormatError(f"Cannot encode {value!r} as bytes32")
    return "0x" + format(value, "064x")


def bytes32_to_hex(value: bytes | str | int) -> str:
    """Normalize a bytes32 value returned by the transport to a 32-byte hex string."""
    if isinstance(value, (bytes, bytearray)):
        if len(value) > 32:
            raise FormatError("bytes32 value longer than 32 bytes")
        return "0x" + bytes(value).rjust(32, b"\x00").hex()
    if isinstance(value, int):
        return int_to_bytes32(value)
    return to_bytes32("bytes32", value)
