from __future__ import annotations

from eth_utils import to_checksum_address

_ADDRESS_HEX_LENGTH = 40


def normalize_address(address: str) -> str:
    """
    Left-pad a hex string to 20 bytes and return its checksum form.

    "0x111" -> "0x0000000000000000000000000000000000000111"
    """
    if not isinstance(address, str):
        raise ValueError(f"Invalid hex string: {address!r}")

    body = address[2:] if address[:2] in ("0x", "0X") else None
    if body is None or not body or len(body) > _ADDRESS_HEX_LENGTH:
        raise ValueError(f"Invalid hex string: {address}")
    try:
        int(body, 16)
    except ValueError:
        raise ValueError(f"Invalid hex string: {address}") from None

    return to_checksum_address("0x" + body.rjust(_ADDRESS_HEX_LENGTH, "0"))


def same_address(a: str | None, b: str | None) -> bool:
    if not a or not b:
        return a == b
    return normalize_address(a) == normalize_address(b)


ZERO_ADDRESS: str = normalize_address("0x0")

# Marker the bridge contracts store in nativeToBridgedToken for reserved slots.
RESERVED_STATUS_ADDRESS: str = normalize_address("0x111")
