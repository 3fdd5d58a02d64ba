from __future__ import annotations

from eth_utils import is_address, to_checksum_address

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(raw_value: str, *, field_name: str) -> str:
    if not isinstance(raw_value, str):
        raise ValueError(f"{field_name} must be a string")
    candidate = raw_value.strip()
    if not candidate:
        raise ValueError(f"{field_name} is required")

    if not is_address(candidate):
        raise ValueError(f"{field_name} must be a valid EVM address")
    return str(to_checksum_address(candidate))


def is_zero_address(address: str) -> bool:
    return address.strip().lower() == ZERO_ADDRESS
