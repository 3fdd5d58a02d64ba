from jar_policy.chains import (
    get_contract_address,
    get_token_symbol,
    native_token_symbol,
    supported_chain_ids,
)
from jar_policy.formatting import format_amount, format_cooldown_period, format_countdown

ZERO = "0x0000000000000000000000000000000000000000"


def test_format_countdown_without_days() -> None:
    assert format_countdown(2600) == "00:43:20"


def test_format_countdown_with_days() -> None:
    assert format_countdown(90061) == "1d 01:01:01"


def test_format_countdown_clamps_negative() -> None:
    assert format_countdown(-5) == "00:00:00"


def test_format_cooldown_period() -> None:
    assert format_cooldown_period(0) == "None"
    assert format_cooldown_period(3600) == "60 minutes"
    assert format_cooldown_period(90) == "1.5 minutes"


def test_format_amount() -> None:
    assert format_amount(10**17) == "0.1 ETH"
    assert format_amount(5 * 10**18, "xDAI") == "5 xDAI"
    assert format_amount(None) == "No limit"


def test_contract_address_lookup() -> None:
    assert get_contract_address(11155111) == "0x1234567890123456789012345678901234567890"
    assert get_contract_address(1) is None
    assert get_contract_address(None) is None
    assert 44787 in supported_chain_ids()


def test_native_token_symbols_follow_chain() -> None:
    assert native_token_symbol(11155111) == "ETH"
    assert native_token_symbol(10200) == "xDAI"
    assert native_token_symbol(42220) == "CELO"
    assert get_token_symbol(ZERO, 100) == "xDAI"
    assert get_token_symbol("0x9999999999999999999999999999999999999999") == "Unknown"
