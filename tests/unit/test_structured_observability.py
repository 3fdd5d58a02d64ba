"""Structured, redacted logging of eligibility decisions."""
import pytest

from jar_policy.domain import AccessControlType, JarConfig
from jar_policy.observability.logging import configure_logging, get_logger
from jar_policy.providers import InMemoryJarStateProvider
from jar_policy.service import EligibilityService

REQUESTER = "0x1234567890123456789012345678901234567890"


def test_structured_logging_outputs_json(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")
    logger = get_logger("test")

    logger.info("test_event", key="value")

    captured = capsys.readouterr()
    assert "{" in captured.out
    assert "}" in captured.out
    assert "test_event" in captured.out


def test_eligibility_decision_is_logged_with_jar_and_reason(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging("DEBUG")
    provider = InMemoryJarStateProvider()
    provider.add_jar(
        JarConfig(id=5, access_control_type=AccessControlType.WHITELIST, balance=100),
        creator_is_admin=False,
    )

    EligibilityService(provider).check_withdrawal(5, REQUESTER, 10, now=0)

    captured = capsys.readouterr()
    assert "withdrawal_evaluated" in captured.out
    assert '"jar_id":5' in captured.out or '"jar_id": 5' in captured.out
    assert "NotWhitelisted" in captured.out


def test_gating_token_fields_are_not_redacted(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("DEBUG")
    logger = get_logger("test")

    logger.info("jar_loaded", gating_token_amount="100", api_key="sk-live")

    captured = capsys.readouterr()
    assert "100" in captured.out
    assert "sk-live" not in captured.out


def test_filtering_respects_level(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("WARNING")
    logger = get_logger("test")

    logger.info("quiet_event")

    assert "quiet_event" not in capsys.readouterr().out
