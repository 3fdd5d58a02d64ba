from decimal import Decimal

import pytest

from jar_policy.domain import (
    AccessControlType,
    DenialReason,
    JarConfig,
    MembershipState,
    WithdrawalCooldownState,
    WithdrawalRequest,
)
from jar_policy.errors import InvalidSnapshotError
from jar_policy.policy.evaluator import (
    effective_withdrawal_cap,
    evaluate_withdrawal,
    time_until_next_withdrawal,
)

REQUESTER = "0x1234567890123456789012345678901234567890"
GATING_TOKEN = "0x9999999999999999999999999999999999999999"


def _jar(**overrides: object) -> JarConfig:
    base: dict[str, object] = {
        "id": 1,
        "access_control_type": AccessControlType.OPEN,
        "balance": 1000,
    }
    base.update(overrides)
    return JarConfig(**base)  # type: ignore[arg-type]


def _evaluate(
    jar: JarConfig,
    *,
    membership: MembershipState | None = None,
    cooldown: WithdrawalCooldownState | None = None,
    amount: object = 500,
    now: int = 10_000,
):
    return evaluate_withdrawal(
        jar,
        membership or MembershipState(),
        cooldown or WithdrawalCooldownState(),
        WithdrawalRequest(amount=amount, requester=REQUESTER),  # type: ignore[arg-type]
        now,
    )


class TestScenarios:
    def test_open_jar_allows_withdrawal_within_balance(self) -> None:
        result = _evaluate(_jar())

        assert result.allowed is True
        assert result.denial_reason is None
        assert result.time_until_next_withdrawal == 0

    def test_whitelist_jar_denies_non_member(self) -> None:
        result = _evaluate(_jar(access_control_type=AccessControlType.WHITELIST))

        assert result.allowed is False
        assert result.denial_reason == DenialReason.NOT_WHITELISTED

    def test_cooldown_reports_remaining_seconds(self) -> None:
        result = _evaluate(
            _jar(cooldown_period=3600),
            cooldown=WithdrawalCooldownState(last_withdrawal_timestamp=1000),
            now=2000,
        )

        assert result.denial_reason == DenialReason.IN_COOLDOWN
        assert result.time_until_next_withdrawal == 2600

    def test_erc20_gated_jar_requires_gating_balance(self) -> None:
        jar = _jar(
            access_control_type=AccessControlType.ERC20_GATED,
            gating_token_address=GATING_TOKEN,
            gating_token_amount=100,
        )

        result = _evaluate(jar, membership=MembershipState(gating_balance=50))

        assert result.denial_reason == DenialReason.INSUFFICIENT_GATING_BALANCE

    def test_amount_above_max_withdrawal_is_denied(self) -> None:
        result = _evaluate(_jar(max_withdrawal_amount=200), amount=300)

        assert result.denial_reason == DenialReason.EXCEEDS_MAX_AMOUNT

    def test_blacklist_overrides_otherwise_eligible_open_jar(self) -> None:
        result = _evaluate(_jar(), membership=MembershipState(is_blacklisted=True))

        assert result.allowed is False
        assert result.denial_reason == DenialReason.BLACKLISTED


class TestCheckOrder:
    def test_inactive_jar_wins_over_everything(self) -> None:
        result = _evaluate(
            _jar(is_active=False, access_control_type=AccessControlType.WHITELIST, cooldown_period=60),
            membership=MembershipState(is_blacklisted=True),
            cooldown=WithdrawalCooldownState(last_withdrawal_timestamp=9_990),
            amount=-1,
        )

        assert result.denial_reason == DenialReason.NOT_ACTIVE

    @pytest.mark.parametrize(
        "amount",
        [0, -5, Decimal("0"), Decimal("-1.5"), float("nan"), float("inf"), Decimal("NaN")],
    )
    def test_non_positive_or_non_finite_amount_is_invalid(self, amount: object) -> None:
        result = _evaluate(_jar(), amount=amount)

        assert result.denial_reason == DenialReason.INVALID_AMOUNT

    def test_invalid_amount_reported_before_blacklist(self) -> None:
        result = _evaluate(_jar(), membership=MembershipState(is_blacklisted=True), amount=0)

        assert result.denial_reason == DenialReason.INVALID_AMOUNT

    @pytest.mark.parametrize("access_type", list(AccessControlType))
    def test_blacklist_applies_to_every_access_mode(self, access_type: AccessControlType) -> None:
        jar = _jar(
            access_control_type=access_type,
            gating_token_address=GATING_TOKEN,
            gating_token_amount=1,
        )
        membership = MembershipState(is_blacklisted=True, is_whitelisted=True, gating_balance=10)

        result = _evaluate(jar, membership=membership)

        assert result.denial_reason == DenialReason.BLACKLISTED

    def test_blacklist_reported_before_cooldown(self) -> None:
        result = _evaluate(
            _jar(cooldown_period=3600),
            membership=MembershipState(is_blacklisted=True),
            cooldown=WithdrawalCooldownState(last_withdrawal_timestamp=9_000),
        )

        assert result.denial_reason == DenialReason.BLACKLISTED
        assert result.time_until_next_withdrawal == 0

    def test_cooldown_reported_before_amount_limits(self) -> None:
        result = _evaluate(
            _jar(cooldown_period=3600, max_withdrawal_amount=10),
            cooldown=WithdrawalCooldownState(last_withdrawal_timestamp=9_000),
            amount=5_000,
        )

        assert result.denial_reason == DenialReason.IN_COOLDOWN


class TestAccessModes:
    def test_whitelisted_member_allowed(self) -> None:
        result = _evaluate(
            _jar(access_control_type=AccessControlType.WHITELIST),
            membership=MembershipState(is_whitelisted=True),
        )

        assert result.allowed is True

    def test_nft_gated_allows_exact_threshold(self) -> None:
        jar = _jar(
            access_control_type=AccessControlType.NFT_GATED,
            gating_token_address=GATING_TOKEN,
            gating_token_amount=1,
        )

        result = _evaluate(jar, membership=MembershipState(gating_balance=1))

        assert result.allowed is True

    def test_admin_status_does_not_grant_withdrawal(self) -> None:
        result = _evaluate(
            _jar(access_control_type=AccessControlType.WHITELIST),
            membership=MembershipState(is_admin=True),
        )

        assert result.denial_reason == DenialReason.NOT_WHITELISTED

    def test_whitelist_membership_ignored_on_gated_jar(self) -> None:
        jar = _jar(
            access_control_type=AccessControlType.ERC20_GATED,
            gating_token_address=GATING_TOKEN,
            gating_token_amount=100,
        )

        result = _evaluate(jar, membership=MembershipState(is_whitelisted=True))

        assert result.denial_reason == DenialReason.INSUFFICIENT_GATING_BALANCE


class TestCooldown:
    def test_no_previous_withdrawal_means_no_cooldown(self) -> None:
        assert time_until_next_withdrawal(WithdrawalCooldownState(), 3600, 0) == 0

    def test_countdown_decreases_and_reaches_zero_at_expiry(self) -> None:
        cooldown = WithdrawalCooldownState(last_withdrawal_timestamp=1000)
        samples = [time_until_next_withdrawal(cooldown, 3600, now) for now in range(1000, 4601, 600)]

        assert samples == [3600, 3000, 2400, 1800, 1200, 600, 0]
        assert time_until_next_withdrawal(cooldown, 3600, 4600) == 0
        assert time_until_next_withdrawal(cooldown, 3600, 999_999) == 0

    def test_withdrawal_allowed_once_cooldown_expires(self) -> None:
        result = _evaluate(
            _jar(cooldown_period=3600),
            cooldown=WithdrawalCooldownState(last_withdrawal_timestamp=1000),
            now=4600,
        )

        assert result.allowed is True
        assert result.time_until_next_withdrawal == 0

    def test_zero_cooldown_never_blocks(self) -> None:
        result = _evaluate(
            _jar(cooldown_period=0),
            cooldown=WithdrawalCooldownState(last_withdrawal_timestamp=10_000),
            now=10_000,
        )

        assert result.allowed is True


class TestAmountCap:
    def test_unset_max_caps_at_balance(self) -> None:
        jar = _jar()

        assert effective_withdrawal_cap(jar) == 1000
        assert _evaluate(jar, amount=1000).allowed is True
        assert _evaluate(jar, amount=1001).denial_reason == DenialReason.EXCEEDS_MAX_AMOUNT

    def test_zero_max_is_treated_as_unlimited(self) -> None:
        jar = _jar(max_withdrawal_amount=0)

        assert effective_withdrawal_cap(jar) == 1000
        assert _evaluate(jar, amount=900).allowed is True

    def test_balance_binds_when_max_exceeds_balance(self) -> None:
        jar = _jar(max_withdrawal_amount=5000)

        result = _evaluate(jar, amount=1500)

        assert effective_withdrawal_cap(jar) == 1000
        assert result.denial_reason == DenialReason.EXCEEDS_BALANCE

    def test_allowed_amount_never_exceeds_cap(self) -> None:
        jar = _jar(max_withdrawal_amount=200)
        for amount in (1, 199, 200, 201, 999, 1000, 1001):
            result = _evaluate(jar, amount=amount)
            if result.allowed:
                assert amount <= min(200, jar.balance)
                assert result.denial_reason is None

    def test_decimal_amounts_are_compared_exactly(self) -> None:
        assert _evaluate(_jar(max_withdrawal_amount=200), amount=Decimal("200.0")).allowed is True
        assert (
            _evaluate(_jar(max_withdrawal_amount=200), amount=Decimal("200.5")).denial_reason
            == DenialReason.EXCEEDS_MAX_AMOUNT
        )


def test_evaluation_is_idempotent() -> None:
    jar = _jar(cooldown_period=3600, max_withdrawal_amount=200)
    cooldown = WithdrawalCooldownState(last_withdrawal_timestamp=1000)

    first = _evaluate(jar, cooldown=cooldown, now=2000)
    second = _evaluate(jar, cooldown=cooldown, now=2000)

    assert first == second


def test_gated_jar_without_threshold_is_malformed() -> None:
    jar = _jar(access_control_type=AccessControlType.NFT_GATED, gating_token_address=GATING_TOKEN)

    with pytest.raises(InvalidSnapshotError, match="gating_token_amount is required"):
        _evaluate(jar, membership=MembershipState(gating_balance=0))
