"""
Unit Tests for the Settlement Authorization Module.

These tests verify:
1. Signature signing and verification
2. Destination whitelist matching
3. Daily rate limiting and day rollover
4. Per-currency amount validation and ceilings
5. Configuration fallbacks

Test Categories:
- TestSignatureVerifier: HMAC over canonical JSON
- TestWhitelistGuard: exact-match allow-list
- TestRateLimiter: daily quota
- TestAmountValidator: LAMPORTS / USDC rules
- TestSettings: numeric config defaults
"""

import threading
from datetime import date, timedelta

import pytest

from src.core.config import Settings
from src.domain.entities import Currency
from src.service.authorization import (
    AmountRejection,
    AmountValidator,
    RateLimiter,
    SignatureVerifier,
    ValidatedAmount,
    WhitelistGuard,
    parse_whitelist,
    to_json_number_domain,
)
from src.service.authorization.signature import MAX_SAFE_INTEGER


DEST = "11111111111111111111111111111111"


def make_settings(**overrides) -> Settings:
    """Helper to build settings isolated from the environment."""
    return Settings(_env_file=None, **overrides)


# =============================================================================
# Signature Tests
# =============================================================================

class TestSignatureVerifier:
    """Tests for HMAC signing and verification."""

    def setup_method(self):
        self.verifier = SignatureVerifier("test-secret")
        self.payload = {"jobId": "job1", "dest": "DEST1", "amountLamports": 100}

    def test_signature_round_trip(self):
        signature = self.verifier.sign(self.payload)

        assert self.verifier.verify(self.payload, signature) is True

    def test_signature_is_lowercase_hex_sha256(self):
        signature = self.verifier.sign(self.payload)

        assert len(signature) == 64
        assert signature == signature.lower()
        int(signature, 16)

    def test_changed_field_fails(self):
        """A signature for one payload never validates another."""
        other = {**self.payload, "amountLamports": 101}

        assert self.verifier.verify(self.payload, self.verifier.sign(other)) is False

    def test_added_field_fails(self):
        signature = self.verifier.sign(self.payload)
        extended = {**self.payload, "currency": "USDC"}

        assert self.verifier.verify(extended, signature) is False

    def test_wrong_secret_fails(self):
        signature = SignatureVerifier("other-secret").sign(self.payload)

        assert self.verifier.verify(self.payload, signature) is False

    @pytest.mark.parametrize("signature", [None, "", "deadbeef", "zz" * 32])
    def test_missing_or_malformed_signature_fails_closed(self, signature):
        assert self.verifier.verify(self.payload, signature) is False

    def test_uppercase_signature_rejected(self):
        signature = self.verifier.sign(self.payload).upper()

        assert self.verifier.verify(self.payload, signature) is False

    def test_none_payload_signs_as_empty_object(self):
        assert self.verifier.sign(None) == self.verifier.sign({})
        assert self.verifier.verify(None, self.verifier.sign({})) is True

    def test_key_order_does_not_matter(self):
        reordered = {"amountLamports": 100, "dest": "DEST1", "jobId": "job1"}

        assert self.verifier.sign(reordered) == self.verifier.sign(self.payload)

    def test_integral_float_signs_like_integer(self):
        assert self.verifier.sign({"a": 1000.0}) == self.verifier.sign({"a": 1000})

    @pytest.mark.parametrize("amount", [2**53, 2**60, 10**20, -(10**20)])
    def test_integers_beyond_safe_range_round_trip(self, amount):
        payload = {"jobId": "job1", "amountMinor": amount}

        signature = self.verifier.sign(payload)

        assert self.verifier.verify(payload, signature) is True

    def test_large_integer_signs_like_its_double(self):
        assert self.verifier.sign({"a": 2**60}) == self.verifier.sign({"a": float(2**60)})

    def test_safe_integers_are_not_converted(self):
        assert to_json_number_domain({"a": [MAX_SAFE_INTEGER, True]}) == {
            "a": [MAX_SAFE_INTEGER, True],
        }

    def test_integer_beyond_double_range_signs_as_null(self):
        assert self.verifier.sign({"a": 10**400}) == self.verifier.sign({"a": None})

    def test_uncanonicalizable_payload_fails_closed(self):
        signature = self.verifier.sign({"a": 1})

        assert self.verifier.verify({"a": float("nan")}, signature) is False


# =============================================================================
# Whitelist Tests
# =============================================================================

class TestWhitelistGuard:
    """Tests for destination whitelist matching."""

    def test_parse_trims_and_drops_empties(self):
        assert parse_whitelist(" DEST1 , ,DEST2,") == ("DEST1", "DEST2")

    def test_parse_empty(self):
        assert parse_whitelist("") == ()

    def test_listed_destination_allowed(self):
        guard = WhitelistGuard(make_settings(treasury_dest_whitelist="DEST1,DEST2"))

        assert guard.is_whitelisted("DEST1") is True
        assert guard.is_whitelisted("DEST2") is True

    def test_unlisted_destination_rejected(self):
        guard = WhitelistGuard(make_settings(treasury_dest_whitelist="DEST1,DEST2"))

        assert guard.is_whitelisted("DESTX") is False

    def test_match_is_case_sensitive(self):
        guard = WhitelistGuard(make_settings(treasury_dest_whitelist="Dest1"))

        assert guard.is_whitelisted("dest1") is False
        assert guard.is_whitelisted("DEST1") is False

    def test_match_is_exact_not_prefix(self):
        guard = WhitelistGuard(make_settings(treasury_dest_whitelist="DEST1"))

        assert guard.is_whitelisted("DEST") is False
        assert guard.is_whitelisted("DEST12") is False

    def test_empty_destination_rejected(self):
        guard = WhitelistGuard(make_settings(treasury_dest_whitelist="DEST1"))

        assert guard.is_whitelisted("") is False

    def test_empty_config_rejects_everything(self):
        guard = WhitelistGuard(make_settings(treasury_dest_whitelist=""))

        assert guard.is_whitelisted(DEST) is False
        assert guard.entries() == ()

    def test_reflects_config_at_call_time(self):
        settings = make_settings(treasury_dest_whitelist="")
        guard = WhitelistGuard(settings)
        assert guard.is_whitelisted(DEST) is False

        settings.treasury_dest_whitelist = DEST

        assert guard.is_whitelisted(DEST) is True


# =============================================================================
# Rate Limiter Tests
# =============================================================================

class FakeClock:
    """Controllable date source."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


class TestRateLimiter:
    """Tests for the daily attempt quota."""

    def test_first_n_calls_allowed_then_blocked(self):
        limiter = RateLimiter(daily_limit=2)

        assert limiter.allow() is True
        assert limiter.allow() is True
        assert limiter.allow() is False

    def test_blocked_calls_still_count(self):
        limiter = RateLimiter(daily_limit=1)

        limiter.allow()
        limiter.allow()
        limiter.allow()

        assert limiter.count == 3
        assert limiter.remaining == 0

    def test_zero_limit_blocks_everything(self):
        limiter = RateLimiter(daily_limit=0)

        assert limiter.allow() is False

    def test_new_day_resets_count(self):
        clock = FakeClock(date(2026, 3, 1))
        limiter = RateLimiter(daily_limit=2, today=clock)
        limiter.allow()
        limiter.allow()
        assert limiter.allow() is False

        clock.today += timedelta(days=1)

        assert limiter.allow() is True
        assert limiter.allow() is True
        assert limiter.allow() is False

    def test_same_day_does_not_reset(self):
        clock = FakeClock(date(2026, 3, 1))
        limiter = RateLimiter(daily_limit=1, today=clock)
        limiter.allow()

        assert limiter.allow() is False

    def test_remaining(self):
        limiter = RateLimiter(daily_limit=5)
        limiter.allow()
        limiter.allow()

        assert limiter.remaining == 3

    def test_reset(self):
        limiter = RateLimiter(daily_limit=1)
        limiter.allow()
        limiter.reset()

        assert limiter.count == 0
        assert limiter.allow() is True

    def test_concurrent_calls_are_not_lost(self):
        """Every concurrent call is counted exactly once."""
        limiter = RateLimiter(daily_limit=250)
        results = []
        results_lock = threading.Lock()

        def worker():
            local = [limiter.allow() for _ in range(100)]
            with results_lock:
                results.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert limiter.count == 800
        assert results.count(True) == 250


# =============================================================================
# Amount Validation Tests
# =============================================================================

class TestAmountValidator:
    """Tests for per-currency amount rules."""

    def setup_method(self):
        self.validator = AmountValidator(
            make_settings(max_lamports_per_tx=10_000, max_usdc_minor_per_tx=100_000)
        )

    def test_lamports_at_ceiling_accepted(self):
        result = self.validator.validate(Currency.LAMPORTS, 10_000)

        assert result == ValidatedAmount(currency=Currency.LAMPORTS, amount=10_000)

    def test_lamports_above_ceiling_rejected(self):
        result = self.validator.validate(Currency.LAMPORTS, 10_001)

        assert result == AmountRejection(reason="amount_exceeds_max")

    def test_lamports_fraction_above_ceiling_rejected(self):
        """The ceiling applies to the value as sent, before truncation."""
        result = self.validator.validate(Currency.LAMPORTS, 10_000.5)

        assert result == AmountRejection(reason="amount_exceeds_max")

    def test_lamports_truncated_toward_zero(self):
        assert self.validator.validate(Currency.LAMPORTS, 1234.9).amount == 1234
        assert self.validator.validate(Currency.LAMPORTS, -3.7).amount == -3

    def test_lamports_numeric_string_accepted(self):
        assert self.validator.validate(Currency.LAMPORTS, "1500").amount == 1500

    @pytest.mark.parametrize("raw", [None, "abc", True, [], {}, float("inf"), float("nan")])
    def test_lamports_non_number_rejected(self, raw):
        result = self.validator.validate(Currency.LAMPORTS, raw)

        assert result == AmountRejection(
            reason="bad_request",
            field="amountLamports",
            issue="number_required",
        )

    def test_usdc_integer_accepted_with_default_mint(self):
        result = self.validator.validate(Currency.USDC, 2500)

        assert result == ValidatedAmount(
            currency=Currency.USDC,
            amount=2500,
            mint="MockUSDCMint11111111111111111111111111111",
        )

    def test_usdc_integral_float_accepted(self):
        assert self.validator.validate(Currency.USDC, 10.0).amount == 10

    @pytest.mark.parametrize("raw", [10.5, None, "ten", "10.5", False])
    def test_usdc_non_integer_rejected(self, raw):
        result = self.validator.validate(Currency.USDC, raw)

        assert result == AmountRejection(
            reason="bad_request",
            field="amountMinor",
            issue="integer_required",
        )

    def test_usdc_at_ceiling_accepted(self):
        assert self.validator.validate(Currency.USDC, 100_000).amount == 100_000

    def test_usdc_above_ceiling_rejected(self):
        result = self.validator.validate(Currency.USDC, 100_001)

        assert result == AmountRejection(reason="amount_exceeds_max")

    def test_usdc_explicit_mint_kept(self):
        mint = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"

        assert self.validator.validate(Currency.USDC, 1, mint=mint).mint == mint

    @pytest.mark.parametrize("mint", ["not-a-mint", "0" * 32, "I" * 32, 12345])
    def test_usdc_malformed_mint_rejected(self, mint):
        result = self.validator.validate(Currency.USDC, 1, mint=mint)

        assert result == AmountRejection(
            reason="bad_request",
            field="mint",
            issue="invalid_format",
        )


# =============================================================================
# Settings Tests
# =============================================================================

class TestSettings:
    """Tests for configuration defaults."""

    def test_defaults(self):
        settings = make_settings()

        assert settings.hmac_secret == "change-me"
        assert settings.treasury_dest_whitelist == ""
        assert settings.max_lamports_per_tx == 10_000
        assert settings.max_usdc_minor_per_tx == 100_000
        assert settings.daily_tx_limit == 50
        assert settings.port == 3001

    def test_non_numeric_values_fall_back_to_defaults(self):
        settings = make_settings(daily_tx_limit="lots", max_lamports_per_tx="", port=None)

        assert settings.daily_tx_limit == 50
        assert settings.max_lamports_per_tx == 10_000
        assert settings.port == 3001

    def test_numeric_strings_are_parsed(self):
        settings = make_settings(max_usdc_minor_per_tx="2500")

        assert settings.max_usdc_minor_per_tx == 2500

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("DAILY_TX_LIMIT", "7")
        monkeypatch.setenv("MAX_LAMPORTS_PER_TX", "not-a-number")
        monkeypatch.setenv("TREASURY_DEST_WHITELIST", "A,B")

        settings = make_settings()

        assert settings.daily_tx_limit == 7
        assert settings.max_lamports_per_tx == 10_000
        assert settings.treasury_dest_whitelist == "A,B"
