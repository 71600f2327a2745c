"""
Tests for FBAR Facts models

Test strategy:
1. Unit tests for the fact and account models
2. Loader and report context tests live in their own modules
3. No network or real user files (temp directories only)
"""

import math
import sys

import pytest
from datetime import date

from pydantic import ValidationError as PydanticValidationError

from fbar.models.account import Account, AccountIdentifier, Provider, UserData
from fbar.models.facts import AnnualFact, ExchangeRate, Facts, round_to_cents


def make_account(**overrides) -> Account:
    fields = {
        "handle": "test",
        "provider_handle": "test_provider",
        "currency_code": "USD",
        "identifier1": "123",
        "identifier1_name": "account",
        "opening_date": date(2023, 1, 1),
    }
    fields.update(overrides)
    return Account(**fields)


class TestExchangeRate:
    """Tests for the ExchangeRate model."""
    
    @pytest.mark.parametrize("code", ["EUR", "eur", "eUr"])
    def test_currency_code_is_lowercased(self, code):
        """Test that any casing normalizes to lowercase."""
        rate = ExchangeRate(currency_code=code, rate=0.85)
        assert rate.currency_code == "eur"
    
    def test_currency_code_whitespace_stripped(self):
        rate = ExchangeRate(currency_code="  GBP ", rate=0.78)
        assert rate.currency_code == "gbp"
    
    @pytest.mark.parametrize("value", [0, 0.0, -0.85, -100])
    def test_rejects_non_positive_rate(self, value):
        """Test that rates must be greater than zero."""
        with pytest.raises(ValueError):
            ExchangeRate(currency_code="EUR", rate=value)
    
    @pytest.mark.parametrize("value", [float("inf"), float("nan")])
    def test_rejects_non_finite_rate(self, value):
        """Test that infinite and NaN rates are rejected."""
        with pytest.raises(ValueError):
            ExchangeRate(currency_code="EUR", rate=value)
    
    def test_accepts_tiny_positive_rate(self):
        rate = ExchangeRate(currency_code="BTC", rate=0.00001)
        assert rate.rate == 0.00001
    
    def test_is_immutable(self):
        rate = ExchangeRate(currency_code="EUR", rate=0.85)
        with pytest.raises(PydanticValidationError):
            rate.rate = 1.0
    
    def test_currency_conversion(self):
        """Test USD <-> EUR conversion with a 0.85 rate."""
        rate = ExchangeRate(currency_code="EUR", rate=0.85)
        
        assert rate.convert_from_usd(100.0) == 85.0
        assert rate.convert_from_usd(50.0) == 42.5
        
        assert rate.convert_to_usd(85.0) == 100.0
        assert rate.convert_to_usd(42.5) == 50.0
    
    def test_rounding(self):
        """Test that conversions round to 2 decimal places."""
        rate = ExchangeRate(currency_code="EUR", rate=0.333)
        
        assert rate.convert_from_usd(1.00) == 0.33
        assert rate.convert_from_usd(10.00) == 3.33
        
        assert rate.convert_to_usd(0.33) == 0.99
        assert rate.convert_to_usd(3.33) == 10.00


class TestRoundToCents:
    """Tests for the shared rounding helper."""
    
    def test_rounds_half_up(self):
        assert round_to_cents(2.675) == 2.68
        assert round_to_cents(0.125) == 0.13
    
    def test_rounds_negative_half_away_from_zero(self):
        assert round_to_cents(-1.005) == -1.01
    
    def test_rounds_down_below_half(self):
        assert round_to_cents(1.234) == 1.23
    
    def test_large_values_keep_their_magnitude(self):
        """Test values wider than the default decimal precision."""
        assert round_to_cents(1e27 * 150.0) == 1e27 * 150.0
        assert round_to_cents(sys.float_info.max) == sys.float_info.max
        assert round_to_cents(-1e300) == -1e300
    
    def test_non_finite_values_pass_through(self):
        assert round_to_cents(float("inf")) == float("inf")
        assert round_to_cents(float("-inf")) == float("-inf")
        assert math.isnan(round_to_cents(float("nan")))


class TestFacts:
    """Tests for first-match fact lookup."""
    
    def test_empty_has_no_years(self):
        facts = Facts.empty()
        assert facts.is_empty
        assert facts.available_years() == []
        assert facts.get_exchange_rate(2023, "eur") is None
    
    def test_lookup_is_case_insensitive(self, reference_facts):
        upper = reference_facts.get_exchange_rate(2023, "EUR")
        mixed = reference_facts.get_exchange_rate(2023, "eUr")
        assert upper is not None
        assert upper.rate == 0.85
        assert mixed == upper
    
    def test_unknown_year_or_currency(self, reference_facts):
        assert reference_facts.get_exchange_rate(2000, "eur") is None
        assert reference_facts.get_exchange_rate(2023, "xyz") is None
    
    def test_first_currency_match_wins(self):
        facts = Facts(years=(
            AnnualFact(year=2023, exchange_rates=(
                ExchangeRate(currency_code="EUR", rate=0.85),
                ExchangeRate(currency_code="eur", rate=0.99),
            )),
        ))
        assert facts.get_exchange_rate(2023, "eur").rate == 0.85
    
    def test_only_first_year_entry_is_searched(self):
        """A later entry for the same year is never consulted."""
        facts = Facts(years=(
            AnnualFact(year=2023, exchange_rates=(
                ExchangeRate(currency_code="EUR", rate=0.85),
            )),
            AnnualFact(year=2023, exchange_rates=(
                ExchangeRate(currency_code="CHF", rate=0.90),
            )),
        ))
        assert facts.get_exchange_rate(2023, "eur").rate == 0.85
        assert facts.get_exchange_rate(2023, "chf") is None
        assert facts.available_years() == [2023, 2023]
    
    def test_model_validate_from_document(self):
        facts = Facts.model_validate({
            "years": [
                {"year": 2022, "exchange_rates": [{"currency_code": "GBP", "rate": 0.81}]},
            ]
        })
        assert facts.years[0].exchange_rates[0].currency_code == "gbp"


class TestProvider:
    """Tests for the Provider model."""
    
    def test_provider_creation(self):
        provider = Provider(name="  Example Bank ", handle="example", address="Zurich")
        assert provider.name == "Example Bank"
        assert provider.handle == "example"
    
    def test_provider_requires_handle(self):
        with pytest.raises(ValueError):
            Provider(name="Example Bank", handle="", address="Zurich")


class TestAccount:
    """Tests for Account validation and date queries."""
    
    def test_is_joint(self):
        """Test single vs joint accounts."""
        assert make_account().is_joint is False
        assert make_account(joint_holder_names=["Jane Doe"]).is_joint is True
    
    def test_identifiers(self):
        account = make_account(
            identifier1="12345678",
            identifier1_name="account_number",
            identifier2="12-34-56",
            identifier2_name="sort_code",
        )
        assert account.primary_identifier == AccountIdentifier(
            value="12345678", label="account_number"
        )
        assert account.secondary_identifier == AccountIdentifier(
            value="12-34-56", label="sort_code"
        )
    
    def test_secondary_identifier_absent(self):
        assert make_account().secondary_identifier is None
    
    def test_secondary_identifier_requires_label(self):
        with pytest.raises(ValueError, match="identifier2 and identifier2_name"):
            make_account(identifier2="12-34-56")
    
    def test_closing_date_before_opening_rejected(self):
        with pytest.raises(ValueError, match="Closing date cannot be before opening date"):
            make_account(closing_date=date(2022, 12, 31))
    
    def test_open_on_still_open(self):
        """Test an account with no closing date."""
        account = make_account()
        assert account.open_on(date(2023, 1, 1))
        assert account.open_on(date(2024, 6, 30))
        assert account.open_on(date(2099, 1, 1))
        assert not account.open_on(date(2022, 12, 31))
    
    def test_open_on_closed(self):
        """Test that the closing date is inclusive."""
        account = make_account(closing_date=date(2024, 6, 30))
        assert account.open_on(date(2023, 1, 1))
        assert account.open_on(date(2024, 1, 1))
        assert account.open_on(date(2024, 6, 30))
        assert not account.open_on(date(2024, 7, 1))
        assert not account.open_on(date(2022, 12, 31))
    
    def test_open_during_still_open(self):
        account = make_account()
        assert account.open_during(2023)
        assert account.open_during(2024)
        assert not account.open_during(2022)
    
    def test_open_during_closed(self):
        account = make_account(closing_date=date(2024, 6, 30))
        assert account.open_during(2023)
        assert account.open_during(2024)
        assert not account.open_during(2022)
        assert not account.open_during(2025)
    
    def test_open_during_partial_years(self):
        """Opened on Dec 31 and closed on Jan 1 still count for those years."""
        account = make_account(
            opening_date=date(2021, 12, 31),
            closing_date=date(2023, 1, 1),
        )
        assert account.open_during(2021)
        assert account.open_during(2022)
        assert account.open_during(2023)
        assert not account.open_during(2020)
        assert not account.open_during(2024)
    
    def test_parses_iso_date_strings(self):
        account = make_account(opening_date="2020-03-15")
        assert account.opening_date == date(2020, 3, 15)


class TestUserData:
    """Tests for UserData helpers."""
    
    def test_helpers(self):
        provider = Provider(name="Bank", handle="bank", address="Somewhere")
        old = make_account(
            handle="old",
            provider_handle="bank",
            opening_date=date(2010, 1, 1),
            closing_date=date(2015, 1, 1),
        )
        new = make_account(handle="new", provider_handle="bank")
        data = UserData(providers=(provider,), accounts=(old, new))
        
        assert data.get_provider("bank") == provider
        assert data.get_provider("missing") is None
        assert [a.handle for a in data.accounts_for_provider("bank")] == ["old", "new"]
        assert [a.handle for a in data.accounts_open_during(2023)] == ["new"]
    
    def test_helpers_without_accounts(self):
        data = UserData(providers=())
        assert data.accounts_for_provider("bank") == []
        assert data.accounts_open_during(2023) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
