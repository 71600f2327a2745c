"""
Exchange Rate Fact Models

A fact set is a year-indexed table of USD exchange rates.
The same shape is used for the bundled reference dataset and for the
user's own `fact_extensions` section.

DESIGN DECISION: Rates are expressed as "units of foreign currency per
1 USD", matching the yearly average tables published for FBAR filing.
So converting USD -> foreign multiplies, foreign -> USD divides.

Lookups are FIRST-MATCH: neither years nor currency codes are required
to be unique. The first year entry for a year wins, and within it the
first rate for a currency wins.
"""

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


CENT = Decimal("0.01")

# Enough significant digits to hold any finite float to the cent
CENT_PRECISION = 400


def round_to_cents(value: float) -> float:
    """
    Round to 2 decimal places, halves away from zero.
    
    Works on the shortest decimal representation of the float so that
    e.g. 2.675 rounds to 2.68 as it would on paper.
    Infinities and NaN are returned unchanged.
    """
    if not math.isfinite(value):
        return value
    with localcontext() as ctx:
        ctx.prec = CENT_PRECISION
        return float(Decimal(repr(value)).quantize(CENT, rounding=ROUND_HALF_UP))


class ExchangeRate(BaseModel):
    """
    A single currency exchange rate fact.
    
    The currency code is normalized to lowercase so that
    "EUR", "eur" and "eUr" all refer to the same rate.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
    
    currency_code: str = Field(
        ...,
        min_length=1,
        description="ISO currency code, stored lowercase"
    )
    rate: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Units of this currency per 1 USD"
    )
    
    @field_validator('currency_code')
    @classmethod
    def normalize_currency_code(cls, v: str) -> str:
        return v.lower()
    
    def convert_from_usd(self, amount: float) -> float:
        """Convert a USD amount into this currency."""
        return round_to_cents(amount * self.rate)
    
    def convert_to_usd(self, amount: float) -> float:
        """Convert an amount in this currency into USD."""
        return round_to_cents(amount / self.rate)


class AnnualFact(BaseModel):
    """All exchange rates known for one calendar year."""
    model_config = ConfigDict(frozen=True)
    
    year: int
    exchange_rates: tuple[ExchangeRate, ...] = Field(default_factory=tuple)
    
    def find_rate(self, currency_code: str) -> Optional[ExchangeRate]:
        """First rate for an already-normalized currency code."""
        return next(
            (rate for rate in self.exchange_rates if rate.currency_code == currency_code),
            None,
        )


class Facts(BaseModel):
    """
    A set of annual facts.
    
    Built once at load time and read-only afterwards.
    `Facts.empty()` is the identity value used when a user
    supplies no overrides.
    """
    model_config = ConfigDict(frozen=True)
    
    years: tuple[AnnualFact, ...] = Field(default_factory=tuple)
    
    @classmethod
    def empty(cls) -> 'Facts':
        """Create a fact set with no years."""
        return cls(years=())
    
    @property
    def is_empty(self) -> bool:
        return not self.years
    
    def available_years(self) -> list[int]:
        """Years in document order (duplicates kept)."""
        return [annual.year for annual in self.years]
    
    def get_exchange_rate(
        self,
        year: int,
        currency_code: str,
    ) -> Optional[ExchangeRate]:
        """
        Look up the rate for a currency in a year.
        
        Only the first entry for `year` is searched; a later duplicate
        year entry is never consulted.
        
        Returns:
            The matching rate, or None if the year or currency is unknown
        """
        lookup_code = currency_code.strip().lower()
        annual = next((a for a in self.years if a.year == year), None)
        if annual is None:
            return None
        return annual.find_rate(lookup_code)
