"""
Rate Provenance

A resolved rate always carries where it came from, so a report can
state for each converted figure whether it used a rate asserted by
the user or one from the reference dataset.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from fbar.models.facts import ExchangeRate


class RateSource(str, Enum):
    """Where a resolved rate came from."""
    USER_PROVIDED = "user_provided"
    REFERENCE_PROVIDED = "reference_provided"


class ResolvedRate(BaseModel):
    """
    An exchange rate tagged with its source.
    
    Callers read `exchange_rate` explicitly; this wrapper does not
    forward attributes to the rate it holds.
    """
    model_config = ConfigDict(frozen=True)
    
    exchange_rate: ExchangeRate
    source: RateSource
    
    @property
    def is_user_provided(self) -> bool:
        return self.source == RateSource.USER_PROVIDED
