"""
Report Context

The single interface report generation uses to convert amounts.

LOOKUP ORDER:
1. User-provided facts (`fact_extensions` from data.yml)
2. Reference facts shipped with the package

The first layer with a rate for the (year, currency) pair wins.
A user layer that knows the year but not the currency does NOT stop
the lookup; it falls through to the reference facts.

IMPORTANT: No rate is ever guessed. If neither layer knows the rate,
resolution fails with a ResolutionError.
"""

from typing import Optional

import structlog

from fbar.audit import AuditLogger
from fbar.errors import ResolutionError
from fbar.models.facts import Facts
from fbar.report.converter import RateSource, ResolvedRate


logger = structlog.get_logger(__name__)


class ReportContext:
    """
    Resolves exchange rates and converts amounts to and from USD.
    
    Holds only read-only fact sets, so one context can be shared
    freely by the code producing a report.
    """
    
    def __init__(
        self,
        facts: Facts,
        extensions: Optional[Facts] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Initialize report context.
        
        Args:
            facts: Reference facts (mandatory)
            extensions: User-provided facts that override the reference.
                        None behaves exactly like an empty fact set.
            audit_logger: If given, every lookup and conversion is recorded
        """
        self._facts = facts
        self._extensions = extensions if extensions is not None else Facts.empty()
        self._audit_logger = audit_logger
    
    @property
    def facts(self) -> Facts:
        return self._facts
    
    @property
    def extensions(self) -> Facts:
        return self._extensions
    
    def resolve(self, year: int, currency_code: str) -> ResolvedRate:
        """
        Find the exchange rate for a currency in a year.
        
        Returns:
            The rate together with the layer that supplied it
        
        Raises:
            ResolutionError: If neither layer has a rate
        """
        # Facts.get_exchange_rate normalizes the code for both layers
        rate = self._extensions.get_exchange_rate(year, currency_code)
        if rate is not None:
            resolved = ResolvedRate(exchange_rate=rate, source=RateSource.USER_PROVIDED)
        else:
            rate = self._facts.get_exchange_rate(year, currency_code)
            if rate is None:
                logger.warning("exchange_rate_not_found", year=year, currency_code=currency_code)
                if self._audit_logger:
                    self._audit_logger.log_rate_not_found(year, currency_code)
                raise ResolutionError(currency_code, year)
            resolved = ResolvedRate(exchange_rate=rate, source=RateSource.REFERENCE_PROVIDED)
        
        if self._audit_logger:
            self._audit_logger.log_rate_resolved(
                year=year,
                currency_code=resolved.exchange_rate.currency_code,
                rate=resolved.exchange_rate.rate,
                source=resolved.source.value,
            )
        return resolved
    
    def convert_to_usd(self, year: int, source_currency: str, amount: float) -> float:
        """
        Convert an amount in `source_currency` to USD using that year's rate.
        
        Raises:
            ResolutionError: If no rate is known
        """
        resolved = self.resolve(year, source_currency)
        result = resolved.exchange_rate.convert_to_usd(amount)
        self._record_conversion(year, resolved, "to_usd", amount, result)
        return result
    
    def convert_from_usd(self, year: int, target_currency: str, amount: float) -> float:
        """
        Convert a USD amount to `target_currency` using that year's rate.
        
        Raises:
            ResolutionError: If no rate is known
        """
        resolved = self.resolve(year, target_currency)
        result = resolved.exchange_rate.convert_from_usd(amount)
        self._record_conversion(year, resolved, "from_usd", amount, result)
        return result
    
    def _record_conversion(
        self,
        year: int,
        resolved: ResolvedRate,
        direction: str,
        amount: float,
        result: float,
    ) -> None:
        if self._audit_logger is None:
            return
        self._audit_logger.log_conversion(
            year=year,
            currency_code=resolved.exchange_rate.currency_code,
            direction=direction,
            amount=amount,
            result=result,
            rate=resolved.exchange_rate.rate,
            source=resolved.source.value,
        )
