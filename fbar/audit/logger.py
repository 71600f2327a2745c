"""
Audit Logger

DESIGN DECISION: Every rate used in a report run is recorded.
This provides:
1. A per-figure record of which rate was used
2. Whether that rate was user-provided or reference data
3. Debugging capability when a figure looks wrong

The audit logger:
- Keeps an append-only, in-memory trail for one report run
- Mirrors every event to the structured log
- Uses a correlation ID so all events of one run can be grouped
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from fbar.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structlog on top of stdlib logging.
    
    Args:
        level: Root log level name (e.g. "INFO", "DEBUG")
        json_logs: Render JSON lines instead of human-readable console output
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
        force=True,
    )
    
    renderer = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Conversion audit trail for one report run.
    
    Events are kept in memory (for the report to cite) and logged
    locally (for debugging).
    """
    
    def __init__(self, correlation_id: Optional[UUID] = None):
        """
        Initialize audit logger.
        
        Args:
            correlation_id: ID shared by every event of this run.
                            A new one is created if not given.
        """
        self._correlation_id = correlation_id or create_correlation_id()
        self._events: list[AuditEvent] = []
        self._logger = structlog.get_logger(__name__)
    
    @property
    def correlation_id(self) -> UUID:
        return self._correlation_id
    
    @property
    def events(self) -> tuple[AuditEvent, ...]:
        """All events recorded so far, oldest first."""
        return tuple(self._events)
    
    def log(self, event: AuditEvent) -> None:
        """Record an event and mirror it to the structured log."""
        self._events.append(event)
        
        log_dict = event.to_log_dict()
        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)
    
    def log_user_data_loaded(
        self,
        path: str,
        provider_count: int,
        account_count: int,
        has_fact_extensions: bool,
    ) -> None:
        """Log a successful user data load."""
        self.log(AuditEventBuilder.user_data_loaded(
            path=path,
            provider_count=provider_count,
            account_count=account_count,
            has_fact_extensions=has_fact_extensions,
            correlation_id=self._correlation_id,
        ))
    
    def log_reference_facts_loaded(self, years: list[int]) -> None:
        """Log which reference years are available."""
        self.log(AuditEventBuilder.reference_facts_loaded(
            years=years,
            correlation_id=self._correlation_id,
        ))
    
    def log_rate_resolved(
        self,
        year: int,
        currency_code: str,
        rate: float,
        source: str,
    ) -> None:
        """Log a successful rate lookup and its source."""
        self.log(AuditEventBuilder.rate_resolved(
            year=year,
            currency_code=currency_code,
            rate=rate,
            source=source,
            correlation_id=self._correlation_id,
        ))
    
    def log_rate_not_found(self, year: int, currency_code: str) -> None:
        """Log a failed rate lookup."""
        self.log(AuditEventBuilder.rate_not_found(
            year=year,
            currency_code=currency_code,
            correlation_id=self._correlation_id,
        ))
    
    def log_conversion(
        self,
        year: int,
        currency_code: str,
        direction: str,
        amount: float,
        result: float,
        rate: float,
        source: str,
    ) -> None:
        """Log a completed conversion."""
        self.log(AuditEventBuilder.conversion_performed(
            year=year,
            currency_code=currency_code,
            direction=direction,
            amount=amount,
            result=result,
            rate=rate,
            source=source,
            correlation_id=self._correlation_id,
        ))
    
    def events_for_source(self, source: str) -> list[AuditEvent]:
        """Events whose rate came from the given source."""
        return [e for e in self._events if e.details.get("source") == source]


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for one report run.
    
    Pass it through all operations of that run.
    """
    return uuid4()
