"""
Audit Models for FBAR Facts

Every rate used in a report must be explainable after the fact:
which figure was converted, with which rate, and whether that rate
came from the user or from the reference dataset.

DESIGN DECISION: Audit trails are append-only. We never delete or modify events.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Loading
    USER_DATA_LOADED = "user_data_loaded"
    REFERENCE_FACTS_LOADED = "reference_facts_loaded"
    
    # Resolution
    RATE_RESOLVED = "rate_resolved"
    RATE_NOT_FOUND = "rate_not_found"
    
    # Conversion
    CONVERSION_PERFORMED = "conversion_performed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.
    
    This is the core unit of the conversion trail.
    """
    
    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    
    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )
    
    # Correlation - all events of one report run share this
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate the events of one report run"
    )
    
    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )
    error_message: Optional[str] = None
    
    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.
    
    Usage:
        event = AuditEventBuilder.rate_resolved(2023, "eur", 0.92, "user_provided", run_id)
    """
    
    @staticmethod
    def user_data_loaded(
        path: str,
        provider_count: int,
        account_count: int,
        has_fact_extensions: bool,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_DATA_LOADED,
            correlation_id=correlation_id,
            description=(
                f"User data loaded: {provider_count} providers, "
                f"{account_count} accounts"
            ),
            details={
                "path": path,
                "provider_count": provider_count,
                "account_count": account_count,
                "has_fact_extensions": has_fact_extensions,
            },
        )
    
    @staticmethod
    def reference_facts_loaded(
        years: list[int],
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.REFERENCE_FACTS_LOADED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Reference facts loaded for {len(years)} years",
            details={"years": years},
        )
    
    @staticmethod
    def rate_resolved(
        year: int,
        currency_code: str,
        rate: float,
        source: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RATE_RESOLVED,
            severity=AuditSeverity.DEBUG,
            correlation_id=correlation_id,
            description=f"Rate for {currency_code} in {year}: {rate} ({source})",
            details={
                "year": year,
                "currency_code": currency_code,
                "rate": rate,
                "source": source,
            },
        )
    
    @staticmethod
    def rate_not_found(
        year: int,
        currency_code: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.RATE_NOT_FOUND,
            severity=AuditSeverity.ERROR,
            correlation_id=correlation_id,
            description=f"No exchange rate for {currency_code} in {year}",
            details={
                "year": year,
                "currency_code": currency_code,
            },
            error_message=f"No exchange rate found for {currency_code} in year {year}",
        )
    
    @staticmethod
    def conversion_performed(
        year: int,
        currency_code: str,
        direction: str,
        amount: float,
        result: float,
        rate: float,
        source: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.CONVERSION_PERFORMED,
            correlation_id=correlation_id,
            description=(
                f"Converted {amount} {direction} for {currency_code} "
                f"in {year}: {result}"
            ),
            details={
                "year": year,
                "currency_code": currency_code,
                "direction": direction,
                "amount": amount,
                "result": result,
                "rate": rate,
                "source": source,
            },
        )
