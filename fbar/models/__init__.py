"""
Data Models Package

This package contains all Pydantic models used by FBAR Facts.
Everything loaded from a document is validated against these schemas.
"""

from fbar.models.account import (
    Account,
    AccountIdentifier,
    Provider,
    UserData,
)
from fbar.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from fbar.models.facts import (
    AnnualFact,
    ExchangeRate,
    Facts,
    round_to_cents,
)

__all__ = [
    # Account models
    "Account",
    "AccountIdentifier",
    "Provider",
    "UserData",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
    # Fact models
    "AnnualFact",
    "ExchangeRate",
    "Facts",
    "round_to_cents",
]
