"""
Report Orchestrator

Ties together the pieces needed for one report run:
1. Load the user's data document (providers, accounts, overrides)
2. Load the bundled reference facts
3. Build a ReportContext with the user's overrides layered on top

The user data and the reference facts are loaded independently; the
report context is the only thing downstream report code should use
to convert amounts.
"""

from pathlib import Path
from typing import NamedTuple, Optional, Union

from fbar.audit import AuditLogger
from fbar.config import FbarSettings, get_settings
from fbar.loaders import load_reference_facts, load_user_data
from fbar.models.account import UserData
from fbar.report import ReportContext


class ReportComponents(NamedTuple):
    user_data: UserData
    context: ReportContext
    audit_logger: Optional[AuditLogger]


def create_report_components(
    base_path: Union[str, Path],
    settings: Optional[FbarSettings] = None,
) -> ReportComponents:
    """
    Factory function to create everything a report run needs.
    
    Args:
        base_path: Directory containing the user's data document
        settings: Settings to use; defaults to the cached environment settings
    
    Returns:
        (user_data, context, audit_logger); audit_logger is None when
        conversion auditing is disabled
    
    Raises:
        FbarError: If the user data or reference facts fail to load
    """
    settings = settings or get_settings()
    
    user_data = load_user_data(base_path, filename=settings.data_filename)
    reference_facts = load_reference_facts()
    
    audit_logger = None
    if settings.audit_conversions:
        audit_logger = AuditLogger()
        audit_logger.log_user_data_loaded(
            path=str(Path(base_path) / settings.data_filename),
            provider_count=len(user_data.providers),
            account_count=len(user_data.accounts or ()),
            has_fact_extensions=user_data.fact_extensions is not None,
        )
        audit_logger.log_reference_facts_loaded(reference_facts.available_years())
    
    context = ReportContext(
        facts=reference_facts,
        extensions=user_data.fact_extensions,
        audit_logger=audit_logger,
    )
    
    return ReportComponents(user_data, context, audit_logger)
