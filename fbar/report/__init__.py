"""Report context package."""

from fbar.report.context import ReportContext
from fbar.report.converter import RateSource, ResolvedRate

__all__ = ["RateSource", "ReportContext", "ResolvedRate"]
