"""
Error Hierarchy for FBAR Facts

Every failure is terminal for the operation that raised it.
Nothing here is retried: a failure means either the input document
is wrong or a fact is genuinely missing, and both need a human.
"""

from pathlib import Path
from typing import Optional


class FbarError(Exception):
    """Base exception for all FBAR Facts errors."""
    pass


# =============================================================================
# LOADING
# =============================================================================

class LoadError(FbarError):
    """Base exception for problems reading a data document."""
    pass


class NotFoundError(LoadError):
    """Expected input file does not exist."""
    
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path.name} not found in {path.parent}")


class ParseError(LoadError):
    """Document is not valid YAML or has the wrong top-level shape."""
    
    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        if source:
            message = f"{source}: {message}"
        super().__init__(message)


class ValidationError(LoadError):
    """Document parsed but its content breaks a data rule."""
    pass


class MissingFieldError(ValidationError):
    """A required top-level field is absent."""
    
    def __init__(self, field: str):
        self.field = field
        super().__init__(f"missing required field: {field}")


class OrderingError(ValidationError):
    """Accounts were listed before providers."""
    
    def __init__(self):
        super().__init__("accounts must come after providers")


class UnknownProviderError(ValidationError):
    """An account references a provider handle that was never defined."""
    
    def __init__(self, account_handle: str, provider_handle: str):
        self.account_handle = account_handle
        self.provider_handle = provider_handle
        super().__init__(
            f"account {account_handle} references unknown provider {provider_handle}"
        )


class DuplicateProviderError(ValidationError):
    """Two providers share the same handle."""
    
    def __init__(self, handle: str):
        self.handle = handle
        super().__init__(f"provider handle {handle} is defined more than once")


# =============================================================================
# RESOLUTION
# =============================================================================

class ResolutionError(FbarError):
    """No exchange rate is known for the requested year and currency."""
    
    def __init__(self, currency_code: str, year: int):
        self.currency_code = currency_code
        self.year = year
        super().__init__(
            f"No exchange rate found for {currency_code} in year {year}"
        )
