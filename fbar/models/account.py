"""
Account and Provider Models

These models describe the user's side of the report: the financial
institutions (providers) and the accounts held with them.

DESIGN DECISION: Every model is frozen. A loaded dataset is built once
and then only read, so nothing downstream can quietly edit an account
after its provider reference has been checked.

Accounts reference providers by handle. The loader checks that
reference and attaches a copy of the provider to the account; the
models themselves never go looking for providers.
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fbar.models.facts import Facts


class Provider(BaseModel):
    """A financial institution holding one or more accounts."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
    
    name: str = Field(
        ...,
        min_length=1,
        description="Institution name as it should appear on the report"
    )
    handle: str = Field(
        ...,
        min_length=1,
        description="Unique key used by accounts to reference this provider"
    )
    address: str = Field(
        ...,
        min_length=1,
        description="Institution mailing address"
    )


class AccountIdentifier(BaseModel):
    """An identifier value together with what it is (e.g. 'sort_code')."""
    model_config = ConfigDict(frozen=True)
    
    value: str
    label: str


class Account(BaseModel):
    """
    A financial account held with a provider.
    
    Open/close semantics:
    - `closing_date` is INCLUSIVE: the account is open on that day
    - no `closing_date` means the account is still open
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
    
    handle: str = Field(
        ...,
        min_length=1,
        description="Unique key for this account"
    )
    provider_handle: str = Field(
        ...,
        min_length=1,
        description="Handle of the provider holding this account"
    )
    provider: Optional[Provider] = Field(
        default=None,
        description="Copy of the referenced provider, attached by the loader"
    )
    currency_code: str = Field(
        ...,
        min_length=1,
        description="Currency the account is held in"
    )
    
    # Primary identifier, e.g. ("12345678", "account_number")
    identifier1: str = Field(..., min_length=1)
    identifier1_name: str = Field(..., min_length=1)
    
    # Optional secondary identifier, e.g. ("12-34-56", "sort_code")
    identifier2: Optional[str] = None
    identifier2_name: Optional[str] = None
    
    joint_holder_names: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Other holders of the account; empty if not joint"
    )
    
    opening_date: date
    closing_date: Optional[date] = None
    
    @model_validator(mode='after')
    def validate_account(self) -> 'Account':
        """Validate identifier pairing and date order."""
        if (self.identifier2 is None) != (self.identifier2_name is None):
            raise ValueError(
                "identifier2 and identifier2_name must be given together"
            )
        
        if self.closing_date and self.closing_date < self.opening_date:
            raise ValueError("Closing date cannot be before opening date")
        
        return self
    
    @property
    def primary_identifier(self) -> AccountIdentifier:
        return AccountIdentifier(value=self.identifier1, label=self.identifier1_name)
    
    @property
    def secondary_identifier(self) -> Optional[AccountIdentifier]:
        if self.identifier2 is None or self.identifier2_name is None:
            return None
        return AccountIdentifier(value=self.identifier2, label=self.identifier2_name)
    
    @property
    def is_joint(self) -> bool:
        """Check if anyone else holds this account."""
        return len(self.joint_holder_names) > 0
    
    def open_on(self, on: date) -> bool:
        """Check if the account was open on a given day."""
        return self.opening_date <= on and (
            self.closing_date is None or self.closing_date >= on
        )
    
    def open_during(self, year: int) -> bool:
        """Check if the account was open at any point in a calendar year."""
        year_start = date(year, 1, 1)
        year_end = date(year, 12, 31)
        return self.opening_date <= year_end and (
            self.closing_date is None or self.closing_date >= year_start
        )


class UserData(BaseModel):
    """
    Everything loaded from the user's data document.
    
    Only the loader should build this: it guarantees that every
    account's provider reference was checked and resolved.
    """
    model_config = ConfigDict(frozen=True)
    
    providers: tuple[Provider, ...]
    accounts: Optional[tuple[Account, ...]] = None
    fact_extensions: Optional[Facts] = None
    
    def get_provider(self, handle: str) -> Optional[Provider]:
        """Find a provider by handle."""
        return next((p for p in self.providers if p.handle == handle), None)
    
    def accounts_for_provider(self, handle: str) -> list[Account]:
        """All accounts held with the given provider."""
        return [a for a in self.accounts or () if a.provider_handle == handle]
    
    def accounts_open_during(self, year: int) -> list[Account]:
        """Accounts that were open at some point in `year`."""
        return [a for a in self.accounts or () if a.open_during(year)]
