"""
User Data Loader

Turns the user's `data.yml` into a validated UserData aggregate.

DOCUMENT SHAPE:
    providers:        required, list of providers
    accounts:         optional, list of accounts
    fact_extensions:  optional, same shape as the reference facts

CRITICAL: `providers` must appear BEFORE `accounts` in the document.
Accounts are resolved against the providers already read, one by one,
as the document is walked. There is no second pass that could let an
account load without its provider.

DESIGN DECISION: Provider handles must be unique. A duplicate handle
would make account resolution depend on document order, so it is
rejected outright instead of silently picking the first provider.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

import structlog
from pydantic import ValidationError as PydanticValidationError

from fbar.errors import (
    DuplicateProviderError,
    MissingFieldError,
    OrderingError,
    UnknownProviderError,
    ValidationError,
)
from fbar.loaders.documents import (
    parse_yaml_mapping,
    read_document,
    validation_failed,
)
from fbar.models.account import Account, Provider, UserData
from fbar.models.facts import Facts


DATA_FILENAME = "data.yml"

PROVIDERS_FIELD = "providers"
ACCOUNTS_FIELD = "accounts"
FACT_EXTENSIONS_FIELD = "fact_extensions"

KNOWN_FIELDS = (PROVIDERS_FIELD, FACT_EXTENSIONS_FIELD, ACCOUNTS_FIELD)

logger = structlog.get_logger(__name__)


class UserDataBuilder:
    """
    Accumulates one document's sections in the order they appear.
    
    Each `add_*` method validates its section immediately, so the
    first problem in the document is the one reported.
    """
    
    def __init__(self):
        self._providers: Optional[dict[str, Provider]] = None
        self._accounts: Optional[list[Account]] = None
        self._fact_extensions: Optional[Facts] = None
    
    def add_field(self, key: Any, value: Any) -> None:
        """Dispatch one top-level field of the document."""
        if key == PROVIDERS_FIELD:
            self.add_providers(value)
        elif key == ACCOUNTS_FIELD:
            self.add_accounts(value)
        elif key == FACT_EXTENSIONS_FIELD:
            self.add_fact_extensions(value)
        else:
            raise ValidationError(
                f"unknown field {key!r}, expected one of: {', '.join(KNOWN_FIELDS)}"
            )
    
    def add_providers(self, raw_providers: Any) -> None:
        records = _require_list(PROVIDERS_FIELD, raw_providers)
        
        providers: dict[str, Provider] = {}
        for index, record in enumerate(records):
            try:
                provider = Provider.model_validate(record)
            except PydanticValidationError as e:
                raise validation_failed(f"provider at index {index}", e) from e
            
            if provider.handle in providers:
                raise DuplicateProviderError(provider.handle)
            providers[provider.handle] = provider
        
        self._providers = providers
    
    def add_accounts(self, raw_accounts: Any) -> None:
        if self._providers is None:
            raise OrderingError()
        
        records = _require_list(ACCOUNTS_FIELD, raw_accounts)
        
        accounts = []
        for index, record in enumerate(records):
            try:
                account = Account.model_validate(record)
            except PydanticValidationError as e:
                raise validation_failed(f"account at index {index}", e) from e
            
            provider = self._providers.get(account.provider_handle)
            if provider is None:
                raise UnknownProviderError(account.handle, account.provider_handle)
            
            accounts.append(account.model_copy(update={"provider": provider.model_copy()}))
        
        self._accounts = accounts
    
    def add_fact_extensions(self, raw_facts: Any) -> None:
        try:
            self._fact_extensions = Facts.model_validate(raw_facts)
        except PydanticValidationError as e:
            raise validation_failed(FACT_EXTENSIONS_FIELD, e) from e
    
    def build(self) -> UserData:
        if self._providers is None:
            raise MissingFieldError(PROVIDERS_FIELD)
        
        return UserData(
            providers=tuple(self._providers.values()),
            accounts=tuple(self._accounts) if self._accounts is not None else None,
            fact_extensions=self._fact_extensions,
        )


def _require_list(field: str, value: Any) -> list:
    if not isinstance(value, list):
        raise ValidationError(
            f"{field} must be a list, got {type(value).__name__}"
        )
    return value


def build_user_data(document: Mapping[str, Any]) -> UserData:
    """
    Build UserData from an already-parsed document mapping.
    
    Keys are processed in the mapping's iteration order, which for
    parsed YAML is document order.
    """
    builder = UserDataBuilder()
    for key, value in document.items():
        builder.add_field(key, value)
    return builder.build()


def parse_user_data(content: str, source: Optional[str] = None) -> UserData:
    """
    Parse and validate a user data document held in a string.
    
    Raises:
        ParseError: If the YAML is malformed
        ValidationError: If the content breaks a data rule
    """
    document = parse_yaml_mapping(content, source=source)
    return build_user_data(document)


def load_user_data(
    base_path: Union[str, Path],
    filename: str = DATA_FILENAME,
) -> UserData:
    """
    Load the user's data document from a directory.
    
    Args:
        base_path: Directory containing the data document
        filename: Name of the document inside `base_path`
    
    Returns:
        Fully validated UserData with providers attached to accounts
    
    Raises:
        NotFoundError: If the document does not exist
        ParseError: If the YAML is malformed
        ValidationError: If the content breaks a data rule
    """
    path = Path(base_path) / filename
    content = read_document(path)
    data = parse_user_data(content, source=str(path))
    
    logger.info(
        "user_data_loaded",
        path=str(path),
        provider_count=len(data.providers),
        account_count=len(data.accounts or ()),
        has_fact_extensions=data.fact_extensions is not None,
    )
    return data
