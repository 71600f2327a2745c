"""
Reference Fact Store

The reference facts are the yearly exchange rates shipped with the
package (`fbar/resources/years.yml`). They are read-only: users never
edit them, they override them through `fact_extensions` instead.
"""

from functools import lru_cache
from importlib import resources
from typing import Optional

import structlog
from pydantic import ValidationError as PydanticValidationError

from fbar.loaders.documents import parse_yaml_mapping, validation_failed
from fbar.models.facts import Facts


REFERENCE_FACTS_RESOURCE = "resources/years.yml"

logger = structlog.get_logger(__name__)


def parse_facts(content: str, source: Optional[str] = None) -> Facts:
    """
    Parse a fact set document: `{years: [{year, exchange_rates: [...]}]}`.
    
    Raises:
        ParseError: If the YAML is malformed
        ValidationError: If a year or rate is invalid (e.g. rate <= 0)
    """
    document = parse_yaml_mapping(content, source=source)
    try:
        return Facts.model_validate(document)
    except PydanticValidationError as e:
        raise validation_failed(source or "facts", e) from e


@lru_cache(maxsize=1)
def load_reference_facts() -> Facts:
    """
    Load the bundled reference facts (cached for the process).
    
    The returned Facts is frozen, so sharing one instance is safe.
    """
    content = (
        resources.files("fbar")
        .joinpath(REFERENCE_FACTS_RESOURCE)
        .read_text(encoding="utf-8")
    )
    facts = parse_facts(content, source=REFERENCE_FACTS_RESOURCE)
    
    logger.debug("reference_facts_loaded", years=facts.available_years())
    return facts
