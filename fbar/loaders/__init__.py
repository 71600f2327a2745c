"""Document loaders package."""

from fbar.loaders.reference import load_reference_facts, parse_facts
from fbar.loaders.user_data import (
    DATA_FILENAME,
    build_user_data,
    load_user_data,
    parse_user_data,
)

__all__ = [
    "DATA_FILENAME",
    "build_user_data",
    "load_reference_facts",
    "load_user_data",
    "parse_facts",
    "parse_user_data",
]
