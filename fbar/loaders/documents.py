"""
YAML Document Helpers

Shared plumbing for the loaders: reading a file that must exist,
parsing YAML, and turning pydantic validation failures into our own
error types with readable messages.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from fbar.errors import NotFoundError, ParseError, ValidationError


MERGE_KEY_TAG = "tag:yaml.org,2002:merge"


class UniqueKeySafeLoader(yaml.SafeLoader):
    """
    SafeLoader that rejects a key repeated within one mapping.
    
    Plain PyYAML keeps the last value under the first key's position,
    which would change the order the loaders see the document in.
    """
    
    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                if key_node.tag == MERGE_KEY_TAG:
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    is_duplicate = key in seen
                except TypeError:
                    # Unhashable keys are reported by the base constructor
                    continue
                if is_duplicate:
                    raise yaml.constructor.ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def read_document(path: Path) -> str:
    """
    Read a UTF-8 document from disk.
    
    Raises:
        NotFoundError: If the file does not exist
    """
    if not path.is_file():
        raise NotFoundError(path)
    return path.read_text(encoding="utf-8")


def parse_yaml_mapping(content: str, source: Optional[str] = None) -> Mapping[str, Any]:
    """
    Parse a YAML document whose top level must be a mapping.
    
    Mapping order is preserved, so callers can rely on the order
    in which keys appear in the document.
    
    Raises:
        ParseError: On YAML syntax errors, repeated keys, empty documents,
                    or a non-mapping top level
    """
    try:
        data = yaml.load(content, Loader=UniqueKeySafeLoader)
    except yaml.YAMLError as e:
        raise ParseError(str(e), source=source) from e
    
    if data is None:
        raise ParseError("document is empty", source=source)
    if not isinstance(data, Mapping):
        raise ParseError(
            f"expected a mapping at the top level, got {type(data).__name__}",
            source=source,
        )
    return data


def format_validation_error(exc: PydanticValidationError) -> str:
    """Flatten pydantic errors into 'field: message; field: message'."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        if location:
            parts.append(f"{location}: {error['msg']}")
        else:
            parts.append(error["msg"])
    return "; ".join(parts)


def validation_failed(what: str, exc: PydanticValidationError) -> ValidationError:
    """Build our ValidationError for a record that failed its schema."""
    return ValidationError(f"invalid {what}: {format_validation_error(exc)}")
