"""Coerce issue/comment body fields into ADF payloads."""

import json
from typing import Any, Mapping

from .converter import ConvertOptions, markdown_to_adf
from .core.model import DOC_VERSION, empty_document, plain_document
from .core.ports import Lexer
from .detect import looks_like_markdown


class InvalidBodyError(ValueError):
    """Raised when a body is neither text nor a valid ADF document."""


def is_adf_document(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and value.get("type") == "doc"
        and value.get("version") == DOC_VERSION
        and not isinstance(value.get("version"), bool)
    )


def coerce_body(
    value: Any,
    options: ConvertOptions | None = None,
    lexer: Lexer | None = None,
) -> dict[str, Any]:
    """
    Turn a body field into an ADF document payload.

    - mappings must already be ADF documents and are returned as-is
    - strings starting with ``{`` are parsed as ADF JSON
    - Markdown-looking strings are converted
    - blank strings give an empty document
    - anything else is wrapped as one literal paragraph
    """
    if isinstance(value, Mapping):
        if not is_adf_document(value):
            raise InvalidBodyError("Body must be a string or valid ADF JSON")
        return dict(value)

    if not isinstance(value, str):
        raise InvalidBodyError(f"Unsupported body type: {type(value).__name__}")

    if not value.strip():
        return empty_document().to_dict()

    if value.strip().startswith("{"):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError as e:
            raise InvalidBodyError(f"Body looks like JSON but does not parse: {e}") from e
        if not is_adf_document(parsed):
            raise InvalidBodyError("Body must be a string or valid ADF JSON")
        return parsed

    if looks_like_markdown(value):
        return markdown_to_adf(value, options=options, lexer=lexer)
    return plain_document(value).to_dict()
