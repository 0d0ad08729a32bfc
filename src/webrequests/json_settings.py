r"""Define the settings used to convert JSON request and response
bodies."""

from __future__ import annotations

__all__ = ["JSON_CONTENT_TYPE", "JsonSettings"]

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter

if TYPE_CHECKING:
    from collections.abc import Callable

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class JsonSettings:
    """Options for JSON conversion.

    Args:
        object_hook: Passed to ``json.loads``.
        parse_float: Passed to ``json.loads``.
        parse_int: Passed to ``json.loads``.
        strict: If ``True``, parsed values are validated against the
            declared type in pydantic strict mode (no type coercion).
        by_alias: Serialize model fields by their alias.
        exclude_none: Omit ``None`` fields when serializing models.
        indent: Indentation of serialized JSON, or ``None`` for compact
            output.

    Example:
        ```pycon
        >>> from decimal import Decimal
        >>> from webrequests import JsonSettings
        >>> settings = JsonSettings(parse_float=Decimal)
        >>> settings.loads(b'{"price": 1.5}')
        {'price': Decimal('1.5')}

        ```
    """

    object_hook: Callable[[dict[str, Any]], Any] | None = None
    parse_float: Callable[[str], Any] | None = None
    parse_int: Callable[[str], Any] | None = None
    strict: bool = False
    by_alias: bool = False
    exclude_none: bool = False
    indent: int | None = None

    def loads(self, data: bytes | str) -> Any:
        """Parse a JSON document.

        Raises:
            ValueError: If the document is not valid JSON.
        """
        return json.loads(
            data,
            object_hook=self.object_hook,
            parse_float=self.parse_float,
            parse_int=self.parse_int,
        )

    def convert(self, value: Any, adapter: TypeAdapter[Any]) -> Any:
        """Validate a parsed JSON value against a declared type.

        Raises:
            pydantic.ValidationError: If the value does not match the type.
        """
        return adapter.validate_python(value, strict=self.strict)

    def dumps(self, value: Any) -> bytes:
        """Serialize a value (including dataclasses and pydantic models)
        to JSON."""
        return TypeAdapter(type(value)).dump_json(
            value, by_alias=self.by_alias, exclude_none=self.exclude_none, indent=self.indent
        )
