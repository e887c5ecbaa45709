"""
Converter from parsed JSON values to DynamoDB attribute values.

Produces the tagged wire representation accepted by the low-level
DynamoDB client, e.g. ``{"S": "text"}``, ``{"N": "1.5"}`` or
``{"M": {"key": {"BOOL": True}}}``.

Empty strings are encoded as NULL, so an explicit ``""`` does not
survive a round trip through this encoding.
"""
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, List, Optional

from dynamo_migrate.core.config import settings
from dynamo_migrate.core.exceptions import (
    NestingDepthError,
    TypeMismatchError,
    UnsupportedTypeError,
)

AttributeValue = Dict[str, Any]

# DynamoDB numbers carry at most 38 significant digits, with magnitudes
# between 1E-130 and 9.99...E+125
MAX_NUMBER_PRECISION = 38
MIN_NUMBER_EXPONENT = -130
MAX_NUMBER_EXPONENT = 125


class AttributeValueEncoder:
    """Encodes generic values into DynamoDB attribute values."""

    def __init__(self, max_depth: Optional[int] = None):
        """Initialize encoder.

        Args:
            max_depth: Maximum number of nested lists/maps, None for no limit
        """
        self.max_depth = max_depth

    def encode(self, value: Any) -> AttributeValue:
        """
        Encode a single value.

        Args:
            value: None, bool, int, float, Decimal, str, list/tuple or
                str-keyed mapping, nested to any depth

        Returns:
            Tagged attribute value

        Raises:
            UnsupportedTypeError: Value (or a nested value) has no encoding
            TypeMismatchError: A mapping has non-string keys
            NestingDepthError: Value is nested deeper than max_depth
        """
        return self._encode(value, "$", 0)

    def encode_item(self, item: Any) -> Dict[str, AttributeValue]:
        """
        Encode a top-level record into a PutItem ``Item`` mapping.

        The record itself is not wrapped in ``{"M": ...}``; each of its
        attributes is encoded separately.
        """
        if not isinstance(item, Mapping):
            raise TypeMismatchError(
                f"expected an object for item, got {type(item).__name__}", "$"
            )
        return self._encode_map(item, "$", 0)

    def _encode(self, value: Any, path: str, depth: int) -> AttributeValue:
        if value is None or (isinstance(value, str) and value == ""):
            return {"NULL": True}

        # bool is a subclass of int, check it first
        if isinstance(value, bool):
            return {"BOOL": value}

        if isinstance(value, (int, float, Decimal)):
            return {"N": self._format_number(value, path)}

        if isinstance(value, str):
            return {"S": value}

        if isinstance(value, (list, tuple)):
            self._check_depth(depth + 1, path)
            return {"L": self._encode_list(value, path, depth + 1)}

        if isinstance(value, Mapping):
            self._check_depth(depth + 1, path)
            return {"M": self._encode_map(value, path, depth + 1)}

        raise UnsupportedTypeError(type(value).__name__, path)

    def _encode_list(self, items, path: str, depth: int) -> List[AttributeValue]:
        return [
            self._encode(item, f"{path}[{index}]", depth)
            for index, item in enumerate(items)
        ]

    def _encode_map(self, mapping, path: str, depth: int) -> Dict[str, AttributeValue]:
        encoded = {}
        for key, item in mapping.items():
            if not isinstance(key, str):
                raise TypeMismatchError(
                    f"expected string map key, got {type(key).__name__} ({key!r})",
                    path,
                )
            encoded[key] = self._encode(item, f"{path}.{key}", depth)
        return encoded

    def _check_depth(self, depth: int, path: str):
        if self.max_depth is not None and depth > self.max_depth:
            raise NestingDepthError(self.max_depth, path)

    def _format_number(self, value, path: str) -> str:
        """Render a number as DynamoDB number text."""
        type_name = type(value).__name__

        if isinstance(value, float):
            if not math.isfinite(value):
                raise UnsupportedTypeError(type_name, path, f"{value!r} is not finite")
            # repr gives the shortest text that parses back to the same float
            text = repr(float(value))
            self._check_number(Decimal(text), type_name, path)
            return text

        if isinstance(value, Decimal):
            if not value.is_finite():
                raise UnsupportedTypeError(type_name, path, f"{value} is not finite")
            self._check_number(value, type_name, path)
            return str(value)

        # int subclasses (IntEnum) render by value, not by name
        number = int(value)
        if abs(number) >= 10 ** (MAX_NUMBER_EXPONENT + 1):
            raise UnsupportedTypeError(
                type_name, path, f"magnitude reaches 1E+{MAX_NUMBER_EXPONENT + 1}"
            )
        self._check_number(Decimal(number), type_name, path)
        return str(number)

    def _check_number(self, number: Decimal, type_name: str, path: str):
        if not number:
            return

        exponent = number.adjusted()
        if exponent < MIN_NUMBER_EXPONENT or exponent > MAX_NUMBER_EXPONENT:
            raise UnsupportedTypeError(
                type_name,
                path,
                f"magnitude 1E{exponent:+d} is outside 1E{MIN_NUMBER_EXPONENT}"
                f"..1E+{MAX_NUMBER_EXPONENT}",
            )

        digits = "".join(str(d) for d in number.as_tuple().digits).strip("0")
        if len(digits) > MAX_NUMBER_PRECISION:
            raise UnsupportedTypeError(
                type_name,
                path,
                f"more than {MAX_NUMBER_PRECISION} significant digits",
            )


def get_default_encoder() -> AttributeValueEncoder:
    """Build an encoder using the configured nesting limit."""
    return AttributeValueEncoder(max_depth=settings.max_nesting_depth)


def encode_value(value: Any) -> AttributeValue:
    """Encode a value with the configured default encoder."""
    return get_default_encoder().encode(value)
