"""Requirement types and the shared requirement parsing contract.

A requirement is the (name, value) pair taken from a ``data-*`` attribute of
a validatable. Attribute values are always text, so each validator declares
the type its requirement should be parsed into, and the text is converted
once, when the validatable's rules are discovered.

Example:
    ```python
    from formknobs.requirements import RequirementType, parse_requirement

    parse_requirement(RequirementType.INTEGER, "10")
    # 10
    parse_requirement("range", "1, 5")
    # Range(min=1.0, max=5.0)
    parse_requirement("bool", "")
    # True
    ```
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from formknobs.exceptions import ParseError

# Plain base-10 digits; no digit grouping.
_INTEGER = re.compile(r"[+-]?[0-9]+")


class RequirementType(str, Enum):
    """Type a requirement value is parsed into."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    REGEX = "regex"
    RANGE = "range"

    @classmethod
    def coerce(cls, tag: Union["RequirementType", str]) -> "RequirementType":
        """Resolve a requirement type from the enum or a textual tag.

        Textual tags are matched case-insensitively and accept the short
        aliases ``str``, ``int``, ``num``, ``number``, ``bool`` and
        ``regexp``.

        Args:
            tag: Requirement type or tag

        Returns:
            The matching requirement type

        Raises:
            ParseError: If the tag is not a known requirement type
        """
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            resolved = _TAG_ALIASES.get(tag.strip().lower())
            if resolved is not None:
                return resolved
        raise ParseError(
            f"Unknown data type for requirement value: {tag!r}",
            context={"requirement_type": tag, "known": sorted(_TAG_ALIASES)},
        )


_TAG_ALIASES = {
    "str": RequirementType.STRING,
    "string": RequirementType.STRING,
    "int": RequirementType.INTEGER,
    "integer": RequirementType.INTEGER,
    "num": RequirementType.FLOAT,
    "number": RequirementType.FLOAT,
    "float": RequirementType.FLOAT,
    "bool": RequirementType.BOOLEAN,
    "boolean": RequirementType.BOOLEAN,
    "regex": RequirementType.REGEX,
    "regexp": RequirementType.REGEX,
    "range": RequirementType.RANGE,
}


@dataclass(frozen=True)
class Range:
    """Inclusive numeric range parsed from a ``"min, max"`` requirement."""

    min: float
    max: float

    def contains(self, value: float) -> bool:
        """Check whether a value lies within the range, bounds included."""
        return self.min <= value <= self.max


def parse_requirement(
    requirement_type: Union[RequirementType, str],
    raw_value: str | None,
) -> Any:
    """Parse a raw requirement value according to its declared type.

    Args:
        requirement_type: Declared type, enum member or textual tag
        raw_value: Attribute value as found on the validatable

    Returns:
        The parsed requirement: ``str``, ``int``, ``float`` (``nan`` for
        unparsable input), ``bool``, compiled ``re.Pattern`` or ``Range``

    Raises:
        ParseError: If the value is malformed for an integer, regex or range
            requirement, or if the type is unknown
    """
    kind = RequirementType.coerce(requirement_type)
    text = "" if raw_value is None else str(raw_value)

    if kind is RequirementType.STRING:
        return text

    if kind is RequirementType.INTEGER:
        if not _INTEGER.fullmatch(text.strip()):
            raise ParseError(
                f"'{text}' is not an integer.",
                context={"requirement_type": kind.value, "raw_value": text},
            )
        return int(text.strip(), 10)

    if kind is RequirementType.FLOAT:
        return _to_float(text)

    if kind is RequirementType.BOOLEAN:
        value = text.strip().lower()
        if not value:
            return True
        return value not in ("false", "0")

    if kind is RequirementType.REGEX:
        try:
            return re.compile(text)
        except re.error as e:
            raise ParseError(
                f"'{text}' is not a valid regular expression: {e}",
                context={"requirement_type": kind.value, "raw_value": text},
            ) from e

    # RequirementType.RANGE
    parts = [part.strip() for part in text.strip().split(",")]
    bounds = [_to_float(part) for part in parts if part]
    if len(bounds) != 2 or any(math.isnan(bound) for bound in bounds):
        raise ParseError(
            "Requirement is not a range.",
            context={"requirement_type": kind.value, "raw_value": text},
        )
    return Range(min=bounds[0], max=bounds[1])


def _to_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return math.nan


__all__ = [
    "RequirementType",
    "Range",
    "parse_requirement",
]
