"""Base class for validation rules.

A validator class is registered under one or more names. A validatable opts
into a rule by carrying a ``data-<name>`` attribute; whether the attribute
needs a value depends on the rule. A regex rule needs the expression, a
required rule only needs to be present.

The attribute name and value that selected a validator are called the
requirement name and value. A validator declares the type of its requirement
value so it is parsed once, at discovery time, instead of on every
validation.

Example:
    ```python
    from formknobs import RequirementType, Validator

    class MaxLengthValidator(Validator):
        def get_requirement_type(self, requirement_name, requirement_value):
            return RequirementType.INTEGER

        def validate(self, validatable, requirement_name, requirement):
            return len(validatable.value) <= requirement

    context.add(MaxLengthValidator, "maxLength")
    ```
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Awaitable, Union

from formknobs.requirements import RequirementType, parse_requirement

if TYPE_CHECKING:
    from formknobs.validatable import Validatable


class Validator(ABC):
    """Base class for validation rules.

    Instances are shared: the registry creates one instance per class and
    reuses it for every validatable, so subclasses should not keep
    per-validation state on ``self``.
    """

    def get_requirement_type(
        self,
        requirement_name: str,
        requirement_value: str,
    ) -> Union[RequirementType, str]:
        """Declare the type the requirement value is parsed into.

        Args:
            requirement_name: Canonical rule name the validator was found by
            requirement_value: Raw attribute value

        Returns:
            Requirement type or textual tag (default: string)
        """
        return RequirementType.STRING

    def parse_requirement(self, requirement_name: str, requirement_value: str) -> Any:
        """Parse a raw requirement value using the declared requirement type.

        Raises:
            ParseError: If the value is malformed for the declared type
        """
        requirement_type = self.get_requirement_type(requirement_name, requirement_value)
        return parse_requirement(requirement_type, requirement_value)

    @abstractmethod
    def validate(
        self,
        validatable: "Validatable",
        requirement_name: str,
        requirement: Any,
    ) -> Union[bool, Awaitable[Any]]:
        """Validate a validatable.

        Args:
            validatable: Element being validated
            requirement_name: Canonical rule name the validator was found by
            requirement: Parsed requirement value

        Returns:
            A truthy value when valid, or an awaitable resolving to one.
            Raising, or an awaitable that raises, counts as a failure.
        """


@dataclass(frozen=True)
class ValidatorInfo:
    """A resolved rule of one validatable: name, parsed requirement, validator."""

    name: str
    requirement: Any
    instance: Validator


__all__ = [
    "Validator",
    "ValidatorInfo",
]
