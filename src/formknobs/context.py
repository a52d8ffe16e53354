"""Validation context: one registry, one rule cache and one orchestrator.

Applications create a context at start-up, register their validators on it
and validate through it. Tests create their own contexts, so nothing leaks
between them.

Example:
    ```python
    from formknobs import FormControl, Form, ValidationContext

    context = ValidationContext()
    context.add(RequiredValidator, "required")
    context.add(EmailValidator, "email")

    form = Form("signup")
    email = form.add(FormControl("email", attributes={"data-validate": "required,email"}))

    failures = await context.validate(email)
    # ['required', 'email']
    ```

Applications that want a single shared context can use
``get_default_context()``.
"""

import logging
from pathlib import Path
from typing import List, Type, Union

from formknobs.discovery import RuleDiscovery
from formknobs.orchestrator import RuleOutcome, ValidationOrchestrator
from formknobs.registry import ValidatorRegistry
from formknobs.settings import ValidationSettings
from formknobs.validatable import Validatable
from formknobs.validator import Validator, ValidatorInfo

logger = logging.getLogger(__name__)


class ValidationContext:
    """Owns the validator registry, the rule cache and the orchestrator.

    Args:
        settings: Validation settings (default: standard settings)
    """

    def __init__(self, settings: ValidationSettings | None = None):
        self._settings = settings or ValidationSettings()
        self._registry = ValidatorRegistry(allow_override=self._settings.allow_override)
        self._discovery = RuleDiscovery(self._registry, self._settings)
        self._orchestrator = ValidationOrchestrator(self._discovery)

    @classmethod
    def from_settings_file(cls, path: Union[str, Path]) -> "ValidationContext":
        """Create a context with settings loaded from a YAML or JSON file."""
        return cls(ValidationSettings.from_file(path))

    @property
    def settings(self) -> ValidationSettings:
        return self._settings

    @property
    def registry(self) -> ValidatorRegistry:
        return self._registry

    @property
    def discovery(self) -> RuleDiscovery:
        return self._discovery

    @property
    def allow_override(self) -> bool:
        return self._registry.allow_override

    @property
    def names(self) -> List[str]:
        return self._registry.names

    def add(self, validator_class: Type[Validator], *names: str) -> List[str]:
        """Register a validator class under one or more names.

        See ``ValidatorRegistry.add``.
        """
        return self._registry.add(validator_class, *names)

    def get_singleton_by_class(self, validator_class: Type[Validator]) -> Validator:
        return self._registry.get_singleton_by_class(validator_class)

    def get_validator_class_by_name(self, name: str) -> Type[Validator] | None:
        return self._registry.get_validator_class_by_name(name)

    def get_singleton_by_name(self, name: str) -> Validator | None:
        return self._registry.get_singleton_by_name(name)

    def get_by_validatable(self, validatable: Validatable) -> List[ValidatorInfo]:
        """Get the rules that apply to a validatable. See ``RuleDiscovery``."""
        return self._discovery.get_by_validatable(validatable)

    async def validate(self, validatable: Validatable) -> List[str]:
        """Validate a validatable and return the names of the failed rules."""
        return await self._orchestrator.validate(validatable)

    async def validate_detailed(self, validatable: Validatable) -> List[RuleOutcome]:
        """Validate a validatable and return one outcome per rule."""
        return await self._orchestrator.validate_detailed(validatable)

    def reset(self) -> None:
        """Drop all registrations, shared instances and cached rules."""
        self._registry.clear()
        self._discovery.clear()
        logger.debug("Validation context reset")

    def __repr__(self) -> str:
        return (
            f"ValidationContext("
            f"names={len(self._registry)}, "
            f"cached={len(self._discovery)}, "
            f"allow_override={self._registry.allow_override}"
            f")"
        )


_default_context: ValidationContext | None = None


def get_default_context() -> ValidationContext:
    """Get the shared validation context, creating it on first use.

    The shared context reads its settings from ``FORMKNOBS_*`` environment
    variables when created.
    """
    global _default_context
    if _default_context is None:
        _default_context = ValidationContext(ValidationSettings.from_env())
    return _default_context


def set_default_context(context: ValidationContext) -> None:
    """Replace the shared validation context."""
    global _default_context
    _default_context = context


def reset_default_context() -> None:
    """Forget the shared validation context; the next access creates a new one."""
    global _default_context
    _default_context = None


__all__ = [
    "ValidationContext",
    "get_default_context",
    "set_default_context",
    "reset_default_context",
]
