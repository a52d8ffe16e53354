"""Exception hierarchy for formknobs.

Every error raised by this package derives from ``FormknobsError``, which
carries an optional context dictionary with details about the failure
(rule names, raw requirement values, attribute names ...).

Most of these errors never reach the caller of ``validate``. Registration
problems are logged and swallowed by the registry, unparsable requirements
are discarded during discovery and failing rules are turned into failure
entries by the orchestrator. They surface directly only from the lower level
helpers (``parse_requirement``, ``get_singleton_by_class``) and from settings
loading.

Example:
    ```python
    from formknobs.exceptions import FormknobsError, ParseError

    try:
        parse_requirement("integer", "ten")
    except ParseError as e:
        logger.warning(f"Bad requirement: {e}")
        if e.context:
            logger.warning(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class FormknobsError(Exception):
    """Base exception for all formknobs errors.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context
        details: Alternative to context (takes precedence if both are given)

    Example:
        ```python
        error = FormknobsError(
            "Rule failed",
            context={"rule": "maxLength", "identity": "form-control-0"}
        )
        str(error)
        # 'Rule failed'
        error.context
        # {'rule': 'maxLength', 'identity': 'form-control-0'}
        ```
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        """Initialize the exception with optional context.

        Args:
            message: Error message
            context: Optional context dictionary
            details: Optional details dictionary (replaces context)
        """
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class RegistrationError(FormknobsError):
    """Raised when a validator class cannot be registered or instantiated.

    Common scenarios include:
    - The class is not a subclass of ``Validator``
    - No usable (non-empty) names were passed
    - The validator class raised while being instantiated

    ``ValidatorRegistry.add`` never lets this escape; it is logged instead.
    """

    pass


class ParseError(FormknobsError, ValueError):
    """Raised when a requirement value cannot be parsed for its declared type.

    Example:
        ```python
        raise ParseError(
            "'ten' is not an integer",
            context={"requirement_type": "integer", "raw_value": "ten"}
        )
        ```
    """

    pass


class RuleInvocationError(FormknobsError):
    """Raised for a validator that threw or whose awaitable result failed.

    The orchestrator never raises this. It is attached to the rule outcome
    (``RuleOutcome.error``), chained to the original exception.
    """

    pass


class ConfigurationError(FormknobsError):
    """Raised when validation settings are invalid or cannot be loaded.

    Example:
        ```python
        raise ConfigurationError(
            "Unknown setting",
            context={"key": "id_prefx", "available_keys": ["id_prefix"]}
        )
        ```
    """

    pass


__all__ = [
    "FormknobsError",
    "RegistrationError",
    "ParseError",
    "RuleInvocationError",
    "ConfigurationError",
]
