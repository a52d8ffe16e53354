"""Validation rule registry and async validation for form controls.

formknobs provides:

- **Registry**: validator classes registered under one or more rule names
- **Discovery**: rules of a form control found from its ``data-*`` attributes
  and cached per control
- **Validation**: all rules of a control run concurrently; the result is the
  list of failed rule names
- **Settings**: override policy and attribute conventions from dicts, files
  or environment variables

Example:
    ```python
    from formknobs import Form, FormControl, RequirementType, ValidationContext, Validator

    class MaxLengthValidator(Validator):
        def get_requirement_type(self, requirement_name, requirement_value):
            return RequirementType.INTEGER

        def validate(self, validatable, requirement_name, requirement):
            return len(validatable.value) <= requirement

    context = ValidationContext()
    context.add(MaxLengthValidator, "maxLength")

    form = Form("profile")
    nickname = form.add(FormControl("nickname", "far too long", attributes={"data-max-length": "8"}))
    await context.validate(nickname)
    # ['maxLength']
    ```
"""

from formknobs.context import (
    ValidationContext,
    get_default_context,
    reset_default_context,
    set_default_context,
)
from formknobs.discovery import RuleDiscovery
from formknobs.exceptions import (
    ConfigurationError,
    FormknobsError,
    ParseError,
    RegistrationError,
    RuleInvocationError,
)
from formknobs.naming import (
    attribute_to_rule_name,
    split_words,
    to_camel_case,
    to_dash_case,
)
from formknobs.orchestrator import (
    OutcomeStatus,
    RuleOutcome,
    ValidationOrchestrator,
)
from formknobs.registry import ValidatorRegistry
from formknobs.requirements import (
    Range,
    RequirementType,
    parse_requirement,
)
from formknobs.settings import ValidationSettings
from formknobs.validatable import (
    Attribute,
    Form,
    FormControl,
    Validatable,
)
from formknobs.validator import (
    Validator,
    ValidatorInfo,
)

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Context
    "ValidationContext",
    "get_default_context",
    "set_default_context",
    "reset_default_context",
    # Core
    "ValidatorRegistry",
    "RuleDiscovery",
    "ValidationOrchestrator",
    "OutcomeStatus",
    "RuleOutcome",
    # Validators
    "Validator",
    "ValidatorInfo",
    # Requirements
    "RequirementType",
    "Range",
    "parse_requirement",
    # Validatables
    "Validatable",
    "Attribute",
    "Form",
    "FormControl",
    # Naming
    "split_words",
    "to_camel_case",
    "to_dash_case",
    "attribute_to_rule_name",
    # Settings
    "ValidationSettings",
    # Exceptions
    "FormknobsError",
    "RegistrationError",
    "ParseError",
    "RuleInvocationError",
    "ConfigurationError",
]
