"""Async validation of a validatable against its discovered rules.

Every rule of a validatable runs as its own coroutine and all of them are
joined with ``asyncio.gather``. A rule may return a plain value or an
awaitable; either way its result is normalized into a ``RuleOutcome``:

- truthy result -> ``PASSED``
- falsy result -> ``FAILED``
- the rule raised, its awaitable raised, or its result has no truth
  value -> ``ERROR``

Errors are logged and reported as failures of their rule. Validation itself
never raises, and a disabled validatable is always valid.

Example:
    ```python
    orchestrator = ValidationOrchestrator(discovery)
    failures = await orchestrator.validate(control)
    # ['required', 'maxLength']
    ```
"""

import asyncio
import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List

from formknobs.discovery import RuleDiscovery
from formknobs.exceptions import RuleInvocationError
from formknobs.validatable import Validatable
from formknobs.validator import ValidatorInfo

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    """Normalized outcome of one rule."""

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass(frozen=True)
class RuleOutcome:
    """Outcome of one rule on one validatable.

    Attributes:
        name: Rule name
        status: Normalized outcome
        error: Wrapped exception for ``ERROR`` outcomes
    """

    name: str
    status: OutcomeStatus
    error: RuleInvocationError | None = None

    @property
    def failed(self) -> bool:
        """Whether the rule counts as a validation failure."""
        return self.status is not OutcomeStatus.PASSED


class ValidationOrchestrator:
    """Runs the discovered rules of validatables and aggregates the outcomes.

    Args:
        discovery: Rule discovery used to find each validatable's rules
    """

    def __init__(self, discovery: RuleDiscovery):
        self._discovery = discovery

    async def validate(self, validatable: Validatable) -> List[str]:
        """Validate a validatable.

        Returns:
            Names of the rules that failed; empty when valid
        """
        outcomes = await self.validate_detailed(validatable)
        return [outcome.name for outcome in outcomes if outcome.failed]

    async def validate_detailed(self, validatable: Validatable) -> List[RuleOutcome]:
        """Validate a validatable and return one outcome per rule.

        Outcomes are in discovery order, whatever order the rules settle in.
        """
        if validatable.disabled:
            return []

        validators = self._discovery.get_by_validatable(validatable)
        if not validators:
            return []

        return list(
            await asyncio.gather(*(self._run_rule(validatable, info) for info in validators))
        )

    async def _run_rule(self, validatable: Validatable, info: ValidatorInfo) -> RuleOutcome:
        try:
            result = info.instance.validate(validatable, info.name, info.requirement)
            if inspect.isawaitable(result):
                result = await result
            passed = bool(result)
        except Exception as e:
            logger.warning(
                "Validation failed: rule '%s' raised %s: %s",
                info.name,
                type(e).__name__,
                e,
                exc_info=True,
            )
            error = RuleInvocationError(
                f"Rule '{info.name}' raised {type(e).__name__}: {e}",
                context={
                    "rule": info.name,
                    "validator": type(info.instance).__name__,
                    "validatable": getattr(validatable, "name", None),
                },
            )
            error.__cause__ = e
            return RuleOutcome(info.name, OutcomeStatus.ERROR, error)

        status = OutcomeStatus.PASSED if passed else OutcomeStatus.FAILED
        return RuleOutcome(info.name, status)


__all__ = [
    "OutcomeStatus",
    "RuleOutcome",
    "ValidationOrchestrator",
]
