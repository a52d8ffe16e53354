"""Rule discovery and the per-validatable rule cache.

Discovery turns a validatable's declarative attributes into the list of
rules to run on it. The result is cached under the validatable's identity
(its ``id`` attribute, generated and written back when missing), so the
attributes are scanned once per validatable:

1. ``data-validate="required,email"`` is expanded into ``data-required=""``
   and ``data-email=""`` and then removed.
2. Every ``data-*`` attribute whose rule name is registered becomes a
   ``ValidatorInfo`` with its requirement parsed by the validator.

Validatables outside a form are never discovered. Validatables with no
registered rules are not cached, so rules added to them later are still
picked up.
"""

import itertools
import logging
from typing import Dict, List

from formknobs.exceptions import FormknobsError
from formknobs.naming import attribute_to_rule_name, to_dash_case
from formknobs.registry import ValidatorRegistry
from formknobs.settings import ValidationSettings
from formknobs.validatable import Validatable
from formknobs.validator import ValidatorInfo

logger = logging.getLogger(__name__)


class RuleDiscovery:
    """Discovers and caches the rules of validatables.

    The cache is never invalidated automatically: once a validatable has
    rules, later attribute changes are not seen unless its identity is
    invalidated explicitly.

    Args:
        registry: Registry to resolve rule names against
        settings: Attribute conventions (default: standard settings)
    """

    def __init__(
        self,
        registry: ValidatorRegistry,
        settings: ValidationSettings | None = None,
    ):
        self._registry = registry
        self._settings = settings or ValidationSettings()
        self._cache: Dict[str, List[ValidatorInfo]] = {}
        self._id_counter = itertools.count(self._settings.id_start)

    @property
    def cached_identities(self) -> List[str]:
        """Identities with cached rules."""
        return list(self._cache.keys())

    def get_by_validatable(self, validatable: Validatable) -> List[ValidatorInfo]:
        """Get the rules that apply to a validatable.

        Args:
            validatable: Element to discover rules for

        Returns:
            A new list of ``ValidatorInfo``; changing it does not affect the
            cache
        """
        if validatable.form is None:
            return []

        identity = self._resolve_identity(validatable)

        cached = self._cache.get(identity)
        if cached is not None:
            logger.debug("Using cached rules for '%s'", identity)
            return list(cached)

        self._expand_aggregate(validatable)
        validators = self._collect(validatable, identity)

        if validators:
            validatable.set_attribute(self._settings.id_attribute, identity)
            self._cache[identity] = validators
            logger.debug(
                "Discovered %d rule(s) for '%s': %s",
                len(validators),
                identity,
                [info.name for info in validators],
            )

        return list(validators)

    def identity_of(self, validatable: Validatable) -> str | None:
        """Get the identity a validatable's rules are cached under, or None."""
        identity = validatable.get_attribute(self._settings.id_attribute)
        if identity and identity in self._cache:
            return identity
        return None

    def invalidate(self, identity: str) -> bool:
        """Drop the cached rules of one identity.

        Returns:
            True if rules were cached for the identity
        """
        return self._cache.pop(identity, None) is not None

    def clear(self) -> None:
        """Drop all cached rules. The identity counter keeps advancing."""
        self._cache.clear()

    def _resolve_identity(self, validatable: Validatable) -> str:
        identity = validatable.get_attribute(self._settings.id_attribute)
        if identity:
            return identity
        # Skip generated identities already taken by explicit ids.
        while True:
            identity = f"{self._settings.id_prefix}{next(self._id_counter)}"
            if identity not in self._cache:
                return identity

    def _expand_aggregate(self, validatable: Validatable) -> None:
        aggregate = self._settings.aggregate_attribute
        if not validatable.has_attribute(aggregate):
            return

        for name in (validatable.get_attribute(aggregate) or "").split(","):
            key = name.strip()
            if not key:
                continue
            # Shorthand entries carry no requirement value.
            validatable.set_attribute(f"{self._settings.attribute_prefix}{to_dash_case(key)}", "")

        validatable.remove_attribute(aggregate)

    def _collect(self, validatable: Validatable, identity: str) -> List[ValidatorInfo]:
        validators: List[ValidatorInfo] = []

        for attribute in list(validatable.attributes):
            name = attribute_to_rule_name(attribute.name, self._settings.attribute_prefix)
            if name is None:
                continue

            try:
                instance = self._registry.get_singleton_by_name(name)
                if instance is None:
                    logger.debug("No validator registered for '%s' on '%s'", name, identity)
                    continue
                requirement = instance.parse_requirement(name, attribute.value)
            except FormknobsError as e:
                logger.warning(
                    "Discarding rule '%s' of '%s': %s",
                    name,
                    identity,
                    e,
                )
                continue
            except Exception as e:
                logger.warning(
                    "Discarding rule '%s' of '%s', requirement type lookup failed: %s",
                    name,
                    identity,
                    e,
                    exc_info=True,
                )
                continue

            validators.append(ValidatorInfo(name=name, requirement=requirement, instance=instance))

        return validators

    def __len__(self) -> int:
        return len(self._cache)


__all__ = ["RuleDiscovery"]
