"""Registry of validator classes and their shared instances.

The registry maps canonical rule names to validator classes, and validator
classes to one lazily created instance each. Several names may point at the
same class; a name points at no more than one class at a time.

Registration is forgiving: a bad class or an empty name list is logged and
ignored instead of raised, so one broken plugin cannot stop an application
from booting.

Example:
    ```python
    from formknobs.registry import ValidatorRegistry

    registry = ValidatorRegistry()
    registry.add(RequiredValidator, "required", "mandatory")

    registry.get_validator_class_by_name("Required")
    # <class 'RequiredValidator'>
    registry.get_singleton_by_name("mandatory") is registry.get_singleton_by_class(RequiredValidator)
    # True
    ```
"""

import logging
import threading
from typing import Any, Dict, List, Type

from formknobs.exceptions import RegistrationError
from formknobs.naming import to_camel_case
from formknobs.validator import Validator

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """Name to validator class bindings plus one instance per class.

    Args:
        allow_override: Whether registering a name that is already bound
            replaces the existing binding (default) or is skipped
    """

    def __init__(self, allow_override: bool = True):
        self._allow_override = allow_override
        self._classes: Dict[str, Type[Validator]] = {}
        self._instances: Dict[Type[Validator], Validator] = {}
        self._lock = threading.RLock()

    @property
    def allow_override(self) -> bool:
        """Whether re-registering a bound name replaces its binding."""
        return self._allow_override

    @property
    def names(self) -> List[str]:
        """All currently registered canonical rule names."""
        with self._lock:
            return list(self._classes.keys())

    def add(self, validator_class: Type[Validator], *names: str) -> List[str]:
        """Register a validator class under one or more names.

        Names are trimmed, empty names dropped and the rest canonicalized.
        Invalid input is logged and nothing is registered. A name that is
        already bound is replaced when overriding is allowed and skipped
        otherwise; both cases are logged.

        Args:
            validator_class: Subclass of ``Validator``
            *names: Rule names to register the class under

        Returns:
            Canonical names that are now bound to the class by this call
        """
        try:
            keys = self._check_registration(validator_class, names)
        except RegistrationError as e:
            logger.warning("Failed to add validator: %s", e)
            return []

        bound: List[str] = []
        with self._lock:
            for key in keys:
                if key in self._classes:
                    if not self._allow_override:
                        logger.warning(
                            "Name '%s' has already been registered for a validator class. "
                            "Overriding is disabled.",
                            key,
                        )
                        continue
                    logger.warning(
                        "Name '%s' has already been registered for a validator class. "
                        "Overriding is enabled.",
                        key,
                    )
                self._classes[key] = validator_class
                bound.append(key)

        logger.debug("Registered %s under %s", validator_class.__name__, bound)
        return bound

    def _check_registration(self, validator_class: Any, names: tuple) -> List[str]:
        if not (
            isinstance(validator_class, type)
            and issubclass(validator_class, Validator)
            and validator_class is not Validator
        ):
            class_name = getattr(validator_class, "__name__", repr(validator_class))
            raise RegistrationError(
                f"Class {class_name} is not a subclass of Validator",
                context={"validator_class": class_name},
            )

        keys: List[str] = []
        for name in names:
            if not isinstance(name, str):
                raise RegistrationError(
                    f"Validator names must be strings, got {type(name).__name__}",
                    context={"validator_class": validator_class.__name__, "name": name},
                )
            key = to_camel_case(name.strip())
            if key and key not in keys:
                keys.append(key)

        if not keys:
            raise RegistrationError(
                f"No names passed for {validator_class.__name__}",
                context={"validator_class": validator_class.__name__, "names": list(names)},
            )
        return keys

    def get_singleton_by_class(self, validator_class: Type[Validator]) -> Validator:
        """Get the shared instance of a validator class, creating it on first use.

        Raises:
            RegistrationError: If the class cannot be instantiated
        """
        with self._lock:
            instance = self._instances.get(validator_class)
            if instance is None:
                try:
                    instance = validator_class()
                except Exception as e:
                    raise RegistrationError(
                        f"Failed to instantiate {validator_class.__name__}: {e}",
                        context={"validator_class": validator_class.__name__},
                    ) from e
                self._instances[validator_class] = instance
            return instance

    def get_validator_class_by_name(self, name: str) -> Type[Validator] | None:
        """Get the validator class bound to a name, or None."""
        with self._lock:
            return self._classes.get(to_camel_case(name))

    def get_singleton_by_name(self, name: str) -> Validator | None:
        """Get the shared instance of the validator bound to a name, or None."""
        validator_class = self.get_validator_class_by_name(name)
        if validator_class is None:
            return None
        return self.get_singleton_by_class(validator_class)

    def remove(self, name: str) -> bool:
        """Unbind a name.

        Returns:
            True if the name was bound
        """
        with self._lock:
            return self._classes.pop(to_camel_case(name), None) is not None

    def clear(self) -> None:
        """Drop all bindings and shared instances."""
        with self._lock:
            self._classes.clear()
            self._instances.clear()

    def __len__(self) -> int:
        return len(self._classes)

    def __contains__(self, name: str) -> bool:
        return self.get_validator_class_by_name(name) is not None

    def __repr__(self) -> str:
        return (
            f"ValidatorRegistry("
            f"names={len(self._classes)}, "
            f"instances={len(self._instances)}, "
            f"allow_override={self._allow_override}"
            f")"
        )


__all__ = ["ValidatorRegistry"]
