"""Validation settings.

Settings control the registry override policy and the attribute conventions
used during rule discovery. The defaults reproduce the standard convention
(``data-*`` rule attributes, ``data-validate`` shorthand, ``id`` identity
attribute and ``form-control-<N>`` generated identities), so most
applications never need to change them.

Settings can be built from a dictionary, a YAML or JSON file, or environment
variables:

    ```yaml
    formknobs:
      allow_override: false
      id_prefix: signup-control-
    ```

    ```bash
    export FORMKNOBS_ALLOW_OVERRIDE=false
    export FORMKNOBS_ID_START=100
    ```
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Union

import yaml  # type: ignore[import-untyped]

from formknobs.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SECTION = "formknobs"


@dataclass(frozen=True)
class ValidationSettings:
    """Settings of a validation context.

    Attributes:
        allow_override: Whether re-registering a bound rule name replaces it
        attribute_prefix: Prefix of per-rule declarative attributes
        aggregate_attribute: Attribute holding a comma-separated rule list
        id_attribute: Attribute holding a validatable's identity
        id_prefix: Prefix of generated identities
        id_start: First value of the generated identity counter
    """

    allow_override: bool = True
    attribute_prefix: str = "data-"
    aggregate_attribute: str = "data-validate"
    id_attribute: str = "id"
    id_prefix: str = "form-control-"
    id_start: int = 0

    ENV_PREFIX = "FORMKNOBS_"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationSettings":
        """Create settings from a dictionary.

        A top-level ``formknobs`` section is unwrapped if present.

        Raises:
            ConfigurationError: On unknown keys or values of the wrong type
        """
        if SECTION in data and isinstance(data[SECTION], Mapping):
            data = data[SECTION]
        return cls()._merge(data, source="dict")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ValidationSettings":
        """Create settings from a YAML or JSON file.

        Raises:
            ConfigurationError: If the file is missing, unreadable, of an
                unsupported format or holds invalid settings
        """
        path = Path(path)
        if not path.exists():
            raise ConfigurationError(
                f"Settings file not found: {path}",
                context={"path": str(path)},
            )

        suffix = path.suffix.lower()
        try:
            with open(path, encoding="utf-8") as f:
                if suffix in (".yaml", ".yml"):
                    data = yaml.safe_load(f)
                elif suffix == ".json":
                    data = json.load(f)
                else:
                    raise ConfigurationError(
                        f"Unsupported settings file format: {suffix}",
                        context={"path": str(path), "supported": [".yaml", ".yml", ".json"]},
                    )
        except (OSError, UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read settings file {path}: {e}",
                context={"path": str(path)},
            ) from e

        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Settings file must contain a mapping, got {type(data).__name__}",
                context={"path": str(path)},
            )
        logger.debug("Loaded validation settings from %s", path)
        return cls.from_dict(data)

    @classmethod
    def from_env(
        cls,
        prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
        base: "ValidationSettings | None" = None,
    ) -> "ValidationSettings":
        """Create settings from environment variables.

        ``<PREFIX><FIELD>`` overrides ``field``, e.g. ``FORMKNOBS_ID_PREFIX``.
        Variables that match no setting are ignored.

        Args:
            prefix: Variable prefix (default: ``FORMKNOBS_``)
            environ: Environment to read (default: ``os.environ``)
            base: Settings to layer the overrides onto (default: defaults)

        Raises:
            ConfigurationError: If a value cannot be converted
        """
        prefix = prefix or cls.ENV_PREFIX
        environ = os.environ if environ is None else environ
        known = {f.name for f in fields(cls)}

        overrides: Dict[str, Any] = {}
        for key, value in environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name in known:
                overrides[name] = value

        return (base or cls())._merge(overrides, source="env")

    def _merge(self, data: Mapping[str, Any], source: str) -> "ValidationSettings":
        types = {f.name: f.type for f in fields(self)}
        unknown = [key for key in data if key not in types]
        if unknown:
            raise ConfigurationError(
                f"Unknown validation settings: {', '.join(sorted(unknown))}",
                context={"source": source, "unknown": unknown, "available_keys": sorted(types)},
            )

        values = {key: _convert(key, value, types[key], source) for key, value in data.items()}
        return replace(self, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a plain dictionary."""
        return asdict(self)


def _convert(key: str, value: Any, field_type: Any, source: str) -> Any:
    expected = field_type if isinstance(field_type, type) else {
        "bool": bool, "int": int, "str": str,
    }.get(str(field_type), str)

    if expected is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            text = value.strip().lower()
            if text in ("1", "true", "yes", "on"):
                return True
            if text in ("0", "false", "no", "off"):
                return False
    elif expected is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
    elif isinstance(value, str):
        return value

    raise ConfigurationError(
        f"Invalid value for setting '{key}': {value!r} (expected {expected.__name__})",
        context={"source": source, "key": key, "value": value},
    )


__all__ = ["ValidationSettings"]
