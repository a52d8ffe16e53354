"""The validatable capability interface and an in-memory implementation.

The validation core only talks to validatables through the ``Validatable``
protocol: a name and value, a few read-only flags, an owning form and a set
of string attributes. ``FormControl`` and ``Form`` implement it without a
DOM, for services that validate submitted data and for tests.
"""

from typing import (
    Any,
    Dict,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Protocol,
    runtime_checkable,
)


class Attribute(NamedTuple):
    """A name/value attribute pair."""

    name: str
    value: str


@runtime_checkable
class Validatable(Protocol):
    """Capability interface of anything that can be validated.

    A validatable whose ``form`` is None is not part of a form and is never
    validated. ``attributes`` yields objects with ``name`` and ``value``.
    """

    name: str
    value: Any

    @property
    def type(self) -> str: ...

    @property
    def disabled(self) -> bool: ...

    @property
    def form(self) -> Any: ...

    @property
    def attributes(self) -> Iterable[Any]: ...

    def has_attribute(self, name: str) -> bool: ...

    def get_attribute(self, name: str) -> str | None: ...

    def set_attribute(self, name: str, value: str) -> None: ...

    def remove_attribute(self, name: str) -> None: ...


class Form:
    """Owning context for form controls.

    Args:
        name: Form name

    Example:
        ```python
        form = Form("signup")
        email = form.add(FormControl("email", attributes={"data-validate": "required,email"}))
        ```
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._controls: List["FormControl"] = []

    @property
    def controls(self) -> List["FormControl"]:
        """Controls bound to this form, in insertion order."""
        return list(self._controls)

    def add(self, control: "FormControl") -> "FormControl":
        """Bind a control to this form and return it."""
        if control.form is not None and control.form is not self:
            control.form.remove(control)
        if control not in self._controls:
            self._controls.append(control)
        control.form = self
        return control

    def remove(self, control: "FormControl") -> None:
        """Unbind a control from this form."""
        if control in self._controls:
            self._controls.remove(control)
        if control.form is self:
            control.form = None

    def __len__(self) -> int:
        return len(self._controls)

    def __iter__(self):
        return iter(self.controls)

    def __repr__(self) -> str:
        return f"Form(name='{self.name}', controls={len(self._controls)})"


class FormControl:
    """In-memory validatable backed by an ordered attribute dictionary.

    Attribute order follows insertion; setting an existing attribute keeps
    its position.

    Args:
        name: Control name
        value: Current value
        type: Control type (``text``, ``email``, ``checkbox`` ...)
        attributes: Initial attributes
        form: Owning form, if any
        disabled: Whether the control is disabled
    """

    def __init__(
        self,
        name: str = "",
        value: Any = "",
        type: str = "text",
        attributes: Mapping[str, str] | None = None,
        form: Form | None = None,
        disabled: bool = False,
    ):
        self.name = name
        self.value = value
        self._type = type
        self._attributes: Dict[str, str] = {
            key: str(val) for key, val in (attributes or {}).items()
        }
        self.form: Form | None = None
        self.disabled = disabled
        if form is not None:
            form.add(self)

    @property
    def type(self) -> str:
        return self._type

    @property
    def attributes(self) -> List[Attribute]:
        """Snapshot of the current attributes."""
        return [Attribute(key, val) for key, val in self._attributes.items()]

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def get_attribute(self, name: str) -> str | None:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        self._attributes[name] = str(value)

    def remove_attribute(self, name: str) -> None:
        self._attributes.pop(name, None)

    def __repr__(self) -> str:
        return (
            f"FormControl(name='{self.name}', type='{self._type}', "
            f"attributes={len(self._attributes)})"
        )


__all__ = [
    "Attribute",
    "Validatable",
    "Form",
    "FormControl",
]
