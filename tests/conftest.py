"""Pytest configuration and fixtures for formknobs tests."""

import asyncio
import re

import pytest

from formknobs import (
    Form,
    FormControl,
    RequirementType,
    ValidationContext,
    Validator,
)


class RequiredValidator(Validator):
    """Fails on empty values."""

    def validate(self, validatable, requirement_name, requirement):
        return bool(str(validatable.value).strip())


class EmailValidator(Validator):
    """Loose e-mail check."""

    def validate(self, validatable, requirement_name, requirement):
        return bool(re.match(r"^[^@\s]+@[^@\s]+\.[a-z]{2,}$", str(validatable.value)))


class MaxLengthValidator(Validator):
    """Fails on values longer than the integer requirement."""

    def get_requirement_type(self, requirement_name, requirement_value):
        return RequirementType.INTEGER

    def validate(self, validatable, requirement_name, requirement):
        return len(str(validatable.value)) <= requirement


class RangeValidator(Validator):
    """Fails on values outside the range requirement."""

    def get_requirement_type(self, requirement_name, requirement_value):
        return "range"

    def validate(self, validatable, requirement_name, requirement):
        try:
            return requirement.contains(float(validatable.value))
        except ValueError:
            return False


class PatternValidator(Validator):
    """Fails on values not fully matching the regex requirement."""

    def get_requirement_type(self, requirement_name, requirement_value):
        return "regexp"

    def validate(self, validatable, requirement_name, requirement):
        return requirement.fullmatch(str(validatable.value)) is not None


class AsyncUniqueValidator(Validator):
    """Async rule: fails when the value is already taken."""

    taken = {"taken@example.com"}

    async def validate(self, validatable, requirement_name, requirement):
        await asyncio.sleep(0)
        return validatable.value not in self.taken


class RaisingValidator(Validator):
    """Raises synchronously."""

    def validate(self, validatable, requirement_name, requirement):
        raise RuntimeError("lookup service unavailable")


class RejectingValidator(Validator):
    """Returns an awaitable that raises."""

    def validate(self, validatable, requirement_name, requirement):
        return self._check()

    async def _check(self):
        await asyncio.sleep(0)
        raise ConnectionError("remote check refused")


@pytest.fixture
def context():
    """Fresh validation context with the test validators registered."""
    ctx = ValidationContext()
    ctx.add(RequiredValidator, "required")
    ctx.add(EmailValidator, "email")
    ctx.add(MaxLengthValidator, "maxLength")
    ctx.add(RangeValidator, "range")
    ctx.add(PatternValidator, "pattern")
    ctx.add(AsyncUniqueValidator, "unique")
    ctx.add(RaisingValidator, "explodes")
    ctx.add(RejectingValidator, "rejects")
    return ctx


@pytest.fixture
def form():
    """Empty form."""
    return Form("signup")


@pytest.fixture
def make_control(form):
    """Factory for controls bound to the test form."""

    def _make(value="", attributes=None, **kwargs):
        kwargs.setdefault("name", "field")
        return FormControl(value=value, attributes=attributes, form=form, **kwargs)

    return _make
