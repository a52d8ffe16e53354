"""Tests for validation contexts."""

import pytest

from formknobs import (
    FormControl,
    ValidationContext,
    ValidationSettings,
    get_default_context,
    reset_default_context,
    set_default_context,
)

from .conftest import EmailValidator, RequiredValidator


@pytest.fixture(autouse=True)
def clean_default_context():
    """Forget the shared context around each test."""
    reset_default_context()
    yield
    reset_default_context()


class TestValidationContext:
    """Test the context facade."""

    def test_registry_delegates(self):
        """Test registration and lookups through the context."""
        context = ValidationContext()
        assert context.add(RequiredValidator, "required", "mandatory") == ["required", "mandatory"]

        assert set(context.names) == {"required", "mandatory"}
        assert context.allow_override is True
        assert context.get_validator_class_by_name("Mandatory") is RequiredValidator
        assert context.get_singleton_by_name("required") is context.get_singleton_by_class(
            RequiredValidator
        )

    def test_settings_drive_override_policy(self):
        """Test that the override setting reaches the registry."""
        context = ValidationContext(ValidationSettings(allow_override=False))
        context.add(RequiredValidator, "check")
        context.add(EmailValidator, "check")

        assert context.allow_override is False
        assert context.get_validator_class_by_name("check") is RequiredValidator

    def test_contexts_are_isolated(self, form):
        """Test that two contexts share nothing."""
        first = ValidationContext()
        second = ValidationContext()
        first.add(RequiredValidator, "required")

        control = form.add(FormControl("name", attributes={"data-required": ""}))

        assert second.get_by_validatable(control) == []
        assert len(first.get_by_validatable(control)) == 1
        assert second.names == []
        assert len(second.discovery) == 0

    def test_reset(self, form):
        """Test dropping registrations and cached rules."""
        context = ValidationContext()
        context.add(RequiredValidator, "required")
        control = form.add(FormControl("name", attributes={"data-required": ""}))
        context.get_by_validatable(control)

        context.reset()

        assert context.names == []
        assert len(context.discovery) == 0
        assert context.get_by_validatable(control) == []

    def test_identities_continue_after_reset(self, form):
        """Test that generated identities are not reused after a reset."""
        context = ValidationContext()
        context.add(RequiredValidator, "required")
        first = form.add(FormControl("a", attributes={"data-required": ""}))
        context.get_by_validatable(first)

        context.reset()
        context.add(RequiredValidator, "required")
        second = form.add(FormControl("b", attributes={"data-required": ""}))
        context.get_by_validatable(second)

        assert first.get_attribute("id") == "form-control-0"
        assert second.get_attribute("id") == "form-control-1"

    def test_from_settings_file(self, tmp_path):
        """Test building a context from a settings file."""
        path = tmp_path / "formknobs.yaml"
        path.write_text("formknobs:\n  allow_override: false\n  id_prefix: signup-\n")

        context = ValidationContext.from_settings_file(path)

        assert context.allow_override is False
        assert context.settings.id_prefix == "signup-"

    def test_repr(self):
        """Test string representation."""
        context = ValidationContext()
        context.add(RequiredValidator, "required")
        assert repr(context) == "ValidationContext(names=1, cached=0, allow_override=True)"

    @pytest.mark.asyncio
    async def test_validate(self, form):
        """Test validation through the context."""
        context = ValidationContext()
        context.add(RequiredValidator, "required")
        context.add(EmailValidator, "email")
        control = form.add(FormControl("email", "", attributes={"data-validate": "required,email"}))

        assert await context.validate(control) == ["required", "email"]
        assert [o.name for o in await context.validate_detailed(control)] == ["required", "email"]


class TestDefaultContext:
    """Test the shared context."""

    def test_created_once(self):
        """Test that the shared context is reused."""
        assert get_default_context() is get_default_context()

    def test_reads_environment(self, monkeypatch):
        """Test that the shared context picks up environment settings."""
        monkeypatch.setenv("FORMKNOBS_ALLOW_OVERRIDE", "false")
        assert get_default_context().allow_override is False

    def test_set_and_reset(self):
        """Test replacing and forgetting the shared context."""
        context = ValidationContext()
        set_default_context(context)
        assert get_default_context() is context

        reset_default_context()
        assert get_default_context() is not context
