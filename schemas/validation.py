"""
Data schemas and validation for the user form.

This module provides the declarative validation schema for submitted form data:
each field has a validator that normalizes its value or raises FieldError with
a user-facing message.
"""

import re
from typing import Any, Dict, List, Optional
import logging

from config import settings

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
INTEGER_PATTERN = re.compile(r"-?\d+")


class FieldError(ValueError):
    """Raised by a validator when a field value is rejected.

    ``details`` maps sub-paths (``"0.title"``) to messages for fields that
    hold nested values, such as the techs list.
    """

    def __init__(self, message: str = "", details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


def as_text(value: Any, label: str) -> str:
    """Return ``value`` as a string; None counts as empty."""
    if value is None:
        return ""
    if not isinstance(value, str):
        raise FieldError(f"{label} must be text")
    return value


class FormField:
    """Represents a form field with validation rules."""

    def __init__(self, name: str, label: str, validator):
        self.name = name
        self.label = label
        self.validator = validator

    def validate(self, value: Any) -> Any:
        """
        Validate and normalize a field value.

        Args:
            value: Raw value to validate

        Returns:
            Any: Normalized value

        Raises:
            FieldError: If the value is rejected
        """
        return self.validator(value)


class NameValidator:
    """Name field validator."""

    @staticmethod
    def validate(value: Any) -> str:
        """Trim the name and capitalize the first letter of every word."""
        cleaned = as_text(value, "Name").strip()
        if not cleaned:
            raise FieldError("Name is required")

        return " ".join(word[0].upper() + word[1:] for word in cleaned.split())


class EmailValidator:
    """Email field validator."""

    @staticmethod
    def validate(value: Any) -> str:
        """Validate and normalize email address."""
        cleaned = as_text(value, "Email").strip()
        if not cleaned:
            raise FieldError("Email is required")

        if not EMAIL_PATTERN.match(cleaned):
            logger.warning("Invalid email format: %s", value)
            raise FieldError("Invalid email format")

        cleaned = cleaned.lower()
        domain = settings.ALLOWED_EMAIL_DOMAIN.lower()
        if not cleaned.endswith(f"@{domain}"):
            logger.warning("Email outside allowed domain %s: %s", domain, cleaned)
            raise FieldError(f"Email must belong to {domain}")

        return cleaned


class PasswordValidator:
    """Password field validator."""

    @staticmethod
    def validate(value: Any) -> str:
        # Passwords are kept verbatim, whitespace included.
        password = as_text(value, "Password")
        if len(password) < settings.PASSWORD_MIN_LENGTH:
            raise FieldError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        return password


class TechValidator:
    """Validator for a single technology/knowledge pair."""

    @staticmethod
    def validate_title(value: Any) -> str:
        title = as_text(value, "Title").strip()
        if not title:
            raise FieldError("Title is required")
        return title

    @staticmethod
    def validate_knowledge(value: Any) -> int:
        """Coerce the knowledge level to an integer and check its range."""
        if isinstance(value, bool):
            raise FieldError("Knowledge must be a number")

        if isinstance(value, int):
            number = value
        elif isinstance(value, float) and value.is_integer():
            number = int(value)
        elif isinstance(value, str) and INTEGER_PATTERN.fullmatch(value.strip()):
            number = int(value.strip())
        else:
            raise FieldError("Knowledge must be a number")

        low, high = settings.KNOWLEDGE_MIN, settings.KNOWLEDGE_MAX
        if not low <= number <= high:
            raise FieldError(f"Knowledge must be between {low} and {high}")

        return number

    @classmethod
    def validate(cls, value: Any) -> Dict[str, Any]:
        """
        Validate one tech element.

        Args:
            value: Mapping with ``title`` and ``knowledge`` keys

        Returns:
            Dict[str, Any]: Normalized ``{"title", "knowledge"}`` element

        Raises:
            FieldError: With per-key ``details`` for every rejected key
        """
        if not isinstance(value, dict):
            raise FieldError("Invalid technology entry")

        tech: Dict[str, Any] = {}
        details: Dict[str, str] = {}
        for key, check in (
            ("title", cls.validate_title),
            ("knowledge", cls.validate_knowledge),
        ):
            try:
                tech[key] = check(value.get(key))
            except FieldError as e:
                details[key] = e.message

        if details:
            raise FieldError("Invalid technology entry", details)
        return tech


class TechsValidator:
    """Validator for the dynamic list of techs."""

    @staticmethod
    def validate(value: Any) -> List[Dict[str, Any]]:
        if value is None:
            value = []
        if not isinstance(value, (list, tuple)):
            raise FieldError("Technologies must be a list")

        techs = []
        details: Dict[str, str] = {}
        for index, item in enumerate(value):
            try:
                techs.append(TechValidator.validate(item))
            except FieldError as e:
                if e.details:
                    for key, message in e.details.items():
                        details[f"{index}.{key}"] = message
                else:
                    details[str(index)] = e.message

        message = ""
        if len(value) < settings.TECHS_MIN_COUNT:
            message = (
                f"At least {settings.TECHS_MIN_COUNT} technologies must be provided"
            )

        if message or details:
            raise FieldError(message, details)
        return techs


class ValidationResult:
    """Outcome of validating a whole form submission."""

    def __init__(self, data: Optional[Dict[str, Any]], errors: Dict[str, str]):
        self.data = data
        self.errors = errors

    @property
    def is_valid(self) -> bool:
        return not self.errors


class FormSchema:
    """Schema definition for form fields with validation."""

    def __init__(self):
        labels = settings.FORM_FIELDS
        self.fields = {
            "name": FormField("name", labels["name"], NameValidator.validate),
            "email": FormField("email", labels["email"], EmailValidator.validate),
            "password": FormField(
                "password", labels["password"], PasswordValidator.validate
            ),
            "techs": FormField("techs", labels["techs"], TechsValidator.validate),
        }

    def validate_data(self, raw_data: Dict[str, Any]) -> ValidationResult:
        """
        Validate and normalize submitted form data.

        Every field is checked; all errors are collected rather than stopping
        at the first one.

        Args:
            raw_data: Raw submitted data dictionary

        Returns:
            ValidationResult: Normalized data (only when valid) and errors
                keyed by field path, e.g. ``techs.1.knowledge``
        """
        validated: Dict[str, Any] = {}
        errors: Dict[str, str] = {}

        for field_name, field in self.fields.items():
            try:
                validated[field_name] = field.validate(raw_data.get(field_name))
            except FieldError as e:
                if e.message:
                    errors[field_name] = e.message
                for path, message in e.details.items():
                    errors[f"{field_name}.{path}"] = message

        if errors:
            logger.warning("Form validation failed: %s", errors)
            return ValidationResult(None, errors)

        logger.info("Form validated for %s", validated["email"])
        return ValidationResult(validated, {})

    def get_field_labels(self) -> Dict[str, str]:
        """Get mapping of field names to user-friendly labels."""
        return {name: field.label for name, field in self.fields.items()}

    def get_required_fields(self) -> list:
        """Get list of required field names."""
        return list(self.fields.keys())


# Global form schema instance
form_schema = FormSchema()
