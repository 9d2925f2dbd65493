"""
Business logic services for form processing.

This module holds the form-field state and submission flow separated from
HTTP concerns.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from schemas import form_schema

logger = logging.getLogger(__name__)


def render_output(data: Dict[str, Any]) -> str:
    """Render a validated payload as pretty-printed JSON text."""
    return json.dumps(data, indent=2, ensure_ascii=False)


class FormProcessor:
    """
    Service class for managing the user form.

    Keeps the raw values typed into each field, the dynamic list of
    technology rows, the errors of the last submission and the rendered
    output of the last valid one.
    """

    SCALAR_FIELDS = ("name", "email", "password")

    def __init__(self):
        """Initialize the FormProcessor with an empty form."""
        self.form_data: Dict[str, str] = {}
        self.techs: List[Dict[str, Any]] = []
        self.errors: Dict[str, str] = {}
        self.output: str = ""
        self.submission_count: int = 0

        logger.info(
            "FormProcessor initialized with fields: %s",
            form_schema.get_required_fields(),
        )

    def update_fields(self, values: Dict[str, Any]) -> None:
        """
        Store raw field values.

        Unknown keys are ignored. A ``techs`` entry replaces the whole list.

        Args:
            values (Dict[str, Any]): Raw values keyed by field name
        """
        techs = self.techs
        if "techs" in values:
            if not isinstance(values["techs"], list):
                raise TypeError("techs must be a list")
            techs = [
                dict(tech) if isinstance(tech, dict) else tech
                for tech in values["techs"]
            ]

        for field in self.SCALAR_FIELDS:
            if field in values:
                self.form_data[field] = values[field]
        self.techs = techs

        logger.debug("Form fields updated: %s", sorted(values.keys()))

    def add_tech(self, title: str = "", knowledge: Any = "") -> int:
        """
        Append an empty (or pre-filled) technology row.

        Returns:
            int: Index of the new row
        """
        self.techs.append({"title": title, "knowledge": knowledge})
        logger.info("Technology row added, %d rows", len(self.techs))
        return len(self.techs) - 1

    def remove_tech(self, index: int) -> Dict[str, Any]:
        """
        Remove a technology row.

        Raises:
            IndexError: If ``index`` does not address an existing row
        """
        if not 0 <= index < len(self.techs):
            raise IndexError(f"No technology row at index {index}")

        removed = self.techs.pop(index)
        # Row error paths are positional.
        self.errors = {
            path: msg
            for path, msg in self.errors.items()
            if not path.startswith("techs.")
        }
        logger.info("Technology row %d removed, %d rows left", index, len(self.techs))
        return removed

    def current_values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {
            field: self.form_data.get(field, "") for field in self.SCALAR_FIELDS
        }
        values["techs"] = list(self.techs)
        return values

    def submit(self, values: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Validate the form and render its payload.

        Args:
            values (Optional[Dict[str, Any]]): Field values to store before
                validating

        Returns:
            Dict[str, Any]: Submission result with success flag, errors,
                normalized data and rendered output
        """
        if values:
            self.update_fields(values)

        self.submission_count += 1
        result = form_schema.validate_data(self.current_values())
        self.errors = result.errors

        if not result.is_valid:
            logger.info(
                "Submission %d rejected with %d errors",
                self.submission_count,
                len(result.errors),
            )
            return {
                "success": False,
                "errors": self.errors.copy(),
                "form_data": None,
                "output": self.output,
                "message": self.get_errors_message(),
            }

        self.output = render_output(result.data)
        logger.info("Submission %d accepted", self.submission_count)
        return {
            "success": True,
            "errors": {},
            "form_data": result.data,
            "output": self.output,
            "message": "Form submitted successfully.",
        }

    def get_errors_message(self) -> Optional[str]:
        """
        Generate a user-friendly summary of fields with errors.

        Returns:
            Optional[str]: Message naming the invalid fields, or None if there
                are no errors
        """
        if not self.errors:
            return None

        field_labels = form_schema.get_field_labels()
        fields = []
        for path in self.errors:
            label = field_labels.get(path.split(".", 1)[0], path)
            if label not in fields:
                fields.append(label)

        if len(fields) == 1:
            return f"Please fix the {fields[0]} field."
        return f"Please fix these fields: {', '.join(fields)}."

    def get_status(self) -> Dict[str, Any]:
        """Get the current form state."""
        return {
            "form_data": {
                field: value
                for field, value in self.form_data.items()
                if field != "password"
            },
            "techs": list(self.techs),
            "errors": self.errors.copy(),
            "output": self.output,
            "submission_count": self.submission_count,
        }

    def reset(self) -> None:
        """Reset the form processor to initial state, clearing all data and errors."""
        self.form_data = {}
        self.techs = []
        self.errors = {}
        self.output = ""
        self.submission_count = 0
        logger.info("Form processor reset successfully")
