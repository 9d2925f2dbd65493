"""
Schemas package for data validation and normalization.
"""

from .validation import form_schema, FormSchema, FieldError, ValidationResult

__all__ = ["form_schema", "FormSchema", "FieldError", "ValidationResult"]
