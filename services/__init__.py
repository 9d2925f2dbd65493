"""
Services package for business logic.
"""

from .form_processor import FormProcessor, render_output

__all__ = ["FormProcessor", "render_output"]
