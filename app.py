"""
User Form Flask Application

A web application that collects a name, email, password and a list of
technologies, validates them against the form schema and renders the
validated payload as text.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict

from flask import Flask, jsonify, redirect, render_template, request, url_for

from config import settings
from schemas import form_schema
from services import FormProcessor

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.FileHandler(settings.LOG_FILE), logging.StreamHandler()],
)
logger = logging.getLogger(__name__)

app = Flask(__name__)

# Global form processor instance
form_processor = FormProcessor()

TECH_KEY_PATTERN = re.compile(r"^techs-(\d+)-(title|knowledge)$")


def parse_form(form) -> Dict[str, Any]:
    """
    Convert posted HTML form fields into form values.

    Technology rows are posted as ``techs-<index>-title`` and
    ``techs-<index>-knowledge``; rows are returned ordered by index.
    """
    values: Dict[str, Any] = {
        field: form[field] for field in FormProcessor.SCALAR_FIELDS if field in form
    }

    rows: Dict[int, Dict[str, str]] = {}
    for key in form:
        match = TECH_KEY_PATTERN.match(key)
        if match:
            row = rows.setdefault(int(match.group(1)), {"title": "", "knowledge": ""})
            row[match.group(2)] = form[key]

    values["techs"] = [rows[index] for index in sorted(rows)]
    return values


def render_index(status_code: int = 200):
    return (
        render_template(
            "index.html",
            form_data=form_processor.form_data,
            techs=form_processor.techs,
            errors=form_processor.errors,
            output=form_processor.output,
            field_labels=form_schema.get_field_labels(),
            knowledge_min=settings.KNOWLEDGE_MIN,
            knowledge_max=settings.KNOWLEDGE_MAX,
        ),
        status_code,
    )


@app.route("/")
def index():
    """
    Render the main form page.

    Returns:
        str: Rendered HTML template with current form values and errors
    """
    logger.info("Index page accessed")
    return render_index()


@app.route("/submit", methods=["POST"])
def submit_form():
    """
    Validate a form submission.

    Accepts either a JSON payload:
        {
            "name": "...",
            "email": "...",
            "password": "...",
            "techs": [{"title": "...", "knowledge": 50}]
        }
    or a posted HTML form.

    Returns:
        JSON or HTML: Submission result; 422 when validation fails
    """
    try:
        logger.info("Form submission received")

        if not request.is_json:
            result = form_processor.submit(parse_form(request.form))
            return render_index(200 if result["success"] else 422)

        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            logger.error("Submission body is not a JSON object")
            return jsonify({"error": "Request body must be a JSON object"}), 400

        result = form_processor.submit(data)
        return jsonify(result), 200 if result["success"] else 422

    except TypeError as e:
        logger.error("Malformed submission: %s", str(e))
        return jsonify({"error": "Malformed submission", "details": str(e)}), 400
    except (ValueError, KeyError) as e:
        logger.error("Error processing submission: %s", str(e), exc_info=True)
        return (
            jsonify(
                {
                    "error": "An error occurred while processing the form",
                    "details": str(e),
                }
            ),
            500,
        )


@app.route("/techs", methods=["POST"])
def add_tech():
    """
    Add a technology row.

    An HTML form post carries the current field values, which are kept
    before the row is appended; the browser is then redirected to the form.

    Returns:
        JSON or redirect: Index of the new row and the current rows
    """
    try:
        if not request.is_json:
            form_processor.update_fields(parse_form(request.form))
            form_processor.add_tech()
            return redirect(url_for("index"))

        data = request.get_json(silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "Request body must be a JSON object"}), 400

        index_added = form_processor.add_tech(
            data.get("title", ""), data.get("knowledge", "")
        )
        return jsonify({"index": index_added, "techs": form_processor.techs}), 201

    except TypeError as e:
        logger.error("Malformed technology row: %s", str(e))
        return jsonify({"error": "Malformed submission", "details": str(e)}), 400


@app.route("/techs/<int:index>", methods=["DELETE"])
def remove_tech(index: int):
    """Remove a technology row by index."""
    try:
        removed = form_processor.remove_tech(index)
        return jsonify({"removed": removed, "techs": form_processor.techs})
    except IndexError as e:
        logger.warning("Remove failed: %s", str(e))
        return jsonify({"error": str(e)}), 404


@app.route("/techs/<int:index>/delete", methods=["POST"])
def remove_tech_form(index: int):
    """Remove a technology row from the HTML form, keeping typed values."""
    values = parse_form(request.form)
    if not 0 <= index < len(values["techs"]):
        logger.warning("Remove failed: no technology row at index %d", index)
        return render_index(404)

    form_processor.update_fields(values)
    form_processor.remove_tech(index)
    return redirect(url_for("index"))


@app.route("/status", methods=["GET"])
def get_status():
    """
    Get current form state.

    Returns:
        JSON: Current field values, technology rows, errors and output
    """
    logger.info("Status request received")
    return jsonify(
        {
            **form_processor.get_status(),
            "field_labels": form_schema.get_field_labels(),
            "timestamp": datetime.now().isoformat(),
        }
    )


@app.route("/reset", methods=["POST"])
def reset_form():
    """
    Reset all form data and start over.

    Returns:
        JSON: Confirmation message and reset form state
    """
    logger.info("Form reset requested")
    form_processor.reset()
    return jsonify(
        {
            "message": "Form has been reset successfully",
            "form_data": form_processor.form_data,
            "techs": form_processor.techs,
            "timestamp": datetime.now().isoformat(),
        }
    )


@app.route("/health", methods=["GET"])
def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        JSON: Application health status and active validation rules
    """
    return jsonify(
        {
            "status": "healthy",
            "timestamp": datetime.now().isoformat(),
            "version": "1.0.0",
            "validation_rules": {
                "allowed_email_domain": settings.ALLOWED_EMAIL_DOMAIN,
                "password_min_length": settings.PASSWORD_MIN_LENGTH,
                "techs_min_count": settings.TECHS_MIN_COUNT,
                "knowledge_range": [settings.KNOWLEDGE_MIN, settings.KNOWLEDGE_MAX],
            },
            "app_settings": {"log_level": settings.LOG_LEVEL},
        }
    )


# Error handlers
@app.errorhandler(404)
def not_found_error(_error):
    """Handle 404 errors."""
    logger.warning("404 error: %s", request.url)
    return jsonify({"error": "Endpoint not found"}), 404


@app.errorhandler(405)
def method_not_allowed_error(_error):
    """Handle 405 errors."""
    logger.warning("405 error: %s %s", request.method, request.url)
    return jsonify({"error": "Method not allowed"}), 405


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error("500 error: %s", str(error))
    return jsonify({"error": "Internal server error"}), 500


if __name__ == "__main__":
    logger.info("Starting User Form application")
    logger.info("Configuration loaded from: %s", "environment variables")
    logger.info("Allowed email domain: %s", settings.ALLOWED_EMAIL_DOMAIN)

    app.run(host=settings.HOST, port=settings.PORT, debug=settings.DEBUG)
