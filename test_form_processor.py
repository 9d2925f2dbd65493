"""
Tests for the form processor service.
"""

import json

import pytest

from services import FormProcessor, render_output


@pytest.fixture
def processor():
    return FormProcessor()


def fill(processor):
    processor.update_fields(
        {"name": "diego", "email": "diego@rocketseat.com.br", "password": "secret1"}
    )
    processor.add_tech("Python", "70")
    processor.add_tech("Flask", 40)


def test_starts_empty(processor):
    assert processor.form_data == {}
    assert processor.techs == []
    assert processor.errors == {}
    assert processor.output == ""


def test_update_fields_ignores_unknown_keys(processor):
    processor.update_fields({"name": "Ana", "role": "admin"})
    assert processor.form_data == {"name": "Ana"}


def test_update_fields_rejects_non_list_techs(processor):
    with pytest.raises(TypeError):
        processor.update_fields({"techs": "React"})


def test_add_and_remove_tech(processor):
    assert processor.add_tech() == 0
    assert processor.add_tech("Go", 30) == 1
    assert processor.techs == [
        {"title": "", "knowledge": ""},
        {"title": "Go", "knowledge": 30},
    ]

    removed = processor.remove_tech(0)
    assert removed == {"title": "", "knowledge": ""}
    assert processor.techs == [{"title": "Go", "knowledge": 30}]


@pytest.mark.parametrize("index", [-1, 0, 3])
def test_remove_tech_out_of_range(processor, index):
    with pytest.raises(IndexError):
        processor.remove_tech(index)


def test_remove_tech_drops_row_errors(processor):
    processor.add_tech()
    processor.add_tech()
    result = processor.submit()
    assert "techs.0.title" in result["errors"]
    assert "name" in result["errors"]

    processor.remove_tech(1)
    assert not any(path.startswith("techs.") for path in processor.errors)
    assert "name" in processor.errors


def test_valid_submission_renders_output(processor):
    fill(processor)
    result = processor.submit()

    assert result["success"] is True
    assert result["errors"] == {}
    expected = {
        "name": "Diego",
        "email": "diego@rocketseat.com.br",
        "password": "secret1",
        "techs": [
            {"title": "Python", "knowledge": 70},
            {"title": "Flask", "knowledge": 40},
        ],
    }
    assert result["form_data"] == expected
    assert result["output"] == json.dumps(expected, indent=2)
    assert processor.output == result["output"]


def test_invalid_submission_keeps_previous_output(processor):
    fill(processor)
    first = processor.submit()

    result = processor.submit({"password": "123"})

    assert result["success"] is False
    assert result["form_data"] is None
    assert result["errors"] == {"password": "Password must be at least 6 characters"}
    assert result["output"] == first["output"]
    assert result["message"] == "Please fix the Password field."


def test_errors_message_lists_fields(processor):
    processor.submit({"name": "", "email": "x@rocketseat.com.br", "password": ""})
    assert processor.get_errors_message() == (
        "Please fix these fields: Name, Password, Technologies."
    )


def test_render_output_keeps_unicode():
    assert render_output({"name": "João"}) == '{\n  "name": "João"\n}'


def test_status_hides_password(processor):
    fill(processor)
    processor.submit()
    status = processor.get_status()

    assert "password" not in status["form_data"]
    assert status["submission_count"] == 1
    assert len(status["techs"]) == 2


def test_reset(processor):
    fill(processor)
    processor.submit()
    processor.reset()

    assert processor.form_data == {}
    assert processor.techs == []
    assert processor.errors == {}
    assert processor.output == ""
    assert processor.submission_count == 0


def test_rejected_update_leaves_state_untouched(processor):
    fill(processor)

    with pytest.raises(TypeError):
        processor.update_fields({"name": "changed", "techs": "React"})

    assert processor.form_data["name"] == "diego"
    assert len(processor.techs) == 2
