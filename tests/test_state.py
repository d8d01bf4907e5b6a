import pytest

from scatterexplorer.model.fields import categorical_fields, field_label, numeric_fields
from scatterexplorer.model.state import DataSource, SessionState


def test_defaults():
    session = SessionState()
    assert session.selection.x_field == "age"
    assert session.selection.y_field == "substance_score"
    assert session.selection.color_field == "gender"
    assert session.show_trend is False
    assert session.source == DataSource.SAMPLE


def test_field_catalog():
    assert [f.key for f in categorical_fields()] == ["gender", "region", "education_level"]
    assert "mental_health_score" in [f.key for f in numeric_fields()]
    assert field_label("alcohol_use") == "Alcohol Use"


def test_setters_validate_kind():
    session = SessionState()
    session.set_x_field("alcohol_use")
    session.set_color_field("region")
    assert session.selection.x_field == "alcohol_use"
    assert session.selection.color_field == "region"

    with pytest.raises(ValueError):
        session.set_y_field("gender")
    with pytest.raises(ValueError):
        session.set_color_field("age")
    with pytest.raises(KeyError):
        session.set_x_field("height")
    assert session.selection.y_field == "substance_score"


def test_toggle_trend():
    session = SessionState()
    assert session.toggle_trend() is True
    assert session.toggle_trend() is False


def test_replace_records_copies_list(linear_records):
    session = SessionState()
    session.replace_records(linear_records, DataSource.FILE)
    linear_records.pop()
    assert len(session.records) == 3
    assert session.source == DataSource.FILE
