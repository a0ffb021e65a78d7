import logging

from brandhub.app.schemas.page import ContentKind, PageRecord, parse_content_field


def test_parse_plain_string():
    field = parse_content_field("<p>x</p>")
    assert field.kind == ContentKind.PLAIN
    assert field.value == "<p>x</p>"


def test_parse_none_is_absent():
    assert parse_content_field(None) is None


def test_parse_unknown_tag_is_raw_and_logged(caplog):
    with caplog.at_level(logging.WARNING):
        field = parse_content_field({"type": "markdown", "value": "# hi"}, "content")
    assert field.kind == ContentKind.RAW
    assert field.source_kind == "markdown"
    assert field.value == "# hi"
    assert field.is_verbatim
    assert "content_malformed" in caplog.text


def test_parse_unknown_tag_keeps_non_string_value():
    field = parse_content_field({"type": "markdown", "value": 42}, "content")
    assert field.kind == ContentKind.RAW
    assert field.value == 42


def test_parse_non_mapping_is_raw_empty():
    field = parse_content_field(42, "button")
    assert field.kind == ContentKind.RAW
    assert field.value == ""


def test_page_record_round_trips_through_json_dump():
    record = PageRecord(
        id=1,
        slug="landing",
        content={"type": "html", "value": "<h2>Hi</h2>"},
        button={"type": "markdown", "value": "<a>Back</a>"},
        keywords="brands, creators ,",
        status="published",
    )
    restored = PageRecord.model_validate(record.model_dump(mode="json"))
    assert restored.content.kind == ContentKind.HTML
    assert restored.button.kind == ContentKind.RAW
    assert restored.button.source_kind == "markdown"
    assert restored.keywords == ["brands", "creators"]
    assert restored == record
