"""
Tests for core domain models.

These tests verify camelCase serialization, timestamp handling and the
model helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from lexdesk.core.models import (
    DocumentTemplate,
    Favorite,
    LegalText,
    LegalTextMetadata,
    NewsItem,
    Procedure,
    ProcedureStep,
    SearchQuery,
    format_timestamp,
    parse_timestamp,
    to_camel_case,
    to_snake_case,
)


class TestNameConversion:

    @pytest.mark.parametrize("snake,camel", [
        ('title', 'title'),
        ('date_created', 'dateCreated'),
        ('is_required', 'isRequired'),
        ('required_documents', 'requiredDocuments'),
    ])
    def test_round_trip(self, snake, camel):
        assert to_camel_case(snake) == camel
        assert to_snake_case(camel) == snake


class TestTimestamps:

    def test_utc_is_written_with_z(self):
        value = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert format_timestamp(value) == "2024-03-01T09:30:00Z"

    def test_offsets_are_converted_to_utc(self):
        value = datetime(2024, 3, 1, 10, 30, tzinfo=timezone(timedelta(hours=1)))
        assert format_timestamp(value) == "2024-03-01T09:30:00Z"

    def test_parse_accepts_z_and_naive(self):
        assert parse_timestamp("2024-03-01T09:30:00Z") == datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)
        assert parse_timestamp("2024-03-01T09:30:00").tzinfo is not None
        assert parse_timestamp(None) is None
        assert parse_timestamp("") is None

    def test_parse_rejects_garbage(self):
        with pytest.raises(ValueError):
            parse_timestamp("yesterday")
        with pytest.raises(ValueError):
            parse_timestamp(12)


class TestLegalText:

    def test_to_dict_uses_camel_case(self):
        text = LegalText(id="t1", title="Loi X", date_created=datetime(2024, 1, 2, tzinfo=timezone.utc),
                         metadata=LegalTextMetadata(source="JO", references=["Loi Y"]))

        data = text.to_dict()

        assert data['dateCreated'] == "2024-01-02T00:00:00Z"
        assert data['dateModified'] is None
        assert data['metadata'] == {'source': "JO", 'references': ["Loi Y"], 'validity': None}

    def test_from_dict_round_trip(self):
        text = LegalText(id="t1", title="Loi X", tags=["a"], date_created=datetime(2024, 1, 2, tzinfo=timezone.utc))
        assert LegalText.from_dict(text.to_dict()) == text

    def test_from_dict_ignores_unknown_keys(self):
        assert LegalText.from_dict({'id': "t1", 'obsolete': True}).id == "t1"

    def test_from_dict_requires_mapping(self):
        with pytest.raises(TypeError):
            LegalText.from_dict(["t1"])

    def test_managed_fields(self):
        assert LegalText.managed_fields() == {'id', 'date_created', 'date_modified'}


class TestProcedure:

    def test_steps_are_deserialized_and_ordered(self):
        procedure = Procedure.from_dict({
            'title': "P",
            'steps': [
                {'id': "2", 'title': "Second", 'order': 2, 'isRequired': False},
                {'id': "1", 'title': "First", 'order': 1, 'documents': ["CNI"]},
            ],
        })

        assert all(isinstance(step, ProcedureStep) for step in procedure.steps)
        assert [step.title for step in procedure.ordered_steps()] == ["First", "Second"]
        assert procedure.steps[0].is_required is False
        assert procedure.steps[1].documents == ["CNI"]

    def test_step_serialization(self):
        data = Procedure(steps=[ProcedureStep(id="1", title="A", order=1)]).to_dict()
        assert data['steps'][0]['isRequired'] is True


class TestOtherModels:

    def test_news_read_tracking(self):
        item = NewsItem(title="N", read_by=["user-1"])
        assert item.is_read_by("user-1")
        assert not item.is_read_by("user-2")
        assert 'read_by' in NewsItem.managed_fields()
        assert NewsItem.CREATED_FIELD == 'date_published'

    def test_saved_search_counters_are_managed(self):
        managed = SearchQuery.managed_fields()
        assert {'use_count', 'last_used'} <= managed
        assert SearchQuery(name="S").title == "S"

    def test_favorite_has_no_modification_time(self):
        assert Favorite.MODIFIED_FIELD is None
        assert Favorite(item_id="t1", item_type='news').key == ("t1", 'news')

    def test_template_title_is_its_name(self):
        template = DocumentTemplate(name="Bail")
        assert template.title == "Bail"
        assert 'usage_count' in DocumentTemplate.managed_fields()
