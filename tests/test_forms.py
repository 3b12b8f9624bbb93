"""
Tests for the form and text helpers used by the workflows.
"""

from datetime import datetime, timezone

from lexdesk.core.models import LegalText, ProcedureStep
from lexdesk.ui.presenter import FormField
from lexdesk.workflows.formatting import bullet_list, excerpt, format_date, plain_text, properties
from lexdesk.workflows.forms import collect, format_steps, initial_record, parse_steps, split_list, to_bool


class TestFormValues:

    def test_split_list(self):
        assert split_list(" a, b ,,c ") == ["a", "b", "c"]
        assert split_list(["x ", ""]) == ["x"]
        assert split_list(None) == []

    def test_to_bool(self):
        assert to_bool("yes") is True
        assert to_bool("non") is False
        assert to_bool(1) is True

    def test_collect_converts_by_kind(self):
        fields = [
            FormField('title', "Title", "Old"),
            FormField('tags', "Tags", "", kind='list'),
            FormField('is_public', "Public", False, kind='bool'),
        ]

        data = collect(fields, {'tags': "a, b", 'is_public': "true"})

        assert data == {'title': "Old", 'tags': ["a", "b"], 'is_public': True}

    def test_initial_record_tolerates_bad_data(self):
        assert initial_record(LegalText, None) == LegalText()
        assert initial_record(LegalText, "garbage") == LegalText()
        assert initial_record(LegalText, {'title': "T"}).title == "T"


class TestSteps:

    def test_format_then_parse_keeps_titles_and_optional_flag(self):
        steps = [
            ProcedureStep(id="b", title="Dépôt", description="En ligne", order=2, is_required=False),
            ProcedureStep(id="a", title="Préparation", description="Pièces", order=1),
        ]

        text = format_steps(steps)
        assert text.splitlines()[0] == "Préparation | Pièces"

        parsed = parse_steps(text)
        assert [(s['order'], s['title'], s['isRequired']) for s in parsed] == [
            (1, "Préparation", True),
            (2, "Dépôt", False),
        ]

    def test_title_only_lines(self):
        assert parse_steps("Une étape")[0]['description'] == ""
        assert parse_steps("") == []


class TestFormatting:

    def test_plain_text_strips_markup(self):
        assert plain_text("<h1>Titre</h1>\n\n\n<p>A &amp; B</p>") == "Titre\n\nA & B"

    def test_excerpt(self):
        assert excerpt("<p>court</p>") == "court"
        assert excerpt("x" * 150, 10) == "x" * 10 + "..."

    def test_format_date(self):
        assert format_date(datetime(2024, 3, 1, tzinfo=timezone.utc)) == "01/03/2024"

    def test_bullet_list_and_properties(self):
        assert bullet_list([], "Rien") == "- Rien"
        assert bullet_list(["a", "b"], "Rien") == "- a\n- b"
        assert properties([("Type", "law"), ("Author", "")]) == "- **Type:** law"
