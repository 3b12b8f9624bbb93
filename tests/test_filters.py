"""
Tests for search predicates.

These tests verify the free-text condition, the exact field filter and the
SearchResults container.
"""

import pytest

from lexdesk.core.filters import (
    FieldEqualsFilter,
    FilterCondition,
    SearchResults,
    TextQueryCondition,
    build_conditions,
    search_records,
)
from lexdesk.core.models import DocumentTemplate, LegalText, NewsItem, Procedure, ProcedureStep


@pytest.fixture
def texts():
    return [
        LegalText(id="a", title="Code du commerce", content="<p>Sociétés</p>", type='law', tags=["entreprise"]),
        LegalText(id="b", title="Décret fiscal", content="Impôts", type='decree', tags=["Fiscalité"]),
        LegalText(id="c", title="Circulaire", content="commerce de détail", type='circular', status='published'),
    ]


class TestTextQueryCondition:

    def test_empty_query_matches_all(self, texts):
        condition = TextQueryCondition(query="")
        assert all(condition.evaluate(text) for text in texts)

    def test_matches_title_content_and_tags(self, texts):
        assert [t.id for t in texts if TextQueryCondition("COMMERCE").evaluate(t)] == ["a", "c"]
        assert [t.id for t in texts if TextQueryCondition("fiscalité").evaluate(t)] == ["b"]
        assert [t.id for t in texts if TextQueryCondition("entre").evaluate(t)] == ["a"]

    def test_procedure_steps_are_searched(self):
        procedure = Procedure(title="Permis", steps=[ProcedureStep(title="Visite médicale")])
        assert TextQueryCondition("médicale").evaluate(procedure)

    def test_template_name_is_searched(self):
        assert TextQueryCondition("bail").evaluate(DocumentTemplate(name="Bail commercial"))


class TestFieldEqualsFilter:

    def test_exact_match(self, texts):
        condition = FieldEqualsFilter(field_name='type', value='decree')
        assert [t.id for t in texts if condition.evaluate(t)] == ["b"]

    def test_falsy_value_matches_all(self, texts):
        for value in ("", None, 0, False):
            assert all(FieldEqualsFilter('type', value).evaluate(t) for t in texts)

    def test_camel_case_field_name(self):
        news = [NewsItem(title="A", is_important=True), NewsItem(title="B")]
        condition = FieldEqualsFilter(field_name='isImportant', value=True)
        assert [n.title for n in news if condition.evaluate(n)] == ["A"]

    def test_missing_field_does_not_match(self):
        assert not FieldEqualsFilter('type', 'law').evaluate(NewsItem(title="A"))


class TestSearchRecords:

    def test_query_and_filters_combine(self, texts):
        assert [t.id for t in search_records(texts, "commerce", {'type': 'circular'})] == ["c"]

    def test_order_is_preserved(self, texts):
        assert [t.id for t in search_records(texts, "", None)] == ["a", "b", "c"]

    def test_build_conditions(self):
        conditions = build_conditions("x", {'type': 'law', 'status': ''})
        assert isinstance(conditions[0], TextQueryCondition)
        assert len(conditions) == 3

    def test_base_condition_is_abstract(self):
        with pytest.raises(NotImplementedError):
            FilterCondition().evaluate(object())


class TestSearchResults:

    def test_totals_and_iteration(self, texts):
        results = SearchResults(legal_texts=texts[:2], news=[NewsItem(title="N")])

        assert results.total == 3
        assert len(results) == 3
        assert [r.title for r in results][-1] == "N"
        assert results.by_collection()['procedure'] == []

    def test_empty(self):
        assert SearchResults().total == 0
        assert SearchResults().all() == []
