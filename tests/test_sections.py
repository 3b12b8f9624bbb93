"""
Tests for the catalog sections listed by the main window.
"""

from lexdesk.commands import names
from lexdesk.ui.sections import SECTIONS, get_section, open_favorite


class TestSections:

    def test_keys_are_unique(self):
        keys = [section.key for section in SECTIONS]
        assert len(keys) == len(set(keys))
        assert get_section('news').label == "News"
        assert get_section('dashboard') is None

    def test_records_come_from_the_store(self, store, legal_text_data):
        store.add_legal_text(legal_text_data)
        assert [t.title for t in get_section('legal-texts').records(store)] == ["Loi X"]

    def test_commands_carry_record_ids(self, store, legal_text_data):
        text = store.add_legal_text(legal_text_data)
        section = get_section('legal-texts')

        assert section.open(text) == (names.VIEW_LEGAL_TEXT, {'textId': text.id, 'title': "Loi X"})
        assert section.delete(text) == (names.DELETE_LEGAL_TEXT, {'textId': text.id})
        assert section.favorite(text)[1] == {'itemType': 'legal-text', 'itemId': text.id, 'itemName': "Loi X"}

    def test_section_commands_reach_a_handler(self, app, store, legal_text_data):
        """Test that opening a record from any section shows a dialog."""
        store.add_legal_text(legal_text_data)
        store.add_procedure({'title': "P"})
        store.add_news({'title': "N"})
        store.add_template({'name': "T"})
        store.save_search({'name': "S", 'query': "q"})

        for key in ('legal-texts', 'procedures', 'news', 'templates', 'saved-searches'):
            section = get_section(key)
            record = section.records(store)[0]
            app.bus.dispatch(*section.open(record))
            assert app.presenter.active is not None, key
            app.presenter.dismiss()


class TestFavoritesSection:

    def test_favorites_open_their_item(self, store):
        favorite = store.add_to_favorites("p1", 'procedure', "Passeport")
        assert open_favorite(favorite) == (names.VIEW_PROCEDURE, {'procedureId': "p1", 'title': "Passeport"})

    def test_favorites_section_removes_instead_of_deleting(self, store):
        favorite = store.add_to_favorites("n1", 'news', "Flash")
        section = get_section('favorites')

        assert section.delete(favorite) == (names.REMOVE_FROM_FAVORITES, {'itemId': "n1", 'itemType': 'news'})
        assert section.edit is None
        assert section.add_command is None
