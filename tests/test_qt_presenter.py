"""
Tests for the outside-click dismissal of Qt dialogs.

The filter is driven directly with stand-in widgets, so no display is needed.
"""

import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from lexdesk.ui.presenter import OUTCOME_DISMISSED, DialogAction, ModalView  # noqa: E402
from lexdesk.ui.qt_presenter import OutsideClickFilter  # noqa: E402


class FakeWidget:
    """Widget stand-in that only knows its top-level window."""

    def __init__(self, window=None):
        self._window = window if window is not None else self

    def isWidgetType(self):
        return True

    def window(self):
        return self._window


def press():
    return QtCore.QEvent(QtCore.QEvent.Type.MouseButtonPress)


@pytest.fixture
def main_window():
    return FakeWidget()


@pytest.fixture
def click_filter(presenter, main_window):
    return OutsideClickFilter(presenter, main_window)


def open_dialog(presenter):
    return presenter.present(ModalView(title="Dialog", body="", actions=[DialogAction("Close")]))


class TestOutsideClickFilter:

    def test_click_in_main_window_dismisses_dialog(self, presenter, click_filter, main_window):
        session = open_dialog(presenter)
        outcomes = []
        session.on_close(lambda s: outcomes.append(s.outcome))

        consumed = click_filter.eventFilter(FakeWidget(main_window), press())

        assert consumed is True
        assert presenter.active is None
        assert outcomes == [OUTCOME_DISMISSED]

    def test_click_inside_dialog_is_ignored(self, presenter, click_filter):
        open_dialog(presenter)
        dialog_window = FakeWidget()

        assert click_filter.eventFilter(FakeWidget(dialog_window), press()) is False
        assert presenter.active is not None

    def test_click_without_dialog_passes_through(self, presenter, click_filter, main_window):
        assert click_filter.eventFilter(FakeWidget(main_window), press()) is False

    def test_other_events_pass_through(self, presenter, click_filter, main_window):
        open_dialog(presenter)
        release = QtCore.QEvent(QtCore.QEvent.Type.MouseButtonRelease)

        assert click_filter.eventFilter(FakeWidget(main_window), release) is False
        assert presenter.active is not None
