"""
Pytest configuration and shared fixtures.

This file contains pytest configuration and reusable test fixtures: a store
driven by a fake clock, a fresh command bus, a headless modal presenter and
presentation services that record what the workflows asked them to do.
"""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

import pytest

from lexdesk.commands.bus import CommandBus
from lexdesk.config.settings import AppSettings
from lexdesk.core.store import EntityStore
from lexdesk.ui.presenter import ModalPresenter
from lexdesk.ui.services import Clipboard, FileService, Notifier, Scheduler
from lexdesk.workflows import WorkflowContext, register_workflows


class FakeClock:
    """Clock returning a fixed time that tests advance explicitly."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class RecordingNotifier(Notifier):

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def notify(self, title: str, message: str) -> None:
        self.messages.append((title, message))

    @property
    def titles(self) -> list[str]:
        return [title for title, _ in self.messages]


class RecordingFileService(FileService):
    """Keeps saved files in memory and serves a preset file content on open."""

    def __init__(self):
        self.saved: dict[str, str] = {}
        self.to_open: Optional[str] = None
        self.cancel_save = False

    def save_text(self, content: str, filename: str) -> bool:
        if self.cancel_save:
            return False
        self.saved[filename] = content
        return True

    def open_text(self, accept: str = ".json") -> Optional[str]:
        return self.to_open


class RecordingClipboard(Clipboard):

    def __init__(self):
        self.text: Optional[str] = None

    def copy(self, text: str) -> None:
        self.text = text


class ManualScheduler(Scheduler):
    """Collects scheduled callbacks; run_all() fires them."""

    def __init__(self):
        self.pending: list[tuple[int, Callable[[], None]]] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending.append((delay_ms, callback))

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> EntityStore:
    """Create an empty store using the fake clock."""
    return EntityStore(clock=clock)


@pytest.fixture
def bus() -> CommandBus:
    return CommandBus()


@pytest.fixture
def presenter() -> ModalPresenter:
    return ModalPresenter()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def files() -> RecordingFileService:
    return RecordingFileService()


@pytest.fixture
def clipboard() -> RecordingClipboard:
    return RecordingClipboard()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def settings(tmp_path: Path) -> AppSettings:
    """Default settings with the log file kept out of the user's data directory."""
    return AppSettings(log_file_path=tmp_path / "log.txt", log_to_file=False)


@pytest.fixture
def context(store, bus, presenter, notifier, files, clipboard, scheduler, settings) -> WorkflowContext:
    return WorkflowContext(
        store_provider=lambda: store,
        bus=bus,
        presenter=presenter,
        notifier=notifier,
        files=files,
        clipboard=clipboard,
        scheduler=scheduler,
        settings=settings,
    )


@pytest.fixture
def app(context):
    """Register every workflow on the bus and return the context."""
    register_workflows(context)
    return context


@pytest.fixture
def legal_text_data() -> dict:
    return {
        'title': "Loi X",
        'content': "contenu sur le commerce",
        'type': 'law',
        'status': 'published',
        'category': "Commerce",
        'author': "Ministère",
        'tags': ['commerce', 'entreprise'],
    }


@pytest.fixture
def procedure_data() -> dict:
    return {
        'title': "Création d'entreprise",
        'description': "Immatriculer une société",
        'steps': [
            {'id': 's2', 'title': "Dépôt", 'description': "Déposer le dossier", 'order': 2, 'isRequired': True},
            {'id': 's1', 'title': "Préparation", 'description': "Rassembler les statuts", 'order': 1,
             'isRequired': True, 'documents': ["Statuts"]},
        ],
        'category': "Entreprise",
        'difficulty': 'medium',
        'estimated_time': "3 semaines",
        'required_documents': ["Statuts", "Pièce d'identité"],
        'status': 'active',
    }
