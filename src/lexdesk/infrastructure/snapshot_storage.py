"""
Local snapshot storage for the entity store.

The store's persisted subset (six collections plus the current user) is kept
as one namespaced record in a JSON file in the persistent data directory:

    {"app-storage": {"state": {...}, "version": 0}}

Once attached, every committed store mutation rewrites the snapshot
(write-through). Writes are atomic: the new content goes to a temporary file
which then replaces the old one, so a failed write leaves the previous
snapshot intact. Failures are logged, never raised.
"""

import json
from pathlib import Path
from typing import Optional

from ..core.errors import ImportParseError
from ..core.store import EntityStore
from .logging_config import get_logger
from .paths import get_snapshot_file_path


logger = get_logger(__name__)

SNAPSHOT_VERSION = 0


class SnapshotStorage:
    """
    Persists entity store snapshots to a local JSON file.
    """

    def __init__(self, file_path: Optional[Path] = None, namespace: str = "app-storage"):
        """
        Initialize the snapshot storage.

        Args:
            file_path: Path to the storage file. If None, uses default location.
            namespace: Key of the record holding the snapshot.
        """
        if file_path is None:
            file_path = get_snapshot_file_path()

        self.file_path = Path(file_path)
        self.namespace = namespace

    def _read_file(self) -> Optional[dict]:
        if not self.file_path.exists():
            return None
        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse snapshot file {self.file_path}: {e}")
            return None
        except OSError as e:
            logger.error(f"Failed to read snapshot file {self.file_path}: {e}")
            return None
        return data if isinstance(data, dict) else None

    def load(self) -> Optional[dict]:
        """
        Load the persisted snapshot.

        Returns:
            The snapshot state, or None if there is none (absence is not an
            error) or the file cannot be read.
        """
        data = self._read_file()
        if data is None:
            logger.info(f"No snapshot found at {self.file_path}, starting empty")
            return None

        record = data.get(self.namespace)
        if not isinstance(record, dict) or not isinstance(record.get('state'), dict):
            logger.info(f"No '{self.namespace}' snapshot in {self.file_path}, starting empty")
            return None

        return record['state']

    def save(self, state: dict) -> bool:
        """
        Write a snapshot.

        Args:
            state: Snapshot state to persist.

        Returns:
            True if the snapshot was written, False if the write failed.
        """
        temp_file = self.file_path.with_suffix('.tmp')
        try:
            data = self._read_file() or {}
            data[self.namespace] = {'state': state, 'version': SNAPSHOT_VERSION}
            content = json.dumps(data, ensure_ascii=False)

            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, 'w', encoding='utf-8') as f:
                f.write(content)

            temp_file.replace(self.file_path)
            logger.debug(f"Snapshot saved to {self.file_path}")
            return True

        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save snapshot: {e}")
            if temp_file.exists():
                try:
                    temp_file.unlink()
                except OSError:
                    logger.warning(f"Could not remove temporary snapshot {temp_file}")
            return False

    def attach(self, store: EntityStore) -> None:
        """
        Restore the persisted snapshot into a store and keep it in sync.

        A malformed snapshot is logged and ignored; the store keeps its
        current (empty) state.

        Args:
            store: The entity store to restore and observe.
        """
        state = self.load()
        if state is not None:
            try:
                store.restore(state)
                logger.info(f"Snapshot restored from {self.file_path}")
            except ImportParseError as e:
                logger.error(f"Ignoring malformed snapshot: {e}")

        store.add_listener(lambda what: self.save(store.snapshot()))
