"""Export, import and resource download workflows."""

from ..commands import names
from ..core.models import utc_now
from ..infrastructure.logging_config import get_logger
from ..infrastructure.paths import sanitize_filename
from .base import Workflow


logger = get_logger(__name__)


class DataTransferWorkflow(Workflow):

    def handlers(self):
        return {
            names.EXPORT_DATA: self.export_data,
            names.IMPORT_DATA: self.import_data,
            names.DOWNLOAD_RESOURCE: self.download_resource,
        }

    def export_data(self, payload: dict) -> None:
        """Save the six collections as a JSON document."""
        filename = self.settings.export_file_name
        if not self.context.files.save_text(self.store.export_data(), filename):
            logger.info("Export cancelled")
            return
        self.notify("Export successful", "The data was exported.")

    def import_data(self, payload: dict) -> None:
        """
        Import a JSON document chosen by the user.

        A cancelled selection does nothing. A malformed document leaves the
        store untouched and is reported.
        """
        content = self.context.files.open_text(".json")
        if content is None:
            logger.info("Import cancelled")
            return

        if self.store.import_data(content):
            self.notify("Import successful", "The data was imported.")
        else:
            self.notify("Import failed", "The file could not be imported. No data was changed.")

    def download_resource(self, payload: dict) -> None:
        name = payload.get('resourceName') or "resource"
        resource_type = payload.get('resourceType') or "document"
        content = (
            f"Resource: {name}\n"
            f"Type: {resource_type}\n"
            f"Downloaded on: {utc_now().astimezone().strftime('%d/%m/%Y %H:%M:%S')}\n"
        )
        self.deliver(content, f"{sanitize_filename(name, default='resource')}.txt")
