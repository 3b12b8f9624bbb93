"""Section navigation workflow."""

from ..commands import names
from .base import Workflow


class NavigationWorkflow(Workflow):

    def handlers(self):
        return {names.NAVIGATE_TO_SECTION: self.navigate}

    def navigate(self, payload: dict) -> None:
        """Record the current section and tell the UI to show it."""
        section = payload.get('section')
        if not section:
            return
        self.store.set_current_section(section)
        self.dispatch(names.SECTION_CHANGE, {'section': section})
