"""Favorite workflows: add, remove and list bookmarks."""

from ..commands import names
from .base import Workflow
from .formatting import format_date


class FavoritesWorkflow(Workflow):

    def handlers(self):
        return {
            names.ADD_TO_FAVORITES: self.add,
            names.REMOVE_FROM_FAVORITES: self.remove,
            names.VIEW_FAVORITES: self.view,
        }

    def add(self, payload: dict) -> None:
        item_type = payload.get('itemType')
        item_name = payload.get('itemName') or ''
        item_id = payload.get('itemId') or item_name

        if self.store.is_favorite(item_id, item_type):
            self.notify("Already in favorites", f"\"{item_name}\" is already in your favorites.")
            return

        if self.guarded(lambda: self.store.add_to_favorites(item_id, item_type, item_name)):
            self.notify("Added to favorites", f"\"{item_name}\" was added to your favorites.")

    def remove(self, payload: dict) -> None:
        self.store.remove_from_favorites(payload.get('itemId'), payload.get('itemType'))
        self.notify("Removed from favorites", "The item was removed from your favorites.")

    def view(self, payload: dict) -> None:
        favorites = self.store.get_favorites(payload.get('itemType'))
        if favorites:
            body = "\n".join(
                f"- **{fav.title}** ({fav.item_type}), added {format_date(fav.date_added)}"
                for fav in favorites
            )
        else:
            body = "No favorites yet."
        self.present("My favorites", body)
