"""News workflows: read, create and edit."""

from dataclasses import replace

from ..commands import names
from ..core.models import NewsItem
from ..ui.presenter import DialogAction, FormField
from .base import CANCEL, CLOSE, SAVE, Workflow
from .formatting import format_date, properties
from .forms import collect, initial_record, join_list
from .placeholders import resolve_news


def news_fields(item: NewsItem) -> list[FormField]:
    return [
        FormField('title', "Title", item.title),
        FormField('category', "Category", item.category),
        FormField('author', "Author", item.author),
        FormField('tags', "Tags (comma-separated)", join_list(item.tags), kind='list'),
        FormField('is_important', "Important", item.is_important, kind='bool'),
        FormField('content', "Content", item.content, multiline=True),
    ]


def news_body(item: NewsItem) -> str:
    details = properties([
        ("By", item.author),
        ("Published", format_date(item.date_published) if item.date_published else None),
        ("Category", item.category),
        ("Tags", join_list(item.tags)),
    ])
    flag = "**Important**\n\n" if item.is_important else ""
    return f"## {item.title}\n\n{flag}{details}\n\n---\n\n{item.content}\n"


class NewsWorkflow(Workflow):
    """Handlers for reading and editing news."""

    def handlers(self):
        return {
            names.READ_NEWS: self.read,
            names.ADD_NEWS: self.add,
            names.EDIT_NEWS: self.edit,
        }

    def read(self, payload: dict) -> None:
        """
        Show a news item and mark it read for the current user.

        Only stored items can be marked read; an unknown id shows a
        placeholder item built from the payload title.
        """
        news_id = payload.get('newsId')
        if news_id:
            self.store.mark_news_as_read(news_id, self.store.current_user)
        item = resolve_news(self.store, news_id, payload.get('newsTitle'))

        self.present("News", news_body(item), [
            DialogAction("Add to favorites", lambda values: self.dispatch(
                names.ADD_TO_FAVORITES,
                {'itemType': 'news', 'itemId': item.id or item.title, 'itemName': item.title}), variant='primary'),
            DialogAction(CLOSE),
        ])

    def add(self, payload: dict) -> None:
        item = initial_record(NewsItem, payload.get('data'))
        if not item.author:
            item = replace(item, author=self.store.current_user)
        fields = news_fields(item)

        def save(values):
            if self.guarded(lambda: self.store.add_news(collect(fields, values))):
                self.notify("News published", "The news item was published.")

        self.present("New news item", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)

    def edit(self, payload: dict) -> None:
        news_id = payload.get('newsId')
        item = self.store.get_news(news_id) if news_id else None
        if item is None:
            self.notify("Not found", f"No news item with id {news_id!r}.")
            return
        fields = news_fields(item)

        def save(values):
            if self.guarded(lambda: self.store.update_news(news_id, collect(fields, values))):
                self.notify("News updated", "The news item was updated.")

        self.present("Edit news item", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)
