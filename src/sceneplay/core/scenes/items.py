"""Content item tree: the widgets a slide paints and scenes refer to by id."""

from typing import Iterator, Optional
from pydantic import Field

from ..base import AuthoredModel


class ContentItem(AuthoredModel):
    """A node in a slide's content tree (atom, card or layout)."""
    id: str
    type: str = "atom"  # atom, card, layout
    content: str = ""
    title: Optional[str] = None
    children: list["ContentItem"] = Field(default_factory=list)
    detail_items: list["ContentItem"] = Field(default_factory=list)

    @property
    def label(self) -> str:
        return self.title or self.content


def iter_items(items: list[ContentItem]) -> Iterator[ContentItem]:
    """Depth-first walk over items and their children (detail items excluded)."""
    for item in items:
        yield item
        yield from iter_items(item.children)


def find_item(items: list[ContentItem], item_id: str) -> Optional[ContentItem]:
    for item in iter_items(items):
        if item.id == item_id:
            return item
    return None


def find_card(items: list[ContentItem], card_id: str) -> Optional[ContentItem]:
    item = find_item(items, card_id)
    if item is not None and item.type == "card":
        return item
    return None


def collect_item_ids(items: list[ContentItem]) -> list[str]:
    return [item.id for item in iter_items(items)]
