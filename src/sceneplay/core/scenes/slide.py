"""Slide data model."""

import uuid
from typing import Optional
from pydantic import Field

from ..base import AuthoredModel
from .items import ContentItem, iter_items
from .scene import Scene


class Slide(AuthoredModel):
    """A single slide: a content tree plus the scenes that animate it.

    Scenes are kept in authored list order; `order` is informational.
    """
    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    order: int = 0
    title: str = ""
    animation_template: Optional[str] = None
    items: list[ContentItem] = Field(default_factory=list)
    scenes: list[Scene] = Field(default_factory=list)

    def get_scene(self, index: int) -> Optional[Scene]:
        if 0 <= index < len(self.scenes):
            return self.scenes[index]
        return None

    def widget_titles(self) -> dict[str, str]:
        return {item.id: item.label for item in iter_items(self.items) if item.label}
