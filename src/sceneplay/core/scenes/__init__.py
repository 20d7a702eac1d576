"""Scenes package — public API re-exports."""

from ..base import AuthoredModel
from .behaviors import (
    WidgetVisualState,
    AnimationBehavior,
    InteractionBehavior,
)
from .items import ContentItem, iter_items, find_item, find_card, collect_item_ids
from .scene import Scene, WidgetStateLayer
from .slide import Slide
from .collection import SlideDeck

__all__ = [
    "AuthoredModel",
    "WidgetVisualState",
    "AnimationBehavior",
    "InteractionBehavior",
    "ContentItem",
    "iter_items",
    "find_item",
    "find_card",
    "collect_item_ids",
    "Scene",
    "WidgetStateLayer",
    "Slide",
    "SlideDeck",
]
