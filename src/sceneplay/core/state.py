"""Playback session: the loaded deck plus the controller driving it."""

import logging
from typing import Any, Optional
from pydantic import BaseModel, Field

from ..engine.navigation import NavigationController, PlaybackFrame
from ..engine.timer import Scheduler
from .config import PlaybackConfig
from .scenes import SlideDeck, find_card, find_item

logger = logging.getLogger("ScenePlayMCP.state")


class PlaybackSession(BaseModel):
    """Global state for one presenter session. Nothing here is persisted."""
    config: PlaybackConfig = Field(default_factory=PlaybackConfig)
    deck: Optional[SlideDeck] = None
    deck_name: Optional[str] = None
    controller: Optional[NavigationController] = None
    scheduler: Optional[Any] = None  # defaults to a thread-based scheduler

    model_config = {"arbitrary_types_allowed": True}

    @property
    def is_active(self) -> bool:
        return self.controller is not None

    def start(self, deck: SlideDeck, name: str = "",
              scheduler: Optional[Scheduler] = None) -> NavigationController:
        """Begin playback of a deck from its first slide."""
        self.stop()
        self.deck = deck
        self.deck_name = name or deck.title or None
        self.controller = NavigationController(
            deck.slides, scripts=deck.scripts, config=self.config,
            scheduler=scheduler or self.scheduler,
        )
        logger.info(f"Started playback of '{self.deck_name}' ({len(deck.slides)} slides)")
        if self.config.autoplay_on_start:
            self.controller.set_playing(True)
        return self.controller

    def stop(self):
        if self.controller is not None:
            self.controller.close()
            self.controller = None

    def status(self) -> dict:
        if self.controller is None:
            return {"active": False}
        return self._status(self.controller.snapshot())

    def _status(self, snap: PlaybackFrame) -> dict:
        return {
            "active": True,
            "deck": self.deck_name,
            "slide_count": snap.slide_count,
            "slide_id": snap.slide.id if snap.slide else None,
            "scene_count": snap.scene_count,
            "total_steps": snap.total_steps,
            **snap.state.to_dict(),
        }

    def render_frame(self) -> dict:
        """Everything a renderer needs to paint the current step."""
        if self.controller is None:
            return {"active": False}
        snap = self.controller.snapshot()
        card = None
        if snap.slide is not None and snap.expanded_card_id:
            card = find_card(snap.slide.items, snap.expanded_card_id)
        return {
            **self._status(snap),
            "step_label": snap.step_label,
            "expanded_card_id": snap.expanded_card_id,
            "expanded_card": card.model_dump(by_alias=True, exclude_none=True) if card else None,
            "script_text": snap.script_text,
            "items": {item_id: v.to_dict() for item_id, v in snap.items.items()},
        }

    def describe_item(self, item_id: str, slide_id: Optional[str] = None) -> Optional[dict]:
        """Look up a content item on a slide (the current one by default)."""
        if self.deck is None:
            return None
        if slide_id:
            slide = self.deck.get(slide_id)
        else:
            slide = self.controller.current_slide if self.controller else None
        if slide is None:
            return None
        item = find_item(slide.items, item_id)
        if item is None:
            return None
        result = {
            "slide_id": slide.id,
            "is_card": find_card(slide.items, item_id) is not None,
            "item": item.model_dump(by_alias=True, exclude_none=True),
        }
        if self.controller is not None and slide is self.controller.current_slide:
            result["visibility"] = self.controller.get_item_visibility(item_id).to_dict()
        return result
