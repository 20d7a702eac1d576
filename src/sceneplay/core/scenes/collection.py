"""Ordered deck of slides with their narration scripts."""

from typing import Optional
from pydantic import Field

from ..script import SlideScript
from ..base import AuthoredModel
from .slide import Slide


class SlideDeck(AuthoredModel):
    """The read-only input of a playback session."""
    title: str = ""
    slides: list[Slide] = Field(default_factory=list)
    scripts: list[SlideScript] = Field(default_factory=list)

    def get(self, slide_id: str) -> Optional[Slide]:
        for s in self.slides:
            if s.id == slide_id:
                return s
        return None

    def script_for(self, slide_id: str) -> Optional[SlideScript]:
        for script in self.scripts:
            if script.slide_id == slide_id:
                return script
        return None

    def to_summary(self) -> list[dict]:
        return [
            {
                "index": i,
                "id": s.id,
                "title": s.title or "(untitled)",
                "scene_count": len(s.scenes),
                "scenes": [sc.title or sc.id for sc in s.scenes],
                "has_script": self.script_for(s.id) is not None,
            }
            for i, s in enumerate(self.slides)
        ]
