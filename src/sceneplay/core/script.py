"""Narration scripts: an opening part per slide plus one part per element."""

from typing import Optional
from pydantic import Field

from .base import AuthoredModel


class ScriptPart(AuthoredModel):
    """Spoken text plus free-form notes for offline reading."""
    text: str = ""
    notes: str = ""


class ElementScript(AuthoredModel):
    """Script for one element (widget) of a slide."""
    element_id: str
    label: str = ""
    script: ScriptPart = Field(default_factory=ScriptPart)


class SlideScript(AuthoredModel):
    slide_id: str
    opening: ScriptPart = Field(default_factory=ScriptPart)
    elements: list[ElementScript] = Field(default_factory=list)

    def element_text(self, element_id: str) -> Optional[str]:
        for entry in self.elements:
            if entry.element_id == element_id:
                return entry.script.text
        return None
