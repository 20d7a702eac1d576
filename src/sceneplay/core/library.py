"""Deck library: authored decks stored as JSON files in one directory."""

import logging
from pathlib import Path
from pydantic import BaseModel, ValidationError

from .scenes import SlideDeck

logger = logging.getLogger("ScenePlayMCP.library")

DECK_SUFFIX = ".json"


class DeckLoadError(ValueError):
    """An authored deck file exists but cannot be parsed."""


class DeckLibrary(BaseModel):
    """Lists, loads and saves decks under ``root_path``."""
    root_path: Path

    model_config = {"arbitrary_types_allowed": True}

    def deck_path(self, name: str) -> Path:
        filename = name if name.endswith(DECK_SUFFIX) else f"{name}{DECK_SUFFIX}"
        return self.root_path / filename

    def list_decks(self) -> list[str]:
        if not self.root_path.is_dir():
            return []
        return sorted(p.stem for p in self.root_path.glob(f"*{DECK_SUFFIX}"))

    def load(self, name: str) -> SlideDeck:
        """Load a deck by name. Raises FileNotFoundError or DeckLoadError."""
        path = self.deck_path(name)
        if not path.exists():
            raise FileNotFoundError(f"No deck named '{name}' in {self.root_path}")
        return self.load_file(path)

    @staticmethod
    def load_file(path: Path) -> SlideDeck:
        try:
            deck = SlideDeck.model_validate_json(path.read_text())
        except ValidationError as e:
            raise DeckLoadError(f"Invalid deck file {path}: {e}") from e
        logger.info(f"Loaded deck {path.name} ({len(deck.slides)} slides)")
        return deck

    def save(self, name: str, deck: SlideDeck) -> Path:
        self.root_path.mkdir(parents=True, exist_ok=True)
        path = self.deck_path(name)
        path.write_text(deck.model_dump_json(indent=2, by_alias=True, exclude_none=True))
        return path
