"""ScenePlay MCP Server - drive scene-animated slide playback through MCP tools."""

from mcp.server.fastmcp import FastMCP, Context
import json
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Any
from pathlib import Path

# SDK imports
from sceneplay.core.config import PlaybackConfig
from sceneplay.core.library import DeckLibrary, DeckLoadError
from sceneplay.core.state import PlaybackSession
from sceneplay.engine.interaction import JumpScene, ToggleExpand

# Configure logging
logging.basicConfig(level=logging.INFO,
                    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger("ScenePlayMCP")

NO_DECK_MESSAGE = "Error: No deck is loaded. Use load_deck first."


# ── Global State ────────────────────────────────────────────────────────

_config = PlaybackConfig.from_env()
_session = PlaybackSession(config=_config)


def _library() -> DeckLibrary:
    return DeckLibrary(root_path=_config.decks_dir)


def _state_json() -> str:
    return json.dumps(_session.status(), indent=2)


# ── Server Setup ────────────────────────────────────────────────────────

@asynccontextmanager
async def server_lifespan(server: FastMCP) -> AsyncIterator[Dict[str, Any]]:
    try:
        logger.info("ScenePlayMCP server starting up")
        logger.info(f"Deck directory: {_config.decks_dir}")
        yield {}
    finally:
        _session.stop()
        logger.info("ScenePlayMCP server shut down")


mcp = FastMCP("ScenePlayMCP", lifespan=server_lifespan)


# ═══════════════════════════════════════════════════════════════════════
# DECK TOOLS
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def list_decks(ctx: Context) -> str:
    """List the decks available in the deck directory."""
    decks = _library().list_decks()
    if not decks:
        return f"No decks found in {_config.decks_dir}."
    return json.dumps({"decks": decks}, indent=2)


@mcp.tool()
def load_deck(ctx: Context, name: str = "", file_path: str = "") -> str:
    """Load a deck and start playback at its first slide.

    Parameters:
    - name: Deck name inside the deck directory (without .json)
    - file_path: Alternatively, a path to a deck JSON file
    """
    if not name and not file_path:
        return "Error: Provide a deck name or a file_path."
    try:
        if file_path:
            path = Path(file_path)
            if not path.exists():
                return f"Error: File not found: {file_path}"
            deck = DeckLibrary.load_file(path)
            deck_name = path.stem
        else:
            deck = _library().load(name)
            deck_name = name
    except (FileNotFoundError, DeckLoadError) as e:
        logger.error(f"Deck load error: {str(e)}")
        return f"Error loading deck: {str(e)}"

    _session.start(deck, deck_name)
    return json.dumps({
        "status": "loaded",
        "deck": deck_name,
        "slides": deck.to_summary(),
    }, indent=2)


# ═══════════════════════════════════════════════════════════════════════
# PLAYBACK TOOLS
# ═══════════════════════════════════════════════════════════════════════

@mcp.tool()
def get_playback_state(ctx: Context) -> str:
    """Get the current slide, scene and step indices and whether auto-play is on."""
    if not _session.is_active:
        return NO_DECK_MESSAGE
    return _state_json()


@mcp.tool()
def get_frame(ctx: Context) -> str:
    """Get visibility, focus and expansion of every item at the current step."""
    if not _session.is_active:
        return NO_DECK_MESSAGE
    return json.dumps(_session.render_frame(), indent=2)


@mcp.tool()
def get_step_labels(ctx: Context) -> str:
    """List the step labels of the current scene."""
    if not _session.is_active:
        return NO_DECK_MESSAGE
    snap = _session.controller.snapshot()
    scene = snap.slide.get_scene(snap.state.scene_index) if snap.slide else None
    return json.dumps({
        "scene": scene.title if scene else None,
        "current_step": snap.state.step_index,
        "labels": snap.step_labels,
    }, indent=2)


@mcp.tool()
def get_item(ctx: Context, widget_id: str, slide_id: str = "") -> str:
    """Get a content item's authored data and, on the current slide, its visibility.

    Parameters:
    - widget_id: ID of the content item
    - slide_id: Slide to search (defaults to the current slide)
    """
    if not _session.is_active:
        return NO_DECK_MESSAGE
    info = _session.describe_item(widget_id, slide_id or None)
    if info is None:
        where = f"slide '{slide_id}'" if slide_id else "the current slide"
        return f"Error: Item '{widget_id}' not found on {where}."
    return json.dumps(info, indent=2)


@mcp.tool()
def advance(ctx: Context) -> str:
    """Move forward one step (crossing into the next scene or slide at the end)."""
    if not _session.is_active:
        return NO_DECK_MESSAGE
    _session.controller.advance()
    return _state_json()


@mcp.tool()
def retreat(ctx: Context) -> str:
    """Move back one step (to the start of the previous scene or slide at step 0)."""
    if not _session.is_active:
        return NO_DECK_MESSAGE
    _session.controller.retreat()
    return _state_json()


@mcp.tool()
def jump_to_slide(ctx: Context, index: int) -> str:
    """Jump to a slide by its 0-based index.

    Parameters:
    - index: Slide index
    """
    if not _session.is_active:
        return NO_DECK_MESSAGE
    if not _session.controller.jump_to_slide(index):
        return f"Error: Slide index {index} is out of range."
    return _state_json()


@mcp.tool()
def toggle_play(ctx: Context) -> str:
    """Start or pause auto-play."""
    if not _session.is_active:
        return NO_DECK_MESSAGE
    _session.controller.toggle_play()
    return _state_json()


@mcp.tool()
def click_item(ctx: Context, widget_id: str) -> str:
    """Simulate a click on a content item (menu navigation or popup toggle).

    Parameters:
    - widget_id: ID of the clicked item
    """
    if not _session.is_active:
        return NO_DECK_MESSAGE
    action = _session.controller.handle_item_click(widget_id)
    if isinstance(action, JumpScene):
        result = {"action": "jump-scene", "scene_index": action.index}
    elif isinstance(action, ToggleExpand):
        result = {"action": "toggle-expand", "expanded_card_id": action.card_id}
    else:
        result = {"action": "none"}
    return json.dumps({**result, "state": _session.status()}, indent=2)


@mcp.tool()
def press_key(ctx: Context, key: str) -> str:
    """Send a key press: ArrowRight or Space advances, ArrowLeft goes back,
    p toggles auto-play, Escape closes an expanded card.

    Parameters:
    - key: Key name
    """
    if not _session.is_active:
        return NO_DECK_MESSAGE
    if not _session.controller.handle_key(key):
        return f"Error: Key '{key}' is not bound."
    return _state_json()


def main():
    """Run the MCP server"""
    mcp.run()


if __name__ == "__main__":
    main()
