"""
Save slots - persists whole game states to JSON.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional
import uuid

from .config import settings
from .models import GameState

logger = logging.getLogger(__name__)

STORAGE_FILENAME = "saves.json"


def _storage_file(save_dir: Optional[Path] = None) -> Path:
    directory = Path(save_dir) if save_dir is not None else settings.storage.path
    directory.mkdir(parents=True, exist_ok=True)
    return directory / STORAGE_FILENAME


def _load_storage(save_dir: Optional[Path] = None) -> Dict[str, Any]:
    """Load storage from disk; an unreadable file counts as empty."""
    storage_file = _storage_file(save_dir)
    if storage_file.exists():
        try:
            with storage_file.open("r") as f:
                storage = json.load(f)
            if isinstance(storage, dict) and isinstance(storage.get("saves"), dict):
                return storage
            logger.error("Save file %s has an unexpected layout", storage_file)
        except (OSError, ValueError) as e:
            logger.error("Failed to load saves: %s", e)
    return {"saves": {}}


def _save_storage(storage: Dict[str, Any], save_dir: Optional[Path] = None) -> None:
    storage_file = _storage_file(save_dir)
    try:
        with storage_file.open("w") as f:
            json.dump(storage, f, indent=2, default=str)
    except OSError as e:
        logger.error("Failed to write saves: %s", e)
        raise


def save_game(
    state: GameState,
    save_id: Optional[str] = None,
    save_dir: Optional[Path] = None,
) -> str:
    """
    Save a game state.

    Args:
        state: State to persist
        save_id: Slot to overwrite; a new slot is created when omitted
        save_dir: Directory holding the save file; the configured one by default

    Returns:
        Save ID
    """
    storage = _load_storage(save_dir)
    save_id = save_id or str(uuid.uuid4())[:8]

    storage["saves"][save_id] = {
        "id": save_id,
        "saved_at": datetime.now().isoformat(),
        "state": state.to_dict(),
    }
    _save_storage(storage, save_dir)

    logger.info("Saved game %s for %s at week %s", save_id, state.artist_name, state.current_week)
    return save_id


def load_game(save_id: str, save_dir: Optional[Path] = None) -> Optional[GameState]:
    """
    Load a saved game by ID.

    Returns:
        Game state or None if not found or unreadable
    """
    storage = _load_storage(save_dir)
    entry = storage["saves"].get(save_id)

    if entry is None:
        return None

    try:
        return GameState.from_dict(entry["state"])
    except Exception as e:
        logger.error("Failed to parse save %s: %s", save_id, e)
        return None


def list_saves(save_dir: Optional[Path] = None) -> List[Dict[str, Any]]:
    """
    Summaries of every save slot, most recent first.
    """
    storage = _load_storage(save_dir)
    summaries = []
    for entry in storage["saves"].values():
        state = entry.get("state", {})
        summaries.append({
            "id": entry.get("id"),
            "artist_name": state.get("artist_name"),
            "current_week": state.get("current_week"),
            "wealth": state.get("stats", {}).get("wealth"),
            "saved_at": entry.get("saved_at"),
        })
    summaries.sort(key=lambda x: x.get("saved_at") or "", reverse=True)
    return summaries


def delete_save(save_id: str, save_dir: Optional[Path] = None) -> bool:
    """
    Delete a save slot.

    Returns:
        True if deleted, False if not found
    """
    storage = _load_storage(save_dir)

    if save_id not in storage["saves"]:
        return False

    del storage["saves"][save_id]
    _save_storage(storage, save_dir)

    logger.info("Deleted save %s", save_id)
    return True
