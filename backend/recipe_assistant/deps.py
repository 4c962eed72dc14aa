"""
FastAPI dependencies: settings, record store, services and caller identity.

Tests replace these through ``app.dependency_overrides``.
"""

import logging
import threading
from typing import Optional

from fastapi import Depends, Header

from recipe_assistant.config import Settings, get_settings
from recipe_assistant.services.recipe_modifier import RecipeModifier
from recipe_assistant.services.record_store import RecordStore
from recipe_assistant.utils.validators import validate_user_id

logger = logging.getLogger(__name__)

_store: Optional[RecordStore] = None
_store_lock = threading.Lock()


def get_store(settings: Settings = Depends(get_settings)) -> RecordStore:
    """Process-wide record store, created on first use."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                if settings.SEED_DATA_PATH:
                    _store = RecordStore.from_seed_file(settings.SEED_DATA_PATH)
                else:
                    _store = RecordStore()
    return _store


def get_modifier(
    store: RecordStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
) -> RecipeModifier:
    return RecipeModifier(store, settings)


def get_current_user(x_user_id: Optional[str] = Header(None)) -> str:
    """Caller identity forwarded by the auth gateway in X-User-Id."""
    return validate_user_id(x_user_id)
