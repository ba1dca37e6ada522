"""
Temporary storage for import sessions between preview and confirm.

Keeps live ImportSession objects in memory with TTL expiration.
Single-server only: a restart drops every pending preview.
"""
import uuid
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Optional

import structlog

from config import settings

if TYPE_CHECKING:
    from services.import_session_service import ImportSession

logger = structlog.get_logger(__name__)

_cache: dict[str, tuple[datetime, "ImportSession"]] = {}


def store_session(session: "ImportSession", ttl_minutes: Optional[int] = None) -> str:
    """Store a session in Preview stage, return its preview_id."""
    ttl = ttl_minutes if ttl_minutes is not None else settings.preview_ttl_minutes
    preview_id = str(uuid.uuid4())
    _cache[preview_id] = (datetime.now() + timedelta(minutes=ttl), session)
    _cleanup_expired()
    logger.debug("import_session_cached", preview_id=preview_id, ttl_minutes=ttl)
    return preview_id


def retrieve_session(preview_id: str) -> Optional["ImportSession"]:
    """Retrieve a session by preview_id. Returns None if expired/not found."""
    entry = _cache.get(preview_id)
    if entry is None:
        return None
    expires_at, session = entry
    if datetime.now() > expires_at:
        del _cache[preview_id]
        logger.info("import_session_expired", preview_id=preview_id)
        return None
    return session


def delete_session(preview_id: str) -> None:
    """Remove a session after confirm or cancel."""
    _cache.pop(preview_id, None)


def clear() -> None:
    _cache.clear()


def _cleanup_expired() -> None:
    """Remove all expired entries."""
    now = datetime.now()
    expired = [k for k, (exp, _) in _cache.items() if now > exp]
    for k in expired:
        del _cache[k]
