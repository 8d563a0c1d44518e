# =============================================================================
# core/services/flash_service.py - One-Time Success Notices
# =============================================================================
# After a create/update/delete the API remembers a short success message for
# the user who made the change. The next listing that user opens returns the
# message in its `success` field, and the message is discarded.
# =============================================================================

import logging
import threading

logger = logging.getLogger(__name__)


class FlashService:
    """
    Per-user store of at most one pending success notice.

    Kept in process memory; a newer notice replaces an unread one.
    """

    _messages: dict[int, str] = {}
    _lock = threading.Lock()

    @classmethod
    def push(cls, user_id: int, message: str) -> None:
        with cls._lock:
            cls._messages[user_id] = message
        logger.debug(f"Flash for user {user_id}: {message}")

    @classmethod
    def pop(cls, user_id: int) -> str | None:
        """Return and forget the pending notice, if any."""
        with cls._lock:
            return cls._messages.pop(user_id, None)

    @classmethod
    def clear(cls) -> None:
        with cls._lock:
            cls._messages.clear()
