"""
User lookup for the acting user of an import.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.user import User
from exceptions import DatabaseError, UserNotFoundError

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self):
        self.db = get_supabase_client()
        self.table = "users"

    def get_by_id(self, user_id: str) -> User:
        """
        Get an active user by ID.

        Raises:
            UserNotFoundError: If the user doesn't exist or is inactive
        """
        logger.debug("getting_user", user_id=user_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.error("get_user_failed", user_id=user_id, error=str(e))
            raise DatabaseError("select", str(e))

        if not result.data:
            raise UserNotFoundError(user_id)

        user = User(**result.data[0])
        if not user.active:
            logger.warning("inactive_user_rejected", user_id=user_id)
            raise UserNotFoundError(user_id)

        return user


_user_service: Optional[UserService] = None


def get_user_service() -> UserService:
    """Get or create UserService instance."""
    global _user_service
    if _user_service is None:
        _user_service = UserService()
    return _user_service
