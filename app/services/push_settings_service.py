"""
Push Settings Service - per-user notification preferences
"""
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.crud.service import unit_of_work
from app.models.user import User, UserPushSettings
from app.schemas.user import PushSettingsRead, PushSettingsUpdate

logger = logging.getLogger(__name__)


class PushSettingsService:
    """Reads and updates the single push settings row of a user"""

    def __init__(self, db: Session):
        self.db = db

    def create_defaults(self, user_id: int) -> UserPushSettings:
        """Add the all-enabled defaults row; the caller commits."""
        settings = UserPushSettings(user_id=user_id)
        self.db.add(settings)
        self.db.flush()
        return settings

    def _get_or_create(self, user_id: int) -> UserPushSettings:
        if self.db.get(User, user_id) is None:
            raise NotFoundError.for_entity("User", user_id)
        settings = self.db.get(UserPushSettings, user_id)
        if settings is None:
            # accounts created before push settings existed get defaults lazily
            settings = self.create_defaults(user_id)
        return settings

    def get(self, user_id: int) -> PushSettingsRead:
        with unit_of_work(self.db, "Push settings", "read"):
            settings = self._get_or_create(user_id)
        return PushSettingsRead.model_validate(settings)

    def update(self, user_id: int, payload: PushSettingsUpdate) -> PushSettingsRead:
        """
        Apply only the flags present in ``payload``.

        Args:
            user_id: Owner of the settings
            payload: Partial flag update

        Returns:
            The settings after the update
        """
        with unit_of_work(self.db, "Push settings", "update"):
            settings = self._get_or_create(user_id)
            for key, value in payload.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(settings, key, value)
            self.db.flush()
        logger.info(f"Updated push settings of user {user_id}", extra={"user_id": user_id})
        return PushSettingsRead.model_validate(settings)
