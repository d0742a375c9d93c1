"""
Seed Service - bootstrap data for an empty database
"""
from typing import Optional
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.config.settings import Settings
from app.core.security import hash_password
from app.crud.service import unit_of_work
from app.models.user import User
from app.services.push_settings_service import PushSettingsService

logger = logging.getLogger(__name__)


def seed_default_admin(db: Session, settings: Settings) -> Optional[User]:
    """
    Insert the configured admin account when the user table is empty.

    Args:
        db: Database session
        settings: Application settings (``settings.seed`` holds the account)

    Returns:
        The created admin, or None when users already exist
    """
    user_count = db.scalar(select(func.count()).select_from(User))
    if user_count:
        logger.info(f"Users already exist ({user_count} found), skipping admin seed")
        return None

    seed = settings.seed
    with unit_of_work(db, "User", "seed"):
        admin = User(
            email=seed.admin_email.lower(),
            password_hash=hash_password(seed.admin_password),
            first_name=seed.admin_first_name,
            last_name=seed.admin_last_name,
            is_admin=True,
            enabled=True,
        )
        db.add(admin)
        db.flush()
        PushSettingsService(db).create_defaults(admin.id)

    logger.info(f"Default admin user created: {admin.email}", extra={"user_id": admin.id})
    logger.warning("Change the default admin password after first login")
    return admin
