from sqlalchemy.orm import relationship
from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, true, false

from app.core.db import Base, TimestampMixin


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id = Column("user_id", Integer, primary_key=True)
    email = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    profile_picture_url = Column(String(500), nullable=True)
    is_admin = Column(Boolean, default=False, server_default=false(), nullable=False)
    enabled = Column(Boolean, default=True, server_default=true(), nullable=False)
    reset_password_token = Column(String(255), nullable=True, index=True)
    reset_password_expires = Column(DateTime, nullable=True)

    # Relationships
    push_settings = relationship(
        "UserPushSettings", back_populates="user", uselist=False, cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:  # pragma: no cover
        return f"<User id={self.id} email={self.email}>"


class UserPushSettings(TimestampMixin, Base):
    __tablename__ = "user_push_settings"

    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), primary_key=True)
    active_route_notifications = Column(Boolean, default=True, server_default=true(), nullable=False)
    travel_tips_notifications = Column(Boolean, default=True, server_default=true(), nullable=False)
    nearby_events_notifications = Column(Boolean, default=True, server_default=true(), nullable=False)
    available_narratives_notifications = Column(Boolean, default=True, server_default=true(), nullable=False)
    local_offers_notifications = Column(Boolean, default=True, server_default=true(), nullable=False)

    user = relationship("User", back_populates="push_settings")
