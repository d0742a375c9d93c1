from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, false

from app.core.db import Base, utcnow


class RefreshToken(Base):
    """Issued refresh tokens, stored as sha256 digests so they can be revoked."""
    __tablename__ = "refresh_tokens"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), unique=True, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    revoked = Column(Boolean, default=False, server_default=false(), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
