from sqlalchemy import Column, Integer, String, Text, UniqueConstraint

from app.core.db import Base, TimestampMixin


class LocalizedText(TimestampMixin, Base):
    """One translation of a text; content rows point at ``reference_id`` through ``*_text_ref_id`` columns."""
    __tablename__ = "localized_texts"
    __table_args__ = (
        UniqueConstraint("reference_id", "language_code", name="uq_localized_texts_reference_language"),
    )

    id = Column("text_id", Integer, primary_key=True)
    reference_id = Column(Integer, nullable=False, index=True)
    language_code = Column(String(10), nullable=False)
    text_content = Column(Text, nullable=False)

    def __repr__(self) -> str:  # pragma: no cover
        return f"<LocalizedText ref={self.reference_id} lang={self.language_code}>"
