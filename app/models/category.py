from sqlalchemy import Column, Integer, String

from app.core.db import Base, TimestampMixin, SoftDeleteMixin


class Category(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "categories"

    id = Column("category_id", Integer, primary_key=True)
    name_text_ref_id = Column(Integer, nullable=False)
    description_text_ref_id = Column(Integer, nullable=True)
    image_url = Column(String(500), nullable=True)


class LocationType(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "types"

    id = Column("type_id", Integer, primary_key=True)
    name_text_ref_id = Column(Integer, nullable=False)


class Faq(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "faq"

    id = Column("faq_id", Integer, primary_key=True)
    question_text_ref_id = Column(Integer, nullable=False)
    answer_text_ref_id = Column(Integer, nullable=False)
