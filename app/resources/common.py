"""Search and label helpers shared by content descriptors."""

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import Select

from app.crud.descriptor import LabelResolver, SearchHook
from app.models.localized_text import LocalizedText


def localized_text_search(*ref_columns) -> SearchHook:
    """
    Match rows whose text reference columns point at a localized text
    containing the term, in any language.
    """

    def apply(statement: Select, term: str) -> Select:
        matching = select(LocalizedText.reference_id).where(LocalizedText.text_content.ilike(f"%{term}%"))
        return statement.where(or_(*[column.in_(matching) for column in ref_columns]))

    return apply


def resolve_texts(session: Session, reference_ids, language: str, fallback_language: str) -> Dict[int, str]:
    """reference_id -> text in ``language``, else in ``fallback_language``."""
    ids = {ref for ref in reference_ids if ref is not None}
    if not ids:
        return {}
    rows = session.execute(
        select(LocalizedText.reference_id, LocalizedText.language_code, LocalizedText.text_content)
        .where(LocalizedText.reference_id.in_(ids))
        .where(LocalizedText.language_code.in_({language, fallback_language}))
    ).all()
    texts: Dict[int, str] = {}
    for reference_id, language_code, content in rows:
        if language_code == language or reference_id not in texts:
            texts[reference_id] = content
    return texts


def localized_labels(attribute: str) -> LabelResolver:
    """Label resolver reading the text referenced by ``attribute`` on each entity."""

    def resolve(session: Session, entities: Sequence[Any], language: str, fallback_language: str) -> Dict[Any, Optional[str]]:
        texts = resolve_texts(session, [getattr(e, attribute) for e in entities], language, fallback_language)
        return {e.id: texts.get(getattr(e, attribute)) for e in entities}

    return resolve
