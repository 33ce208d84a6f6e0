"""Shared save logic for versioned submission rows."""
import logging
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lms.domain.errors import ConcurrentModificationError

logger = logging.getLogger(__name__)

STALE_WRITE_MESSAGE = "Submission has been modified by another user. Please refresh and try again"


def save_versioned(
    db: Session,
    model,
    data: Dict[str, Any],
    expected_version: Optional[int] = None,
    expected_status: Optional[str] = None,
) -> None:
    """Upsert ``data`` into ``model``.

    With ``expected_version`` (and optionally ``expected_status``) the row is
    only updated while it still carries those values; zero matched rows means
    another writer got there first.
    """
    if expected_version is None:
        db.merge(model(**data))
    else:
        query = db.query(model).filter(model.id == data["id"], model.version == expected_version)
        if expected_status is not None:
            query = query.filter(model.status == expected_status)
        values = {key: value for key, value in data.items() if key != "id"}
        matched = query.update(values, synchronize_session=False)
        if not matched:
            db.rollback()
            logger.warning(
                f"Stale write rejected for {model.__tablename__} {data['id']} (expected v{expected_version})"
            )
            raise ConcurrentModificationError(STALE_WRITE_MESSAGE)

    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"Duplicate {model.__tablename__} row for {data['id']}: {exc.orig}")
        raise ConcurrentModificationError("Submission already exists") from exc
