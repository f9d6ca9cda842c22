"""
Terminal state transitions for thumbnail records.

Both updates are guarded by ``is_generating = true`` so a record leaves the
pending state exactly once; a second call matches no rows and returns False.
"""

import logging

from sqlalchemy.orm import Session

from thumbnail_api.models import Thumbnail

logger = logging.getLogger(__name__)


def _finish(db: Session, thumbnail_id, values) -> bool:
    updated = (
        db.query(Thumbnail)
        .filter(Thumbnail.id == thumbnail_id, Thumbnail.is_generating.is_(True))
        .update(values, synchronize_session="fetch")
    )
    db.commit()
    return updated == 1


def mark_succeeded(db: Session, thumbnail_id, image_url: str) -> bool:
    done = _finish(db, thumbnail_id, {"image_url": image_url, "is_generating": False})
    if done:
        logger.info("Thumbnail generation succeeded", extra={"thumbnail_id": str(thumbnail_id)})
    else:
        logger.warning("Thumbnail was already reconciled", extra={"thumbnail_id": str(thumbnail_id)})
    return done


def mark_failed(db: Session, thumbnail_id) -> bool:
    done = _finish(db, thumbnail_id, {"is_generating": False})
    if done:
        logger.info("Thumbnail generation failed", extra={"thumbnail_id": str(thumbnail_id)})
    else:
        logger.warning("Thumbnail was already reconciled", extra={"thumbnail_id": str(thumbnail_id)})
    return done
