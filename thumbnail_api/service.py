import logging
import uuid

from prometheus_client import Counter
from sqlalchemy.orm import Session

from thumbnail_api.errors import NotFound
from thumbnail_api.models import Thumbnail
from thumbnail_api.prompts import compose_prompt
from thumbnail_api.reconciler import mark_failed, mark_succeeded

logger = logging.getLogger(__name__)

GENERATIONS = Counter(
    "thumbnail_generations_total",
    "Thumbnail generations by terminal outcome",
    ["outcome"],  # succeeded, failed
)


def create_thumbnail(db: Session, owner_id: str, request, generator, publisher) -> Thumbnail:
    """
    Run one generation end to end: compose, persist pending, generate, publish, reconcile.

    The prompt is composed before anything is written, so bad option keys never
    create a record. Once the record exists every exit path reconciles it.
    """
    prompt = compose_prompt(
        title=request.title,
        style=request.style,
        aspect_ratio=request.aspect_ratio,
        color_scheme=request.color_scheme,
        user_prompt=request.prompt,
    )

    thumbnail = Thumbnail(
        user_id=owner_id,
        title=request.title,
        user_prompt=request.prompt,
        prompt_used=prompt,
        style=request.style,
        color_scheme=request.color_scheme or None,
        aspect_ratio=request.aspect_ratio,
        text_overlay=request.text_overlay,
        is_generating=True,
    )
    db.add(thumbnail)
    db.commit()
    db.refresh(thumbnail)
    thumbnail_id = thumbnail.id
    logger.info(
        "Saved pending thumbnail",
        extra={"thumbnail_id": str(thumbnail_id), "user_id": owner_id},
    )

    try:
        image = generator.generate(prompt)
        image_url = publisher.publish(image)
        done = mark_succeeded(db, thumbnail_id, image_url)
    except Exception:
        logger.error(
            "Thumbnail generation failed",
            extra={"thumbnail_id": str(thumbnail_id), "user_id": owner_id},
            exc_info=True,
        )
        db.rollback()
        mark_failed(db, thumbnail_id)
        GENERATIONS.labels(outcome="failed").inc()
        raise

    # the owner deleted the record while it was generating
    if not done:
        logger.warning(
            "Thumbnail was deleted before generation finished",
            extra={"thumbnail_id": str(thumbnail_id), "user_id": owner_id},
        )
        raise NotFound()

    GENERATIONS.labels(outcome="succeeded").inc()
    db.refresh(thumbnail)
    return thumbnail


def _parse_id(thumbnail_id):
    if isinstance(thumbnail_id, uuid.UUID):
        return thumbnail_id
    try:
        return uuid.UUID(str(thumbnail_id))
    except ValueError:
        return None


def get_thumbnail(db: Session, owner_id: str, thumbnail_id) -> Thumbnail:
    thumbnail_uuid = _parse_id(thumbnail_id)
    if thumbnail_uuid is None:
        raise NotFound()

    thumbnail = (
        db.query(Thumbnail)
        .filter(Thumbnail.id == thumbnail_uuid, Thumbnail.user_id == owner_id)
        .first()
    )
    if not thumbnail:
        raise NotFound()
    return thumbnail


def list_thumbnails(db: Session, owner_id: str):
    return (
        db.query(Thumbnail)
        .filter(Thumbnail.user_id == owner_id)
        .order_by(Thumbnail.created_at.desc())
        .all()
    )


def delete_thumbnail(db: Session, owner_id: str, thumbnail_id) -> bool:
    """Delete an owned thumbnail. Returns False when nothing matched."""
    thumbnail_uuid = _parse_id(thumbnail_id)
    if thumbnail_uuid is None:
        return False

    deleted = (
        db.query(Thumbnail)
        .filter(Thumbnail.id == thumbnail_uuid, Thumbnail.user_id == owner_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(
        "Deleted thumbnail" if deleted else "No owned thumbnail to delete",
        extra={"thumbnail_id": str(thumbnail_uuid), "user_id": owner_id},
    )
    return deleted == 1
