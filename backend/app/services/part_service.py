"""Parts inventory with picture storage."""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError
from app.models.part import Part
from app.schemas.part import PartFields, PartUpdateFields
from app.services.car_service import get_car
from app.services.media_store import ImageUpload, MediaStore, StagedImage

logger = logging.getLogger(__name__)


def list_parts(db: Session, car_id: int) -> List[Part]:
    get_car(db, car_id)
    return (
        db.query(Part)
        .filter(Part.car_id == car_id)
        .order_by(Part.created_at.desc(), Part.id.desc())
        .all()
    )


def get_part(db: Session, part_id: int) -> Part:
    part = db.query(Part).filter(Part.id == part_id).first()
    if not part:
        raise NotFoundError("Part not found")
    return part


def _stage(media: MediaStore, image: Optional[ImageUpload]) -> Optional[StagedImage]:
    if image is None:
        return None
    return media.stage(image.content, image.content_type, image.filename)


def _commit_with_image(db: Session, media: MediaStore, part: Part, staged: Optional[StagedImage],
                       previous_picture: Optional[str] = None) -> None:
    """Commit the row, then promote the staged picture it references.

    A failed commit discards the staged file. A failed promotion points the row
    back at ``previous_picture`` before reporting the error.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        media.discard(staged)
        raise

    if staged is None:
        return
    try:
        media.commit(staged)
    except StorageError:
        media.discard(staged)
        part.picture_path = previous_picture
        db.commit()
        raise


def create_part(db: Session, media: MediaStore, car_id: int, fields: PartFields,
                image: Optional[ImageUpload] = None) -> Part:
    get_car(db, car_id)
    staged = _stage(media, image)

    part = Part(car_id=car_id, **fields.model_dump())
    if staged is not None:
        part.picture_path = media.public_path(staged.filename)
    db.add(part)
    _commit_with_image(db, media, part, staged)

    db.refresh(part)
    logger.info(f"Part created: {part.id} for car {car_id}")
    return part


def update_part(db: Session, media: MediaStore, part_id: int, fields: PartUpdateFields,
                image: Optional[ImageUpload] = None) -> Part:
    """Merge supplied fields; a new picture replaces and removes the old one."""
    part = get_part(db, part_id)
    staged = _stage(media, image)

    for key, value in fields.model_dump(exclude_none=True).items():
        setattr(part, key, value)

    previous_picture = part.picture_path
    if staged is not None:
        part.picture_path = media.public_path(staged.filename)
    _commit_with_image(db, media, part, staged, previous_picture)

    if staged is not None and previous_picture:
        media.delete(previous_picture)

    db.refresh(part)
    return part


def delete_part(db: Session, media: MediaStore, part_id: int) -> None:
    part = get_part(db, part_id)
    picture = part.picture_path
    db.delete(part)
    db.commit()
    media.delete(picture)
