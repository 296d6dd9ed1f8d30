from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.api.deps import get_media_store
from app.core.database import get_db
from app.core.exceptions import ValidationError
from app.schemas.part import PartFields, PartUpdateFields, PartResponse
from app.services import part_service
from app.services.media_store import ImageUpload, MediaStore

router = APIRouter()


def _build(schema, **data):
    try:
        return schema(**data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(loc) for loc in first.get("loc", ()))
        raise ValidationError(f"Invalid {field}: {first.get('msg')}") from e


async def _read_upload(picture: Optional[UploadFile]) -> Optional[ImageUpload]:
    # Browsers send an empty file part when nothing was picked
    if picture is None or not picture.filename:
        return None
    content = await picture.read()
    return ImageUpload(content=content, content_type=picture.content_type, filename=picture.filename)


@router.get("/cars/{car_id}/parts", response_model=List[PartResponse])
def get_parts(car_id: int, db: Session = Depends(get_db)):
    """Parts bought for a car, newest first."""
    return part_service.list_parts(db, car_id)


@router.post("/cars/{car_id}/parts", response_model=PartResponse, status_code=201)
async def create_part(
    car_id: int,
    main_component: str = Form(...),
    detailed_component: str = Form(...),
    model: str = Form(...),
    price: float = Form(...),
    purchase_date: date = Form(...),
    picture: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    """Create a part record with an optional picture."""
    fields = _build(
        PartFields,
        main_component=main_component,
        detailed_component=detailed_component,
        model=model,
        price=price,
        purchase_date=purchase_date,
    )
    image = await _read_upload(picture)
    return part_service.create_part(db, media, car_id, fields, image)


@router.put("/parts/{part_id}", response_model=PartResponse)
async def update_part(
    part_id: int,
    main_component: Optional[str] = Form(None),
    detailed_component: Optional[str] = Form(None),
    model: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    purchase_date: Optional[date] = Form(None),
    picture: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    """Update a part; a new picture replaces the stored one."""
    fields = _build(
        PartUpdateFields,
        main_component=main_component,
        detailed_component=detailed_component,
        model=model,
        price=price,
        purchase_date=purchase_date,
    )
    image = await _read_upload(picture)
    return part_service.update_part(db, media, part_id, fields, image)


@router.delete("/parts/{part_id}")
def delete_part(
    part_id: int,
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    """Delete a part and its picture."""
    part_service.delete_part(db, media, part_id)
    return {"success": True}
