"""Car records."""
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models.vehicle import Car
from app.schemas.vehicle import CarCreate, CarUpdate
from app.services.media_store import MediaStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("brand", "model", "vin", "current_mileage")


def list_cars(db: Session) -> List[Car]:
    return db.query(Car).order_by(Car.created_at.desc(), Car.id.desc()).all()


def get_car(db: Session, car_id: int) -> Car:
    car = db.query(Car).filter(Car.id == car_id).first()
    if not car:
        raise NotFoundError("Car not found")
    return car


def create_car(db: Session, data: CarCreate) -> Car:
    car = Car(**data.model_dump())
    if car.color is None:
        car.color = ""
    db.add(car)
    db.commit()
    db.refresh(car)
    logger.info(f"Car created: {car.id} ({car.brand} {car.model})")
    return car


def update_car(db: Session, car_id: int, data: CarUpdate) -> Car:
    """Merge the supplied fields into the stored car and bump updated_at."""
    car = get_car(db, car_id)

    update_data = data.model_dump(exclude_unset=True)
    for key in REQUIRED_FIELDS:
        if key in update_data and update_data[key] is None:
            raise ValidationError(f"{key} cannot be empty")
    if "color" in update_data and update_data["color"] is None:
        update_data["color"] = ""

    for key, value in update_data.items():
        setattr(car, key, value)
    car.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(car)
    return car


def delete_car(db: Session, media: MediaStore, car_id: int) -> None:
    """Delete a car together with its fuel records, parts and part pictures."""
    car = get_car(db, car_id)
    pictures = [part.picture_path for part in car.parts if part.picture_path]

    db.delete(car)
    db.commit()

    for picture in pictures:
        media.delete(picture)
    logger.info(f"Car deleted: {car_id} ({len(pictures)} picture(s) removed)")
