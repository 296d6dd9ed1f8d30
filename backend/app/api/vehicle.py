from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.api.deps import get_media_store
from app.core.database import get_db
from app.schemas.vehicle import CarCreate, CarUpdate, CarResponse
from app.services import car_service
from app.services.media_store import MediaStore

router = APIRouter()


@router.get("", response_model=List[CarResponse])
def get_cars(db: Session = Depends(get_db)):
    """Get all cars, newest first."""
    return car_service.list_cars(db)


@router.get("/{car_id}", response_model=CarResponse)
def get_car(car_id: int, db: Session = Depends(get_db)):
    return car_service.get_car(db, car_id)


@router.post("", response_model=CarResponse, status_code=201)
def create_car(car: CarCreate, db: Session = Depends(get_db)):
    """Create car record."""
    return car_service.create_car(db, car)


@router.put("/{car_id}", response_model=CarResponse)
def update_car(car_id: int, car: CarUpdate, db: Session = Depends(get_db)):
    """Update car information; omitted fields are kept."""
    return car_service.update_car(db, car_id, car)


@router.delete("/{car_id}")
def delete_car(
    car_id: int,
    db: Session = Depends(get_db),
    media: MediaStore = Depends(get_media_store),
):
    """Delete a car with its fuel log and parts."""
    car_service.delete_car(db, media, car_id)
    return {"success": True}
