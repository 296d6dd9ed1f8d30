from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from app.core.database import get_db
from app.schemas.fuel import (
    FuelRecordCreate, FuelRecordUpdate, FuelRecordResponse, FuelRecordWithStats, FuelSummaryResponse,
)
from app.services import fuel_service

router = APIRouter()


def _with_stats(stats) -> FuelRecordWithStats:
    record = FuelRecordResponse.model_validate(stats.record)
    return FuelRecordWithStats(
        **record.model_dump(),
        price_per_liter=stats.price_per_liter,
        distance=stats.distance,
        avg_consumption=stats.avg_consumption,
        avg_price_per_km=stats.avg_price_per_km,
        avg_price_per_100km=stats.avg_price_per_100km,
        price_trend=stats.price_trend.value if stats.price_trend else None,
        price_diff=stats.price_diff,
    )


@router.get("/cars/{car_id}/fuel", response_model=List[FuelRecordWithStats])
def get_fuel_records(car_id: int, db: Session = Depends(get_db)):
    """Fuel records by mileage descending, with consumption figures."""
    return [_with_stats(s) for s in fuel_service.list_fuel_records_with_stats(db, car_id)]


@router.get("/cars/{car_id}/fuel/summary", response_model=FuelSummaryResponse)
def get_fuel_summary(car_id: int, db: Session = Depends(get_db)):
    summary = fuel_service.fuel_summary(db, car_id)
    return FuelSummaryResponse(**vars(summary))


@router.post("/cars/{car_id}/fuel", response_model=FuelRecordResponse, status_code=201)
def create_fuel_record(car_id: int, record: FuelRecordCreate, db: Session = Depends(get_db)):
    return fuel_service.create_fuel_record(db, car_id, record)


@router.put("/fuel/{record_id}", response_model=FuelRecordResponse)
def update_fuel_record(record_id: int, record: FuelRecordUpdate, db: Session = Depends(get_db)):
    return fuel_service.update_fuel_record(db, record_id, record)


@router.delete("/fuel/{record_id}")
def delete_fuel_record(record_id: int, db: Session = Depends(get_db)):
    fuel_service.delete_fuel_record(db, record_id)
    return {"success": True}
