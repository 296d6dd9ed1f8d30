"""Fuel log with mileage reconciliation."""
import logging
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.fuel import FuelRecord
from app.models.vehicle import Car
from app.schemas.fuel import FuelRecordCreate, FuelRecordUpdate
from app.services.car_service import get_car
from app.services.fuel_stats import FuelStats, FuelSummary, annotate_fuel_records, summarize_fuel_records

logger = logging.getLogger(__name__)


def list_fuel_records(db: Session, car_id: int) -> List[FuelRecord]:
    get_car(db, car_id)
    return (
        db.query(FuelRecord)
        .filter(FuelRecord.car_id == car_id)
        .order_by(FuelRecord.mileage.desc(), FuelRecord.id.desc())
        .all()
    )


def list_fuel_records_with_stats(db: Session, car_id: int) -> List[FuelStats]:
    return annotate_fuel_records(list_fuel_records(db, car_id))


def fuel_summary(db: Session, car_id: int) -> FuelSummary:
    return summarize_fuel_records(list_fuel_records(db, car_id))


def get_fuel_record(db: Session, record_id: int) -> FuelRecord:
    record = db.query(FuelRecord).filter(FuelRecord.id == record_id).first()
    if not record:
        raise NotFoundError("Fuel record not found")
    return record


def reconcile_mileage(db: Session, car_id: int) -> None:
    """Set the car's mileage to its highest fuel reading.

    Leaves the car untouched when it has no fuel records. Runs inside the
    caller's transaction.
    """
    db.flush()
    max_mileage = (
        db.query(func.max(FuelRecord.mileage)).filter(FuelRecord.car_id == car_id).scalar()
    )
    if max_mileage is None:
        return
    car = db.query(Car).filter(Car.id == car_id).first()
    if car is not None and car.current_mileage != max_mileage:
        logger.info(f"Car {car_id} mileage reconciled: {car.current_mileage} -> {max_mileage}")
        car.current_mileage = max_mileage


def create_fuel_record(db: Session, car_id: int, data: FuelRecordCreate) -> FuelRecord:
    get_car(db, car_id)
    record = FuelRecord(car_id=car_id, **data.model_dump())
    db.add(record)
    reconcile_mileage(db, car_id)
    db.commit()
    db.refresh(record)
    return record


def update_fuel_record(db: Session, record_id: int, data: FuelRecordUpdate) -> FuelRecord:
    record = get_fuel_record(db, record_id)
    for key, value in data.model_dump().items():
        setattr(record, key, value)
    reconcile_mileage(db, record.car_id)
    db.commit()
    db.refresh(record)
    return record


def delete_fuel_record(db: Session, record_id: int) -> None:
    record = get_fuel_record(db, record_id)
    car_id = record.car_id
    db.delete(record)
    reconcile_mileage(db, car_id)
    db.commit()
