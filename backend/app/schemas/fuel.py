from pydantic import BaseModel, Field
import datetime as dt
from typing import Optional


class FuelRecordBase(BaseModel):
    date: dt.date
    mileage: int = Field(..., ge=0)
    liters: float = Field(..., gt=0)
    price_paid: float = Field(..., ge=0)


class FuelRecordCreate(FuelRecordBase):
    pass


class FuelRecordUpdate(FuelRecordBase):
    """Fuel updates replace the whole reading."""


class FuelRecordResponse(FuelRecordBase):
    id: int
    car_id: int
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class FuelRecordWithStats(FuelRecordResponse):
    price_per_liter: Optional[float] = None
    distance: Optional[int] = None
    avg_consumption: Optional[float] = None
    avg_price_per_km: Optional[float] = None
    avg_price_per_100km: Optional[float] = None
    price_trend: Optional[str] = None
    price_diff: Optional[float] = None


class FuelSummaryResponse(BaseModel):
    record_count: int
    total_liters: float
    total_spent: float
    distance: int
    avg_consumption: Optional[float] = None
    avg_price_per_km: Optional[float] = None
    avg_price_per_liter: Optional[float] = None
