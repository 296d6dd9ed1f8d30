from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class CarBase(BaseModel):
    brand: str = Field(..., min_length=1, max_length=100)
    model: str = Field(..., min_length=1, max_length=100)
    vin: str = Field(..., min_length=1, max_length=32)
    license_plate: Optional[str] = Field(None, max_length=20)
    insurance_expiry: Optional[date] = None
    color: Optional[str] = Field(None, max_length=50)


class CarCreate(CarBase):
    current_mileage: int = Field(..., ge=0)


class CarUpdate(BaseModel):
    """Partial update; fields left out of the request keep their stored value."""
    brand: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    vin: Optional[str] = Field(None, min_length=1, max_length=32)
    license_plate: Optional[str] = Field(None, max_length=20)
    current_mileage: Optional[int] = Field(None, ge=0)
    insurance_expiry: Optional[date] = None
    color: Optional[str] = Field(None, max_length=50)


class CarResponse(CarBase):
    id: int
    current_mileage: int
    insurance_status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
