from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import Optional


class PartFields(BaseModel):
    main_component: str = Field(..., min_length=1, max_length=200)
    detailed_component: str = Field(..., min_length=1, max_length=200)
    model: str = Field(..., min_length=1)
    price: float = Field(..., ge=0)
    purchase_date: date


class PartUpdateFields(BaseModel):
    main_component: Optional[str] = Field(None, min_length=1, max_length=200)
    detailed_component: Optional[str] = Field(None, min_length=1, max_length=200)
    model: Optional[str] = Field(None, min_length=1)
    price: Optional[float] = Field(None, ge=0)
    purchase_date: Optional[date] = None


class PartResponse(PartFields):
    id: int
    car_id: int
    picture_path: Optional[str] = None
    model_url: Optional[str] = None
    model_domain: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
        protected_namespaces = ()
