from app.schemas.auth import PinRequest, AuthStatusResponse, SessionStatusResponse, VerifyResponse
from app.schemas.vehicle import CarCreate, CarUpdate, CarResponse
from app.schemas.fuel import (
    FuelRecordCreate, FuelRecordUpdate, FuelRecordResponse, FuelRecordWithStats, FuelSummaryResponse,
)
from app.schemas.part import PartFields, PartUpdateFields, PartResponse

__all__ = [
    "PinRequest", "AuthStatusResponse", "SessionStatusResponse", "VerifyResponse",
    "CarCreate", "CarUpdate", "CarResponse",
    "FuelRecordCreate", "FuelRecordUpdate", "FuelRecordResponse", "FuelRecordWithStats", "FuelSummaryResponse",
    "PartFields", "PartUpdateFields", "PartResponse",
]
