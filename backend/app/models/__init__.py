from app.models.credential import Credential
from app.models.vehicle import Car
from app.models.fuel import FuelRecord
from app.models.part import Part

__all__ = ["Credential", "Car", "FuelRecord", "Part"]
