from datetime import date

from sqlalchemy import Column, Integer, String, Date, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.services.insurance import insurance_status


class Car(Base):
    __tablename__ = "cars"

    id = Column(Integer, primary_key=True, index=True)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    vin = Column(String(32), nullable=False)
    license_plate = Column(String(20))
    current_mileage = Column(Integer, nullable=False, default=0)
    insurance_expiry = Column(Date)
    color = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now())

    fuel_records = relationship("FuelRecord", back_populates="car", cascade="all, delete-orphan")
    parts = relationship("Part", back_populates="car", cascade="all, delete-orphan")

    @property
    def insurance_status(self) -> str:
        return insurance_status(self.insurance_expiry, date.today()).value
