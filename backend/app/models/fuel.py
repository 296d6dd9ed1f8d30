from sqlalchemy import Column, Integer, Date, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base


class FuelRecord(Base):
    __tablename__ = "fuel_records"

    id = Column(Integer, primary_key=True, index=True)
    car_id = Column(Integer, ForeignKey("cars.id"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    mileage = Column(Integer, nullable=False)  # odometer reading at the fill-up
    liters = Column(Float, nullable=False)
    price_paid = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    car = relationship("Car", back_populates="fuel_records")
