from sqlalchemy import Column, Integer, String, Date, Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.services.part_links import model_domain, model_url


class Part(Base):
    __tablename__ = "parts_inventory"

    id = Column(Integer, primary_key=True, index=True)
    car_id = Column(Integer, ForeignKey("cars.id"), nullable=False, index=True)

    main_component = Column(String(200), nullable=False)
    detailed_component = Column(String(200), nullable=False)
    model = Column(Text, nullable=False)  # part number or shop link

    # Public path of the stored image, e.g. /media/part_1700000000000_a1b2c3d4.jpg
    picture_path = Column(String(255))

    price = Column(Float, nullable=False)
    purchase_date = Column(Date, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    car = relationship("Car", back_populates="parts")

    @property
    def model_url(self):
        return model_url(self.model)

    @property
    def model_domain(self):
        return model_domain(self.model)
