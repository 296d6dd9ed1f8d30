from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from app.core.database import Base

CREDENTIAL_ID = 1


class Credential(Base):
    """Singleton PIN credential; the fixed primary key keeps it to one row."""

    __tablename__ = "auth"

    id = Column(Integer, primary_key=True, default=CREDENTIAL_ID)
    pin_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
