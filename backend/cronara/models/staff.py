"""Staff roster model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from cronara.database import Base, utcnow


class Staff(Base):
    """Person working at a business."""

    __tablename__ = "staff"

    id = Column(Integer, primary_key=True, autoincrement=True)
    business_id = Column(Integer, ForeignKey("business.id"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    email = Column(String(255))
    cargo = Column(String(100))  # Role label: receptionist, doctor, ...
    phone = Column(String(30))

    created_at = Column(DateTime, default=utcnow)

    business = relationship("Business", back_populates="staff")

    def __repr__(self):
        return f"<Staff {self.name} ({self.cargo})>"
