"""Business profile model."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Index
from sqlalchemy.orm import relationship
from cronara.database import Base, utcnow


class Business(Base):
    """Business run by an owner. One per owner."""

    __tablename__ = "business"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("owner.id"), nullable=False)

    # Basic Info
    name = Column(String(255), nullable=False)
    description = Column(Text)
    logo_url = Column(String(500))

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("Owner", back_populates="business")
    staff = relationship("Staff", back_populates="business")

    __table_args__ = (
        Index("ix_business_owner_id", "owner_id", unique=True),
    )

    def __repr__(self):
        return f"<Business {self.name}>"
