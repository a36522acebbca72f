"""User profile shadow rows and their role extensions."""

from enum import Enum as PyEnum
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from cronara.database import Base, utcnow


class UserRole(str, PyEnum):
    """Roles a principal can choose during onboarding."""
    OWNER = "owner"    # Runs a business, manages staff and settings
    CLIENT = "client"  # Books appointments


class User(Base):
    """Profile row for an identity provider principal."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Identity provider principal id
    user_id = Column(String(255), nullable=False)

    # Profile
    name = Column(String(255))
    email = Column(String(255))
    phone = Column(String(30))

    # Last role chosen during onboarding, mirrored to principal metadata
    role = Column(String(20))
    metadata_synced_at = Column(DateTime)

    # Timestamps
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("Owner", back_populates="user", uselist=False)
    client = relationship("Client", back_populates="user", uselist=False)

    __table_args__ = (
        Index("ix_user_user_id", "user_id", unique=True),
    )

    def __repr__(self):
        return f"<User {self.user_id} ({self.email})>"


class Owner(Base):
    """Owner extension. Shares its primary key with the user row."""

    __tablename__ = "owner"

    id = Column(Integer, ForeignKey("user.id"), primary_key=True, autoincrement=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="owner")
    business = relationship("Business", back_populates="owner", uselist=False)

    def __repr__(self):
        return f"<Owner {self.id}>"


class Client(Base):
    """Client extension of a user row."""

    __tablename__ = "client"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("user.id"), nullable=False)
    created_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="client")

    __table_args__ = (
        Index("ix_client_user_id", "user_id", unique=True),
    )

    def __repr__(self):
        return f"<Client {self.id} user={self.user_id}>"
