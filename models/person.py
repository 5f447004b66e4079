from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from database import Base
from sqlalchemy.sql import func


class Person(Base):
    __tablename__ = "people"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    trackers = relationship("Tracker", back_populates="person", cascade="all, delete-orphan")
    rounds = relationship("Round", back_populates="person", cascade="all, delete-orphan")
