from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from sqlalchemy.sql import func
from models.record_state import SoftDeleteMixin


class Tracker(SoftDeleteMixin, Base):
    __tablename__ = "trackers"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    person_id = Column(Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False, index=True)
    tracker_type_id = Column(Integer, ForeignKey("tracker_types.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    person = relationship("Person", back_populates="trackers")
    tracker_type = relationship("TrackerType", back_populates="trackers")
    rounds = relationship(
        "Round",
        back_populates="tracker",
        cascade="all, delete-orphan",
        order_by="[Round.created_at, Round.id]"
    )
