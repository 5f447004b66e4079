from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from database import Base
from sqlalchemy.sql import func
from models.record_state import SoftDeleteMixin


class TrackerType(SoftDeleteMixin, Base):
    __tablename__ = "tracker_types"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # Unique regardless of state; an inactive type is reactivated instead of duplicated
    name = Column(String(100), nullable=False, unique=True)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    categories = relationship("Category", back_populates="tracker_type", order_by="Category.sort_order")
    trackers = relationship("Tracker", back_populates="tracker_type")
