from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from sqlalchemy.sql import func
from models.record_state import SoftDeleteMixin

MAX_ACTIVE_CATEGORIES = 5
MAX_DAYS_OFF_PER_WEEK = 5


class Category(SoftDeleteMixin, Base):
    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("tracker_type_id", "name", name="uq_category_type_name"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    tracker_type_id = Column(Integer, ForeignKey("tracker_types.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
    allow_days_off_per_week = Column(Integer, nullable=False, default=0)
    allow_treat = Column(Boolean, nullable=False, default=False)
    allow_sick = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    tracker_type = relationship("TrackerType", back_populates="categories")
