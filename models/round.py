# models/round.py
from sqlalchemy import Column, Integer, String, Float, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from sqlalchemy.sql import func

ALLOWED_ROUND_LENGTHS = (4, 8)


class Round(Base):
    __tablename__ = "rounds"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    tracker_id = Column(Integer, ForeignKey("trackers.id", ondelete="CASCADE"), nullable=False, index=True)
    person_id = Column(Integer, ForeignKey("people.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    length_weeks = Column(Integer, nullable=False, default=8)
    goal_weight = Column(Float, nullable=True)
    created_at = Column(DateTime, default=func.current_timestamp(), index=True)
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    person = relationship("Person", back_populates="rounds")
    tracker = relationship("Tracker", back_populates="rounds")
    round_categories = relationship(
        "RoundCategory",
        back_populates="round",
        cascade="all, delete-orphan",
        order_by="RoundCategory.sort_order"
    )
    entries = relationship("Entry", back_populates="round", cascade="all, delete-orphan")
    weight_entries = relationship(
        "WeightEntry",
        back_populates="round",
        cascade="all, delete-orphan",
        order_by="WeightEntry.week_index"
    )


class RoundCategory(Base):
    """Frozen copy of a category taken when the round starts"""
    __tablename__ = "round_categories"
    __table_args__ = (
        UniqueConstraint("round_id", "category_id", name="uq_round_category"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    round_id = Column(Integer, ForeignKey("rounds.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    sort_order = Column(Integer, nullable=False)
    display_name = Column(String(100), nullable=False)

    # Relationships
    round = relationship("Round", back_populates="round_categories")
    category = relationship("Category")
