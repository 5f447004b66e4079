# models/entry.py
from sqlalchemy import Column, Integer, Date, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
from sqlalchemy.sql import func
import enum


class EntryStatusEnum(enum.Enum):
    EMPTY = "EMPTY"
    HALF = "HALF"
    DONE = "DONE"
    OFF = "OFF"
    TREAT = "TREAT"
    SICK = "SICK"


class Entry(Base):
    __tablename__ = "entries"
    __table_args__ = (
        UniqueConstraint("round_id", "category_id", "date", name="uq_entry_round_category_date"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    round_id = Column(Integer, ForeignKey("rounds.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    status = Column(Enum(EntryStatusEnum), nullable=False, default=EntryStatusEnum.EMPTY)
    created_at = Column(DateTime, default=func.current_timestamp())
    updated_at = Column(
        DateTime,
        default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    # Relationships
    round = relationship("Round", back_populates="entries")
