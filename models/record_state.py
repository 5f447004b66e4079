# models/record_state.py
from sqlalchemy import Column, Enum
from sqlalchemy.ext.hybrid import hybrid_property
import enum


class RecordStateEnum(enum.Enum):
    active = "active"
    inactive = "inactive"


class SoftDeleteMixin:
    """Tagged active/inactive state shared by long-lived admin records.

    Rows are never removed while history points at them; deleting moves them
    to ``inactive`` and creating one with the same name moves it back.
    """

    state = Column(Enum(RecordStateEnum), nullable=False, default=RecordStateEnum.active)

    @hybrid_property
    def active(self) -> bool:
        return self.state == RecordStateEnum.active

    @active.expression
    def active(cls):
        return cls.state == RecordStateEnum.active

    def deactivate(self):
        self.state = RecordStateEnum.inactive

    def reactivate(self):
        self.state = RecordStateEnum.active
