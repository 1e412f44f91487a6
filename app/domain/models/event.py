"""Event domain model: maps to the 'events' table and its participant join table."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Table,
    Text,
    Time,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.infrastructure.database import Base

# Composite primary key keeps membership unique
event_participants = Table(
    "event_participants",
    Base.metadata,
    Column("event_id", Integer, ForeignKey("events.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False, index=True)
    time = Column(Time, nullable=True)
    department = Column(String(100), nullable=False, index=True)
    location = Column(String(255), nullable=False)
    max_participants = Column(Integer, nullable=False)
    current_participants = Column(Integer, nullable=False, default=0)
    image = Column(String(500), nullable=True)
    registration_closed = Column(Boolean, nullable=False, default=False)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    created_by = relationship("User", lazy="joined")
    # Written through the join table only; see SQLAlchemyEventRepository
    participants = relationship("User", secondary=event_participants, lazy="selectin", viewonly=True)

    __table_args__ = (
        CheckConstraint("current_participants >= 0", name="check_current_participants_non_negative"),
        CheckConstraint(
            "current_participants <= max_participants",
            name="check_current_participants_lte_max",
        ),
    )

    def __repr__(self):
        return f"<Event {self.id} - {self.title} ({self.current_participants}/{self.max_participants})>"
