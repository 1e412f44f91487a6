"""
SQLAlchemy Implementation of Event Repository.

Participant writes go through the join table with conditional UPDATEs so the
count and the membership rows always move together, and concurrent
registrations cannot push an event past capacity.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import delete, exists, func, insert, or_, select, update
from sqlalchemy.exc import IntegrityError

from app.domain.models.event import Event, event_participants
from app.domain.repositories.event_repository import EventRepository
from app.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyEventRepository(SQLAlchemyRepository[Event], EventRepository):
    """Event repository implementation using SQLAlchemy."""

    def _ordered(self, query):
        return query.order_by(Event.date.asc(), Event.time.asc(), Event.id.asc())

    def get_for_update(self, id: int) -> Optional[Event]:
        return (
            self.db.query(Event)
            .filter(Event.id == id)
            .with_for_update(of=Event)
            .populate_existing()
            .first()
        )

    def list_all(self) -> List[Event]:
        return self._ordered(self.db.query(Event)).all()

    def find_by_department(self, department: str) -> List[Event]:
        return self._ordered(self.db.query(Event).filter(Event.department == department)).all()

    def find_after(self, day: date) -> List[Event]:
        return self._ordered(self.db.query(Event).filter(Event.date > day)).all()

    def search(self, term: str) -> List[Event]:
        pattern = f"%{term}%"
        query = self.db.query(Event).filter(
            or_(Event.title.ilike(pattern), Event.description.ilike(pattern))
        )
        return self._ordered(query).all()

    def find_by_creator(self, user_id: int) -> List[Event]:
        return self._ordered(self.db.query(Event).filter(Event.created_by_id == user_id)).all()

    def find_by_participant(self, user_id: int) -> List[Event]:
        query = self.db.query(Event).join(
            event_participants, event_participants.c.event_id == Event.id
        ).filter(event_participants.c.user_id == user_id)
        return self._ordered(query).all()

    def count_by_creator(self, user_id: int) -> int:
        return (
            self.db.query(func.count(Event.id)).filter(Event.created_by_id == user_id).scalar() or 0
        )

    def is_participant(self, event_id: int, user_id: int) -> bool:
        stmt = select(
            exists().where(
                event_participants.c.event_id == event_id,
                event_participants.c.user_id == user_id,
            )
        )
        return bool(self.db.execute(stmt).scalar())

    def add_participant(self, event_id: int, user_id: int) -> bool:
        result = self.db.execute(
            update(Event)
            .where(Event.id == event_id, Event.current_participants < Event.max_participants)
            .values(current_participants=Event.current_participants + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            self.db.rollback()
            return False

        try:
            self.db.execute(insert(event_participants).values(event_id=event_id, user_id=user_id))
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        return True

    def remove_participant(self, event_id: int, user_id: int) -> bool:
        result = self.db.execute(
            delete(event_participants).where(
                event_participants.c.event_id == event_id,
                event_participants.c.user_id == user_id,
            )
        )
        if result.rowcount != 1:
            self.db.rollback()
            return False

        self.db.execute(
            update(Event)
            .where(Event.id == event_id, Event.current_participants > 0)
            .values(current_participants=Event.current_participants - 1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return True

    def remove_user_from_all(self, user_id: int) -> int:
        event_ids = [
            row[0]
            for row in self.db.execute(
                select(event_participants.c.event_id).where(event_participants.c.user_id == user_id)
            ).all()
        ]
        if not event_ids:
            return 0

        self.db.execute(
            delete(event_participants).where(event_participants.c.user_id == user_id)
        )
        self.db.execute(
            update(Event)
            .where(Event.id.in_(event_ids), Event.current_participants > 0)
            .values(current_participants=Event.current_participants - 1)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return len(event_ids)

    def delete(self, db_obj: Event) -> None:
        self.db.execute(delete(event_participants).where(event_participants.c.event_id == db_obj.id))
        self.db.delete(db_obj)
        self.db.commit()
