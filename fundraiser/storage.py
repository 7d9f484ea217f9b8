# fundraiser/storage.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from fundraiser.database import get_db
from fundraiser.models import User, School, Student, Donation, Event


class Storage(ABC):
    """
    Entity store used by routers and the stats calculator.

    Getters return None for a missing entity, list getters return entities
    in ascending id order (the order they were created in).
    """

    # --- users ---
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, data: Dict[str, Any]) -> User: ...

    # --- schools ---
    @abstractmethod
    def get_school(self, school_id: int) -> Optional[School]: ...

    @abstractmethod
    def get_school_by_user_id(self, user_id: int) -> Optional[School]: ...

    @abstractmethod
    def get_all_schools(self) -> List[School]: ...

    @abstractmethod
    def create_school(self, data: Dict[str, Any]) -> School: ...

    # --- students ---
    @abstractmethod
    def get_student(self, student_id: int) -> Optional[Student]: ...

    @abstractmethod
    def get_student_by_user_id(self, user_id: int) -> Optional[Student]: ...

    @abstractmethod
    def get_students_by_school_id(self, school_id: int) -> List[Student]: ...

    @abstractmethod
    def create_student(self, data: Dict[str, Any]) -> Student: ...

    # --- donations ---
    @abstractmethod
    def get_donation(self, donation_id: int) -> Optional[Donation]: ...

    @abstractmethod
    def get_donations_by_student_id(self, student_id: int) -> List[Donation]: ...

    @abstractmethod
    def get_donations_by_school_id(self, school_id: int) -> List[Donation]: ...

    @abstractmethod
    def create_donation(self, data: Dict[str, Any]) -> Donation: ...

    # --- events ---
    @abstractmethod
    def get_event(self, event_id: int) -> Optional[Event]: ...

    @abstractmethod
    def get_events_by_school_id(self, school_id: int) -> List[Event]: ...

    @abstractmethod
    def create_event(self, data: Dict[str, Any]) -> Event: ...

    @abstractmethod
    def update_event(self, event_id: int, changes: Dict[str, Any]) -> Optional[Event]: ...

    @abstractmethod
    def delete_event(self, event_id: int) -> bool: ...


class SqlStorage(Storage):
    """Storage on top of a request-scoped SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _add(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def get_user(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email).first()

    def create_user(self, data: Dict[str, Any]) -> User:
        return self._add(User(**data))

    def get_school(self, school_id: int) -> Optional[School]:
        return self.db.get(School, school_id)

    def get_school_by_user_id(self, user_id: int) -> Optional[School]:
        return self.db.query(School).filter(School.user_id == user_id).first()

    def get_all_schools(self) -> List[School]:
        return self.db.query(School).order_by(School.id).all()

    def create_school(self, data: Dict[str, Any]) -> School:
        return self._add(School(**data))

    def get_student(self, student_id: int) -> Optional[Student]:
        return self.db.get(Student, student_id)

    def get_student_by_user_id(self, user_id: int) -> Optional[Student]:
        return self.db.query(Student).filter(Student.user_id == user_id).first()

    def get_students_by_school_id(self, school_id: int) -> List[Student]:
        return (
            self.db.query(Student)
            .filter(Student.school_id == school_id)
            .order_by(Student.id)
            .all()
        )

    def create_student(self, data: Dict[str, Any]) -> Student:
        return self._add(Student(**data))

    def get_donation(self, donation_id: int) -> Optional[Donation]:
        return self.db.get(Donation, donation_id)

    def get_donations_by_student_id(self, student_id: int) -> List[Donation]:
        return (
            self.db.query(Donation)
            .filter(Donation.student_id == student_id)
            .order_by(Donation.id)
            .all()
        )

    def get_donations_by_school_id(self, school_id: int) -> List[Donation]:
        return (
            self.db.query(Donation)
            .join(Student, Donation.student_id == Student.id)
            .filter(Student.school_id == school_id)
            .order_by(Donation.id)
            .all()
        )

    def create_donation(self, data: Dict[str, Any]) -> Donation:
        return self._add(Donation(**data))

    def get_event(self, event_id: int) -> Optional[Event]:
        return self.db.get(Event, event_id)

    def get_events_by_school_id(self, school_id: int) -> List[Event]:
        return (
            self.db.query(Event)
            .filter(Event.school_id == school_id)
            .order_by(Event.id)
            .all()
        )

    def create_event(self, data: Dict[str, Any]) -> Event:
        return self._add(Event(**data))

    def update_event(self, event_id: int, changes: Dict[str, Any]) -> Optional[Event]:
        event = self.get_event(event_id)
        if not event:
            return None
        for field, value in changes.items():
            setattr(event, field, value)
        self.db.commit()
        self.db.refresh(event)
        return event

    def delete_event(self, event_id: int) -> bool:
        event = self.get_event(event_id)
        if not event:
            return False
        self.db.delete(event)
        self.db.commit()
        return True


class MemoryStorage(Storage):
    """
    Dict-backed storage with per-collection auto-increment ids.
    Entities are transient ORM instances, never attached to a session.
    """

    def __init__(self):
        self._tables: Dict[type, Dict[int, Any]] = {
            User: {}, School: {}, Student: {}, Donation: {}, Event: {},
        }
        self._next_id: Dict[type, int] = {model: 1 for model in self._tables}

    def _create(self, model, data: Dict[str, Any]):
        values = dict(data)
        values.setdefault("created_at", datetime.utcnow())
        values["id"] = self._next_id[model]
        self._next_id[model] += 1
        obj = model(**values)
        self._tables[model][obj.id] = obj
        return obj

    def _all(self, model) -> List[Any]:
        return list(self._tables[model].values())

    def get_user(self, user_id: int) -> Optional[User]:
        return self._tables[User].get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self._all(User) if u.username == username), None)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._all(User) if u.email == email), None)

    def create_user(self, data: Dict[str, Any]) -> User:
        return self._create(User, data)

    def get_school(self, school_id: int) -> Optional[School]:
        return self._tables[School].get(school_id)

    def get_school_by_user_id(self, user_id: int) -> Optional[School]:
        return next((s for s in self._all(School) if s.user_id == user_id), None)

    def get_all_schools(self) -> List[School]:
        return self._all(School)

    def create_school(self, data: Dict[str, Any]) -> School:
        values = dict(data)
        values.setdefault("fundraising_goal", 0)
        return self._create(School, values)

    def get_student(self, student_id: int) -> Optional[Student]:
        return self._tables[Student].get(student_id)

    def get_student_by_user_id(self, user_id: int) -> Optional[Student]:
        return next((s for s in self._all(Student) if s.user_id == user_id), None)

    def get_students_by_school_id(self, school_id: int) -> List[Student]:
        return [s for s in self._all(Student) if s.school_id == school_id]

    def create_student(self, data: Dict[str, Any]) -> Student:
        values = dict(data)
        values.setdefault("parent_consent", False)
        return self._create(Student, values)

    def get_donation(self, donation_id: int) -> Optional[Donation]:
        return self._tables[Donation].get(donation_id)

    def get_donations_by_student_id(self, student_id: int) -> List[Donation]:
        return [d for d in self._all(Donation) if d.student_id == student_id]

    def get_donations_by_school_id(self, school_id: int) -> List[Donation]:
        student_ids = {s.id for s in self.get_students_by_school_id(school_id)}
        return [d for d in self._all(Donation) if d.student_id in student_ids]

    def create_donation(self, data: Dict[str, Any]) -> Donation:
        return self._create(Donation, data)

    def get_event(self, event_id: int) -> Optional[Event]:
        return self._tables[Event].get(event_id)

    def get_events_by_school_id(self, school_id: int) -> List[Event]:
        return [e for e in self._all(Event) if e.school_id == school_id]

    def create_event(self, data: Dict[str, Any]) -> Event:
        return self._create(Event, data)

    def update_event(self, event_id: int, changes: Dict[str, Any]) -> Optional[Event]:
        event = self.get_event(event_id)
        if not event:
            return None
        for field, value in changes.items():
            setattr(event, field, value)
        return event

    def delete_event(self, event_id: int) -> bool:
        return self._tables[Event].pop(event_id, None) is not None


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return SqlStorage(db)
