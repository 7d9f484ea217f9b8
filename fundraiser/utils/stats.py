# fundraiser/utils/stats.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, NamedTuple, Optional

from fundraiser.models import Donation, Event, Student
from fundraiser.storage import Storage

CAMPAIGN_LENGTH_DAYS = 30
TOP_STUDENTS_LIMIT = 10
RECENT_DONATIONS_LIMIT = 5
UPCOMING_EVENTS_LIMIT = 3

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


class InvalidAmountError(ValueError):
    """Raised when a stored amount cannot be read as a non-negative decimal."""
    pass


@dataclass
class StudentStats:
    total_raised: float
    total_donations: int
    largest_donation: float
    average_donation: float


@dataclass
class SchoolStats:
    total_raised: float
    total_donations: int
    active_students: int


# not a dataclass: FastAPI would asdict() it and deep-copy the ORM student
class RankedStudent(NamedTuple):
    student: Student
    amount_raised: float
    goal_progress: int


@dataclass
class GradeRanking:
    grade: str
    total_raised: float
    student_count: int
    percentage: int


# ------------------------------------------------------------
# Parsing and percentages
# ------------------------------------------------------------
def parse_amount(value: Any) -> Decimal:
    """
    Reads a money amount as a Decimal.
    float goes through str() so 0.1 stays 0.1 instead of its binary expansion.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    try:
        if isinstance(value, Decimal):
            amount = value
        elif isinstance(value, (int, float)):
            amount = Decimal(str(value))
        elif isinstance(value, str):
            amount = Decimal(value.strip())
        else:
            raise InvalidAmountError(f"Invalid amount: {value!r}")
    except InvalidOperation as e:
        raise InvalidAmountError(f"Invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount: {value!r}")
    if amount < 0:
        raise InvalidAmountError(f"Negative amount: {value!r}")
    return amount


def percent(part: Decimal, whole: Decimal) -> int:
    """part/whole as an integer percentage, halves rounded up. 0 for an empty whole."""
    if not whole:
        return 0
    return int((part * _HUNDRED / whole).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def goal_progress(raised: Any, goal: Any, *, capped: bool) -> int:
    """
    Percentage of a goal reached. An unset or zero goal gives 0.
    capped=True clamps to 100 (dashboards), rankings pass capped=False.
    """
    if goal is None:
        return 0
    goal_amount = parse_amount(goal)
    if not goal_amount:
        return 0
    progress = percent(parse_amount(raised), goal_amount)
    return min(100, progress) if capped else progress


# ------------------------------------------------------------
# Primitives
# ------------------------------------------------------------
def _amounts(donations: Iterable[Donation]) -> List[Decimal]:
    return [parse_amount(d.amount) for d in donations]


def _student_total(storage: Storage, student_id: int) -> Decimal:
    return sum(_amounts(storage.get_donations_by_student_id(student_id)), _ZERO)


def get_student_stats(storage: Storage, student_id: int) -> StudentStats:
    amounts = _amounts(storage.get_donations_by_student_id(student_id))
    total = sum(amounts, _ZERO)
    count = len(amounts)

    return StudentStats(
        total_raised=float(total),
        total_donations=count,
        largest_donation=float(max(amounts)) if amounts else 0.0,
        average_donation=float(total / count) if count else 0.0,
    )


def get_school_stats(storage: Storage, school_id: int) -> SchoolStats:
    students = storage.get_students_by_school_id(school_id)

    amounts: List[Decimal] = []
    for student in students:
        amounts.extend(_amounts(storage.get_donations_by_student_id(student.id)))

    return SchoolStats(
        total_raised=float(sum(amounts, _ZERO)),
        total_donations=len(amounts),
        active_students=len(students),
    )


def get_top_performing_students(
    storage: Storage,
    school_id: int,
    limit: int = TOP_STUDENTS_LIMIT,
) -> List[RankedStudent]:
    """
    Students of a school ranked by amount raised, highest first.
    Equal amounts keep storage order. goal_progress here is not capped at 100.
    """
    ranked = []
    for student in storage.get_students_by_school_id(school_id):
        stats = get_student_stats(storage, student.id)
        ranked.append(RankedStudent(
            student=student,
            amount_raised=stats.total_raised,
            goal_progress=goal_progress(stats.total_raised, student.personal_goal, capped=False),
        ))

    # sorted() is stable with reverse=True as well
    ranked = sorted(ranked, key=lambda r: r.amount_raised, reverse=True)
    return ranked[:max(limit, 0)]


# ------------------------------------------------------------
# Dashboard building blocks
# ------------------------------------------------------------
def _student_brief(student: Student) -> Dict[str, Any]:
    return {
        "id": student.id,
        "first_name": student.first_name,
        "last_name": student.last_name,
    }


def newest_first(donations: Iterable[Donation]) -> List[Donation]:
    return sorted(donations, key=lambda d: (d.created_at, d.id), reverse=True)


def recent_donations(
    storage: Storage,
    students: Iterable[Student],
    limit: int = RECENT_DONATIONS_LIMIT,
) -> List[Dict[str, Any]]:
    """Latest donations across a set of students, each tagged with a short student record."""
    owner: Dict[int, Student] = {}
    donations: List[Donation] = []
    for student in students:
        owner[student.id] = student
        donations.extend(storage.get_donations_by_student_id(student.id))

    return [
        {"donation": d, "student": _student_brief(owner[d.student_id])}
        for d in newest_first(donations)[:limit]
    ]


def grade_rankings(storage: Storage, school_id: int) -> List[GradeRanking]:
    """
    Per-grade totals for a school with each grade's share of the school total.
    Grades are ordered by total raised, ties keep the order grades were first seen in.
    """
    groups: Dict[str, Dict[str, Any]] = {}
    for student in storage.get_students_by_school_id(school_id):
        group = groups.setdefault(student.grade, {"total": _ZERO, "count": 0})
        group["total"] += _student_total(storage, student.id)
        group["count"] += 1

    school_total = sum((g["total"] for g in groups.values()), _ZERO)

    rankings = [
        GradeRanking(
            grade=grade,
            total_raised=float(g["total"]),
            student_count=g["count"],
            percentage=percent(g["total"], school_total),
        )
        for grade, g in groups.items()
    ]
    return sorted(rankings, key=lambda r: r.total_raised, reverse=True)


def days_remaining(created_at: datetime, now: Optional[datetime] = None) -> int:
    """Days left in the fixed campaign window that starts when the school registers."""
    now = now or datetime.utcnow()
    days_passed = int((now - created_at).total_seconds() // 86400)
    return max(0, CAMPAIGN_LENGTH_DAYS - days_passed)


def upcoming_events(
    events: Iterable[Event],
    now: Optional[datetime] = None,
    limit: int = UPCOMING_EVENTS_LIMIT,
) -> List[Event]:
    now = now or datetime.utcnow()
    upcoming = [e for e in events if e.date >= now]
    return sorted(upcoming, key=lambda e: e.date)[:limit]
