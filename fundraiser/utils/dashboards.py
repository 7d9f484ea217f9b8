# fundraiser/utils/dashboards.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from fundraiser.models import School, Student
from fundraiser.storage import Storage
from fundraiser.utils.stats import (
    RECENT_DONATIONS_LIMIT,
    get_school_stats,
    get_student_stats,
    get_top_performing_students,
    goal_progress,
    grade_rankings,
    days_remaining,
    newest_first,
    recent_donations,
    upcoming_events,
)

DASHBOARD_TOP_STUDENTS = 5


def school_dashboard(storage: Storage, school: School) -> Dict[str, Any]:
    """Dashboard of a school admin: totals, leaders and the latest donations."""
    students = storage.get_students_by_school_id(school.id)
    return {
        "school": school,
        "stats": get_school_stats(storage, school.id),
        "top_students": get_top_performing_students(storage, school.id, DASHBOARD_TOP_STUDENTS),
        "recent_donations": recent_donations(storage, students),
    }


def student_dashboard(
    storage: Storage,
    student: Student,
    school: School,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Dashboard of a student:
      - own stats and goal progress (capped at 100)
      - school stats and school goal progress (capped at 100)
      - per-grade rankings inside the school
      - own latest donations and the days left in the campaign
    """
    stats = get_student_stats(storage, student.id)
    school_stats = get_school_stats(storage, school.id)
    donations = newest_first(storage.get_donations_by_student_id(student.id))

    return {
        "student": student,
        "school": school,
        "stats": stats,
        "goal_progress": goal_progress(stats.total_raised, student.personal_goal, capped=True),
        "school_stats": school_stats,
        "school_goal_progress": goal_progress(
            school_stats.total_raised, school.fundraising_goal, capped=True
        ),
        "class_rankings": grade_rankings(storage, school.id),
        "recent_donations": donations[:RECENT_DONATIONS_LIMIT],
        "days_remaining": days_remaining(school.created_at, now),
    }


def school_page(storage: Storage, school: School, now: Optional[datetime] = None) -> Dict[str, Any]:
    stats = get_school_stats(storage, school.id)
    return {
        "school": school,
        "stats": stats,
        "goal_progress": goal_progress(stats.total_raised, school.fundraising_goal, capped=True),
        "top_students": get_top_performing_students(storage, school.id, DASHBOARD_TOP_STUDENTS),
        "upcoming_events": upcoming_events(storage.get_events_by_school_id(school.id), now),
    }


def school_roster(storage: Storage, school_id: int) -> List[Dict[str, Any]]:
    """All students of a school with their stats, best fundraisers first."""
    roster = []
    for student in storage.get_students_by_school_id(school_id):
        stats = get_student_stats(storage, student.id)
        roster.append({
            "student": student,
            "stats": stats,
            "goal_progress": goal_progress(stats.total_raised, student.personal_goal, capped=True),
        })
    return sorted(roster, key=lambda r: r["stats"].total_raised, reverse=True)
