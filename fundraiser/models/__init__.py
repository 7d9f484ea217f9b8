from fundraiser.models.user import User
from fundraiser.models.school import School
from fundraiser.models.student import Student
from fundraiser.models.donation import Donation
from fundraiser.models.event import Event

__all__ = ["User", "School", "Student", "Donation", "Event"]
