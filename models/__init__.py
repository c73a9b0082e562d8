from models.timeslot import TimeSlot, DayOfWeek, DAYS
from models.course import CourseSection
from models.plan import Plan, PlanScore
from models.preferences import SmartPreferences
from models.catalog import Catalog, CatalogReport, CatalogError

__all__ = [
    "TimeSlot",
    "DayOfWeek",
    "DAYS",
    "CourseSection",
    "Plan",
    "PlanScore",
    "SmartPreferences",
    "Catalog",
    "CatalogReport",
    "CatalogError",
]
