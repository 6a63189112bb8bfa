# core/nav_registry.py
from __future__ import annotations
from dataclasses import dataclass
from typing import List

@dataclass(frozen=True)
class Route:
    key: str                  # stable id, also used as the url path
    label: str                # UI label
    icon: str                 # emoji or short string
    stem: str                 # screens/<stem>.py or screens/<stem>/page.py

@dataclass
class Section:
    title: str
    routes: List[Route]

SECTIONS: List[Section] = [
    Section("Overview", [
        Route("dashboard",    "Dashboard",    "📊", "dashboard"),
    ]),
    Section("Masters", [
        Route("locations",    "Locations",    "📍", "locations"),
        Route("candidates",   "Candidates",   "🧑‍🎓", "candidates"),
        Route("course-types", "Course Types", "🏷️", "course_types"),
        Route("courses",      "Courses",      "📚", "courses"),
    ]),
    Section("Training", [
        Route("allotments",   "Allotments",   "🗓️", "allotments"),
        Route("experts",      "Experts",      "🧑‍🏫", "experts"),
        Route("evaluations",  "Evaluations",  "📝", "evaluations"),
    ]),
    Section("Administration", [
        Route("users",        "Users",        "👥", "users"),
        Route("certificates", "Certificates", "🏅", "certificates"),
    ]),
]

DEFAULT_ROUTE_KEY = "dashboard"
