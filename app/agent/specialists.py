"""
Agent identities: the coordinator (tutor) and the domain specialists.

SpecialistId is the closed set of agents; SPECIALIST_PROFILES carries the display
name, description and routing hint that prompts and the /agents endpoint use.
"""

from dataclasses import dataclass
from enum import Enum

from app.core.config import COORDINATOR_ID


class SpecialistId(str, Enum):
    TUTOR = "tutor"
    MATH = "math"
    PHYSICS = "physics"
    CHEMISTRY = "chemistry"
    BIOLOGY = "biology"
    HISTORY = "history"
    LITERATURE = "literature"
    CODING = "coding"
    FINANCE = "finance"
    HEALTH = "health"


COORDINATOR = SpecialistId(COORDINATOR_ID)


@dataclass(frozen=True)
class SpecialistProfile:
    name: str
    description: str
    routing_hint: str


SPECIALIST_PROFILES: dict[SpecialistId, SpecialistProfile] = {
    SpecialistId.TUTOR: SpecialistProfile("AI Tutor", "Main tutoring assistant", "greetings and general questions"),
    SpecialistId.MATH: SpecialistProfile("Math Agent", "Mathematics specialist", "arithmetic, algebra, calculus, equations"),
    SpecialistId.PHYSICS: SpecialistProfile("Physics Agent", "Physics specialist", "constants, mechanics, energy calculations"),
    SpecialistId.CHEMISTRY: SpecialistProfile("Chemistry Agent", "Chemistry specialist", "elements, equations, molecular calculations"),
    SpecialistId.BIOLOGY: SpecialistProfile("Biology Agent", "Biology specialist", "life processes, cell division, genetics"),
    SpecialistId.HISTORY: SpecialistProfile("History Agent", "History specialist", "historical events, time periods"),
    SpecialistId.LITERATURE: SpecialistProfile("Literature Agent", "Literature specialist", "poetry devices, narrative elements"),
    SpecialistId.CODING: SpecialistProfile("Coding Agent", "Coding specialist", "algorithms, debugging, programming concepts"),
    SpecialistId.FINANCE: SpecialistProfile("Finance Agent", "Finance specialist", "interest calculations, ROI, investments"),
    SpecialistId.HEALTH: SpecialistProfile("Health Agent", "Health specialist", "BMI, nutrition, wellness information"),
}


def parse_specialist_id(value) -> SpecialistId | None:
    """Map a raw identifier (as written by the model) to a SpecialistId, or None if unknown."""
    if isinstance(value, SpecialistId):
        return value
    key = str(value or "").strip().strip("[]").strip().lower()
    try:
        return SpecialistId(key)
    except ValueError:
        return None
