"""
Function registry: the closed, per-specialist table of invocable functions.

Each specialist gets a fixed table of protocol name -> FunctionEntry. The registry is
built once at import time and is read-only afterwards; the coordinator's table is empty.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Mapping

from app.agent import tools
from app.agent.specialists import SpecialistId, parse_specialist_id

logger = logging.getLogger(__name__)

FunctionHandler = Callable[[Mapping[str, Any]], str]


@dataclass(frozen=True)
class FunctionEntry:
    """A registered function: protocol name, handler and a one-line description for prompts."""

    name: str
    handler: FunctionHandler
    description: str = ""

    def signature(self) -> str:
        return f"{self.name}: {self.description}" if self.description else self.name


# Static declaration: one explicit table per specialist
FUNCTION_TABLES: dict[SpecialistId, list[FunctionEntry]] = {
    SpecialistId.TUTOR: [],
    SpecialistId.MATH: [
        FunctionEntry("add", tools.add, 'add two numbers, PARAMS {"a": number, "b": number}'),
        FunctionEntry("multiply", tools.multiply, 'multiply two numbers, PARAMS {"a": number, "b": number}'),
        FunctionEntry("solveQuadratic", tools.solve_quadratic, 'solve ax² + bx + c = 0, PARAMS {"a": number, "b": number, "c": number}'),
        FunctionEntry("calculateDerivative", tools.calculate_derivative, 'differentiate a polynomial, PARAMS {"polynomial": "3x^2 + 2x + 1"}'),
    ],
    SpecialistId.PHYSICS: [
        FunctionEntry("getPhysicsConstant", tools.get_physics_constant, 'look up a constant, PARAMS {"name": "speed of light"}'),
        FunctionEntry("calculateForce", tools.calculate_force, 'F = ma, PARAMS {"mass": number, "acceleration": number}'),
        FunctionEntry("calculateKineticEnergy", tools.calculate_kinetic_energy, 'KE = ½mv², PARAMS {"mass": number, "velocity": number}'),
    ],
    SpecialistId.CHEMISTRY: [
        FunctionEntry("getElementInfo", tools.get_element_info, 'element facts, PARAMS {"element": "oxygen"}'),
        FunctionEntry("balanceSimpleEquation", tools.balance_simple_equation, 'balance a simple reaction, PARAMS {"equation": "H2 + O2 -> H2O"}'),
        FunctionEntry("calculateMolarMass", tools.calculate_molar_mass, 'molar mass of a formula, PARAMS {"compound": "H2O"}'),
    ],
    SpecialistId.BIOLOGY: [
        FunctionEntry("explainPhotosynthesis", tools.explain_photosynthesis, "explain photosynthesis, PARAMS {}"),
        FunctionEntry("describeCellDivision", tools.describe_cell_division, 'mitosis or meiosis, PARAMS {"type": "mitosis"}'),
        FunctionEntry("explainDNA", tools.explain_dna, "explain DNA structure, PARAMS {}"),
    ],
    SpecialistId.HISTORY: [
        FunctionEntry("getHistoricalEvent", tools.get_historical_event, 'event facts, PARAMS {"event": "moon landing"}'),
        FunctionEntry("compareTimePeriods", tools.compare_time_periods, 'compare two periods, PARAMS {"period1": "renaissance", "period2": "industrial revolution"}'),
    ],
    SpecialistId.LITERATURE: [
        FunctionEntry("analyzePoetryDevice", tools.analyze_poetry_device, 'explain a device, PARAMS {"device": "metaphor", "example": "..."}'),
        FunctionEntry("explainNarrative", tools.explain_narrative, 'narrative element, PARAMS {"element": "plot"}'),
    ],
    SpecialistId.CODING: [
        FunctionEntry("explainAlgorithm", tools.explain_algorithm, 'algorithm summary, PARAMS {"algorithm": "binary search"}'),
        FunctionEntry("debugCode", tools.debug_code, 'debugging hints, PARAMS {"language": "python", "error": "..."}'),
    ],
    SpecialistId.FINANCE: [
        FunctionEntry(
            "calculateCompoundInterest",
            tools.calculate_compound_interest,
            'PARAMS {"principal": number, "rate": percent, "time": years, "frequency": times per year}',
        ),
        FunctionEntry("calculateROI", tools.calculate_roi, 'return on investment, PARAMS {"gain": number, "cost": number}'),
    ],
    SpecialistId.HEALTH: [
        FunctionEntry("calculateBMI", tools.calculate_bmi, 'body mass index, PARAMS {"weight": kg, "height": metres}'),
        FunctionEntry("explainNutrient", tools.explain_nutrient, 'nutrient facts, PARAMS {"nutrient": "protein"}'),
    ],
}

_EMPTY: Mapping[str, FunctionEntry] = MappingProxyType({})


class FunctionRegistry:
    """Read-only lookup of FunctionEntry tables by specialist."""

    def __init__(self, tables: Mapping[SpecialistId, list[FunctionEntry]]) -> None:
        frozen: dict[SpecialistId, Mapping[str, FunctionEntry]] = {}
        for specialist in SpecialistId:
            entries = tables.get(specialist, [])
            table: dict[str, FunctionEntry] = {}
            for entry in entries:
                if entry.name in table:
                    raise ValueError(f"Duplicate function {entry.name!r} for specialist {specialist.value}")
                table[entry.name] = entry
            frozen[specialist] = MappingProxyType(table)
        self._tables = MappingProxyType(frozen)

    def specialists(self) -> list[SpecialistId]:
        return list(self._tables)

    def lookup(self, specialist: SpecialistId | str) -> Mapping[str, FunctionEntry]:
        """All functions for a specialist (empty for the coordinator or an unknown id)."""
        sid = parse_specialist_id(specialist)
        if sid is None:
            return _EMPTY
        return self._tables[sid]

    def resolve(self, specialist: SpecialistId | str, name: str) -> FunctionEntry | None:
        return self.lookup(specialist).get(name)

    def function_names(self, specialist: SpecialistId | str) -> list[str]:
        return list(self.lookup(specialist))


def build_default_registry() -> FunctionRegistry:
    registry = FunctionRegistry(FUNCTION_TABLES)
    logger.info(
        "[registry] built tables=%s",
        {sid.value: len(registry.lookup(sid)) for sid in registry.specialists()},
    )
    return registry


DEFAULT_REGISTRY = build_default_registry()
