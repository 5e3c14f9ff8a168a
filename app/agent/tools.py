"""
Specialist functions: deterministic operations a specialist can invoke via EXECUTE_FUNCTION.

Every function takes the parsed PARAMS mapping and returns text for the user.
Functions validate their own inputs and return "Error: ..." text instead of raising.
"""

import logging
import math
import re
from typing import Any, Mapping

from app.data.reference import (
    ALGORITHMS,
    ATOMIC_MASSES,
    CELL_DIVISION,
    CHEMICAL_ELEMENTS,
    HISTORICAL_EVENTS,
    NARRATIVE_ELEMENTS,
    NUTRIENTS,
    PHYSICS_CONSTANTS,
    POETRY_DEVICES,
)

logger = logging.getLogger(__name__)

Params = Mapping[str, Any]


def _number(params: Params, key: str) -> float | int | None:
    """Numeric param or None. Booleans and numeric strings are not accepted."""
    value = (params or {}).get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def _text(params: Params, key: str) -> str:
    value = (params or {}).get(key)
    if value is None:
        return ""
    return str(value).strip()


def _fmt(value: float | int) -> str:
    """Render numbers without a trailing .0 for whole values (5.0 -> '5')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# --- math ---

def add(params: Params) -> str:
    a, b = _number(params, "a"), _number(params, "b")
    if a is None or b is None:
        return "Error: Both parameters must be numbers."
    return f"The sum of {_fmt(a)} and {_fmt(b)} is {_fmt(a + b)}."


def multiply(params: Params) -> str:
    a, b = _number(params, "a"), _number(params, "b")
    if a is None or b is None:
        return "Error: Both parameters must be numbers."
    return f"The product of {_fmt(a)} and {_fmt(b)} is {_fmt(a * b)}."


def solve_quadratic(params: Params) -> str:
    a, b, c = _number(params, "a"), _number(params, "b"), _number(params, "c")
    if a is None or b is None or c is None:
        return "Error: All coefficients must be numbers."
    if a == 0:
        return "Error: 'a' cannot be zero for a quadratic equation."
    equation = f"{_fmt(a)}x² + {_fmt(b)}x + {_fmt(c)} = 0"
    discriminant = b * b - 4 * a * c
    if discriminant < 0:
        return f"For equation {equation}, there are no real solutions (discriminant = {_fmt(discriminant)})."
    if discriminant == 0:
        x = -b / (2 * a)
        return f"For equation {equation}, there is one solution: x = {_fmt(x)}."
    root = math.sqrt(discriminant)
    x1 = (-b + root) / (2 * a)
    x2 = (-b - root) / (2 * a)
    return f"For equation {equation}, the solutions are: x₁ = {_fmt(x1)}, x₂ = {_fmt(x2)}."


_CONSTANT_TERM = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
_POWER_TERM = re.compile(r"^([+-]?\d*(?:\.\d+)?)\*?x(?:\^([+-]?\d+(?:\.\d+)?))?$")


def _differentiate_term(term: str) -> str:
    if _CONSTANT_TERM.match(term):
        return "0"
    match = _POWER_TERM.match(term)
    if not match:
        return f"Cannot differentiate: {term}"
    raw_coeff, raw_power = match.group(1), match.group(2)
    if raw_coeff in ("", "+"):
        coeff = 1.0
    elif raw_coeff == "-":
        coeff = -1.0
    else:
        coeff = float(raw_coeff)
    power = float(raw_power) if raw_power else 1.0
    if power == 0:
        return "0"
    new_coeff = coeff * power
    new_power = power - 1
    if new_coeff == 0:
        return "0"
    if new_power == 0:
        return _fmt(new_coeff)
    prefix = "" if new_coeff == 1 else "-" if new_coeff == -1 else _fmt(new_coeff)
    if new_power == 1:
        return f"{prefix}x"
    return f"{prefix}x^{_fmt(new_power)}"


def calculate_derivative(params: Params) -> str:
    """Differentiate a polynomial written as a sum of terms like 3x^2, -x, 5."""
    polynomial = _text(params, "polynomial")
    if not polynomial:
        return "Error: polynomial is required."
    compact = re.sub(r"\s+", "", polynomial)
    # Split on + and - that separate terms, but keep the sign of exponents (x^-2)
    terms = [t for t in re.split(r"(?<!\^)(?=[+-])", compact) if t not in ("", "+")]
    derived = [_differentiate_term(t.lstrip("+") or t) for t in terms]
    non_zero = [t for t in derived if t != "0"]
    result = " + ".join(non_zero).replace("+ -", "- ") if non_zero else "0"
    return f"The derivative of {polynomial} is {result}."


# --- physics ---

def get_physics_constant(params: Params) -> str:
    name = _text(params, "name")
    if not name:
        return "Error: name is required."
    constant = PHYSICS_CONSTANTS.get(name.lower())
    if constant:
        return (
            f"The {name.lower()} ({constant['symbol']}) is {constant['value']} {constant['unit']}. "
            f"Description: {constant['description']}"
        )
    known = ", ".join(PHYSICS_CONSTANTS)
    return f'Sorry, I don\'t have information for the constant "{name}". Known constants are: {known}.'


def calculate_force(params: Params) -> str:
    mass, acceleration = _number(params, "mass"), _number(params, "acceleration")
    if mass is None or acceleration is None:
        return "Error: Mass and acceleration must be numbers."
    force = mass * acceleration
    return (
        f"Using F = ma, the force is {_fmt(force)} N (Newtons). "
        f"Mass: {_fmt(mass)} kg, Acceleration: {_fmt(acceleration)} m/s²"
    )


def calculate_kinetic_energy(params: Params) -> str:
    mass, velocity = _number(params, "mass"), _number(params, "velocity")
    if mass is None or velocity is None:
        return "Error: Mass and velocity must be numbers."
    energy = 0.5 * mass * velocity ** 2
    return (
        f"Using KE = ½mv², the kinetic energy is {_fmt(energy)} J (Joules). "
        f"Mass: {_fmt(mass)} kg, Velocity: {_fmt(velocity)} m/s"
    )


# --- chemistry ---

def get_element_info(params: Params) -> str:
    element_name = _text(params, "element")
    if not element_name:
        return "Error: element is required."
    key = element_name.lower()
    element = CHEMICAL_ELEMENTS.get(key)
    if element:
        return (
            f"{key.capitalize()} ({element['symbol']}) - Atomic Number: {element['atomic_number']}, "
            f"Atomic Mass: {element['atomic_mass']} u. {element['description']}"
        )
    known = ", ".join(CHEMICAL_ELEMENTS)
    return f'Sorry, I don\'t have information for "{element_name}". Known elements: {known}.'


_KNOWN_REACTIONS = [
    ({"h2", "o2", "h2o"}, "2H₂ + O₂ → 2H₂O (Synthesis of water)"),
    ({"ch4", "o2", "co2", "h2o"}, "CH₄ + 2O₂ → CO₂ + 2H₂O (Combustion of methane)"),
    ({"na", "cl2", "nacl"}, "2Na + Cl₂ → 2NaCl (Synthesis of sodium chloride)"),
]


def balance_simple_equation(params: Params) -> str:
    equation = _text(params, "equation")
    if not equation:
        return "Error: equation is required."
    species = set(re.findall(r"[a-z][a-z0-9]*", equation.lower()))
    for required, balanced in _KNOWN_REACTIONS:
        if required <= species:
            return f"Balanced equation: {balanced}"
    return (
        "I can help balance simple equations. For complex balancing, please provide the specific equation. "
        f"Example provided: {equation}"
    )


_FORMULA_TOKEN = re.compile(r"([A-Z][a-z]?)(\d*)")


def _formula_counts(formula: str) -> list[tuple[str, int]] | None:
    """Element counts in order of appearance, or None if the formula has unknown parts."""
    counts: dict[str, int] = {}
    pos = 0
    for match in _FORMULA_TOKEN.finditer(formula):
        if match.start() != pos or match.group(1) not in ATOMIC_MASSES:
            return None
        counts[match.group(1)] = counts.get(match.group(1), 0) + int(match.group(2) or 1)
        pos = match.end()
    if pos != len(formula) or not counts:
        return None
    return list(counts.items())


def calculate_molar_mass(params: Params) -> str:
    compound = _text(params, "compound")
    if not compound:
        return "Error: compound is required."
    formula = compound.replace(" ", "")
    counts = _formula_counts(formula)
    if counts is None and formula.islower():
        formula = formula.upper()
        counts = _formula_counts(formula)
    if counts is None:
        return (
            f'I can calculate molar mass for basic compounds like H2O, CO2. For "{compound}", '
            "please provide the molecular formula."
        )
    total = sum(ATOMIC_MASSES[el] * n for el, n in counts)
    breakdown = " + ".join(f"({n} × {ATOMIC_MASSES[el]})" for el, n in counts)
    return f"Molar mass of {formula}: {breakdown} = {total:.3f} g/mol"


# --- biology ---

def explain_photosynthesis(params: Params) -> str:
    return (
        "Photosynthesis: 6CO₂ + 6H₂O + light energy → C₆H₁₂O₆ + 6O₂. Plants convert carbon dioxide and "
        "water into glucose and oxygen using sunlight and chlorophyll."
    )


def describe_cell_division(params: Params) -> str:
    division_type = _text(params, "type")
    explanation = CELL_DIVISION.get(division_type.lower())
    if explanation:
        return explanation
    return f"I can explain mitosis or meiosis. You asked about: {division_type or 'nothing specified'}"


def explain_dna(params: Params) -> str:
    return (
        "DNA (Deoxyribonucleic Acid): Double helix structure with four bases - Adenine (A), Thymine (T), "
        "Guanine (G), Cytosine (C). A pairs with T, G pairs with C. Stores genetic information."
    )


# --- history ---

def get_historical_event(params: Params) -> str:
    event_name = _text(params, "event")
    if not event_name:
        return "Error: event is required."
    event = HISTORICAL_EVENTS.get(event_name.lower())
    if event:
        return f"{event_name}: Occurred in {event['year']}. {event['description']}. Significance: {event['significance']}."
    known = ", ".join(HISTORICAL_EVENTS)
    return f'Sorry, I don\'t have information for "{event_name}". Known events: {known}.'


def compare_time_periods(params: Params) -> str:
    period1, period2 = _text(params, "period1"), _text(params, "period2")
    if not period1 or not period2:
        return "Error: period1 and period2 are required."
    lines = [f"Comparing {period1} and {period2}:"]
    for period in (period1, period2):
        event = HISTORICAL_EVENTS.get(period.lower())
        if event:
            lines.append(f"- {period} ({event['year']}): {event['description']}. {event['significance']}.")
    lines.append(
        "Both periods had significant cultural, political, and technological developments. "
        "Each shaped modern civilization in unique ways."
    )
    return "\n".join(lines)


# --- literature ---

def analyze_poetry_device(params: Params) -> str:
    device = _text(params, "device")
    if not device:
        return "Error: device is required."
    explanation = POETRY_DEVICES.get(device.lower(), "Literary device explanation not available")
    example = _text(params, "example")
    result = f"{device.lower().capitalize()}: {explanation}."
    if example:
        result += f' Your example: "{example}"'
    return result


def explain_narrative(params: Params) -> str:
    element = _text(params, "element")
    explanation = NARRATIVE_ELEMENTS.get(element.lower())
    if explanation:
        return explanation
    return f'Narrative element "{element}" - please specify plot, character, setting, or theme.'


# --- coding ---

def explain_algorithm(params: Params) -> str:
    algorithm = _text(params, "algorithm")
    explanation = ALGORITHMS.get(algorithm.lower())
    if explanation:
        return explanation
    return f'Algorithm "{algorithm}" - I can explain bubble sort, binary search, quick sort, merge sort.'


def debug_code(params: Params) -> str:
    language = _text(params, "language") or "code"
    error = _text(params, "error")
    if not error:
        return "Error: error message is required."
    lowered = error.lower()
    if "null" in lowered or "undefined" in lowered or "none" in lowered:
        return (
            f"Common {language} null/undefined error: Check if variables are initialized before use. "
            "Use optional chaining (?.) or null checks."
        )
    if "syntax" in lowered:
        return (
            f"{language} syntax error: Check for missing semicolons, brackets, or parentheses. "
            "Verify proper indentation and quotes."
        )
    return f'For {language} error "{error}": Check syntax, variable initialization, and logic flow. Use debugger or console logs.'


# --- finance ---

def calculate_compound_interest(params: Params) -> str:
    principal, rate, time = _number(params, "principal"), _number(params, "rate"), _number(params, "time")
    frequency = _number(params, "frequency")
    if "frequency" not in (params or {}):
        frequency = 1
    if principal is None or rate is None or time is None or frequency is None:
        return "Error: principal, rate, time and frequency must be numbers."
    if frequency <= 0:
        return "Error: frequency must be greater than zero."
    amount = principal * (1 + (rate / 100) / frequency) ** (frequency * time)
    interest = amount - principal
    return (
        f"Compound Interest: Principal: ${_fmt(principal)}, Rate: {_fmt(rate)}%, Time: {_fmt(time)} years, "
        f"Frequency: {_fmt(frequency)}/year. Final Amount: ${amount:.2f}, Interest Earned: ${interest:.2f}"
    )


def calculate_roi(params: Params) -> str:
    gain, cost = _number(params, "gain"), _number(params, "cost")
    if gain is None or cost is None:
        return "Error: gain and cost must be numbers."
    if cost == 0:
        return "Error: Cost cannot be zero."
    roi = ((gain - cost) / cost) * 100
    return (
        f"ROI = ((Gain - Cost) / Cost) × 100 = (({_fmt(gain)} - {_fmt(cost)}) / {_fmt(cost)}) × 100 = {roi:.2f}%"
    )


# --- health ---

def _bmi_category(bmi: float) -> str:
    if bmi < 18.5:
        return "Underweight"
    if bmi < 25:
        return "Normal weight"
    if bmi < 30:
        return "Overweight"
    return "Obese"


def calculate_bmi(params: Params) -> str:
    weight, height = _number(params, "weight"), _number(params, "height")
    if weight is None or height is None:
        return "Error: weight (kg) and height (m) must be numbers."
    if height <= 0 or weight <= 0:
        return "Error: weight and height must be greater than zero."
    bmi = weight / height ** 2
    return (
        f"BMI = {bmi:.1f} ({_bmi_category(bmi)}). Formula: weight(kg) / height²(m). "
        f"Weight: {_fmt(weight)}kg, Height: {_fmt(height)}m"
    )


def explain_nutrient(params: Params) -> str:
    nutrient = _text(params, "nutrient")
    explanation = NUTRIENTS.get(nutrient.lower())
    if explanation:
        return explanation
    return f'Nutrient "{nutrient}" - I can explain protein, carbohydrates, fats, vitamins, minerals.'
