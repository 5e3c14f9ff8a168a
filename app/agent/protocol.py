"""
Inter-agent text protocol: typed directives and the parser that produces them.

Model responses are line-oriented:

    TO_AGENT: <specialist_id>        (coordinator only)
    <forwarded query ...>

    TO_USER: <free text>

    EXECUTE_FUNCTION: <function_name> (specialist only)
    PARAMS: <JSON object>

The parser is total: anything it cannot recognise becomes a RespondToUser carrying
the raw text, so callers always get a usable directive.
"""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

logger = logging.getLogger(__name__)

TO_AGENT_PREFIX = "TO_AGENT:"
TO_USER_PREFIX = "TO_USER:"
EXECUTE_FUNCTION_PREFIX = "EXECUTE_FUNCTION:"
PARAMS_PREFIX = "PARAMS:"


class ParseContext(str, Enum):
    COORDINATOR = "coordinator"
    SPECIALIST = "specialist"


@dataclass(frozen=True)
class RespondToUser:
    text: str


@dataclass(frozen=True)
class DelegateToSpecialist:
    specialist: str
    forwarded_query: str


@dataclass(frozen=True)
class InvokeFunction:
    name: str
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze a private copy so the directive cannot change after parsing
        object.__setattr__(self, "params", MappingProxyType(dict(self.params or {})))

    def __hash__(self) -> int:
        return hash((self.name, json.dumps(dict(self.params), sort_keys=True, default=str)))


Directive = Union[RespondToUser, DelegateToSpecialist, InvokeFunction]


def _first_line(lines: list[str]) -> tuple[int, str]:
    """Index and stripped text of the first non-empty line; (-1, "") when there is none."""
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped:
            return i, stripped
    return -1, ""


def _parse_params(lines: list[str]) -> dict[str, Any]:
    """JSON object from the first PARAMS: line. Missing or malformed params become {}."""
    params_line = next((ln.strip() for ln in lines if ln.strip().startswith(PARAMS_PREFIX)), None)
    if params_line is None:
        logger.info("[protocol:params] no PARAMS line found; using empty params")
        return {}
    raw = params_line[len(PARAMS_PREFIX):].strip()
    if not raw:
        return {}
    try:
        params = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        logger.warning("[protocol:params] malformed PARAMS json=%r error=%s; using empty params", raw[:200], e)
        return {}
    if not isinstance(params, dict):
        logger.warning("[protocol:params] PARAMS is not a JSON object (got %s); using empty params", type(params).__name__)
        return {}
    return params


def parse_directive(raw_text: Any, context: ParseContext) -> Directive:
    """
    Parse one model response into exactly one Directive. Never raises.

    Rules, checked against the first non-empty line in order:
    TO_AGENT (coordinator only), TO_USER, EXECUTE_FUNCTION (specialist only),
    otherwise the whole raw text is a direct answer.
    """
    text = "" if raw_text is None else str(raw_text)
    lines = text.split("\n")
    idx, first = _first_line(lines)
    logger.debug("[protocol:parse] IN  context=%s first_line=%r", context.value, first[:100])

    if context == ParseContext.COORDINATOR and first.startswith(TO_AGENT_PREFIX):
        specialist = first[len(TO_AGENT_PREFIX):].strip()
        forwarded = "\n".join(lines[idx + 1:]).strip()
        logger.info("[protocol:parse] OUT delegate specialist=%r forwarded_len=%d", specialist, len(forwarded))
        return DelegateToSpecialist(specialist=specialist, forwarded_query=forwarded)

    if first.startswith(TO_USER_PREFIX):
        start = text.index(TO_USER_PREFIX) + len(TO_USER_PREFIX)
        answer = text[start:].strip()
        logger.info("[protocol:parse] OUT respond context=%s text_len=%d", context.value, len(answer))
        return RespondToUser(text=answer)

    if context == ParseContext.SPECIALIST and first.startswith(EXECUTE_FUNCTION_PREFIX):
        name = first[len(EXECUTE_FUNCTION_PREFIX):].strip()
        params = _parse_params(lines)
        logger.info("[protocol:parse] OUT invoke name=%r params=%r", name, params)
        return InvokeFunction(name=name, params=params)

    logger.info("[protocol:parse] no recognised format in %s response; treating as direct answer", context.value)
    return RespondToUser(text=text)
