"""
Dispatcher: resolve a function name in a specialist's table, run it, return text.

Unknown names and faults inside a function are normal outcomes here and come back
as descriptive text; nothing is raised to the caller.
"""

import logging
from typing import Any, Mapping

from app.agent.registry import FunctionRegistry
from app.agent.specialists import SpecialistId

logger = logging.getLogger(__name__)


def _label(specialist: SpecialistId | str) -> str:
    return specialist.value if isinstance(specialist, SpecialistId) else str(specialist)


def execute_function(
    registry: FunctionRegistry,
    specialist: SpecialistId | str,
    name: str,
    params: Mapping[str, Any] | None,
) -> str:
    """
    Execute a registered function by name with the given params. Returns a string result.
    """
    args = dict(params or {})
    agent = _label(specialist)
    logger.info("[dispatcher] execute_function agent=%s name=%r params=%r", agent, name, args)

    entry = registry.resolve(specialist, name)
    if entry is None:
        logger.info("[dispatcher] function %r not found for %s agent", name, agent)
        return f"Function '{name}' not found for {agent} agent."

    try:
        result = entry.handler(args)
    except Exception as e:
        logger.exception("[dispatcher] error executing %s", name)
        return f"Error executing {name}: {e}"

    result = "" if result is None else str(result)
    logger.info("[dispatcher] OUT name=%r result=%r", name, result[:100])
    return result
