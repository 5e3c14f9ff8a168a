"""
Tests for the function registry, the dispatcher and specialist prompts.
"""

import pytest

from app.agent.dispatcher import execute_function
from app.agent.prompts import COORDINATOR_SYSTEM_PROMPT, build_specialist_prompt
from app.agent.protocol import ParseContext, parse_directive
from app.agent.registry import DEFAULT_REGISTRY, FunctionEntry, FunctionRegistry
from app.agent.specialists import SpecialistId


class TestFunctionRegistry:

    def test_every_specialist_has_a_table(self) -> None:
        assert set(DEFAULT_REGISTRY.specialists()) == set(SpecialistId)

    def test_coordinator_has_no_functions(self) -> None:
        assert dict(DEFAULT_REGISTRY.lookup(SpecialistId.TUTOR)) == {}

    def test_domain_specialists_have_functions(self) -> None:
        for sid in SpecialistId:
            if sid is not SpecialistId.TUTOR:
                assert DEFAULT_REGISTRY.function_names(sid), sid

    def test_resolve_by_enum_or_string(self) -> None:
        entry = DEFAULT_REGISTRY.resolve(SpecialistId.MATH, "add")
        assert entry is not None and entry.name == "add"
        assert DEFAULT_REGISTRY.resolve("math", "add") is entry

    def test_resolve_unknown_returns_none(self) -> None:
        assert DEFAULT_REGISTRY.resolve(SpecialistId.MATH, "getPhysicsConstant") is None
        assert DEFAULT_REGISTRY.resolve("astrology", "add") is None

    def test_function_names_keep_declaration_order(self) -> None:
        assert DEFAULT_REGISTRY.function_names(SpecialistId.PHYSICS) == [
            "getPhysicsConstant",
            "calculateForce",
            "calculateKineticEnergy",
        ]

    def test_tables_are_read_only(self) -> None:
        table = DEFAULT_REGISTRY.lookup(SpecialistId.MATH)
        with pytest.raises(TypeError):
            table["evil"] = FunctionEntry("evil", lambda p: "")  # type: ignore[index]

    def test_duplicate_names_are_rejected(self) -> None:
        entry = FunctionEntry("add", lambda p: "x")
        with pytest.raises(ValueError):
            FunctionRegistry({SpecialistId.MATH: [entry, entry]})


class TestDispatcher:

    def test_add_returns_sum(self) -> None:
        out = execute_function(DEFAULT_REGISTRY, SpecialistId.MATH, "add", {"a": 2, "b": 3})
        assert "5" in out

    def test_unknown_function_is_reported_not_raised(self) -> None:
        out = execute_function(DEFAULT_REGISTRY, SpecialistId.MATH, "integrate", {})
        assert out == "Function 'integrate' not found for math agent."

    def test_function_of_other_specialist_is_not_found(self) -> None:
        out = execute_function(DEFAULT_REGISTRY, SpecialistId.HEALTH, "add", {"a": 1, "b": 2})
        assert "not found" in out

    def test_fault_is_wrapped_with_name_and_cause(self) -> None:
        def boom(params):
            raise RuntimeError("kaboom")

        registry = FunctionRegistry({SpecialistId.MATH: [FunctionEntry("boom", boom)]})
        assert execute_function(registry, SpecialistId.MATH, "boom", {}) == "Error executing boom: kaboom"

    def test_none_params_become_empty_mapping(self) -> None:
        seen = []
        registry = FunctionRegistry({SpecialistId.MATH: [FunctionEntry("echo", lambda p: seen.append(p) or "ok")]})
        assert execute_function(registry, "math", "echo", None) == "ok"
        assert seen == [{}]

    def test_malformed_params_still_invoke_function(self) -> None:
        directive = parse_directive("EXECUTE_FUNCTION: add\nPARAMS: {not json}", ParseContext.SPECIALIST)
        out = execute_function(DEFAULT_REGISTRY, SpecialistId.MATH, directive.name, directive.params)
        assert out == "Error: Both parameters must be numbers."


class TestPrompts:

    def test_specialist_prompt_lists_functions(self) -> None:
        functions = list(DEFAULT_REGISTRY.lookup(SpecialistId.CHEMISTRY).values())
        prompt = build_specialist_prompt(SpecialistId.CHEMISTRY, functions)
        assert "CHEMISTRY Specialist Agent" in prompt
        for name in ("getElementInfo", "balanceSimpleEquation", "calculateMolarMass"):
            assert f"- {name}:" in prompt
        assert "PARAMS: {}" in prompt

    def test_coordinator_prompt_lists_specialists_only(self) -> None:
        for sid in SpecialistId:
            if sid is not SpecialistId.TUTOR:
                assert f"- {sid.value}:" in COORDINATOR_SYSTEM_PROMPT
        assert "- tutor:" not in COORDINATOR_SYSTEM_PROMPT
