#!/usr/bin/env python3
"""
Ask the multi-agent tutor one question from the command line.

Uses the same model configuration as the API (OPENAI_API_KEY or HF_API_KEY from
the environment / .env). Run from project root:

    python scripts/ask.py "What is the speed of light?"
    python scripts/ask.py --call physics getPhysicsConstant '{"name": "planck constant"}'

--call skips the model and runs a specialist function directly.
"""

import argparse
import json
import sys
from pathlib import Path

# Project root on path so "app" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from app.agent.dispatcher import execute_function
from app.agent.graph import Orchestrator
from app.agent.llm import ModelClient
from app.agent.registry import DEFAULT_REGISTRY


def main() -> None:
    parser = argparse.ArgumentParser(description="Ask the multi-agent tutor a question.")
    parser.add_argument("question", nargs="*", help="Question text.")
    parser.add_argument(
        "--call",
        nargs=3,
        metavar=("SPECIALIST", "FUNCTION", "PARAMS_JSON"),
        help="Run a specialist function directly, without the model.",
    )
    args = parser.parse_args()

    if args.call:
        specialist, name, raw_params = args.call
        try:
            params = json.loads(raw_params)
        except json.JSONDecodeError as e:
            parser.error(f"PARAMS_JSON is not valid JSON: {e}")
        print(execute_function(DEFAULT_REGISTRY, specialist, name, params))
        return

    question = " ".join(args.question).strip()
    if not question:
        parser.error("a question is required")

    orchestrator = Orchestrator(ModelClient(), DEFAULT_REGISTRY)
    result = orchestrator.run(question)
    print(result.text)
    print(f"\n[{result.specialist.value}] model_calls={result.model_calls}")


if __name__ == "__main__":
    main()
