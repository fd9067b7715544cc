"""
Functional tests driven by the JSON cases in test_data/functional.

Each case holds an input schema in any dialect and the parts of the
compiled output it expects, or the name of the error it expects.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from kind_schema_to_openapi.pipeline import (
    CompilerConfig,
    GroupVersionKind,
    MalformedDialectError,
    PipelineGenerator,
    SchemaParseError,
)

ERRORS = {
    "MalformedDialectError": MalformedDialectError,
    "SchemaParseError": SchemaParseError,
}


def load_all_test_cases():
    """Load all test cases from all JSON files in test_data/functional directory."""
    functional_dir = Path(__file__).parent / "test_data" / "functional"
    test_cases = []

    for json_file in sorted(functional_dir.glob("*_tests.json")):
        with open(json_file) as f:
            data = json.load(f)

        for test_case in data:
            test_case["_source_file"] = json_file.name
            test_cases.append(test_case)

    return test_cases


def _generate(test_case):
    gvk = GroupVersionKind(
        group=test_case.get("group", "g"),
        version=test_case.get("version", "v1"),
        kind=test_case.get("kind", "Foo"),
    )
    config = CompilerConfig.from_dict(test_case.get("config", {}))
    return PipelineGenerator(test_case["schema"], gvk, test_case.get("prefix"), config).generate_dict()


@pytest.mark.parametrize("test_case", load_all_test_cases(), ids=lambda case: case["name"])
def test_functional_compilation(test_case):
    """Unified test for all JSON test cases using a single pattern."""
    if "expected_error" in test_case:
        with pytest.raises(ERRORS[test_case["expected_error"]]):
            _generate(test_case)
        return

    output = _generate(test_case)
    kind_name = f"{test_case.get('group', 'g')}/{test_case.get('version', 'v1')}.{test_case.get('kind', 'Foo')}"
    assert kind_name in output, f"Kind definition {kind_name} missing from {test_case['_source_file']}"
    assert f"{kind_name}List" in output

    for name, expected in test_case.get("expected_definitions", {}).items():
        assert output[name] == expected, f"Definition {name} does not match"

    for name, expected in test_case.get("expected_dependencies", {}).items():
        assert output[name].get("dependencies") == expected, f"Dependencies of {name} do not match"

    if "expected_required" in test_case:
        assert output[kind_name]["schema"]["required"] == test_case["expected_required"]
