# Copyright 2025 Ralph Lemke
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Shared fixtures for RobotScript tests."""

import copy
import json

import pytest

# One robot type, one instance, one shared area, everything initialized.
MINIMAL_PROGRAM = {
    "NAME": {"type": "NAME", "identifier": "demo"},
    "PROCEDURES": [
        {
            "identifier": "collect",
            "parameters": [
                {"type_parameter": "ES", "identifier": "total", "type_value": "numero"},
            ],
            "local_variables": [],
            "body": [
                {
                    "type": "IF",
                    "condition": {"type": "STATE_METHOD", "identifier": "HayFlorEnLaEsquina"},
                    "body": {
                        "type": "STATEMENT_ASSIGN",
                        "identifier": "total",
                        "value": {
                            "type": "BINARY_OPERATION",
                            "operator": "+",
                            "lhs": {"type": "VARIABLE", "identifier": "total"},
                            "rhs": {"type": "LITERAL_INTEGER", "value": 1},
                        },
                    },
                },
            ],
        },
    ],
    "AREAS": [
        {
            "identifier": "city",
            "type": "SHARED",
            "a": {"x": 1, "y": 1},
            "b": {"x": 10, "y": 10},
        },
    ],
    "ROBOT_TYPES": [
        {
            "identifier": "collector",
            "local_variables": [{"identifier": "count", "type_value": "numero"}],
            "body": [
                {
                    "type": "STATEMENT_ASSIGN",
                    "identifier": "count",
                    "value": {"type": "LITERAL_INTEGER", "value": 0},
                },
                {
                    "type": "CALL_PROCEDURE",
                    "identifier": "collect",
                    "parameters": [{"type": "VARIABLE", "identifier": "count"}],
                },
                {
                    "type": "INFORM",
                    "arg1": {"type": "STRING_LITERAL", "value": "flowers"},
                    "arg2": {"type": "VARIABLE", "identifier": "count"},
                },
            ],
        },
    ],
    "INSTANCES": [{"identifier": "r1", "type": "collector"}],
    "INITS": {
        "assign_areas": [{"identifier": "r1", "type": "city"}],
        "assign_items": [{"identifier": "r1", "type": ["flower"], "value": 3}],
        "assign_origins": [{"identifier": "r1", "x": 3, "y": 3}],
    },
}


@pytest.fixture
def program_data():
    """A minimal valid program in the parser's JSON format."""
    return copy.deepcopy(MINIMAL_PROGRAM)


@pytest.fixture
def program_file(tmp_path, program_data):
    """The minimal program written to a JSON file."""
    path = tmp_path / "program.json"
    path.write_text(json.dumps(program_data))
    return path
