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

"""Load RobotScript programs from the parser's JSON AST.

The upstream parser emits a tagged JSON tree. This module is the only
place that reads those tags; everything downstream works on the frozen
dataclasses from :mod:`robotscript.ast`. A node of the wrong shape is an
upstream defect and raises :class:`ASTFormatError` naming where it was.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .ast import (
    Area,
    AreaAssignment,
    AreaKind,
    AssignStmt,
    BinaryExpr,
    BlockStmt,
    BooleanLiteral,
    CallStmt,
    ChangePositionStmt,
    CornerMode,
    CornerStmt,
    ForStmt,
    IfStmt,
    InformStmt,
    InitBlock,
    Instance,
    IntegerLiteral,
    ItemAssignment,
    MessageMode,
    MessageStmt,
    OriginAssignment,
    Parameter,
    PassMode,
    Point,
    Procedure,
    Program,
    RobotType,
    StateQueryExpr,
    StringLiteral,
    UnaryExpr,
    ValueType,
    Variable,
    VariableRef,
    WhileStmt,
)

logger = logging.getLogger(__name__)

PROGRAM_ENVELOPE = "PROGRAM"


class ASTFormatError(Exception):
    """JSON AST that does not have the shape the parser promises."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        location = f" at {path}" if path else ""
        super().__init__(f"{message}{location}")


class ProgramLoader:
    """Builds :class:`Program` ASTs from parser output."""

    @staticmethod
    def load_file(path: str | Path) -> Program:
        """Load a program from a JSON file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ASTFormatError: If the content is not UTF-8 or not a well-formed AST
        """
        file_path = Path(path)
        logger.debug("Loading program AST from %s", file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ASTFormatError(f"Invalid UTF-8: {e.reason} at byte {e.start}") from e
        return ProgramLoader.load_text(text)

    @staticmethod
    def load_text(text: str) -> Program:
        """Load a program from JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ASTFormatError(
                f"Invalid JSON: {e.msg} (line {e.lineno}, column {e.colno})"
            ) from e
        return ProgramLoader.from_dict(data)

    @staticmethod
    def from_dict(data: Any) -> Program:
        """Load a program from an already decoded JSON value.

        Accepts the bare program object or the parser's
        ``{"type": "PROGRAM", "value": {...}}`` envelope.
        """
        if isinstance(data, dict) and data.get("type") == PROGRAM_ENVELOPE and "value" in data:
            data = data["value"]
        return _program(_mapping(data, "program"))


# =========================================================================
# Scalars
# =========================================================================


def _mapping(value: Any, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ASTFormatError(f"Expected an object, got {type(value).__name__}", path)
    return value


def _list(node: dict[str, Any], key: str, path: str, required: bool = True) -> list[Any]:
    if key not in node:
        if required:
            raise ASTFormatError(f"Missing key '{key}'", path)
        return []
    value = node[key]
    if not isinstance(value, list):
        raise ASTFormatError(f"Expected '{key}' to be a list", path)
    return value


def _str(node: dict[str, Any], key: str, path: str) -> str:
    value = node.get(key)
    if not isinstance(value, str):
        raise ASTFormatError(f"Expected '{key}' to be a string", path)
    return value


def _int(node: dict[str, Any], key: str, path: str) -> int:
    value = node.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ASTFormatError(f"Expected '{key}' to be an integer", path)
    return value


def _choice(node: dict[str, Any], key: str, allowed: tuple[str, ...], path: str) -> str:
    value = _str(node, key, path)
    if value not in allowed:
        raise ASTFormatError(f"Unexpected {key} '{value}', expected one of {list(allowed)}", path)
    return value


def _point(value: Any, path: str) -> Point:
    node = _mapping(value, path)
    return Point(_int(node, "x", path), _int(node, "y", path))


# =========================================================================
# Declarations
# =========================================================================


def _program(node: dict[str, Any]) -> Program:
    name = ""
    if isinstance(node.get("NAME"), dict):
        name = node["NAME"].get("identifier", "") or ""

    return Program(
        name=name,
        procedures=tuple(
            _procedure(_mapping(p, f"PROCEDURES[{i}]"), f"PROCEDURES[{i}]")
            for i, p in enumerate(_list(node, "PROCEDURES", "program", required=False))
        ),
        areas=tuple(
            _area(_mapping(a, f"AREAS[{i}]"), f"AREAS[{i}]")
            for i, a in enumerate(_list(node, "AREAS", "program", required=False))
        ),
        robot_types=tuple(
            _robot_type(_mapping(r, f"ROBOT_TYPES[{i}]"), f"ROBOT_TYPES[{i}]")
            for i, r in enumerate(_list(node, "ROBOT_TYPES", "program", required=False))
        ),
        instances=tuple(
            _instance(_mapping(r, f"INSTANCES[{i}]"), f"INSTANCES[{i}]")
            for i, r in enumerate(_list(node, "INSTANCES", "program", required=False))
        ),
        init=_init(_mapping(node.get("INITS", {}), "INITS")),
    )


def _variables(node: dict[str, Any], path: str) -> tuple[Variable, ...]:
    variables = []
    for i, raw in enumerate(_list(node, "local_variables", path, required=False)):
        var_path = f"{path}.local_variables[{i}]"
        var = _mapping(raw, var_path)
        variables.append(
            Variable(
                name=_str(var, "identifier", var_path),
                type=_choice(var, "type_value", ValueType.ALL, var_path),
            )
        )
    return tuple(variables)


def _body(node: dict[str, Any], path: str) -> tuple:
    return tuple(
        _statement(raw, f"{path}.body[{i}]") for i, raw in enumerate(_list(node, "body", path))
    )


def _procedure(node: dict[str, Any], path: str) -> Procedure:
    params = []
    for i, raw in enumerate(_list(node, "parameters", path, required=False)):
        param_path = f"{path}.parameters[{i}]"
        param = _mapping(raw, param_path)
        params.append(
            Parameter(
                mode=_choice(param, "type_parameter", PassMode.ALL, param_path),
                name=_str(param, "identifier", param_path),
                type=_choice(param, "type_value", ValueType.ALL, param_path),
            )
        )
    return Procedure(
        name=_str(node, "identifier", path),
        params=tuple(params),
        variables=_variables(node, path),
        body=_body(node, path),
    )


def _robot_type(node: dict[str, Any], path: str) -> RobotType:
    return RobotType(
        name=_str(node, "identifier", path),
        variables=_variables(node, path),
        body=_body(node, path),
    )


def _area(node: dict[str, Any], path: str) -> Area:
    return Area(
        name=_str(node, "identifier", path),
        kind=_choice(node, "type", AreaKind.ALL, path),
        a=_point(node.get("a"), f"{path}.a"),
        b=_point(node.get("b"), f"{path}.b"),
    )


def _instance(node: dict[str, Any], path: str) -> Instance:
    return Instance(name=_str(node, "identifier", path), robot_type=_str(node, "type", path))


def _init(node: dict[str, Any]) -> InitBlock:
    areas = []
    for i, raw in enumerate(_list(node, "assign_areas", "INITS", required=False)):
        path = f"INITS.assign_areas[{i}]"
        item = _mapping(raw, path)
        areas.append(AreaAssignment(_str(item, "identifier", path), _str(item, "type", path)))

    items = []
    for i, raw in enumerate(_list(node, "assign_items", "INITS", required=False)):
        path = f"INITS.assign_items[{i}]"
        item = _mapping(raw, path)
        kinds = _list(item, "type", path)
        if not all(isinstance(kind, str) for kind in kinds):
            raise ASTFormatError("Expected 'type' to be a list of strings", path)
        items.append(
            ItemAssignment(
                instance=_str(item, "identifier", path),
                items=tuple(kinds),
                quantity=_int(item, "value", path),
            )
        )

    origins = []
    for i, raw in enumerate(_list(node, "assign_origins", "INITS", required=False)):
        path = f"INITS.assign_origins[{i}]"
        item = _mapping(raw, path)
        origins.append(
            OriginAssignment(
                instance=_str(item, "identifier", path),
                origin=Point(_int(item, "x", path), _int(item, "y", path)),
            )
        )

    return InitBlock(areas=tuple(areas), items=tuple(items), origins=tuple(origins))


# =========================================================================
# Statements
# =========================================================================


def _statement(raw: Any, path: str):
    node = _mapping(raw, path)
    tag = node.get("type")

    if tag == "STATEMENT_ASSIGN":
        return AssignStmt(
            target=_str(node, "identifier", path),
            value=_expression(node.get("value"), f"{path}.value"),
        )
    if tag == "STATEMENT_BLOCK":
        return BlockStmt(body=_body(node, path))
    if tag == "IF":
        else_body = node.get("else_body")
        return IfStmt(
            condition=_expression(node.get("condition"), f"{path}.condition"),
            body=_statement(node.get("body"), f"{path}.body"),
            else_body=_statement(else_body, f"{path}.else_body") if else_body else None,
        )
    if tag == "FOR":
        return ForStmt(
            condition=_expression(node.get("condition"), f"{path}.condition"),
            body=_statement(node.get("body"), f"{path}.body"),
        )
    if tag == "WHILE":
        return WhileStmt(
            condition=_expression(node.get("condition"), f"{path}.condition"),
            body=_statement(node.get("body"), f"{path}.body"),
        )
    if tag == "INFORM":
        return _inform(node, path)
    if tag == "CHANGE_POSITION":
        return ChangePositionStmt(
            x=_expression(node.get("x"), f"{path}.x"),
            y=_expression(node.get("y"), f"{path}.y"),
        )
    if tag == "MESSAGE":
        return MessageStmt(
            mode=_choice(node, "mode", MessageMode.ALL, path),
            value=_expression(node.get("value"), f"{path}.value"),
            target=_str(node, "who", path),
        )
    if tag == "CONTROL_CORNER":
        return CornerStmt(
            mode=_choice(node, "mode", CornerMode.ALL, path),
            x=_expression(node.get("x"), f"{path}.x"),
            y=_expression(node.get("y"), f"{path}.y"),
        )
    if tag == "CALL_PROCEDURE":
        return CallStmt(
            name=_str(node, "identifier", path),
            args=tuple(
                _expression(arg, f"{path}.parameters[{i}]")
                for i, arg in enumerate(_list(node, "parameters", path, required=False))
            ),
        )

    raise ASTFormatError(f"Unknown statement type {tag!r}", path)


def _inform(node: dict[str, Any], path: str) -> InformStmt:
    first = _mapping(node.get("arg1"), f"{path}.arg1")
    if first.get("type") == "STRING_LITERAL":
        message = StringLiteral(_str(first, "value", f"{path}.arg1"))
    else:
        message = _expression(first, f"{path}.arg1")

    # The parser emits an empty object when the second argument is absent
    second = node.get("arg2")
    value = _expression(second, f"{path}.arg2") if second else None
    return InformStmt(message=message, value=value)


# =========================================================================
# Expressions
# =========================================================================


def _expression(raw: Any, path: str):
    node = _mapping(raw, path)
    tag = node.get("type")

    if tag == "BINARY_OPERATION":
        return BinaryExpr(
            operator=_str(node, "operator", path),
            left=_expression(node.get("lhs"), f"{path}.lhs"),
            right=_expression(node.get("rhs"), f"{path}.rhs"),
        )
    if tag == "UNARY_OPERATION":
        return UnaryExpr(
            operator=_str(node, "operator", path),
            operand=_expression(node.get("rhs"), f"{path}.rhs"),
        )
    if tag == "LITERAL_INTEGER":
        return IntegerLiteral(_int(node, "value", path))
    if tag == "LITERAL_BOOLEAN":
        value = node.get("value")
        if not isinstance(value, bool):
            raise ASTFormatError("Expected 'value' to be a boolean", path)
        return BooleanLiteral(value)
    if tag == "VARIABLE":
        return VariableRef(_str(node, "identifier", path))
    if tag == "STATE_METHOD":
        return StateQueryExpr(_str(node, "identifier", path))

    raise ASTFormatError(f"Unknown expression type {tag!r}", path)


def load_program(data: Any) -> Program:
    """Convenience function to load a program from decoded JSON."""
    return ProgramLoader.from_dict(data)
