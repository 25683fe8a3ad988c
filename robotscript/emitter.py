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

"""RobotScript AST to JSON emitter.

Writes the same tagged format :mod:`robotscript.loader` reads, so a
validated program can be handed to the runtime as JSON.
"""

import json
from typing import Any

from .ast import (
    Area,
    AreaAssignment,
    AssignStmt,
    ASTNode,
    BinaryExpr,
    BlockStmt,
    BooleanLiteral,
    CallStmt,
    ChangePositionStmt,
    CornerStmt,
    ForStmt,
    IfStmt,
    InformStmt,
    InitBlock,
    Instance,
    IntegerLiteral,
    ItemAssignment,
    MessageStmt,
    OriginAssignment,
    Parameter,
    Point,
    Procedure,
    Program,
    RobotType,
    StateQueryExpr,
    StringLiteral,
    UnaryExpr,
    Variable,
    VariableRef,
    WhileStmt,
)
from .loader import PROGRAM_ENVELOPE


class JSONEmitter:
    """Converts RobotScript AST to the parser's JSON representation."""

    def __init__(self, indent: int | None = 2, envelope: bool = False):
        """Initialize emitter.

        Args:
            indent: JSON indentation (None for compact)
            envelope: Wrap programs in ``{"type": "PROGRAM", "value": ...}``
        """
        self.indent = indent
        self.envelope = envelope

    def emit(self, node: ASTNode) -> str:
        """Convert AST node to JSON string."""
        return json.dumps(self.emit_dict(node), indent=self.indent)

    def emit_dict(self, node: ASTNode) -> dict[str, Any]:
        """Convert AST node to dictionary."""
        data = self._convert(node)
        if self.envelope and isinstance(node, Program):
            return {"type": PROGRAM_ENVELOPE, "value": data}
        return data

    def _convert(self, node: Any) -> Any:
        """Convert a node to its JSON-serializable form."""
        if node is None:
            return None

        if isinstance(node, (list, tuple)):
            return [self._convert(item) for item in node]

        if isinstance(node, Program):
            return self._program(node)
        if isinstance(node, Procedure):
            return self._procedure(node)
        if isinstance(node, RobotType):
            return self._robot_type(node)
        if isinstance(node, Area):
            return self._area(node)
        if isinstance(node, Instance):
            return {"identifier": node.name, "type": node.robot_type}
        if isinstance(node, InitBlock):
            return self._init(node)
        if isinstance(node, Variable):
            return {"identifier": node.name, "type_value": node.type}
        if isinstance(node, Parameter):
            return {
                "type_parameter": node.mode,
                "identifier": node.name,
                "type_value": node.type,
            }
        if isinstance(node, Point):
            return {"x": node.x, "y": node.y}
        if isinstance(node, AreaAssignment):
            return {"identifier": node.instance, "type": node.area}
        if isinstance(node, ItemAssignment):
            return {"identifier": node.instance, "type": list(node.items), "value": node.quantity}
        if isinstance(node, OriginAssignment):
            return {"identifier": node.instance, "x": node.origin.x, "y": node.origin.y}

        # Statements
        if isinstance(node, AssignStmt):
            return {
                "type": "STATEMENT_ASSIGN",
                "identifier": node.target,
                "value": self._convert(node.value),
            }
        if isinstance(node, BlockStmt):
            return {"type": "STATEMENT_BLOCK", "body": self._convert(node.body)}
        if isinstance(node, IfStmt):
            data = {
                "type": "IF",
                "condition": self._convert(node.condition),
                "body": self._convert(node.body),
            }
            if node.else_body is not None:
                data["else_body"] = self._convert(node.else_body)
            return data
        if isinstance(node, ForStmt):
            return self._loop("FOR", node)
        if isinstance(node, WhileStmt):
            return self._loop("WHILE", node)
        if isinstance(node, InformStmt):
            return {
                "type": "INFORM",
                "arg1": self._convert(node.message),
                "arg2": self._convert(node.value) if node.value is not None else {},
            }
        if isinstance(node, ChangePositionStmt):
            return {
                "type": "CHANGE_POSITION",
                "x": self._convert(node.x),
                "y": self._convert(node.y),
            }
        if isinstance(node, MessageStmt):
            return {
                "type": "MESSAGE",
                "mode": node.mode,
                "value": self._convert(node.value),
                "who": node.target,
            }
        if isinstance(node, CornerStmt):
            return {
                "type": "CONTROL_CORNER",
                "mode": node.mode,
                "x": self._convert(node.x),
                "y": self._convert(node.y),
            }
        if isinstance(node, CallStmt):
            return {
                "type": "CALL_PROCEDURE",
                "identifier": node.name,
                "parameters": self._convert(node.args),
            }

        # Expressions
        if isinstance(node, BinaryExpr):
            return {
                "type": "BINARY_OPERATION",
                "operator": node.operator,
                "lhs": self._convert(node.left),
                "rhs": self._convert(node.right),
            }
        if isinstance(node, UnaryExpr):
            return {
                "type": "UNARY_OPERATION",
                "operator": node.operator,
                "rhs": self._convert(node.operand),
            }
        if isinstance(node, IntegerLiteral):
            return {"type": "LITERAL_INTEGER", "value": node.value}
        if isinstance(node, BooleanLiteral):
            return {"type": "LITERAL_BOOLEAN", "value": node.value}
        if isinstance(node, StringLiteral):
            return {"type": "STRING_LITERAL", "value": node.value}
        if isinstance(node, VariableRef):
            return {"type": "VARIABLE", "identifier": node.name}
        if isinstance(node, StateQueryExpr):
            return {"type": "STATE_METHOD", "identifier": node.name}

        raise ValueError(f"Unknown node type: {type(node)}")

    def _program(self, node: Program) -> dict:
        return {
            "NAME": {"type": "NAME", "identifier": node.name},
            "PROCEDURES": self._convert(node.procedures),
            "AREAS": self._convert(node.areas),
            "ROBOT_TYPES": self._convert(node.robot_types),
            "INSTANCES": self._convert(node.instances),
            "INITS": self._convert(node.init),
        }

    def _procedure(self, node: Procedure) -> dict:
        return {
            "identifier": node.name,
            "parameters": self._convert(node.params),
            "local_variables": self._convert(node.variables),
            "body": self._convert(node.body),
        }

    def _robot_type(self, node: RobotType) -> dict:
        return {
            "identifier": node.name,
            "local_variables": self._convert(node.variables),
            "body": self._convert(node.body),
        }

    def _area(self, node: Area) -> dict:
        return {
            "identifier": node.name,
            "type": node.kind,
            "a": self._convert(node.a),
            "b": self._convert(node.b),
        }

    def _init(self, node: InitBlock) -> dict:
        return {
            "assign_areas": self._convert(node.areas),
            "assign_items": self._convert(node.items),
            "assign_origins": self._convert(node.origins),
        }

    def _loop(self, tag: str, node: ForStmt | WhileStmt) -> dict:
        return {
            "type": tag,
            "condition": self._convert(node.condition),
            "body": self._convert(node.body),
        }


def emit_json(node: ASTNode, indent: int | None = 2) -> str:
    """Convenience function to emit JSON from AST."""
    return JSONEmitter(indent=indent).emit(node)


def emit_dict(node: ASTNode) -> dict[str, Any]:
    """Convenience function to emit dictionary from AST."""
    return JSONEmitter().emit_dict(node)
