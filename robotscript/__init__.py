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

"""RobotScript static semantic validator package."""

from .ast import (
    Area,
    AreaAssignment,
    AreaKind,
    AssignStmt,
    ASTNode,
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
    StateQuery,
    StateQueryExpr,
    StringLiteral,
    UnaryExpr,
    ValueType,
    Variable,
    VariableRef,
    WhileStmt,
)
from .config import GridConfig, RobotScriptConfig, ValidatorConfig, load_config
from .emitter import JSONEmitter, emit_dict, emit_json
from .loader import ASTFormatError, ProgramLoader, load_program
from .results import ErrorCategory, ExpressionResult, ValidationError, ValidationResult
from .validator import RobotScriptValidator, validate

__version__ = "0.1.0"

__all__ = [
    # Loader
    "ProgramLoader",
    "ASTFormatError",
    "load_program",
    # Emitter
    "JSONEmitter",
    "emit_json",
    "emit_dict",
    # Validator
    "RobotScriptValidator",
    "ValidationResult",
    "ValidationError",
    "ExpressionResult",
    "ErrorCategory",
    "validate",
    # Configuration
    "RobotScriptConfig",
    "GridConfig",
    "ValidatorConfig",
    "load_config",
    # Constants
    "AreaKind",
    "ValueType",
    "PassMode",
    "MessageMode",
    "CornerMode",
    "StateQuery",
    # AST nodes
    "ASTNode",
    "Point",
    "IntegerLiteral",
    "BooleanLiteral",
    "StringLiteral",
    "VariableRef",
    "StateQueryExpr",
    "UnaryExpr",
    "BinaryExpr",
    "AssignStmt",
    "BlockStmt",
    "IfStmt",
    "ForStmt",
    "WhileStmt",
    "InformStmt",
    "ChangePositionStmt",
    "MessageStmt",
    "CornerStmt",
    "CallStmt",
    "Variable",
    "Parameter",
    "Procedure",
    "RobotType",
    "Area",
    "Instance",
    "AreaAssignment",
    "ItemAssignment",
    "OriginAssignment",
    "InitBlock",
    "Program",
]
