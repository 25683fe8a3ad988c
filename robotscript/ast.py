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

"""RobotScript AST node definitions using dataclasses.

Nodes are frozen and hold tuples so a loaded program cannot be changed by
the validator or anything downstream of it.
"""

from dataclasses import dataclass, field


class ValueType:
    """Declared value types for variables, parameters and expressions."""

    NUMERIC = "numero"
    BOOLEAN = "boolean"

    ALL = (NUMERIC, BOOLEAN)


class AreaKind:
    """Occupancy policy of an area."""

    SHARED = "SHARED"
    SEMI_PRIVATE = "SEMI_PRIVATE"
    PRIVATE = "PRIVATE"

    ALL = (SHARED, SEMI_PRIVATE, PRIVATE)

    @classmethod
    def capacity(cls, kind: str, instance_count: int) -> int:
        """Maximum number of instances that may be assigned an area of *kind*."""
        if kind == cls.SHARED:
            return instance_count
        if kind == cls.SEMI_PRIVATE:
            return max(instance_count - 1, 1)
        return 1


class PassMode:
    """Parameter passing modes."""

    BY_VALUE = "E"
    BY_REFERENCE = "ES"

    ALL = (BY_VALUE, BY_REFERENCE)


class MessageMode:
    """Direction of a message statement."""

    SEND = "SEND"
    RECEIVE = "RECEIVE"

    ALL = (SEND, RECEIVE)

    @classmethod
    def keyword(cls, mode: str) -> str:
        """Source keyword for *mode*, used in diagnostics."""
        return "EnviarMensaje" if mode == cls.SEND else "RecibirMensaje"


class CornerMode:
    """Corner lock operations."""

    BLOCK = "BLOCK"
    FREE = "FREE"

    ALL = (BLOCK, FREE)

    @classmethod
    def keyword(cls, mode: str) -> str:
        """Source keyword for *mode*, used in diagnostics."""
        return "BloquearEsquina" if mode == cls.BLOCK else "LiberarEsquina"


class StateQuery:
    """Built-in state queries and the type each one returns."""

    AVENUE = "PosAv"
    STREET = "PosCa"
    FLOWER_AT_CORNER = "HayFlorEnLaEsquina"
    PAPER_AT_CORNER = "HayPapelEnLaEsquina"
    FLOWER_IN_BAG = "HayFlorEnLaBolsa"
    PAPER_IN_BAG = "HayPapelEnLaBolsa"

    NUMERIC = frozenset({AVENUE, STREET})
    BOOLEAN = frozenset({FLOWER_AT_CORNER, PAPER_AT_CORNER, FLOWER_IN_BAG, PAPER_IN_BAG})

    @classmethod
    def result_type(cls, name: str) -> str | None:
        """Return the value type produced by query *name*, or None if unknown."""
        if name in cls.NUMERIC:
            return ValueType.NUMERIC
        if name in cls.BOOLEAN:
            return ValueType.BOOLEAN
        return None


@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""


@dataclass(frozen=True)
class Point(ASTNode):
    """Grid point (avenue x, street y)."""

    x: int
    y: int


# Expressions
@dataclass(frozen=True)
class IntegerLiteral(ASTNode):
    """Integer literal."""

    value: int


@dataclass(frozen=True)
class BooleanLiteral(ASTNode):
    """Boolean literal (V / F)."""

    value: bool


@dataclass(frozen=True)
class StringLiteral(ASTNode):
    """String literal, only valid as the first argument of Informar."""

    value: str


@dataclass(frozen=True)
class VariableRef(ASTNode):
    """Reference to a local variable or parameter."""

    name: str


@dataclass(frozen=True)
class StateQueryExpr(ASTNode):
    """Call to a built-in state query such as PosAv."""

    name: str


@dataclass(frozen=True)
class UnaryExpr(ASTNode):
    """Unary operation: -expr or ~expr."""

    operator: str
    operand: "Expression"


@dataclass(frozen=True)
class BinaryExpr(ASTNode):
    """Binary operation: left op right."""

    operator: str
    left: "Expression"
    right: "Expression"


Expression = (
    BinaryExpr | UnaryExpr | IntegerLiteral | BooleanLiteral | VariableRef | StateQueryExpr
)


# Statements
@dataclass(frozen=True)
class AssignStmt(ASTNode):
    """Assignment: target := value"""

    target: str
    value: Expression


@dataclass(frozen=True)
class BlockStmt(ASTNode):
    """Nested statement block. Does not open a new scope."""

    body: tuple["Statement", ...] = ()


@dataclass(frozen=True)
class IfStmt(ASTNode):
    """si (condition) body [sino else_body]"""

    condition: Expression
    body: "Statement"
    else_body: "Statement | None" = None


@dataclass(frozen=True)
class ForStmt(ASTNode):
    """repetir count body. The condition is the iteration count."""

    condition: Expression
    body: "Statement"


@dataclass(frozen=True)
class WhileStmt(ASTNode):
    """mientras (condition) body"""

    condition: Expression
    body: "Statement"


@dataclass(frozen=True)
class InformStmt(ASTNode):
    """Informar(message [, value])"""

    message: StringLiteral | Expression
    value: Expression | None = None


@dataclass(frozen=True)
class ChangePositionStmt(ASTNode):
    """Pos(x, y)"""

    x: Expression
    y: Expression


@dataclass(frozen=True)
class MessageStmt(ASTNode):
    """EnviarMensaje / RecibirMensaje(value, target)"""

    mode: str
    value: Expression
    target: str


@dataclass(frozen=True)
class CornerStmt(ASTNode):
    """BloquearEsquina / LiberarEsquina(x, y)"""

    mode: str
    x: Expression
    y: Expression


@dataclass(frozen=True)
class CallStmt(ASTNode):
    """Procedure call: name(args)"""

    name: str
    args: tuple[Expression, ...] = ()


Statement = (
    AssignStmt
    | BlockStmt
    | IfStmt
    | ForStmt
    | WhileStmt
    | InformStmt
    | ChangePositionStmt
    | MessageStmt
    | CornerStmt
    | CallStmt
)


# Declarations
@dataclass(frozen=True)
class Variable(ASTNode):
    """Variable declaration: name: type"""

    name: str
    type: str


@dataclass(frozen=True)
class Parameter(ASTNode):
    """Procedure parameter: mode name: type"""

    mode: str
    name: str
    type: str

    @property
    def by_reference(self) -> bool:
        return self.mode == PassMode.BY_REFERENCE


@dataclass(frozen=True)
class Procedure(ASTNode):
    """Procedure declaration."""

    name: str
    params: tuple[Parameter, ...] = ()
    variables: tuple[Variable, ...] = ()
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class RobotType(ASTNode):
    """Robot type declaration."""

    name: str
    variables: tuple[Variable, ...] = ()
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Area(ASTNode):
    """Rectangular area from a (lower-left) to b (upper-right), inclusive."""

    name: str
    kind: str
    a: Point
    b: Point


@dataclass(frozen=True)
class Instance(ASTNode):
    """Robot instance: name bound to a robot type."""

    name: str
    robot_type: str


# Initialization
@dataclass(frozen=True)
class AreaAssignment(ASTNode):
    """AsignarArea(instance, area)"""

    instance: str
    area: str


@dataclass(frozen=True)
class ItemAssignment(ASTNode):
    """Initial inventory: one quantity for one or more item kinds."""

    instance: str
    items: tuple[str, ...]
    quantity: int


@dataclass(frozen=True)
class OriginAssignment(ASTNode):
    """Iniciar(instance, x, y)"""

    instance: str
    origin: Point


@dataclass(frozen=True)
class InitBlock(ASTNode):
    """Program-level initialization declarations."""

    areas: tuple[AreaAssignment, ...] = ()
    items: tuple[ItemAssignment, ...] = ()
    origins: tuple[OriginAssignment, ...] = ()


# Program (root)
@dataclass(frozen=True)
class Program(ASTNode):
    """Root AST node representing a RobotScript program."""

    name: str = ""
    procedures: tuple[Procedure, ...] = ()
    areas: tuple[Area, ...] = ()
    robot_types: tuple[RobotType, ...] = ()
    instances: tuple[Instance, ...] = ()
    init: InitBlock = field(default_factory=InitBlock)
