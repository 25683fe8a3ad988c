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

"""Tests for statement and body validation."""

import pytest

from robotscript.ast import (
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
    IntegerLiteral,
    MessageMode,
    MessageStmt,
    Parameter,
    PassMode,
    Procedure,
    StateQueryExpr,
    StringLiteral,
    ValueType,
    VariableRef,
    WhileStmt,
)
from robotscript.results import ErrorCategory
from robotscript.statements import signature_table, validate_body, validate_statement

NUM = ValueType.NUMERIC
BOOL = ValueType.BOOLEAN

SCOPE = {"n": NUM, "flag": BOOL}
INSTANCES = ("r1", "r2")

PROCEDURES = signature_table(
    [
        Procedure("noop"),
        Procedure(
            "step",
            params=(
                Parameter(PassMode.BY_REFERENCE, "total", NUM),
                Parameter(PassMode.BY_VALUE, "done", BOOL),
            ),
        ),
    ]
)


def check(stmt, scope=SCOPE, instances=INSTANCES, procedures=PROCEDURES, **kwargs):
    return validate_statement(stmt, scope, instances, procedures, **kwargs)


class TestAssign:
    """Tests for assignments."""

    def test_valid(self):
        stmt = AssignStmt("n", BinaryExpr("*", VariableRef("n"), IntegerLiteral(2)))
        assert check(stmt).is_valid

    def test_undeclared_target(self):
        result = check(AssignStmt("y", IntegerLiteral(1)))
        assert result.category == ErrorCategory.INVALID_ASSIGNMENT
        assert result.context == "Invalid variable, 'y' was not declared"

    def test_type_mismatch(self):
        result = check(AssignStmt("n", BooleanLiteral(True)))
        assert result.context == (
            "Cannot assign a value of type boolean to a variable of type numero, "
            "in the assignment of variable 'n'"
        )

    def test_plus_boolean_literal(self):
        """x := 3 + V fails on the operator, not on the assignment."""
        result = check(AssignStmt("n", BinaryExpr("+", IntegerLiteral(3), BooleanLiteral(True))))
        assert result.category == ErrorCategory.INVALID_ASSIGNMENT
        assert result.context.startswith(
            "To use operator + the right operand must be of type numero"
        )


class TestControlFlow:
    """Tests for si, mientras and repetir."""

    def test_if_valid(self):
        stmt = IfStmt(VariableRef("flag"), AssignStmt("n", IntegerLiteral(1)))
        assert check(stmt).is_valid

    def test_if_numeric_condition(self):
        result = check(IfStmt(IntegerLiteral(1), BlockStmt()))
        assert result.category == ErrorCategory.INVALID_CONDITION_RESULT
        assert result.context == (
            "Invalid expression result, the condition of a si statement must evaluate to boolean"
        )

    def test_repetir_with_numeric_query(self):
        assert check(ForStmt(StateQueryExpr("PosAv"), BlockStmt())).is_valid

    def test_mientras_with_numeric_query(self):
        result = check(WhileStmt(StateQueryExpr("PosAv"), BlockStmt()))
        assert result.category == ErrorCategory.INVALID_CONDITION_RESULT
        assert "mientras statement must evaluate to boolean" in result.context

    def test_repetir_with_boolean(self):
        result = check(ForStmt(BooleanLiteral(True), BlockStmt()))
        assert "repetir statement must evaluate to numero" in result.context

    def test_condition_expression_error(self):
        result = check(WhileStmt(VariableRef("ghost"), BlockStmt()))
        assert result.category == ErrorCategory.INVALID_CONDITION
        assert result.context == (
            "Invalid variable, 'ghost' was not declared, in the condition declaration"
        )

    def test_body_error_propagates(self):
        stmt = WhileStmt(BooleanLiteral(True), BlockStmt((AssignStmt("ghost", IntegerLiteral(1)),)))
        result = check(stmt)
        assert result.context == "Invalid variable, 'ghost' was not declared"

    def test_else_body_is_validated(self):
        stmt = IfStmt(
            BooleanLiteral(True),
            BlockStmt(),
            else_body=AssignStmt("n", BooleanLiteral(False)),
        )
        result = check(stmt)
        assert result.category == ErrorCategory.INVALID_ASSIGNMENT
        assert result.context.endswith(", in the sino branch")

    def test_valid_else_body(self):
        stmt = IfStmt(BooleanLiteral(True), BlockStmt(), else_body=AssignStmt("n", IntegerLiteral(0)))
        assert check(stmt).is_valid


class TestInform:
    """Tests for Informar."""

    def test_message_only(self):
        assert check(InformStmt(StringLiteral("hello"))).is_valid

    def test_message_and_value(self):
        assert check(InformStmt(StringLiteral("n"), VariableRef("n"))).is_valid

    def test_expression_as_first_argument(self):
        assert check(InformStmt(VariableRef("flag"))).is_valid

    def test_undeclared_value(self):
        result = check(InformStmt(StringLiteral("x"), VariableRef("ghost")))
        assert result.category == ErrorCategory.INVALID_ARGUMENT
        assert result.context.endswith(", in the argument of Informar")

    def test_undeclared_first_argument(self):
        result = check(InformStmt(VariableRef("ghost")))
        assert "'ghost' was not declared" in result.context


class TestCoordinates:
    """Tests for Pos and the corner lock statements."""

    def test_pos_valid(self):
        stmt = ChangePositionStmt(BinaryExpr("+", StateQueryExpr("PosAv"), IntegerLiteral(1)), VariableRef("n"))
        assert check(stmt).is_valid

    def test_pos_boolean_y(self):
        result = check(ChangePositionStmt(IntegerLiteral(1), BooleanLiteral(True)))
        assert result.category == ErrorCategory.INVALID_ARGUMENT
        assert result.context == (
            "Invalid expression result, the y argument of Pos must evaluate to numero"
        )

    def test_block_corner_boolean_x(self):
        result = check(CornerStmt(CornerMode.BLOCK, VariableRef("flag"), IntegerLiteral(1)))
        assert "the x argument of BloquearEsquina" in result.context

    def test_free_corner_y_reports_y(self):
        result = check(CornerStmt(CornerMode.FREE, IntegerLiteral(1), VariableRef("q")))
        assert result.context == (
            "Invalid variable, 'q' was not declared, in the y coordinate of LiberarEsquina"
        )

    def test_corner_valid(self):
        assert check(CornerStmt(CornerMode.BLOCK, IntegerLiteral(4), IntegerLiteral(4))).is_valid


class TestMessages:
    """Tests for EnviarMensaje and RecibirMensaje."""

    def test_send_to_instance(self):
        assert check(MessageStmt(MessageMode.SEND, VariableRef("n"), "r2")).is_valid

    def test_broadcast(self):
        assert check(MessageStmt(MessageMode.RECEIVE, VariableRef("flag"), "*")).is_valid

    def test_unknown_target(self):
        result = check(MessageStmt(MessageMode.SEND, IntegerLiteral(1), "r9"))
        assert result.category == ErrorCategory.INVALID_ARGUMENT
        assert result.context == (
            "Instance 'r9' was not declared and is used as the target of EnviarMensaje"
        )

    def test_value_error(self):
        result = check(MessageStmt(MessageMode.RECEIVE, VariableRef("ghost"), "r1"))
        assert result.context.endswith(", in the value argument of RecibirMensaje")

    def test_instance_names_not_mutated(self):
        names = ["r1"]
        for _ in range(3):
            assert check(MessageStmt(MessageMode.SEND, IntegerLiteral(1), "*"), instances=names).is_valid
        assert names == ["r1"]

    def test_custom_broadcast_target(self):
        stmt = MessageStmt(MessageMode.SEND, IntegerLiteral(1), "all")
        assert check(stmt, broadcast_target="all").is_valid
        assert not check(MessageStmt(MessageMode.SEND, IntegerLiteral(1), "*"), broadcast_target="all").is_valid


class TestCalls:
    """Tests for procedure calls."""

    def test_no_arguments(self):
        assert check(CallStmt("noop")).is_valid

    def test_valid_call(self):
        stmt = CallStmt("step", (VariableRef("n"), BinaryExpr(">", VariableRef("n"), IntegerLiteral(3))))
        assert check(stmt).is_valid

    def test_unknown_procedure(self):
        result = check(CallStmt("ghost"))
        assert result.category == ErrorCategory.INVALID_CALL
        assert result.context == "Procedure 'ghost' was not declared"

    def test_too_few_arguments(self):
        result = check(CallStmt("step", (VariableRef("n"),)))
        assert result.context == (
            "Too few arguments in the call to procedure 'step': expected 2, got 1"
        )

    def test_too_many_arguments(self):
        result = check(CallStmt("noop", (IntegerLiteral(1),)))
        assert result.context == (
            "Too many arguments in the call to procedure 'noop': expected 0, got 1"
        )

    def test_literal_for_reference_parameter(self):
        """P(5) where the parameter is passed by reference."""
        result = check(CallStmt("step", (IntegerLiteral(5), BooleanLiteral(True))))
        assert result.category == ErrorCategory.INVALID_CALL
        assert result.context == (
            "Argument 1 in the call to procedure 'step' must be a variable because "
            "parameter 'total' is passed by reference"
        )

    def test_undeclared_reference_argument(self):
        result = check(CallStmt("step", (VariableRef("ghost"), BooleanLiteral(True))))
        assert result.context == (
            "Variable 'ghost' was not declared and is used in the call to procedure 'step'"
        )

    def test_reference_argument_type_mismatch(self):
        result = check(CallStmt("step", (VariableRef("flag"), BooleanLiteral(True))))
        assert result.context == (
            "Argument 1 in the call to procedure 'step' does not have the type of "
            "parameter 1 (numero) in the procedure declaration"
        )

    def test_value_argument_type_mismatch(self):
        result = check(CallStmt("step", (VariableRef("n"), IntegerLiteral(1))))
        assert "Argument 2" in result.context
        assert "parameter 2 (boolean)" in result.context

    def test_value_argument_expression_error(self):
        result = check(CallStmt("step", (VariableRef("n"), VariableRef("ghost"))))
        assert result.context == (
            "Invalid variable, 'ghost' was not declared, "
            "in argument 2 of the call to procedure 'step'"
        )

    def test_first_declaration_wins(self):
        table = signature_table(
            [Procedure("p"), Procedure("p", params=(Parameter(PassMode.BY_VALUE, "a", NUM),))]
        )
        assert table["p"].params == ()


class TestBody:
    """Tests for bodies and unknown nodes."""

    def test_empty_body(self):
        assert validate_body([], SCOPE, INSTANCES, PROCEDURES).is_valid

    def test_first_error_wins(self):
        body = [
            AssignStmt("n", IntegerLiteral(1)),
            AssignStmt("a", IntegerLiteral(1)),
            AssignStmt("b", IntegerLiteral(1)),
        ]
        result = validate_body(body, SCOPE, INSTANCES, PROCEDURES)
        assert result.context == "Invalid variable, 'a' was not declared"

    def test_nested_blocks_share_scope(self):
        body = [BlockStmt((BlockStmt((AssignStmt("flag", BooleanLiteral(False)),)),))]
        assert validate_body(body, SCOPE, INSTANCES, PROCEDURES).is_valid

    def test_unknown_statement_is_internal(self):
        result = check(IntegerLiteral(1))
        assert result.is_internal
        assert result.category == ErrorCategory.INTERNAL

    @pytest.mark.parametrize("query", ["PosX", "Unknown"])
    def test_unknown_query_inside_statement_is_internal(self, query):
        result = check(AssignStmt("n", StateQueryExpr(query)))
        assert result.is_internal
