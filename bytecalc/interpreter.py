"""
Bytecalc Interpreter

Evaluates arithmetic over digital storage quantities, e.g. '1 + 2 KiB + 3 MiB' or '1234 as KiB'.

Each interpret() call builds its own lexer, parser and tree and shares no state with other calls.
"""

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import EvalError, UnitError
from .expr import Binary, Expr, Grouping, Literal, TypeCast, Unary
from .parser import DEFAULT_MAX_NESTING, Parser
from .tokens import BinaryOperator
from .value import Value


class InterpreterConf:
    MAX_NESTING = DEFAULT_MAX_NESTING


interpreter_conf = InterpreterConf()


# Methods --------------------------------------------------------------------------------------------------------------

def interpret(text: str) -> Value:
    """
    Parse and evaluate one expression.

    Args:
        text: Expression source, e.g. '1 + 2 KiB'.

    Returns:
        Value: The magnitude and optional unit of the result.

    Raises:
        TypeError: If text is not a str.
        LexError: On an unexpected character or a malformed integer literal.
        ParseError: If text is not a single well-formed expression.
        EvalError: On multiplication of two unit values or division by a unit value.

    Examples:
        >>> str(interpret("1 + 2 KiB + 3 MiB"))
        '3075KiB'
        >>> str(interpret("1234 as KiB"))
        '1234KiB'
    """
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text).__name__}")
    expr = Parser(text, max_nesting=interpreter_conf.MAX_NESTING).parse()
    return evaluate(expr)


def evaluate(expr: Expr) -> Value:
    """
    Evaluate an expression tree.

    Only multiplication and division can fail; the resulting EvalError points at the operator token.
    """
    if isinstance(expr, Literal):
        return Value(float(expr.value), expr.full_unit)

    if isinstance(expr, Grouping):
        return evaluate(expr.expression)

    if isinstance(expr, Unary):
        return -evaluate(expr.right)

    if isinstance(expr, TypeCast):
        return evaluate(expr.left).convert_to(expr.full_unit)

    if isinstance(expr, Binary):
        # Chains like 1 + 2 + ... + n are left-deep, fold them bottom up in a loop
        spine = expr.left_spine()
        value = evaluate(spine[0].left)
        for node in spine:
            value = _apply(node, value, evaluate(node.right))
        return value

    raise TypeError(f"Expression node required, got {type(expr).__name__}")


def _apply(node: Binary, left: Value, right: Value) -> Value:
    operator = node.operator
    if operator is BinaryOperator.ADD:
        return left + right
    if operator is BinaryOperator.SUB:
        return left - right
    try:
        if operator is BinaryOperator.MUL:
            return left.try_mul(right)
        return left.try_div(right)
    except UnitError as err:
        raise EvalError(err.kind, node.token) from err
