"""Safe integer evaluation of synthesized expressions."""

from __future__ import annotations

import ast
import operator

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.LShift: operator.lshift,
    ast.RShift: operator.rshift,
    ast.BitAnd: operator.and_,
    ast.BitOr: operator.or_,
    ast.BitXor: operator.xor,
}


class ExpressionError(ValueError):
    """Raised for expressions outside the integer arithmetic/bitwise subset."""


def _exact_div(left: int, right: int) -> int:
    if right == 0:
        msg = "Division by zero"
        raise ExpressionError(msg)
    quotient, remainder = divmod(left, right)
    if remainder:
        msg = f"Inexact division {left} / {right}"
        raise ExpressionError(msg)
    return quotient


def _eval(node: ast.AST) -> int:
    if isinstance(node, ast.Expression):
        return _eval(node.body)
    if isinstance(node, ast.Constant) and type(node.value) is int:
        return node.value
    if isinstance(node, ast.BinOp):
        left, right = _eval(node.left), _eval(node.right)
        if isinstance(node.op, ast.Div):
            return _exact_div(left, right)
        op = _BINARY_OPS.get(type(node.op))
        if op is None:
            msg = f"Unsupported operator: {type(node.op).__name__}"
            raise ExpressionError(msg)
        if isinstance(node.op, (ast.LShift, ast.RShift)) and right < 0:
            msg = f"Negative shift count: {right}"
            raise ExpressionError(msg)
        return op(left, right)
    msg = f"Unsupported syntax: {type(node).__name__}"
    raise ExpressionError(msg)


def evaluate(expr: str) -> int:
    """Evaluate *expr* with standard operator precedence over integers.

    Only integer literals, parentheses and ``+ - * / << >> & | ^`` are
    accepted. ``/`` is exact integer division.

    Parameters
    ----------
    expr : str
        Expression text.

    Returns
    -------
    int

    Raises
    ------
    ExpressionError
        On a syntax error, a disallowed construct, or an inexact division.
    """
    try:
        tree = ast.parse(expr.strip(), mode="eval")
    except SyntaxError as exc:
        msg = f"Cannot parse expression: {expr!r}"
        raise ExpressionError(msg) from exc
    return _eval(tree)
