"""Coordinate expression evaluator.

Catalog coordinates are numbers or short expressions such as ``"sqrt(3)"``,
``"1/sind(36)"`` or ``"2*cosd(60)+1"``. Expressions are parsed with ``ast``
and walked against a closed whitelist; nothing is passed to ``eval``.

Grammar: numeric literals, ``+ - * / **``, unary ``+ -``, parentheses,
constants ``pi`` and ``e``, and the functions in ``_FUNCTIONS`` (the ``*d``
variants take degrees).
"""

from __future__ import annotations

import ast
import math
from collections.abc import Callable

from packing.catalog.errors import ExpressionError

_FUNCTIONS: dict[str, Callable[[float], float]] = {
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "abs": abs,
    "sind": lambda deg: math.sin(math.radians(deg)),
    "cosd": lambda deg: math.cos(math.radians(deg)),
    "tand": lambda deg: math.tan(math.radians(deg)),
}

_CONSTANTS: dict[str, float] = {"pi": math.pi, "e": math.e}

_BINARY_OPS: dict[type, Callable[[float, float], float]] = {
    ast.Add: lambda a, b: a + b,
    ast.Sub: lambda a, b: a - b,
    ast.Mult: lambda a, b: a * b,
    ast.Div: lambda a, b: a / b,
    ast.Pow: lambda a, b: a**b,
}

_UNARY_OPS: dict[type, Callable[[float], float]] = {
    ast.UAdd: lambda a: +a,
    ast.USub: lambda a: -a,
}


def _eval_node(node: ast.AST) -> float:
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionError(f"Unsupported literal {node.value!r}")
        return float(node.value)

    if isinstance(node, ast.Name):
        if node.id not in _CONSTANTS:
            raise ExpressionError(f"Unknown name '{node.id}'")
        return _CONSTANTS[node.id]

    if isinstance(node, ast.BinOp) and type(node.op) in _BINARY_OPS:
        result = _BINARY_OPS[type(node.op)](_eval_node(node.left), _eval_node(node.right))
        if isinstance(result, complex):
            raise ExpressionError(f"'{ast.unparse(node)}' has no real value")
        return result

    if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
        return _UNARY_OPS[type(node.op)](_eval_node(node.operand))

    if isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in _FUNCTIONS:
            raise ExpressionError(f"Unsupported function in '{ast.unparse(node)}'")
        if node.keywords or len(node.args) != 1:
            raise ExpressionError(f"{node.func.id}() takes exactly one argument")
        return float(_FUNCTIONS[node.func.id](_eval_node(node.args[0])))

    raise ExpressionError(f"Unsupported syntax: {type(node).__name__}")


def evaluate_expression(expr: str) -> float:
    """Evaluate an expression string to a float."""
    try:
        tree = ast.parse(expr.strip(), mode="eval")
    except SyntaxError as e:
        raise ExpressionError(f'Failed to parse expression "{expr}": {e.msg}') from e

    try:
        value = _eval_node(tree.body)
    except (ArithmeticError, ValueError) as e:
        if isinstance(e, ExpressionError):
            raise
        raise ExpressionError(f'Failed to evaluate expression "{expr}": {e}') from e

    if not math.isfinite(value):
        raise ExpressionError(f'Expression "{expr}" is not finite')
    return value


def evaluate_coordinate(value: str | int | float) -> float:
    """A catalog coordinate: numbers pass through, strings are evaluated."""
    if isinstance(value, bool):
        raise ExpressionError(f"Unsupported coordinate {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return evaluate_expression(value)
    raise ExpressionError(f"Unsupported coordinate {value!r}")
