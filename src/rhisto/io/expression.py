"""
Arithmetic expressions evaluated once per input row.

Columns are referenced as ``?N`` with ``N`` 1-based, e.g. ``?2 * 1000 + ?3``.
The expression is parsed with :mod:`ast` and checked against a whitelist of
operators, functions and constants before any row is evaluated.
"""

from __future__ import annotations

import ast
import math
import operator
import re
from collections.abc import Sequence

from ..core.errors import ExpressionError

_COLUMN_REF = re.compile(r"\?([0-9]+)")

_BINOPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: operator.mod,
    ast.Pow: lambda a, b: float(a) ** float(b),
}

_UNARYOPS = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# name -> (callable, arity as an int or inclusive range)
_FUNCS = {
    "abs": (abs, 1),
    "sqrt": (math.sqrt, 1),
    "exp": (math.exp, 1),
    "log": (math.log, (1, 2)),
    "log10": (math.log10, 1),
    "sin": (math.sin, 1),
    "cos": (math.cos, 1),
    "tan": (math.tan, 1),
    "floor": (math.floor, 1),
    "ceil": (math.ceil, 1),
    "round": (round, (1, 2)),
    "min": (min, (2, 16)),
    "max": (max, (2, 16)),
}

_CONSTANTS = {"pi": math.pi, "e": math.e}


def _arity_ok(expected, got: int) -> bool:
    if isinstance(expected, int):
        return got == expected
    lo, hi = expected
    return lo <= got <= hi


def _var_name(column: int) -> str:
    return f"_c{column}"


def _check(node: ast.AST, variables: set[str]) -> None:
    if isinstance(node, ast.Expression):
        _check(node.body, variables)
    elif isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionError(f"unsupported literal {node.value!r}")
    elif isinstance(node, ast.Name):
        if node.id not in variables and node.id not in _CONSTANTS:
            raise ExpressionError(f"unknown name '{node.id}'")
    elif isinstance(node, ast.BinOp):
        if type(node.op) not in _BINOPS:
            raise ExpressionError(f"unsupported operator {type(node.op).__name__}")
        _check(node.left, variables)
        _check(node.right, variables)
    elif isinstance(node, ast.UnaryOp):
        if type(node.op) not in _UNARYOPS:
            raise ExpressionError(f"unsupported operator {type(node.op).__name__}")
        _check(node.operand, variables)
    elif isinstance(node, ast.Call):
        if not isinstance(node.func, ast.Name) or node.func.id not in _FUNCS:
            raise ExpressionError(f"unsupported function call: {ast.unparse(node)}")
        if node.keywords:
            raise ExpressionError(f"keyword arguments are not supported: {node.func.id}")
        _, arity = _FUNCS[node.func.id]
        if not _arity_ok(arity, len(node.args)):
            raise ExpressionError(
                f"wrong number of arguments for {node.func.id}: {len(node.args)}"
            )
        for arg in node.args:
            _check(arg, variables)
    else:
        raise ExpressionError(f"unsupported syntax: {type(node).__name__}")


def _eval(node: ast.AST, env: dict[str, float]) -> float:
    if isinstance(node, ast.Expression):
        return _eval(node.body, env)
    if isinstance(node, ast.Constant):
        return node.value
    if isinstance(node, ast.Name):
        if node.id in env:
            return env[node.id]
        return _CONSTANTS[node.id]
    if isinstance(node, ast.BinOp):
        return _BINOPS[type(node.op)](_eval(node.left, env), _eval(node.right, env))
    if isinstance(node, ast.UnaryOp):
        return _UNARYOPS[type(node.op)](_eval(node.operand, env))
    func, _ = _FUNCS[node.func.id]
    return func(*(_eval(arg, env) for arg in node.args))


class RowExpression:
    """Compiled ``?N`` expression producing one sample per row."""

    def __init__(self, text: str):
        source = str(text or "").strip()
        if not source:
            raise ExpressionError("expression is empty")

        columns = []
        for match in _COLUMN_REF.finditer(source):
            column = int(match.group(1))
            if column not in columns:
                columns.append(column)
        if not columns:
            raise ExpressionError(
                f"expression '{source}' does not reference any ?N column"
            )

        rewritten = _COLUMN_REF.sub(lambda m: _var_name(int(m.group(1))), source)
        if "?" in rewritten:
            raise ExpressionError(f"'?' must be followed by a column index in '{source}'")
        try:
            tree = ast.parse(rewritten, mode="eval")
        except SyntaxError as exc:
            raise ExpressionError(f"invalid expression '{source}': {exc.msg}") from None

        self._variables = [_var_name(c) for c in columns]
        _check(tree, set(self._variables))

        self.text = source
        self.columns = tuple(columns)
        self._tree = tree

    def evaluate(self, values: Sequence[float]) -> float:
        """Evaluate with ``values`` bound to :attr:`columns` in order."""

        if len(values) != len(self.columns):
            raise ExpressionError(
                f"expected {len(self.columns)} column values, got {len(values)}"
            )
        env = dict(zip(self._variables, values))
        try:
            result = _eval(self._tree, env)
        except (ArithmeticError, TypeError, ValueError) as exc:
            raise ExpressionError(f"failed to evaluate '{self.text}': {exc}") from None
        if isinstance(result, complex):
            raise ExpressionError(f"'{self.text}' produced a complex result")
        return float(result)
