"""Safe evaluation of scientific calculator expressions.

Expressions are parsed with :mod:`ast` and only arithmetic nodes, the constants
``pi``/``e`` and a fixed set of functions are accepted. Every numeric value is a
float so oversized powers overflow instead of growing without bound.
"""

from __future__ import annotations

import ast
import logging
import math
import operator
from typing import Callable, Mapping

LOGGER = logging.getLogger(__name__)

UNDEFINED = "Undefined"

_REPLACEMENTS = (("√", "sqrt"), ("×", "*"), ("÷", "/"), ("π", "pi"), (",", "."), ("^", "**"))

_CONSTANTS: Mapping[str, float] = {"pi": math.pi, "e": math.e}

_BINARY: Mapping[type, Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: math.fmod,
    ast.Pow: math.pow,
}

_UNARY: Mapping[type, Callable[[float], float]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _cot(x: float) -> float:
    _require(math.fmod(x, math.pi) != 0.0, "Invalid input for cotangent")
    return 1 / math.tan(x)


def _arcsin(x: float) -> float:
    _require(-1 <= x <= 1, "Input for arcsin must be between -1 and 1")
    return math.asin(x)


def _arccos(x: float) -> float:
    _require(-1 <= x <= 1, "Input for arccos must be between -1 and 1")
    return math.acos(x)


def _coth(x: float) -> float:
    _require(x != 0.0, "Invalid input for coth")
    return 1 / math.tanh(x)


def _arcosh(x: float) -> float:
    _require(x >= 1, "Input for arcosh must be >= 1")
    return math.log(x + math.sqrt(x * x - 1))


def _artanh(x: float) -> float:
    _require(-1 < x < 1, "Input for artanh must be between -1 and 1")
    return 0.5 * math.log((1 + x) / (1 - x))


def _arcoth(x: float) -> float:
    _require(x <= -1 or x >= 1, "Input for arcoth must be <= -1 or >= 1")
    return 0.5 * math.log((x + 1) / (x - 1))


FUNCTIONS: Mapping[str, Callable[[float], float]] = {
    "sqrt": math.sqrt,
    "exp": math.exp,
    "abs": abs,
    "ln": math.log,
    "log": math.log10,
    "rad": math.radians,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "cot": _cot,
    "arcsin": _arcsin,
    "arccos": _arccos,
    "arctan": math.atan,
    "arccot": lambda x: math.atan(1 / x),
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "coth": _coth,
    "arsinh": lambda x: math.log(x + math.sqrt(x * x + 1)),
    "arcosh": _arcosh,
    "artanh": _artanh,
    "arcoth": _arcoth,
}


class Evaluator:
    """Evaluate calculator input and format the result for display."""

    def evaluate(self, expression: str) -> str:
        """Return the formatted value of ``expression`` or ``"Undefined"``.

        The result keeps at most six decimals with trailing zeros removed.
        """
        try:
            value = self.compute(expression)
        except (ArithmeticError, RecursionError, SyntaxError, ValueError, TypeError) as exc:
            LOGGER.debug("Cannot evaluate %r: %s", expression, exc)
            return UNDEFINED
        return format_result(value)

    def compute(self, expression: str) -> float:
        """Return the raw value of ``expression``.

        Raises:
            SyntaxError: If the expression cannot be parsed.
            ValueError: If it uses unsupported syntax or leaves a function's domain.
            ArithmeticError: On division by zero or overflow.
        """
        source = expression
        for old, new in _REPLACEMENTS:
            source = source.replace(old, new)
        _require(bool(source.strip()), "Empty expression")
        tree = ast.parse(source.strip(), mode="eval")
        value = self._visit(tree.body)
        _require(math.isfinite(value), "Result is not a finite number")
        return value

    def _visit(self, node: ast.AST) -> float:
        if isinstance(node, ast.Constant) and type(node.value) in (int, float):
            return float(node.value)
        if isinstance(node, ast.Name) and node.id in _CONSTANTS:
            return _CONSTANTS[node.id]
        if isinstance(node, ast.BinOp) and type(node.op) in _BINARY:
            return _BINARY[type(node.op)](self._visit(node.left), self._visit(node.right))
        if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY:
            return _UNARY[type(node.op)](self._visit(node.operand))
        if (
            isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id in FUNCTIONS
            and len(node.args) == 1
            and not node.keywords
        ):
            return float(FUNCTIONS[node.func.id](self._visit(node.args[0])))
        raise ValueError(f"Unsupported element: {ast.dump(node)}")


def format_result(value: float) -> str:
    """Render ``value`` with up to six decimals, dropping trailing zeros."""
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


__all__ = ["Evaluator", "FUNCTIONS", "UNDEFINED", "format_result"]
