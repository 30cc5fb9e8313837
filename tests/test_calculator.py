"""Tests for the calculator evaluator."""

from __future__ import annotations

import pytest

from eduverse.calculator import UNDEFINED, Evaluator, format_result


@pytest.mark.parametrize(
    ("expression", "expected"),
    [
        ("1+2", "3"),
        ("7/2", "3.5"),
        ("2^10", "1024"),
        ("√(16)", "4"),
        ("3×4", "12"),
        ("1,5+1", "2.5"),
        ("-(2+3)*2", "-10"),
        ("10 % 4", "2"),
        ("1/3", "0.333333"),
        ("pi", "3.141593"),
        ("e", "2.718282"),
        ("ln(e)", "1"),
        ("log(1000)", "3"),
        ("sin(0)", "0"),
        ("cos(pi)", "-1"),
        ("cot(pi/4)", "1"),
        ("arcsin(1)", "1.570796"),
        ("arccot(1)", "0.785398"),
        ("cosh(0)", "1"),
        ("arsinh(0)", "0"),
        ("arcosh(1)", "0"),
        ("artanh(0.5)", "0.549306"),
        ("arcoth(2)", "0.549306"),
        ("exp(0)", "1"),
    ],
)
def test_evaluate(expression: str, expected: str) -> None:
    assert Evaluator().evaluate(expression) == expected


@pytest.mark.parametrize(
    "expression",
    [
        "",
        "1/0",
        "2+",
        "arcsin(2)",
        "arccos(-1.5)",
        "cot(0)",
        "coth(0)",
        "arcosh(0.5)",
        "artanh(1)",
        "arcoth(0.5)",
        "sqrt(-1)",
        "ln(0)",
        "10^400",
        "__import__('os')",
        "foo(1)",
        "max(1, 2)",
    ],
)
def test_invalid_expressions_are_undefined(expression: str) -> None:
    assert Evaluator().evaluate(expression) == UNDEFINED


def test_format_result_strips_trailing_zeros() -> None:
    assert format_result(2.5) == "2.5"
    assert format_result(100.0) == "100"
    assert format_result(-0.0000001) == "0"
