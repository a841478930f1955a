"""Evaluator tests: arithmetic, numeric semantics, and semantic errors."""

import math

import pytest

from calcengine.config import Settings
from calcengine.errors import (
    DivisionByZero,
    DomainError,
    NumericOverflow,
    ParseError,
    SemanticError,
)
from calcengine.evaluator import evaluate
from calcengine.models import BinaryOp, Literal, Operator, SquareRoot, UnaryMinus
from calcengine.parser import parse


def calc(text):
    return evaluate(parse(text, Settings()))


# --- Arithmetic ---

@pytest.mark.parametrize("text, expected", [
    ("2-3-4", -5),
    ("2^3^2", 512),
    ("2+3×4", 14),
    ("2×3^2", 18),
    ("15÷4", 3.75),
    ("(2+3)×4", 20),
    ("1÷(4)", 0.25),
    ("√16", 4),
    ("-√4", -2),
    ("--3", 3),
    ("-2^2", 4),
    ("2^-1", 0.5),
    ("3.", 3),
    (".5×4", 2),
    ("10-2×3+4÷2", 6),
    ("((2+3)×(4-1))", 15),
    ("(-8)^2", 64),
    ("", 0),
    ("0", 0),
])
def test_evaluates(text, expected):
    assert calc(text) == pytest.approx(expected)


def test_fractional_power():
    assert calc("8^(1÷3)") == pytest.approx(2.0)


def test_float_arithmetic_is_ieee_double():
    assert calc("0.1+0.2") == 0.1 + 0.2


def test_hand_built_tree():
    tree = BinaryOp(Operator.DIV, Literal(1.0), SquareRoot(UnaryMinus(UnaryMinus(Literal(16.0)))))
    assert evaluate(tree) == 0.25


def test_long_chain_does_not_recurse():
    assert calc("+".join(["1"] * 5000)) == 5000


# --- Properties ---

@pytest.mark.parametrize("text", [
    "2-3-4", "2^3^2", "2+3×4", "√(9)÷3", "-2^2", "1÷(3)", "2.5×-4+7",
])
def test_parenthesized_evaluates_identically(text):
    assert calc(f"({text})") == calc(text)


def test_evaluation_is_repeatable():
    tree = parse("√(2+7)×-3^2", Settings())
    first = evaluate(tree)
    assert evaluate(tree) == first
    assert evaluate(parse("√(2+7)×-3^2", Settings())) == first


def test_results_are_finite():
    for text in ("9^9^2", "1÷3×3", "√2×√2"):
        assert math.isfinite(calc(text))


# --- Semantic errors ---

@pytest.mark.parametrize("text", ["5÷0", "5÷(2-2)", "1÷-0", "0^-1"])
def test_division_by_zero(text):
    with pytest.raises(DivisionByZero):
        calc(text)


@pytest.mark.parametrize("text", ["√-9", "√(1-2)", "(-8)^(1÷2)", "(-1)^.5"])
def test_domain_error(text):
    with pytest.raises(DomainError):
        calc(text)


@pytest.mark.parametrize("text", ["10^400", "10^300×10^300", "9^9^9"])
def test_overflow(text):
    with pytest.raises(NumericOverflow):
        calc(text)


def test_semantic_and_structural_are_distinct():
    with pytest.raises(SemanticError):
        calc("5÷0")
    with pytest.raises(ParseError):
        calc("5÷")
    assert not issubclass(ParseError, SemanticError)


def test_unknown_node_type():
    with pytest.raises(TypeError):
        evaluate(object())
