import math

from adapters.builtins import BUILTINS, Precedence, display, lookup


def test_lookup_returns_descriptor_or_none():
    plus = lookup("+")

    assert plus is not None
    assert plus.arity == 2
    assert plus.precedence == Precedence.ADDITIVE
    assert lookup("nope") is None


def test_display_uses_glyph_or_token_spelling():
    assert display(BUILTINS["*"]) == "×"
    assert display(BUILTINS["PI"]) == "π"
    assert display(BUILTINS["%"]) == "mod"
    assert display(BUILTINS["sqrt"]) == "sqrt"
    assert display(BUILTINS["-"]) == "-"


def test_constants_are_nullary():
    assert BUILTINS["PI"].arity == 0
    assert BUILTINS["PI"]() == math.pi
    assert BUILTINS["E"]() == math.e


def test_numeric_edge_cases_follow_ieee_instead_of_raising():
    assert BUILTINS["/"](1.0, 0.0) == math.inf
    assert BUILTINS["/"](-1.0, 0.0) == -math.inf
    assert math.isnan(BUILTINS["/"](0.0, 0.0))
    assert math.isnan(BUILTINS["sqrt"](-4.0))
    assert BUILTINS["log"](0.0) == -math.inf
    assert math.isnan(BUILTINS["%"](5.0, 0.0))
    assert BUILTINS["exp"](1000.0) == math.inf


def test_remainder_keeps_sign_of_dividend():
    assert BUILTINS["%"](7.0, 3.0) == 1.0
    assert BUILTINS["%"](-7.0, 3.0) == -1.0


def test_results_are_plain_floats():
    value = BUILTINS["pow"](2.0, 10.0)

    assert value == 1024.0
    assert type(value) is float
