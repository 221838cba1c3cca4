import math

import pytest

from adapters.evaluator.stack_evaluator import StackEvaluator
from adapters.renderer.precedence_renderer import NestingTooDeep, PrecedenceRenderer
from contracts import (
    FractionFragment,
    IdentToken,
    NumberToken,
    OperatorToken,
    RadicalFragment,
    RowFragment,
    SuperscriptFragment,
)
from ports.renderer import Renderer


def N(value):
    return NumberToken(value=value)


def O(text):
    return OperatorToken(text=text)


def I(text):
    return IdentToken(text=text)


def R(*items):
    return RowFragment(items=list(items))


def P(*items):
    return R(O("("), *items, O(")"))


def _top(text):
    result = StackEvaluator().evaluate_text(text)
    return PrecedenceRenderer().render_node(result, result.top_level[-1])


def test_precedence_renderer_implements_port():
    assert isinstance(PrecedenceRenderer(), Renderer)


def test_sum_inside_product_is_parenthesized():
    assert _top("1 2 + 3 *") == R(P(N(1), O("+"), N(2)), O("×"), N(3))


def test_product_inside_sum_is_not_parenthesized():
    assert _top("1 2 * 3 +") == R(N(1), O("×"), N(2), O("+"), N(3))


def test_both_operands_wrapped_when_needed():
    assert _top("1 2 + 3 4 + *") == R(
        P(N(1), O("+"), N(2)), O("×"), P(N(3), O("+"), N(4)),
    )


def test_subtraction_is_left_associative():
    assert _top("1 2 - 3 -") == R(N(1), O("-"), N(2), O("-"), N(3))
    assert _top("1 2 3 - -") == R(N(1), O("-"), P(N(2), O("-"), N(3)))


def test_modulo_uses_glyph_and_multiplicative_precedence():
    assert _top("7 3 % 1 +") == R(N(7), O("mod"), N(3), O("+"), N(1))
    assert _top("7 3 1 + %") == R(N(7), O("mod"), P(N(3), O("+"), N(1)))


def test_division_never_parenthesizes_its_children():
    assert _top("1 2 + 3 /") == R(
        FractionFragment(numerator=R(N(1), O("+"), N(2)), denominator=R(N(3))),
    )


def test_fraction_is_atomic_inside_products():
    assert _top("1 2 / 3 *") == R(
        FractionFragment(numerator=R(N(1)), denominator=R(N(2))), O("×"), N(3),
    )


def test_radical_holds_child_unwrapped():
    assert _top("1 2 + sqrt") == R(RadicalFragment(radicand=R(N(1), O("+"), N(2))))


def test_power_wraps_low_precedence_base_only():
    assert _top("1 2 + 3 pow") == R(
        SuperscriptFragment(base=R(P(N(1), O("+"), N(2))), exponent=R(N(3))),
    )
    assert _top("2 1 2 + pow") == R(
        SuperscriptFragment(base=R(N(2)), exponent=R(N(1), O("+"), N(2))),
    )


def test_radical_as_power_base_is_wrapped():
    assert _top("4 sqrt 2 pow") == R(
        SuperscriptFragment(base=R(P(RadicalFragment(radicand=R(N(4))))), exponent=R(N(2))),
    )


def test_function_call_syntax():
    assert _top("0 sin") == R(I("sin"), O("("), N(0), O(")"))
    assert _top("1 2 + cos") == R(I("cos"), O("("), N(1), O("+"), N(2), O(")"))


def test_constant_renders_glyph():
    result = StackEvaluator().evaluate_text("PI")
    (line,) = PrecedenceRenderer().render(result)

    assert line.row == R(I("π"), O("="), N(math.pi))


def test_bind_and_references():
    result = StackEvaluator().evaluate_text("5 =x x x +")
    lines = PrecedenceRenderer().render(result)

    assert [line.index for line in lines] == [1, 4]
    assert lines[0].row == R(I("x"), O("≔"), N(5), O("="), N(5))
    assert lines[1].row == R(I("x"), O("+"), I("x"), O("="), N(10))


def test_bind_as_operand_is_parenthesized():
    assert _top("5 =x 3 +") == R(P(I("x"), O("≔"), N(5)), O("+"), N(3))


def test_chained_bind_source_is_not_wrapped():
    assert _top("5 =x =y") == R(I("y"), O("≔"), I("x"), O("≔"), N(5))


def test_negative_numbers_render_as_minus_and_magnitude():
    assert _top("-3 2 +") == R(R(O("-"), N(3)), O("+"), N(2))


def test_partial_result_is_renderable():
    result = StackEvaluator().evaluate_text("5 +")
    lines = PrecedenceRenderer().render(result)

    assert not result.ok
    assert [line.row for line in lines] == [R(N(5), O("="), N(5))]


def test_rendering_is_idempotent():
    result = StackEvaluator().evaluate_text("1 2 3 * 4 / - 5 + =y y 2 pow")
    renderer = PrecedenceRenderer()

    assert renderer.render(result) == renderer.render(result)


def test_each_node_is_built_once_per_render():
    built = []

    class CountingRenderer(PrecedenceRenderer):
        def _build(self, result, index, cache):
            built.append(index)
            return super()._build(result, index, cache)

    result = StackEvaluator().evaluate_text("2 3 + =s s s * s +")
    CountingRenderer().render(result)

    assert sorted(built) == list(range(len(result.nodes)))


def test_render_node_rejects_unknown_index():
    result = StackEvaluator().evaluate_text("1")

    with pytest.raises(IndexError):
        PrecedenceRenderer().render_node(result, 5)


def test_long_chains_render_without_deep_recursion():
    result = StackEvaluator().evaluate_text("1 " + "1 + " * 2000)
    (line,) = PrecedenceRenderer().render(result)

    assert line.value == 2001.0
    assert len(line.row.items) == 2 * 2001 + 1


def test_nesting_up_to_the_limit_renders():
    result = StackEvaluator().evaluate_text("1" + " 1 /" * 64)
    (line,) = PrecedenceRenderer(max_depth=64).render(result)

    assert line.value == 1.0
    assert isinstance(line.row.items[0], FractionFragment)
    line.model_dump_json()


def test_nesting_past_the_limit_is_rejected():
    result = StackEvaluator().evaluate_text("1" + " 1 /" * 101)

    with pytest.raises(NestingTooDeep) as exc:
        PrecedenceRenderer(max_depth=64).render(result)

    # "1 1 /" pairs: the fraction of depth d sits at node 2d
    assert exc.value.depth == 65
    assert exc.value.limit == 64
    assert exc.value.index == 130


def test_parentheses_count_towards_nesting():
    result = StackEvaluator().evaluate_text("1 2 + 3 *")

    with pytest.raises(NestingTooDeep):
        PrecedenceRenderer(max_depth=0).render(result)
    assert PrecedenceRenderer(max_depth=1).render(result)


def test_render_node_checks_only_the_requested_node():
    result = StackEvaluator().evaluate_text("1" + " 1 /" * 101)
    renderer = PrecedenceRenderer(max_depth=64)

    assert renderer.render_node(result, 2) == R(FractionFragment(numerator=R(N(1)), denominator=R(N(1))))
    with pytest.raises(NestingTooDeep):
        renderer.render_node(result, len(result.nodes) - 1)
