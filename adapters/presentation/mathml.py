"""
Adapter: MathMLPresenter
Implementuje port Presenter — zamienia RenderedLine na element <math>.

  NumberToken         → <mn>
  IdentToken          → <mi>
  OperatorToken       → <mo>
  RowFragment         → <mrow>
  FractionFragment    → <mfrac>
  RadicalFragment     → <msqrt>
  SuperscriptFragment → <msup>
"""
from __future__ import annotations

import xml.etree.ElementTree as ET

from adapters.presentation._format import format_number
from contracts import (
    FractionFragment,
    FragmentItem,
    IdentToken,
    NumberToken,
    OperatorToken,
    RadicalFragment,
    RenderedLine,
    RowFragment,
    SuperscriptFragment,
)

MATHML_NS = "http://www.w3.org/1998/Math/MathML"


def _leaf(tag: str, text: str) -> ET.Element:
    el = ET.Element(tag)
    el.text = text
    return el


def _element(item: FragmentItem) -> ET.Element:
    if isinstance(item, NumberToken):
        return _leaf("mn", format_number(item.value))
    if isinstance(item, IdentToken):
        return _leaf("mi", item.text)
    if isinstance(item, OperatorToken):
        return _leaf("mo", item.text)
    if isinstance(item, RowFragment):
        row = ET.Element("mrow")
        row.extend(_element(child) for child in item.items)
        return row
    if isinstance(item, FractionFragment):
        frac = ET.Element("mfrac")
        frac.extend([_element(item.numerator), _element(item.denominator)])
        return frac
    if isinstance(item, RadicalFragment):
        sqrt = ET.Element("msqrt")
        sqrt.append(_element(item.radicand))
        return sqrt
    if isinstance(item, SuperscriptFragment):
        sup = ET.Element("msup")
        sup.extend([_element(item.base), _element(item.exponent)])
        return sup
    raise TypeError(f"Unknown fragment type: {type(item)}")


class MathMLPresenter:
    """Serializuje linie do MathML (jeden <math> na wynik)."""

    def __init__(self, css_class: str | None = "mb3") -> None:
        self._css_class = css_class

    def present(self, line: RenderedLine) -> str:
        math_el = ET.Element("math", {"xmlns": MATHML_NS})
        if self._css_class:
            math_el.set("class", self._css_class)
        math_el.extend(_element(item) for item in line.row.items)
        return ET.tostring(math_el, encoding="unicode")
