"""
Adapter: builtin registry
Stała tablica operatorów i funkcji dostępnych w programach RPN.

Każdy wpis: nazwa, arność, funkcja numeryczna, opcjonalny glif do wyświetlania
oraz klasa precedencji używana przez renderer.

Arytmetyka idzie przez ufunc-i numpy z wyciszonymi błędami zmiennoprzecinkowymi,
więc dzielenie przez zero, sqrt(-1) czy log(0) dają inf/NaN zgodnie z IEEE-754
zamiast wyjątków.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping, Optional

import numpy as np


class Precedence(str, Enum):
    ADDITIVE = "additive"              # a + b
    MULTIPLICATIVE = "multiplicative"  # a × b
    FRACTION = "fraction"              # a over b
    RADICAL = "radical"                # √a
    POWER = "power"                    # a^b
    CALL = "call"                      # name(a, b) / name


@dataclass(frozen=True)
class Builtin:
    name: str
    arity: int
    fn: Callable[..., float]
    glyph: Optional[str] = None
    precedence: Precedence = Precedence.CALL

    def __call__(self, *args: float) -> float:
        with np.errstate(all="ignore"):
            return float(self.fn(*(float(a) for a in args)))


def _constant(value: float) -> Callable[[], float]:
    return lambda: value


_TABLE = [
    Builtin("+", 2, np.add, precedence=Precedence.ADDITIVE),
    Builtin("-", 2, np.subtract, precedence=Precedence.ADDITIVE),
    Builtin("*", 2, np.multiply, glyph="×", precedence=Precedence.MULTIPLICATIVE),
    # remainder keeps the sign of the dividend
    Builtin("%", 2, np.fmod, glyph="mod", precedence=Precedence.MULTIPLICATIVE),
    Builtin("/", 2, np.true_divide, precedence=Precedence.FRACTION),
    Builtin("sqrt", 1, np.sqrt, precedence=Precedence.RADICAL),
    Builtin("pow", 2, np.power, precedence=Precedence.POWER),
    Builtin("abs", 1, np.abs),
    Builtin("sin", 1, np.sin),
    Builtin("cos", 1, np.cos),
    Builtin("tan", 1, np.tan),
    Builtin("asin", 1, np.arcsin),
    Builtin("acos", 1, np.arccos),
    Builtin("atan", 1, np.arctan),
    Builtin("exp", 1, np.exp),
    Builtin("log", 1, np.log),
    Builtin("PI", 0, _constant(np.pi), glyph="π"),
    Builtin("E", 0, _constant(np.e)),
]

BUILTINS: Mapping[str, Builtin] = MappingProxyType({b.name: b for b in _TABLE})


def lookup(name: str, registry: Mapping[str, Builtin] = BUILTINS) -> Builtin | None:
    """Zwraca deskryptor builtinu lub None."""
    return registry.get(name)


def display(builtin: Builtin) -> str:
    """Glif do wyświetlenia; domyślnie pisownia tokenu."""
    return builtin.glyph if builtin.glyph is not None else builtin.name
