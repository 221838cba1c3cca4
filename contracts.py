"""
contracts.py — the single source of truth for every data type in StackMath.
All modules import types ONLY from here. Do not modify without versioning.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

CONTRACTS_VERSION = "1.0.0"

# Values may be ±inf / NaN (IEEE-754 propagation); JSON carries them as strings.
_NUMERIC_CONFIG = ConfigDict(ser_json_inf_nan="strings")


# ─────────────────────────── Expression nodes ────────────────────────────

class LiteralNode(BaseModel):
    node_type: Literal["literal"] = "literal"
    value: float


class ApplyNode(BaseModel):
    node_type: Literal["apply"] = "apply"
    op: str               # builtin name, e.g. "+", "sqrt", "PI"
    args: list[int]       # node indices, in argument order


class BindNode(BaseModel):
    node_type: Literal["bind"] = "bind"
    name: str
    source: int           # node index whose value was captured


class VarRefNode(BaseModel):
    node_type: Literal["var_ref"] = "var_ref"
    name: str             # value snapshot lives in EvalResult.values


ExprNode = Union[LiteralNode, ApplyNode, BindNode, VarRefNode]


# ─────────────────────────── Evaluator ───────────────────────────────────

class ErrorKind(str, Enum):
    UNKNOWN_OPERATOR = "UnknownOperator"
    INSUFFICIENT_OPERANDS = "InsufficientOperands"
    EMPTY_STACK_ON_ASSIGNMENT = "EmptyStackOnAssignment"
    UNKNOWN_VARIABLE = "UnknownVariable"
    UNIMPLEMENTED_FEATURE = "UnimplementedFeature"


class EvalError(BaseModel):
    kind: ErrorKind
    token: str                      # the token that stopped evaluation
    name: str                       # operator / variable / feature name
    needed: Optional[int] = None    # InsufficientOperands only
    have: Optional[int] = None      # InsufficientOperands only
    message: str                    # shown verbatim to the user


class EvalResult(BaseModel):
    model_config = _NUMERIC_CONFIG

    ok: bool
    tokens: list[str] = Field(default_factory=list)
    nodes: list[ExprNode] = Field(default_factory=list)
    values: list[float] = Field(default_factory=list)      # values[i] ↔ nodes[i]
    top_level: list[int] = Field(default_factory=list)     # operand stack, program order
    environment: dict[str, float] = Field(default_factory=dict)
    error: Optional[EvalError] = None


# ─────────────────────────── Render tree ─────────────────────────────────

class NumberToken(BaseModel):
    model_config = _NUMERIC_CONFIG

    kind: Literal["number"] = "number"
    value: float


class IdentToken(BaseModel):
    kind: Literal["ident"] = "ident"
    text: str


class OperatorToken(BaseModel):
    kind: Literal["operator"] = "operator"
    text: str


class RowFragment(BaseModel):
    kind: Literal["row"] = "row"
    items: list["FragmentItem"] = Field(default_factory=list)


class FractionFragment(BaseModel):
    kind: Literal["fraction"] = "fraction"
    numerator: RowFragment
    denominator: RowFragment


class RadicalFragment(BaseModel):
    kind: Literal["radical"] = "radical"
    radicand: RowFragment


class SuperscriptFragment(BaseModel):
    kind: Literal["superscript"] = "superscript"
    base: RowFragment
    exponent: RowFragment


FragmentItem = Union[
    NumberToken, IdentToken, OperatorToken,
    RowFragment, FractionFragment, RadicalFragment, SuperscriptFragment,
]
RowFragment.model_rebuild()
FractionFragment.model_rebuild()
RadicalFragment.model_rebuild()
SuperscriptFragment.model_rebuild()


class RenderedLine(BaseModel):
    """One top-level result: `<expression> = <value>`."""
    model_config = _NUMERIC_CONFIG

    index: int
    value: float
    row: RowFragment
