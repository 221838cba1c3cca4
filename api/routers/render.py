"""
Router: POST /render, POST /render/node
  1. Tokenizuje i ewaluuje program (StackEvaluator)
  2. Renderuje wyniki ze szczytu stosu (PrecedenceRenderer)
  3. Prezentuje w wybranym formacie: tree | mathml | text
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from adapters.presentation.plain_text import to_text
from adapters.renderer.precedence_renderer import NestingTooDeep
from api.dependencies import (
    get_evaluator,
    get_mathml_presenter,
    get_renderer,
    get_settings,
    get_text_presenter,
    tokens_within_limit,
)
from api.schemas import (
    NodeRenderRequest,
    NodeRenderResponse,
    RenderedOutput,
    RenderRequest,
    RenderResponse,
)

router = APIRouter(prefix="/render", tags=["render"])


def _too_deep(exc: NestingTooDeep) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "kind": "NestingTooDeep",
            "message": str(exc),
            "index": exc.index,
            "depth": exc.depth,
            "limit": exc.limit,
        },
    )


@router.post("", response_model=RenderResponse)
async def render(
    body: RenderRequest,
    settings=Depends(get_settings),
    evaluator=Depends(get_evaluator),
    renderer=Depends(get_renderer),
    mathml=Depends(get_mathml_presenter),
    text_presenter=Depends(get_text_presenter),
) -> RenderResponse:
    fmt = body.format or settings.default_format
    result = evaluator.evaluate(tokens_within_limit(body.text, settings))

    try:
        rendered = renderer.render(result)
    except NestingTooDeep as exc:
        raise _too_deep(exc)

    lines: list[RenderedOutput] = []
    for line in rendered:
        out = RenderedOutput(index=line.index, value=line.value)
        if fmt == "tree":
            out.tree = line.row
        elif fmt == "mathml":
            out.mathml = mathml.present(line)
        else:
            out.text = text_presenter.present(line)
        lines.append(out)

    return RenderResponse(ok=result.ok, format=fmt, lines=lines, error=result.error)


@router.post("/node", response_model=NodeRenderResponse)
async def render_node(
    body: NodeRenderRequest,
    settings=Depends(get_settings),
    evaluator=Depends(get_evaluator),
    renderer=Depends(get_renderer),
) -> NodeRenderResponse:
    result = evaluator.evaluate(tokens_within_limit(body.text, settings))
    try:
        tree = renderer.render_node(result, body.index)
    except IndexError:
        raise HTTPException(
            status_code=400,
            detail=f"Node index {body.index} out of range (nodes: {len(result.nodes)})",
        )
    except NestingTooDeep as exc:
        raise _too_deep(exc)

    return NodeRenderResponse(
        index=body.index,
        value=result.values[body.index],
        node=result.nodes[body.index],
        tree=tree,
        text=to_text(tree),
    )
