"""
Router: GET /share, GET /share/{fragment}
Kodowanie programu do fragmentu URL i z powrotem.
"""
from fastapi import APIRouter, Depends

from adapters.share_link import from_fragment, to_fragment
from api.dependencies import get_settings
from api.schemas import ShareResponse

router = APIRouter(prefix="/share", tags=["share"])


@router.get("", response_model=ShareResponse)
async def share(text: str) -> ShareResponse:
    return ShareResponse(fragment=to_fragment(text), text=text)


@router.get("/{fragment:path}", response_model=ShareResponse)
async def open_shared(fragment: str, settings=Depends(get_settings)) -> ShareResponse:
    # Starlette has already percent-decoded the path
    text = from_fragment(fragment, default=settings.default_program, percent_decoded=True)
    return ShareResponse(fragment=to_fragment(text), text=text)
