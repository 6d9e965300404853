"""Extraction endpoints for the page-capture helper and the app."""
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from listing_reconciler.extraction import ExtractionOutcome, ListingEngine, PageSnapshot
from listing_reconciler.transport import build_deep_link

router = APIRouter()

_engine: Optional[ListingEngine] = None


def get_engine() -> ListingEngine:
    """Shared engine instance (it holds no per-call state)."""
    global _engine
    if _engine is None:
        _engine = ListingEngine()
    return _engine


class PageRequest(BaseModel):
    """A captured listing page."""
    url: str
    html: str = ""
    text: Optional[str] = None


class PastedRequest(BaseModel):
    """Clipboard content: raw text or an already-decoded object."""
    content: Union[Dict[str, Any], str, None] = None


class UrlRequest(BaseModel):
    """A listing URL."""
    url: str = ""


def _respond(outcome: ExtractionOutcome) -> dict:
    if not outcome.ok:
        raise HTTPException(
            status_code=422,
            detail={"error": outcome.error.value, "message": outcome.message},
        )
    return {
        "record": outcome.record.to_fields(),
        "deep_link": build_deep_link(outcome.record),
        "needs_assist": outcome.needs_assist,
    }


@router.post("/page")
async def extract_page(request: PageRequest, engine: ListingEngine = Depends(get_engine)):
    """Extract a record from a captured listing page."""
    snapshot = PageSnapshot(url=request.url, html=request.html, text=request.text)
    return _respond(engine.extract_page(snapshot))


@router.post("/pasted")
async def extract_pasted(request: PastedRequest, engine: ListingEngine = Depends(get_engine)):
    """Import a pasted JSON listing object."""
    return _respond(engine.import_pasted(request.content))


@router.post("/url")
async def extract_url(request: UrlRequest, engine: ListingEngine = Depends(get_engine)):
    """Recover address fields from a listing URL."""
    return _respond(engine.import_url(request.url))
