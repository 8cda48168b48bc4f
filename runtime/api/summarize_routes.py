"""HTTP route for compressing chronological log entries.

- POST /api/summarize -> {"summary": str}, body {"entries": str}

Status mapping:
- 500 when no provider credential is configured (checked before the body)
- 400 for invalid JSON or a missing / non-string "entries" field
- 502 when the provider call fails
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.concurrency import run_in_threadpool

from core.summarizer.summarizer import Summarizer

from ..models.api_models import SummarizeRequest, SummarizeResponse
from .request_body import parse_json_body


logger = logging.getLogger(__name__)

router = APIRouter()


def get_summarizer(request: Request) -> Summarizer:
    """Return the Summarizer attached to this app by create_app."""
    summarizer = getattr(request.app.state, "summarizer", None)
    if summarizer is None:
        raise HTTPException(
            status_code=500,
            detail="Summarizer is not configured on the server.",
        )
    return summarizer


@router.post("/summarize", response_model=SummarizeResponse)
async def summarize(
    request: Request,
    summarizer: Summarizer = Depends(get_summarizer),
) -> SummarizeResponse:
    """Condense the posted log entries into a single narrative paragraph.

    The caller decides which entries to send and splices the returned
    summary back into the log itself.
    """
    summarizer.ensure_configured()

    body = await parse_json_body(request, SummarizeRequest, "entries")
    # The provider call blocks; run it in a worker thread so other requests
    # keep being served meanwhile.
    summary = await run_in_threadpool(summarizer.summarize, body.entries)
    return SummarizeResponse(summary=summary)
