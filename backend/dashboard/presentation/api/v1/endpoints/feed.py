"""Change feed endpoint — Server-Sent Events stream of committed writes."""

import json
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import StreamingResponse

from dashboard.application.interfaces import ChangeFeed, ChangeSubscription
from dashboard.infrastructure.dependencies import get_change_feed

router = APIRouter(prefix="/feed", tags=["Change feed"])

# Collection → column the stream may be filtered on (the year).
_YEAR_COLUMNS = {
    "clientes": "anio_registro",
    "ejecutivos": "anio",
}


async def _event_stream(subscription: ChangeSubscription) -> AsyncGenerator[str, None]:
    """Format events as SSE messages; the subscription is closed on disconnect."""
    try:
        async for event in subscription:
            payload = json.dumps(event.to_dict(), default=str)
            yield f"event: {event.kind.value.lower()}\ndata: {payload}\n\n"
    finally:
        await subscription.close()


@router.get("/{table}")
async def change_stream(
    table: str,
    anio: int | None = Query(None, description="Only changes to rows of this year"),
    feed: ChangeFeed = Depends(get_change_feed),
) -> StreamingResponse:
    """SSE endpoint for row-level changes of one collection.

    Clients connect via EventSource and receive 'insert', 'update' and
    'delete' events carrying the new and old rows.
    """
    column = _YEAR_COLUMNS.get(table)
    if column is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown collection '{table}'"
        )

    subscription = feed.subscribe(
        table,
        column=column if anio is not None else None,
        value=anio,
    )
    return StreamingResponse(
        _event_stream(subscription),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
