from typing import Optional

from fastapi import APIRouter, Query, Request

router = APIRouter(tags=["events"])


@router.get('/api/events')
async def api_events(
    request: Request,
    since: Optional[int] = Query(default=None, description="Return events with id greater than this value")
):
    """
    Return core events (recipes, tabs, shopping list, suggestions) for a polling renderer.

    Client polling strategy:
        1. First call without 'since' to load the current backlog.
        2. Store 'next_cursor' from response.
        3. Subsequent polls: /api/events?since=<next_cursor>
    """
    return request.app.state.event_feed.get_events(since)
