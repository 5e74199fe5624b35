"""Human-readable status page."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from donation_alerts.api.dependencies import get_hub
from donation_alerts.notifications.hub import BroadcastHub  # noqa: TC001

router = APIRouter(tags=["base"])

_STATUS_PAGE = """<!DOCTYPE html>
<html>
  <head><title>Donation Alert Server</title></head>
  <body>
    <h1>Donation Alert Server is Running!</h1>
    <p>OBS Browser Source URL: <a href="/alert.html">/alert.html</a></p>
    <p>Live stream: <code>/ws</code></p>
    <p>Test donation: <code>POST /test-donation</code></p>
    <p>Connected clients: <span id="count">{count}</span></p>
  </body>
</html>
"""


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def status_page(hub: Annotated[BroadcastHub, Depends(get_hub)]) -> str:
    return _STATUS_PAGE.format(count=hub.subscriber_count)
