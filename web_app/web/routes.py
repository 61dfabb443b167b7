"""Web interface routes implementation."""

import json
import logging
import os
from typing import Optional

from fastapi import APIRouter, Request, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, RedirectResponse

from ..api.routes import request_base_url
from shortlink.errors import InvalidUrlError

logger = logging.getLogger("shortlink.web")

router = APIRouter()

template_dir = os.path.join(os.path.dirname(__file__), "..", "..", "ux", "web")

FALLBACK_HOMEPAGE = """<!DOCTYPE html>
<html>
<head><title>Shortlink</title></head>
<body>
<h1>Shortlink</h1>
<form id="shorten">
  <input type="url" name="url" placeholder="https://example.com/a/long/path" required>
  <button type="submit">Shorten</button>
</form>
<p id="result"></p>
<script>
document.getElementById("shorten").addEventListener("submit", async (event) => {
  event.preventDefault();
  const url = event.target.url.value;
  const response = await fetch("url", {
    method: "POST",
    headers: {"Content-Type": "application/json"},
    body: JSON.stringify({url}),
  });
  const result = document.getElementById("result");
  result.textContent = response.ok ? (await response.json()).url : await response.text();
});
</script>
</body>
</html>
"""


def parse_url_body(raw: bytes) -> Optional[str]:
    """Pull the submitted URL out of a request body.

    Accepts a JSON object with a ``url`` field, a JSON string, or the URL as
    plain text. Bodies that are not valid UTF-8 yield None.
    """
    try:
        text = raw.decode("utf-8").strip()
    except UnicodeDecodeError:
        return None
    if not text:
        return None

    try:
        payload = json.loads(text)
    except ValueError:
        return text

    if isinstance(payload, dict):
        value = payload.get("url")
        return value if isinstance(value, str) else None
    if isinstance(payload, str):
        return payload
    return None


@router.api_route("/", methods=["GET", "HEAD"], response_class=HTMLResponse, include_in_schema=False)
async def homepage():
    """Serve the homepage."""
    html_file = os.path.join(template_dir, "index.html")

    if os.path.exists(html_file):
        with open(html_file, "r", encoding="utf-8") as f:
            content = f.read()
        return HTMLResponse(content=content)

    return HTMLResponse(content=FALLBACK_HOMEPAGE, status_code=200)


@router.api_route("/health", methods=["GET", "HEAD"], include_in_schema=False)
def health_check_web(request: Request):
    """Health check endpoint (simple version for load balancers)."""
    if request.app.state.store.health_check():
        return {"status": "healthy"}

    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service unhealthy",
    )


@router.post("/url", include_in_schema=False)
async def shorten_from_body(request: Request):
    """Shorten the URL carried in the request body and answer ``{"url": <short url>}``."""
    shortener = request.app.state.shortener

    raw_url = parse_url_body(await request.body())
    if raw_url is None:
        return PlainTextResponse("URL is invalid: URL is required", status_code=400)

    try:
        short_url = await run_in_threadpool(
            shortener.shorten, raw_url, request_base_url(request)
        )
    except InvalidUrlError as e:
        return PlainTextResponse(f"URL is invalid: {e}", status_code=400)

    return JSONResponse({"url": short_url})


# Catch-all: must stay the last route registered. Static routes above must
# accept every method it accepts.
@router.api_route("/{path:path}", methods=["GET", "HEAD"], include_in_schema=False)
def redirect_to_url(request: Request, path: str):
    """Redirect a short link to its stored URL, or to the fallback location."""
    location = request.app.state.redirector.resolve(path)
    return RedirectResponse(url=location, status_code=status.HTTP_302_FOUND)
