"""Echo endpoint served inside every webapp for smoke testing."""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Request

router = APIRouter(tags=["Echo"])


@router.api_route("/echo", methods=["GET", "POST", "PUT"])
async def echo(request: Request) -> Dict[str, Any]:
    """Reflect the request back to the caller."""
    body = await request.body()
    user: Optional[str] = None
    if "user" in request.scope and request.user.is_authenticated:
        user = request.user.display_name
    return {
        "method": request.method,
        "path": request.url.path,
        "root_path": request.scope.get("root_path", ""),
        "query": dict(request.query_params),
        "body": body.decode("utf-8", errors="replace"),
        "user": user,
    }
