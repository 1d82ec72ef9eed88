"""Status endpoint describing the running container."""

from typing import Any, Dict, List

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status

from webcontainer.domain.entities.errors import LifecycleError
from webcontainer.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Status"])


@router.get("/status")
@inject
async def container_status(
    servlet_container: Any = Depends(Provide["servlet_container"]),
) -> Dict[str, Any]:
    """Report lifecycle state, deployed contexts and connectors."""
    try:
        embedded = servlet_container.get()
    except LifecycleError as exc:
        logger.warning("status.unavailable", error=str(exc))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Servlet container has not been initialized",
        ) from exc

    contexts: List[Dict[str, str]] = []
    for engine in embedded.engines:
        for host in engine.find_children():
            for context in host.find_children():
                contexts.append(
                    {
                        "host": host.name,
                        "path": context.path or "/",
                        "doc_base": context.doc_base,
                    }
                )

    return {
        "state": servlet_container.state.value,
        "contexts": contexts,
        "connectors": [
            {
                "address": connector.address,
                "port": connector.bound_port or connector.port,
                "scheme": connector.scheme,
            }
            for connector in embedded.connectors
        ],
    }
