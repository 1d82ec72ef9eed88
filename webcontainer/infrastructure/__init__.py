"""
Infrastructure module - Infrastructure Layer

Adapters over third-party components: the embedded engine (Starlette
and uvicorn), realms and the container orchestrator service.
"""
