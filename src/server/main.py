"""FastAPI application."""

from __future__ import annotations

from fastapi import FastAPI

from server.routers import restructure

app = FastAPI(title="guidetiles", description="Restructure guide bodies into container-wrapped tiles.")
app.include_router(restructure.router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}
