"""Health check endpoint."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    """Report liveness and the label categories loaded at startup."""
    labels = getattr(request.app.state, "labels", None)
    if labels is None:
        return JSONResponse(status_code=503, content={"status": "unhealthy"})
    return {"status": "ok", "labelCategories": labels.categories}
