from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter(prefix="", tags=["pages"])


def _templates(request: Request):
    tpl = getattr(getattr(request.app, "state", None), "templates", None)
    if tpl:
        return tpl
    raise RuntimeError("Templates nao configurados")


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Homepage listing every resource of the document."""
    svc = request.app.state.resources
    settings = request.app.state.settings
    templates = _templates(request)
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "resources": svc.summary(),
            "db_path": str(svc.store.path),
            "read_only": settings.read_only,
            "persist": settings.persist,
        },
    )
