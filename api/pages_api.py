from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from core.templating import templates


router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def index(request: Request):
    return templates.TemplateResponse(request, "index.html")


@router.get("/thanks", response_class=HTMLResponse)
async def thanks(request: Request, already: str = ""):
    return templates.TemplateResponse(request, "thanks.html", {"already": already == "1"})


@router.get("/health")
async def health():
    return {"status": "healthy"}
