"""
Demo Page Route
Serves the single page with the ride buttons and the fare selector
"""

from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

router = APIRouter()

# Shipped as package data next to this module
DEMO_PAGE = Path(__file__).resolve().parent / "static" / "index.html"
DEMO_HTML = DEMO_PAGE.read_text(encoding="utf-8")


@router.get("/demo", response_class=HTMLResponse)
async def demo_page():
    return HTMLResponse(DEMO_HTML)
