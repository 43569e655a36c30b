# portfolio_contact/main.py
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from portfolio_contact.core.settings import settings
from portfolio_contact.lib.contact_relay import METHOD_NOT_ALLOWED
from portfolio_contact.routers.contact import router as contact_router
from portfolio_contact.routers.health import router as health_router

app = FastAPI(title=settings.api_title)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
ROUTERS = [contact_router, health_router]
for r in ROUTERS:
    app.include_router(r)

@app.exception_handler(StarletteHTTPException)
async def contact_method_not_allowed(request: Request, exc: StarletteHTTPException):
    # methods the contact router does not list explicitly (PROPFIND, CONNECT, ...)
    if exc.status_code == 405 and request.url.path == "/api/contact":
        return JSONResponse(status_code=405, content=METHOD_NOT_ALLOWED, headers={"Allow": "POST"})
    return await http_exception_handler(request, exc)

@app.get("/__routes")
async def __routes():
    # router routes already carry their prefix; app.routes may only hold wrappers for them
    candidates = list(app.routes)
    for r in ROUTERS:
        candidates.extend(r.routes)
    out, seen = [], set()
    for r in candidates:
        if not isinstance(r, APIRoute):
            continue
        key = (r.path, tuple(sorted(r.methods)))
        if key in seen:
            continue
        seen.add(key)
        out.append({"methods": list(key[1]), "path": r.path})
    return out

# portfolio page; mounted last so the API routes above win
if settings.site_root:
    site_dir = Path(settings.site_root).resolve()
    if site_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(site_dir), html=True), name="site")
        logging.getLogger("uvicorn.error").info(f"[main] serving site from {site_dir}")
    else:
        logging.getLogger("uvicorn.error").warning(f"[main] SITE_ROOT {site_dir} is not a directory; not serving it")
