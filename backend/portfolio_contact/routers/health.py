# portfolio_contact/routers/health.py
import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from portfolio_contact.core.mail import MailConfig, TransportFactory
from portfolio_contact.dependencies import get_mail_config, get_transport_factory

log = logging.getLogger("uvicorn.error")

router = APIRouter(prefix="/health", tags=["health"])

@router.get("")
async def health_root():
    return {"status": "ok"}

@router.get("/mail")
async def health_mail(
    config: MailConfig = Depends(get_mail_config),
    make_transport: TransportFactory = Depends(get_transport_factory),
):
    """Log in to the relay and NOOP; never sends anything."""
    transport = make_transport(config)
    try:
        await run_in_threadpool(transport.verify)
    except Exception as exc:
        log.warning(f"[health] mail transport check failed: {exc}")
        return JSONResponse(status_code=503, content={"ok": False, "error": str(exc)})
    finally:
        await run_in_threadpool(transport.close)

    return {
        "ok": True,
        "host": config.host,
        "port": config.port,
        "sender_configured": bool(config.sender_account),
    }
