from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/healthz")
async def healthz(request: Request) -> dict:
    initialized = getattr(request.app.state, "activator", None) is not None
    return {"status": "ok", "activator": initialized}
