from fastapi import APIRouter

router = APIRouter()

@router.get("/")
@router.get("/healthz")
async def healthz():
    # liveness only; no upstream round-trip
    return {"ok": True}
