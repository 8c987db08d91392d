from datetime import datetime, timezone

from fastapi import APIRouter, Response

router = APIRouter()


@router.get("")
async def health():
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.head("")
async def health_head():
    return Response(status_code=200)
