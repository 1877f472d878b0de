import time
from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()

_started_at = time.monotonic()


@router.get("/")
def root():
    return {"message": "Hello from Accounts API!"}


@router.get("/health")
def health_check():
    return {
        "status": "OK",
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
    }


@router.get("/api")
def api_root():
    return {"message": "API is running"}
