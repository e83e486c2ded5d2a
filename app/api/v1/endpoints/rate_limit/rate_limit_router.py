from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.core.rate_limiter import get_client_ip

router = APIRouter(prefix="/rate-limit", tags=["Rate Limit"])


@router.get("/ping")
def rate_limit_ping(request: Request):
    return {
        "message": "Rate limit test endpoint",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "ip": get_client_ip(request),
    }
