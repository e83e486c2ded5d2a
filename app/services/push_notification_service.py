from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from app.core.config import settings
from app.core.exceptions import UpstreamFailure

logger = logging.getLogger(__name__)

ONESIGNAL_URL = "https://onesignal.com/api/v1/notifications"


def _shorten(text: str, max_len: int) -> str:
    cleaned = (text or "").strip()
    if len(cleaned) <= max_len:
        return cleaned
    return cleaned[: max(0, max_len - 1)].rstrip() + "…"


async def _send_onesignal(*, heading: str, content: str) -> dict[str, Any]:
    if not (settings.ONESIGNAL_APP_ID and settings.ONESIGNAL_REST_API_KEY):
        raise UpstreamFailure("Push notifications are not configured")

    payload: dict[str, Any] = {
        "app_id": settings.ONESIGNAL_APP_ID,
        "headings": {"en": heading},
        "contents": {"en": content},
        "included_segments": ["All"],
        "url": settings.APP_URL,
    }
    headers = {
        "Authorization": f"Basic {settings.ONESIGNAL_REST_API_KEY}",
        "Content-Type": "application/json; charset=utf-8",
    }

    try:
        async with httpx.AsyncClient(timeout=10) as client:
            resp = await client.post(ONESIGNAL_URL, headers=headers, json=payload)
    except httpx.HTTPError as e:
        raise UpstreamFailure("Push provider unreachable") from e

    if not (200 <= resp.status_code < 300):
        text = resp.text or ""
        logger.warning(
            "OneSignal send failed status=%s body=%s",
            resp.status_code,
            (text[:2000] + "…") if len(text) > 2000 else text,
        )
        raise UpstreamFailure("Failed to send notification")

    return resp.json()


def send_push(heading: str, content: str) -> dict[str, Any]:
    """Blocking send; raises UpstreamFailure on any provider problem."""
    return asyncio.run(_send_onesignal(heading=heading, content=content))


def send_notice_push(notice_id: str, title: str) -> bool:
    """Fire-and-forget push for a freshly created notice.

    Runs as a background task after the response is sent. Never raises:
    a failed push is logged and the notice stays published.
    """
    try:
        result = send_push("Department Update", f"New Notice: {_shorten(title, 120)}")
    except Exception:
        logger.exception("Failed to send push notification for notice_id=%s", notice_id)
        return False

    logger.info(
        "Push: notice_id=%s onesignal_id=%s recipients=%s",
        notice_id,
        result.get("id"),
        result.get("recipients"),
    )
    return True
