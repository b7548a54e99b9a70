# apps/api/turnus/services/delivery.py
"""Outbound delivery stubs. Both are best-effort and never raise."""
from __future__ import annotations

import logging
from typing import Optional

import requests

from turnus.core.config import settings

log = logging.getLogger(__name__)


def send_email(to: str, subject: str, body: str) -> bool:
    # Stub: gerçek SMTP yok, sadece payload loglanır
    log.info("[email] to=%s subject=%r body=%r", to, subject, body)
    return True


def send_sms(endpoint: Optional[str], message: str, team_id: int, user_id: Optional[int] = None) -> bool:
    if not endpoint:
        return False
    try:
        resp = requests.post(
            endpoint,
            json={"teamId": team_id, "userId": user_id, "message": message},
            timeout=settings.SMS_TIMEOUT_SEC,
        )
        return resp.ok
    except requests.RequestException as e:
        log.warning("[sms] post to %s failed: %s", endpoint, e)
        return False
