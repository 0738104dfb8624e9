# trophyhunter/core/sync/confirmations.py
"""
Two-step protocol for destructive operations.

``propose`` validates the input and parks it under a random token;
``take`` hands it back exactly once. The "are you sure" UX lives in the
caller, the mutation only happens on confirm.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from trophyhunter.config import settings
from trophyhunter.core.errors import ConfirmationError

log = logging.getLogger(__name__)


@dataclass
class PendingConfirmation:
    token: str
    action: str            # 'sync' | 'import'
    scope: str             # выбранная игра в момент запроса
    message: str
    expires_at: datetime
    payload: Any = field(default=None, repr=False)


class ConfirmationRegistry:
    def __init__(self, ttl_seconds: Optional[int] = None) -> None:
        self.ttl = timedelta(seconds=ttl_seconds if ttl_seconds is not None else settings.CONFIRMATION_TTL_SECONDS)
        self._pending: Dict[str, PendingConfirmation] = {}

    def propose(self, action: str, scope: str, message: str, payload: Any) -> PendingConfirmation:
        self._evict_expired()
        pending = PendingConfirmation(
            token=secrets.token_urlsafe(16),
            action=action,
            scope=scope,
            message=message,
            expires_at=datetime.now(timezone.utc) + self.ttl,
            payload=payload,
        )
        self._pending[pending.token] = pending
        log.debug("Confirmation %s proposed for %s (scope=%s)", pending.token, action, scope)
        return pending

    def take(self, token: str, current_scope: str) -> PendingConfirmation:
        """
        Забрать ожидающее подтверждение (одноразово).

        Raises:
            ConfirmationError: токен неизвестен, истёк или выбор игры сменился.
        """
        pending = self._pending.pop(token, None)
        if pending is None:
            raise ConfirmationError("Unknown or already used confirmation.")
        if pending.expires_at <= datetime.now(timezone.utc):
            raise ConfirmationError("Confirmation expired, please try again.")
        if pending.scope != current_scope:
            raise ConfirmationError("Game selection changed since confirmation was requested.")
        return pending

    def _evict_expired(self) -> None:
        now = datetime.now(timezone.utc)
        for token in [t for t, p in self._pending.items() if p.expires_at <= now]:
            del self._pending[token]
