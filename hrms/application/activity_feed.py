"""
===============================================================================
TARJETA CRC — application/activity_feed.py
===============================================================================

Responsabilidades:
    - Convertir eventos crudos (attendance / leaves) en el feed del dashboard.
    - Etiquetas relativas ("5 minutes ago") e íconos por estado.
    - Ordenar por fecha real (no por la etiqueta) y acotar a 15 items.

Colaboradores:
    - ReportingRepository.recent_activity (filas crudas)
    - api/routers/dashboard.py
===============================================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable

MAX_ACTIVITY_ITEMS = 15

_LEAVE_ICONS = {"approved": "✅", "rejected": "❌"}


def time_ago(occurred_at: datetime, now: datetime) -> str:
    seconds = int((now - occurred_at).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    if seconds < 2592000:
        return f"{seconds // 86400} days ago"
    return f"{seconds // 2592000} months ago"


def _align(occurred_at: datetime, now: datetime) -> datetime:
    """R: Compara aware con aware y naive con naive."""
    if occurred_at.tzinfo is None and now.tzinfo is not None:
        return occurred_at.replace(tzinfo=now.tzinfo)
    if occurred_at.tzinfo is not None and now.tzinfo is None:
        return occurred_at.replace(tzinfo=None)
    return occurred_at


def _describe(row: dict[str, Any], occurred_at: datetime) -> tuple[str, str]:
    status = str(row.get("status") or "")
    if row.get("type") == "attendance":
        action = f"{status.lower()} at {occurred_at.strftime('%H:%M:%S')}"
        icon = "✅" if status == "Checked In" else "🚪"
        return action, icon
    action = f"{status} {row.get('leave_type') or ''} request".replace("  ", " ")
    return action, _LEAVE_ICONS.get(status, "⏳")


def build_activity_feed(
    rows: Iterable[dict[str, Any]], now: datetime, limit: int = MAX_ACTIVITY_ITEMS
) -> list[dict[str, str]]:
    events = []
    for row in rows:
        occurred_at = row.get("occurred_at")
        if not isinstance(occurred_at, datetime):
            continue
        events.append((_align(occurred_at, now), row))

    events.sort(key=lambda item: item[0], reverse=True)

    feed: list[dict[str, str]] = []
    for occurred_at, row in events[:limit]:
        action, icon = _describe(row, occurred_at)
        feed.append(
            {
                "user": f"{row.get('first_name') or ''} {row.get('last_name') or ''}".strip(),
                "action": action,
                "time": time_ago(occurred_at, now),
                "icon": icon,
                "type": str(row.get("type")),
            }
        )
    return feed
