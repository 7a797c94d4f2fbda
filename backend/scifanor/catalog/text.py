"""Small text helpers used when preparing view models for display."""
import re
from datetime import datetime, timezone
from typing import Optional

_PARAGRAPH_OR_SENTENCE = re.compile(r"\n\n|\. ")
_INSTAGRAM = re.compile(r"(?:.*instagram\.com/)?@?([^/?#]+)")


def truncate_preview(text: Optional[str], max_length: int = 150) -> Optional[str]:
    """First paragraph or sentence of ``text``, with ``...`` when something was cut."""
    if not text or text == "-":
        return text
    first = _PARAGRAPH_OR_SENTENCE.split(text, maxsplit=1)[0]
    if len(first) > max_length:
        return first[:max_length] + "..."
    return first + ("..." if len(text) > len(first) else "")


def instagram_username(value: Optional[str]) -> str:
    """Accepts a full URL, ``@name`` or a bare name and returns the bare name."""
    if not value:
        return ""
    value = value.strip().rstrip("/")
    match = _INSTAGRAM.match(value)
    return match.group(1) if match else value


def instagram_url(username: Optional[str]) -> Optional[str]:
    name = instagram_username(username)
    return f"https://instagram.com/{name}" if name else None


def instagram_handle(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return "@" + url.rstrip("/").split("/")[-1]


def share_url(base_url: str, plant_id: str) -> str:
    return f"{base_url.rstrip('/')}/plant-detail.html?id={plant_id}"


def time_ago(moment: datetime, now: Optional[datetime] = None) -> str:
    """Indonesian relative time, falling back to a date after 30 days."""
    now = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    seconds = int((now - moment).total_seconds())
    if seconds < 60:
        return "baru saja"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes} menit yang lalu"
    hours = minutes // 60
    if hours < 24:
        return f"{hours} jam yang lalu"
    days = hours // 24
    if days < 30:
        return f"{days} hari yang lalu"
    return f"{moment.day}/{moment.month}/{moment.year}"
