"""Photo upload validation, storage keys and video links."""
import re
import time
import uuid
from typing import Optional

from scifanor.errors import ValidationError

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp", "image/gif"}

_YOUTUBE_URL = re.compile(
    r"^(https?://)?(www\.)?(youtube\.com/watch\?v=|youtu\.be/|youtube\.com/embed/)[\w-]+"
)
_YOUTUBE_ID = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")


def validate_image(size: int, content_type: Optional[str], max_bytes: int) -> None:
    """Reject an upload before anything is sent to storage."""
    if size <= 0:
        raise ValidationError("File is empty")
    if size > max_bytes:
        limit_mb = max_bytes / (1024 * 1024)
        raise ValidationError(
            f"Ukuran foto terlalu besar (maks {limit_mb:g}MB)",
            detail={"size": size, "max_bytes": max_bytes},
        )
    if content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError(f"Unsupported image type: {content_type}")


def _extension(filename: Optional[str], default: str = "jpg") -> str:
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[1].lower()
        if ext.isalnum():
            return ext
    return default


def plant_image_key(filename: Optional[str]) -> str:
    return f"{uuid.uuid4().hex[:10]}_{int(time.time() * 1000)}.{_extension(filename)}"


def avatar_key(user_id: str, filename: Optional[str]) -> str:
    return f"avatars/avatar_{user_id}_{int(time.time() * 1000)}.{_extension(filename)}"


def is_valid_youtube_url(url: Optional[str]) -> bool:
    if not url:
        return False
    return _YOUTUBE_URL.match(url) is not None


def youtube_video_id(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    match = _YOUTUBE_ID.match(url)
    if match and len(match.group(2)) == 11:
        return match.group(2)
    return None


def youtube_embed_url(url: Optional[str]) -> Optional[str]:
    video_id = youtube_video_id(url)
    if not video_id:
        return None
    return f"https://www.youtube-nocookie.com/embed/{video_id}?rel=0"
