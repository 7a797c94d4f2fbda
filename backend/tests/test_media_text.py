"""Display helpers: photos, video links, previews, social links, relative time."""
from datetime import datetime, timedelta, timezone

import pytest

from scifanor.catalog.avatars import AVATAR_COLORS, avatar_color, initial_for
from scifanor.catalog.media import (
    avatar_key,
    is_valid_youtube_url,
    plant_image_key,
    validate_image,
    youtube_embed_url,
    youtube_video_id,
)
from scifanor.catalog.text import (
    instagram_handle,
    instagram_url,
    instagram_username,
    share_url,
    time_ago,
    truncate_preview,
)
from scifanor.errors import ValidationError

MB = 1024 * 1024
NOW = datetime(2026, 3, 10, 12, 0, tzinfo=timezone.utc)


def test_oversized_photo_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_image(MB + 1, "image/jpeg", MB)
    assert exc_info.value.message == "Ukuran foto terlalu besar (maks 1MB)"
    assert exc_info.value.status_code == 422


def test_photo_type_and_emptiness_are_checked():
    validate_image(MB, "image/png", MB)
    with pytest.raises(ValidationError):
        validate_image(10, "application/pdf", MB)
    with pytest.raises(ValidationError):
        validate_image(0, "image/png", MB)


def test_storage_keys():
    assert plant_image_key("Daun.PNG").endswith(".png")
    assert plant_image_key(None).endswith(".jpg")
    assert avatar_key("u1", "me.webp").startswith("avatars/avatar_u1_")


@pytest.mark.parametrize("url, video_id", [
    ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://youtu.be/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("youtube.com/embed/dQw4w9WgXcQ", "dQw4w9WgXcQ"),
    ("https://www.youtube.com/watch?v=short", None),
])
def test_youtube_video_id(url, video_id):
    assert is_valid_youtube_url(url)
    assert youtube_video_id(url) == video_id


def test_youtube_rejects_other_hosts():
    assert not is_valid_youtube_url("https://vimeo.com/123")
    assert not is_valid_youtube_url(None)
    assert youtube_embed_url("https://vimeo.com/123") is None


def test_youtube_embed_is_privacy_enhanced():
    assert youtube_embed_url("https://youtu.be/dQw4w9WgXcQ") == (
        "https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ?rel=0"
    )


def test_truncate_preview_keeps_first_sentence():
    assert truncate_preview("Tumbuh di tepi sungai. Butuh banyak air.") == "Tumbuh di tepi sungai..."
    assert truncate_preview("Satu paragraf saja") == "Satu paragraf saja"
    assert truncate_preview("-") == "-"
    assert truncate_preview(None) is None


def test_truncate_preview_caps_length():
    preview = truncate_preview("a" * 200)
    assert preview == "a" * 150 + "..."


@pytest.mark.parametrize("value", [
    "https://instagram.com/siti_m",
    "https://www.instagram.com/siti_m/",
    "@siti_m",
    "siti_m",
    "https://www.instagram.com/siti_m?igsh=abc123",
    "https://instagram.com/siti_m/?hl=id",
])
def test_instagram_username(value):
    assert instagram_username(value) == "siti_m"
    assert instagram_url(value) == "https://instagram.com/siti_m"


def test_instagram_empty_and_handle():
    assert instagram_url("") is None
    assert instagram_handle("https://instagram.com/siti_m") == "@siti_m"
    assert instagram_handle(None) is None


def test_share_url():
    assert share_url("https://scifanor.sch.id/", "p1") == "https://scifanor.sch.id/plant-detail.html?id=p1"


@pytest.mark.parametrize("delta, expected", [
    (timedelta(seconds=30), "baru saja"),
    (timedelta(minutes=5), "5 menit yang lalu"),
    (timedelta(hours=3), "3 jam yang lalu"),
    (timedelta(days=2), "2 hari yang lalu"),
])
def test_time_ago(delta, expected):
    assert time_ago(NOW - delta, NOW) == expected


def test_time_ago_falls_back_to_date():
    assert time_ago(datetime(2026, 1, 5, 9, 0), NOW) == "5/1/2026"


def test_avatar_initial_and_color():
    assert initial_for("  siti mulia") == "S"
    assert initial_for(None) == "?"
    assert avatar_color("S") == AVATAR_COLORS[ord("S") % 26]
    assert avatar_color("?") in AVATAR_COLORS
