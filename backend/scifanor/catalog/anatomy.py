"""Clickable plant-part map for the detail page's anatomy diagram."""
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel

from scifanor.catalog.views import IMAGE_PARTS

PART_LABELS = {
    "full_plant": ("Tumbuhan Utuh", "🌳"),
    "root": ("Akar", "🌱"),
    "stem": ("Batang", "🎋"),
    "leaf": ("Daun", "🍃"),
    "fruit": ("Buah", "🍎"),
    "flower": ("Bunga", "🌸"),
}

NO_IMAGES_MESSAGE = "Gambar detail bagian tumbuhan belum tersedia"


class ViewerImage(BaseModel):
    src: str
    caption: str


class ImageViewer(BaseModel):
    """Single-image lightbox payload opened by clicking a part."""

    images: list[ViewerImage]


class AnatomyPart(BaseModel):
    part: str
    label: str
    icon: str
    url: str

    def open(self) -> ImageViewer:
        return ImageViewer(images=[ViewerImage(src=self.url, caption=self.label)])


def _image_mapping(images: Any) -> Mapping[str, Any]:
    if images is None:
        return {}
    if isinstance(images, BaseModel):
        return images.model_dump()
    return images


def build_anatomy_map(images: Any) -> list[AnatomyPart]:
    """Parts that have a photo, in diagram order; parts without one are left out."""
    mapping = _image_mapping(images)
    parts = []
    for part in IMAGE_PARTS:
        url = mapping.get(part)
        if not url:
            continue
        label, icon = PART_LABELS[part]
        parts.append(AnatomyPart(part=part, label=label, icon=icon, url=url))
    return parts


@dataclass
class AnatomyMap:
    parts: list[AnatomyPart]
    highlighted: Optional[str] = None
    handlers: dict[str, Callable[[], ImageViewer]] = field(default_factory=dict)

    @classmethod
    def from_images(cls, images: Any) -> "AnatomyMap":
        parts = build_anatomy_map(images)
        return cls(parts=parts, handlers={p.part: p.open for p in parts})

    @property
    def message(self) -> Optional[str]:
        return None if self.parts else NO_IMAGES_MESSAGE

    def click(self, part: str) -> Optional[ImageViewer]:
        handler = self.handlers.get(part)
        return handler() if handler else None

    def highlight(self, part: str) -> None:
        if part in self.handlers:
            self.highlighted = part

    def clear_highlight(self) -> None:
        self.highlighted = None
