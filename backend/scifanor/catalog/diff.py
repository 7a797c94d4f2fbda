"""Human-readable summary of what changed between two versions of a plant."""
from typing import Any, Mapping

from pydantic import BaseModel

FIELD_LABELS = {
    "nama_indonesia": "Nama Indonesia",
    "nama_latin": "Nama Latin",
    "famili": "Famili",
    "genus": "Genus",
    "spesies": "Spesies",
    "habitat": "Habitat",
}

# Only genus and spesies descriptions are compared; the audit feed has always
# been written this way.
DESCRIPTION_LABELS = {
    "genus": "Genus",
    "spesies": "Spesies",
}

IMAGE_LABELS = {
    "full_plant": "Tumbuhan Utuh",
    "root": "Akar",
    "stem": "Batang",
    "leaf": "Daun",
    "fruit": "Buah",
    "flower": "Bunga",
}

NO_CHANGES = "Melakukan update data"
MAX_LISTED_CHANGES = 2


def _as_mapping(record: Any) -> Mapping[str, Any]:
    if record is None:
        return {}
    if isinstance(record, BaseModel):
        return record.model_dump(by_alias=True)
    return record


def _sub_mapping(record: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = record.get(key)
    if isinstance(value, BaseModel):
        return value.model_dump()
    return value or {}


def detect_changes(old_record: Any, new_record: Any) -> list[str]:
    old = _as_mapping(old_record)
    new = _as_mapping(new_record)
    changes = []

    for key, label in FIELD_LABELS.items():
        if old.get(key) != new.get(key):
            changes.append(f"Mengubah {label}")

    if new.get("taxonomy_descriptions") is not None:
        old_desc = _sub_mapping(old, "taxonomy_descriptions")
        new_desc = _sub_mapping(new, "taxonomy_descriptions")
        for key, label in DESCRIPTION_LABELS.items():
            if old_desc.get(key) != new_desc.get(key):
                changes.append(f"Mengupdate deskripsi {label}")

    if new.get("images"):
        old_images = _sub_mapping(old, "images")
        new_images = _sub_mapping(new, "images")
        for part, url in new_images.items():
            # removed photos (url now empty) are intentionally not reported
            if url and url != old_images.get(part):
                changes.append(f"Menambahkan/Mengupdate foto {IMAGE_LABELS.get(part, part)}")

    return changes


def diff_to_summary(old_record: Any, new_record: Any) -> str:
    """Summary for the activity log; long change lists collapse to a count."""
    changes = detect_changes(old_record, new_record)
    if not changes:
        return NO_CHANGES
    if len(changes) > MAX_LISTED_CHANGES:
        return f"Mengupdate {len(changes)} data detail"
    return ", ".join(changes)
