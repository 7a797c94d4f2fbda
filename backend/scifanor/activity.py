"""Activity logging utilities."""
import logging
from datetime import datetime
from typing import Optional

from scifanor.backend import CatalogBackend
from scifanor.catalog.normalize import profile_summary
from scifanor.catalog.text import time_ago
from scifanor.errors import CatalogError, TransientIOError
from scifanor.models import ActionType
from scifanor.schemas import ActivityEntry

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"

COLLABORATOR_DETAILS = {
    ActionType.ADD_COLLABORATOR: "Menambahkan kolaborator baru",
    ActionType.REMOVE_COLLABORATOR: "Menghapus kolaborator",
}


def log_activity(
    backend: CatalogBackend,
    plant_id: str,
    action: ActionType,
    details: str,
) -> Optional[dict]:
    """Append an entry to a plant's activity log.

    Args:
        backend: Backend client bound to the acting user
        plant_id: Plant the action was performed on
        action: What kind of change was made
        details: Human readable summary shown in the timeline

    Anonymous actions are not logged. A failed write is logged and swallowed so
    that the change it describes still goes through.
    """
    identity = backend.current_identity()
    if identity is None:
        return None

    try:
        row = backend.insert("plant_activity_logs", {
            "plant_id": plant_id,
            "user_id": identity["id"],
            "action_type": ActionType(action).value,
            "details": details,
        })
    except CatalogError as exc:
        logger.error("Error logging activity %s for plant %s: %s", action, plant_id, exc)
        return None

    logger.info("Activity logged: %s - %s", row["action_type"], details)
    return row


def get_activities(
    backend: CatalogBackend,
    plant_id: str,
    now: Optional[datetime] = None,
) -> list[ActivityEntry]:
    """Activity for a plant, newest first, with the acting user's profile."""
    try:
        rows = backend.fetch_where(
            "plant_activity_logs", "plant_id", [plant_id], order_by="-created_at"
        )
    except TransientIOError as exc:
        logger.error("Error fetching activities for plant %s: %s", plant_id, exc)
        return []

    user_ids = sorted({row["user_id"] for row in rows if row.get("user_id")})
    try:
        profiles = {p["id"]: p for p in backend.fetch_where("profiles", "id", user_ids)}
    except TransientIOError as exc:
        logger.error("Error fetching activity authors: %s", exc)
        profiles = {}

    entries = []
    for row in rows:
        user = profile_summary(profiles.get(row.get("user_id")))
        entries.append(ActivityEntry(
            id=row["id"],
            plant_id=row["plant_id"],
            action_type=row["action_type"],
            details=row.get("details") or row["action_type"],
            created_at=row["created_at"],
            time_ago=time_ago(row["created_at"], now),
            user=user,
            user_name=(user.full_name if user and user.full_name else UNKNOWN_USER),
        ))
    return entries
