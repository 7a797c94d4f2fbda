"""All SQLAlchemy models – re-exported for Alembic and app use."""

from scifanor.models.user import User
from scifanor.models.profile import Profile
from scifanor.models.plant import Plant
from scifanor.models.collaborator import PlantCollaborator
from scifanor.models.activity import PlantActivityLog, ActionType

__all__ = [
    "User",
    "Profile",
    "Plant",
    "PlantCollaborator",
    "PlantActivityLog", "ActionType",
]
