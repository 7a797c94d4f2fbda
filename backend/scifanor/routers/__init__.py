from scifanor.routers.auth import router as auth_router
from scifanor.routers.plants import router as plants_router
from scifanor.routers.collaborators import router as collaborators_router
from scifanor.routers.media import router as media_router
from scifanor.routers.profiles import router as profiles_router

__all__ = ["auth_router", "plants_router", "collaborators_router", "media_router", "profiles_router"]
