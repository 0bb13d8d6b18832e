# Routers package
from . import schedule_router
from . import appointments_router
from . import registration_router
from . import pwa_router

__all__ = [
    "schedule_router",
    "appointments_router",
    "registration_router",
    "pwa_router",
]
