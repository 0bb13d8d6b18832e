# Services package (re-export feature modules for stable imports)
from .schedule_service import ScheduleEditor
from .appointments_service import AppointmentsService
from .registration_service import RegistrationService
from .push_service import PushContext, PushService

__all__ = [
    "ScheduleEditor",
    "AppointmentsService",
    "RegistrationService",
    "PushContext",
    "PushService",
]
