from typing import Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .application.ports.backend_api import BackendApi
from .application.services.appointments_service import AppointmentsService
from .application.services.push_service import PushService
from .application.services.registration_service import RegistrationService

bearer_scheme = HTTPBearer(auto_error=False)


def get_backend(request: Request) -> BackendApi:
    backend = getattr(request.app.state, "backend", None)
    if backend is None:
        raise HTTPException(status_code=503, detail="Backend API not configured")
    return backend


def get_push_service(request: Request) -> PushService:
    return request.app.state.push_service


def get_token(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> str:
    """Bearer token forwarded untouched; the backend validates it."""
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="Authentication required")
    return credentials.credentials


def get_appointments_service(api: BackendApi = Depends(get_backend)) -> AppointmentsService:
    return AppointmentsService(api=api)


def get_registration_service(api: BackendApi = Depends(get_backend)) -> RegistrationService:
    return RegistrationService(api=api)
