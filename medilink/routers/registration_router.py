from typing import Any, Dict
from fastapi import APIRouter, Depends
import logging

from ..application.services.registration_service import RegistrationService, check_step
from ..dependencies import get_registration_service
from ..schemas.appointments import ValidationResult
from ..schemas.registration import ProfessionalFormData, Token, UsuarioLogin

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Registration"])


@router.post("/register/doctor/steps/{step}", response_model=ValidationResult)
def validate_step(step: int, form: ProfessionalFormData):
    error = check_step(step, form)
    return ValidationResult(valid=error is None, error=error)


@router.post("/register/doctor", response_model=Token)
async def register_doctor(
    form: ProfessionalFormData,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.register_doctor(form)


@router.post("/register/patient", response_model=Token)
async def register_patient(
    data: Dict[str, Any],
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.register_patient(data)


@router.post("/login", response_model=Token)
async def login(
    credentials: UsuarioLogin,
    service: RegistrationService = Depends(get_registration_service),
):
    return await service.login(credentials)
