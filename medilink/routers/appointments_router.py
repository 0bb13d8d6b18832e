from typing import List, Optional
from fastapi import APIRouter, Depends, Query
import logging

from ..application.services.appointments_service import AppointmentsService, validate_appointment
from ..dependencies import get_appointments_service, get_token
from ..schemas.appointments import (
    AppointmentBookRequest,
    AppointmentForm,
    Cita,
    CitaCancelar,
    CitaFilters,
    CitasEstadisticas,
    EstadoCita,
    ValidationResult,
)
from ..schemas.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("/validate", response_model=ValidationResult)
def validate_form(form: AppointmentForm):
    return validate_appointment(form)


@router.post("/", response_model=Cita)
async def book_appointment(
    body: AppointmentBookRequest,
    token: str = Depends(get_token),
    service: AppointmentsService = Depends(get_appointments_service),
):
    form = AppointmentForm(**body.model_dump(exclude={"doctor_id"}))
    return await service.create(body.doctor_id, form, token)


@router.get("/", response_model=List[Cita])
async def list_my_appointments(
    estado: Optional[EstadoCita] = Query(None),
    fecha_inicio: Optional[str] = Query(None),
    fecha_fin: Optional[str] = Query(None),
    skip: Optional[int] = Query(None, ge=0),
    limit: Optional[int] = Query(None, ge=1, le=100),
    token: str = Depends(get_token),
    service: AppointmentsService = Depends(get_appointments_service),
):
    filters = CitaFilters(estado=estado, fecha_inicio=fecha_inicio, fecha_fin=fecha_fin, skip=skip, limit=limit)
    return await service.list_mine(filters, token)


@router.get("/upcoming", response_model=List[Cita])
async def upcoming_appointments(
    limit: int = Query(10, ge=1, le=50),
    token: str = Depends(get_token),
    service: AppointmentsService = Depends(get_appointments_service),
):
    return await service.upcoming(token, limit=limit)


@router.get("/statistics", response_model=CitasEstadisticas)
async def appointment_statistics(
    token: str = Depends(get_token),
    service: AppointmentsService = Depends(get_appointments_service),
):
    return await service.statistics(token)


@router.get("/{cita_id}", response_model=Cita)
async def get_appointment(
    cita_id: int,
    token: str = Depends(get_token),
    service: AppointmentsService = Depends(get_appointments_service),
):
    return await service.get(cita_id, token)


@router.put("/{cita_id}/cancel", response_model=MessageResponse)
async def cancel_appointment(
    cita_id: int,
    body: CitaCancelar,
    token: str = Depends(get_token),
    service: AppointmentsService = Depends(get_appointments_service),
):
    out = await service.cancel(cita_id, body.motivo_cancelacion, token)
    return MessageResponse(message=out.get("message", "Cita cancelada"), cita_id=out.get("cita_id", cita_id))
