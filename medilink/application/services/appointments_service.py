from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from datetime import datetime
import logging

from ...exceptions import RequestValidationFailed
from ...schemas.appointments import (
    AppointmentForm,
    Cita,
    CitaCancelar,
    CitaCreate,
    CitaFilters,
    CitasEstadisticas,
    ValidationResult,
)
from ..ports.backend_api import BackendApi

logger = logging.getLogger(__name__)

MIN_REASON_LENGTH = 10

MISSING_DATE_TIME = "Por favor selecciona fecha y hora"
INVALID_DATE_TIME = "Formato de fecha u hora inválido"
REASON_TOO_SHORT = "El motivo debe tener al menos 10 caracteres"
NOT_IN_FUTURE = "La fecha y hora deben ser en el futuro"
CANCEL_REASON_TOO_SHORT = "El motivo de cancelación debe tener al menos 10 caracteres"


def combine_date_time(fecha: str, hora: str) -> datetime:
    return datetime.strptime(f"{fecha}T{hora}", "%Y-%m-%dT%H:%M")


def validate_appointment(form: AppointmentForm, now: Optional[datetime] = None) -> ValidationResult:
    """Fail-fast check of a booking form.

    Order: date and time present (and well formed), reason length, then the
    combined instant must be strictly later than ``now``.
    """
    if not form.fecha or not form.hora:
        return ValidationResult(valid=False, error=MISSING_DATE_TIME)
    try:
        fecha_hora = combine_date_time(form.fecha, form.hora)
    except ValueError:
        return ValidationResult(valid=False, error=INVALID_DATE_TIME)

    if len(form.motivo) < MIN_REASON_LENGTH:
        return ValidationResult(valid=False, error=REASON_TOO_SHORT)

    now = now or datetime.now()
    if fecha_hora <= now:
        return ValidationResult(valid=False, error=NOT_IN_FUTURE)

    return ValidationResult(valid=True)


def build_cita_create(doctor_id: int, form: AppointmentForm) -> CitaCreate:
    return CitaCreate(
        doctor_id=doctor_id,
        fecha_hora=combine_date_time(form.fecha, form.hora).strftime("%Y-%m-%dT%H:%M:%S"),
        motivo=form.motivo,
        sintomas=form.sintomas or None,
        notas_paciente=form.notas_paciente or None,
        es_videollamada=form.es_videollamada,
    )


@dataclass
class AppointmentsService:
    api: BackendApi

    async def create(self, doctor_id: int, form: AppointmentForm, token: Optional[str], now: Optional[datetime] = None) -> Cita:
        result = validate_appointment(form, now=now)
        if not result.valid:
            raise RequestValidationFailed(result.error)
        payload = build_cita_create(doctor_id, form)
        cita = await self.api.create_appointment(payload, token)
        logger.info(f"Appointment {cita.id} created with doctor {doctor_id}")
        return cita

    async def cancel(self, cita_id: int, motivo_cancelacion: str, token: Optional[str]) -> Dict[str, Any]:
        if len(motivo_cancelacion or "") < MIN_REASON_LENGTH:
            raise RequestValidationFailed(CANCEL_REASON_TOO_SHORT)
        out = await self.api.cancel_appointment(cita_id, CitaCancelar(motivo_cancelacion=motivo_cancelacion), token)
        logger.info(f"Appointment {cita_id} cancelled")
        return out

    async def list_mine(self, filters: Optional[CitaFilters], token: Optional[str]) -> List[Cita]:
        return await self.api.list_appointments(filters or CitaFilters(), token)

    async def upcoming(self, token: Optional[str], limit: int = 10) -> List[Cita]:
        return await self.api.upcoming_appointments(limit, token)

    async def get(self, cita_id: int, token: Optional[str]) -> Cita:
        return await self.api.get_appointment(cita_id, token)

    async def statistics(self, token: Optional[str]) -> CitasEstadisticas:
        return await self.api.appointment_statistics(token)
