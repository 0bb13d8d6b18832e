from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from ...exceptions import RequestValidationFailed
from ...schemas.registration import (
    DoctorSubmit,
    ProfessionalFormData,
    ProfessionalSubmitData,
    Token,
    UsuarioLogin,
    UsuarioSubmit,
)
from ..ports.backend_api import BackendApi
from .schedule_service import deduplicate

logger = logging.getLogger(__name__)


def _to_float(value: str) -> Optional[float]:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_int(value: str) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def check_basic_info(form: ProfessionalFormData) -> Optional[str]:
    if form.password != form.confirm_password:
        return "Las contraseñas no coinciden"
    if not form.accept_terms:
        return "Debes aceptar los términos y condiciones"
    if len(form.nombre) < 2 or len(form.apellido) < 2:
        return "Nombre y apellido deben tener al menos 2 caracteres"
    if "@" not in form.email:
        return "Ingresa un correo electrónico válido"
    if len(form.telefono) < 10:
        return "El teléfono debe tener al menos 10 dígitos"
    if len(form.password) < 8:
        return "La contraseña debe tener al menos 8 caracteres"
    return None


def check_professional_info(form: ProfessionalFormData) -> Optional[str]:
    if not form.especialidad or not form.cedula_profesional or not form.consultorio or not form.costo_consulta:
        return "Por favor completa todos los campos profesionales requeridos"
    if len(form.cedula_profesional) < 5:
        return "La cédula profesional debe tener al menos 5 caracteres"
    if len(form.consultorio) < 3:
        return "El consultorio debe tener al menos 3 caracteres"
    costo = _to_float(form.costo_consulta)
    if costo is None or costo <= 0:
        return "Por favor ingresa un costo de consulta válido"
    duracion = _to_int(form.duracion_cita_minutos)
    if duracion is None or duracion <= 0:
        return "Por favor ingresa una duración de cita válida"
    if not form.horarios:
        return "Agrega al menos un horario de atención"
    return None


def check_additional_info(form: ProfessionalFormData) -> Optional[str]:
    required = (form.direccion_consultorio, form.ciudad, form.estado, form.codigo_postal, form.universidad)
    if not all(value.strip() for value in required):
        return "Por favor completa la información adicional requerida"
    anos = _to_int(form.anos_experiencia)
    if anos is None or anos < 0:
        return "Por favor ingresa años de experiencia válidos"
    for label, value in (("latitud", form.latitud), ("longitud", form.longitud)):
        if value and _to_float(value) is None:
            return f"Coordenada inválida: {label}"
    return None


STEP_CHECKS = {
    1: check_basic_info,
    2: check_professional_info,
    3: check_additional_info,
}


def check_step(step: int, form: ProfessionalFormData) -> Optional[str]:
    if step not in STEP_CHECKS:
        raise RequestValidationFailed(f"Paso de registro inválido: {step}")
    return STEP_CHECKS[step](form)


def build_submit_data(form: ProfessionalFormData) -> ProfessionalSubmitData:
    """Assemble the registration payload; duplicate horarios are collapsed."""
    horarios = deduplicate(form.horarios)
    removed = len(form.horarios) - len(horarios)
    if removed:
        logger.warning(f"Dropped {removed} duplicate schedule entries before registration")

    return ProfessionalSubmitData(
        usuario=UsuarioSubmit(
            nombre=form.nombre,
            apellido=form.apellido,
            email=form.email,
            telefono=form.telefono,
            password=form.password,
        ),
        doctor=DoctorSubmit(
            especialidad=form.especialidad,
            cedula_profesional=form.cedula_profesional,
            consultorio=form.consultorio,
            direccion_consultorio=form.direccion_consultorio,
            ciudad=form.ciudad,
            estado=form.estado,
            codigo_postal=form.codigo_postal,
            anos_experiencia=_to_int(form.anos_experiencia),
            duracion_cita_minutos=_to_int(form.duracion_cita_minutos),
            universidad=form.universidad,
            acepta_seguro=form.acepta_seguro,
            atiende_domicilio=form.atiende_domicilio,
            atiende_videollamada=form.atiende_videollamada,
            costo_consulta=_to_float(form.costo_consulta),
            biografia=form.biografia or None,
            foto_url=form.foto_url or None,
            latitud=_to_float(form.latitud) if form.latitud else None,
            longitud=_to_float(form.longitud) if form.longitud else None,
        ),
        horarios=horarios,
    )


@dataclass
class RegistrationService:
    api: BackendApi

    async def register_doctor(self, form: ProfessionalFormData) -> Token:
        for step in sorted(STEP_CHECKS):
            error = check_step(step, form)
            if error:
                raise RequestValidationFailed(error)
        data = build_submit_data(form)
        token = await self.api.register_doctor(data)
        logger.info(f"Doctor registered: {form.email}")
        return token

    async def register_patient(self, data: Dict[str, Any]) -> Token:
        return await self.api.register_patient(data)

    async def login(self, credentials: UsuarioLogin) -> Token:
        return await self.api.login(credentials)
