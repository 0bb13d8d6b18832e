# medilink/schemas/appointments.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class EstadoCita(str, Enum):
    PENDIENTE = "pendiente"
    CONFIRMADA = "confirmada"
    COMPLETADA = "completada"
    CANCELADA = "cancelada"


class AppointmentForm(BaseModel):
    fecha: str = ""  # YYYY-MM-DD
    hora: str = ""  # HH:MM
    motivo: str = ""
    sintomas: str = ""
    notas_paciente: str = ""
    es_videollamada: bool = False


class AppointmentBookRequest(AppointmentForm):
    doctor_id: int


class CitaCreate(BaseModel):
    doctor_id: int
    fecha_hora: str  # ISO-8601, no offset
    motivo: str
    sintomas: Optional[str] = None
    notas_paciente: Optional[str] = None
    es_videollamada: bool = False


class CitaCancelar(BaseModel):
    motivo_cancelacion: str


class DoctorResumen(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    nombre: str
    apellido: str
    especialidad: str
    consultorio: Optional[str] = None
    telefono: Optional[str] = None


class Cita(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    paciente_id: int
    doctor_id: int
    fecha_hora: str
    duracion_minutos: Optional[int] = None
    motivo: str
    sintomas: Optional[str] = None
    notas_paciente: Optional[str] = None
    notas_doctor: Optional[str] = None
    diagnostico: Optional[str] = None
    tratamiento: Optional[str] = None
    receta: Optional[str] = None
    es_videollamada: bool = False
    url_videollamada: Optional[str] = None
    estado: EstadoCita
    costo: Optional[float] = None
    motivo_cancelacion: Optional[str] = None
    fecha_cancelacion: Optional[str] = None
    fecha_creacion: Optional[str] = None
    doctor: Optional[DoctorResumen] = None


class CitasEstadisticas(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: int = 0
    pendientes: int = 0
    confirmadas: int = 0
    completadas: int = 0
    canceladas: int = 0
    proxima_cita: Optional[str] = None


class CitaFilters(BaseModel):
    estado: Optional[EstadoCita] = None
    fecha_inicio: Optional[str] = None
    fecha_fin: Optional[str] = None
    skip: Optional[int] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, ge=1)


class ValidationResult(BaseModel):
    valid: bool
    error: Optional[str] = None
