# medilink/schemas/registration.py
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict

from .schedule import ScheduleEntry


class Especialidad(str, Enum):
    MEDICINA_GENERAL = "medicina_general"
    CARDIOLOGIA = "cardiologia"
    DERMATOLOGIA = "dermatologia"
    PEDIATRIA = "pediatria"
    GINECOLOGIA = "ginecologia"
    TRAUMATOLOGIA = "traumatologia"
    OFTALMOLOGIA = "oftalmologia"
    NEUROLOGIA = "neurologia"


class ProfessionalFormData(BaseModel):
    """Raw wizard state; numeric fields arrive as strings from the form."""

    # Step 1
    nombre: str = ""
    apellido: str = ""
    email: str = ""
    telefono: str = ""
    password: str = ""
    confirm_password: str = ""
    accept_terms: bool = False

    # Step 2
    especialidad: Optional[Especialidad] = None
    cedula_profesional: str = ""
    consultorio: str = ""
    costo_consulta: str = ""
    duracion_cita_minutos: str = "30"
    horarios: List[ScheduleEntry] = []

    # Step 3
    direccion_consultorio: str = ""
    ciudad: str = ""
    estado: str = ""
    codigo_postal: str = ""
    anos_experiencia: str = ""
    universidad: str = ""
    biografia: str = ""
    foto_url: str = ""
    acepta_seguro: bool = False
    atiende_domicilio: bool = False
    atiende_videollamada: bool = False
    latitud: str = ""
    longitud: str = ""


class UsuarioSubmit(BaseModel):
    nombre: str
    apellido: str
    email: str
    telefono: str
    password: str
    tipo_usuario: Literal["doctor"] = "doctor"


class DoctorSubmit(BaseModel):
    especialidad: Especialidad
    cedula_profesional: str
    consultorio: str
    direccion_consultorio: str
    ciudad: str
    estado: str
    codigo_postal: str
    anos_experiencia: int
    duracion_cita_minutos: int
    universidad: str
    acepta_seguro: bool
    atiende_domicilio: bool
    atiende_videollamada: bool
    costo_consulta: float
    biografia: Optional[str] = None
    foto_url: Optional[str] = None
    latitud: Optional[float] = None
    longitud: Optional[float] = None


class ProfessionalSubmitData(BaseModel):
    usuario: UsuarioSubmit
    doctor: DoctorSubmit
    horarios: List[ScheduleEntry]


class UsuarioLogin(BaseModel):
    email: str
    password: str


class UsuarioResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    email: str
    nombre: str
    apellido: str
    telefono: Optional[str] = None
    tipo_usuario: str
    activo: bool = True
    fecha_registro: Optional[str] = None


class Token(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access_token: str
    token_type: str = "bearer"
    usuario: Optional[UsuarioResponse] = None
