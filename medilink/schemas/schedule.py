# medilink/schemas/schedule.py
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, field_validator


class DiaSemana(str, Enum):
    LUNES = "LUNES"
    MARTES = "MARTES"
    MIERCOLES = "MIERCOLES"
    JUEVES = "JUEVES"
    VIERNES = "VIERNES"
    SABADO = "SABADO"
    DOMINGO = "DOMINGO"


# Monday -> Sunday
DIAS_SEMANA: List[DiaSemana] = list(DiaSemana)


class ScheduleEntry(BaseModel):
    dia_semana: DiaSemana
    hora_inicio: str  # HH:MM
    hora_fin: str  # HH:MM
    activo: bool = True

    @field_validator("hora_inicio", "hora_fin")
    @classmethod
    def _check_time(cls, value: str) -> str:
        try:
            parsed = datetime.strptime(value, "%H:%M")
        except (TypeError, ValueError):
            raise ValueError("Invalid time format. Use HH:MM")
        return parsed.strftime("%H:%M")

    def key(self) -> tuple:
        return (self.dia_semana, self.hora_inicio, self.hora_fin)


class ScheduleState(BaseModel):
    horarios: List[ScheduleEntry] = []


class ScheduleUpdate(ScheduleState):
    index: int
    field: str
    value: Any


class ScheduleRemove(ScheduleState):
    index: int


class ScheduleResponse(BaseModel):
    horarios: List[ScheduleEntry]
    duplicate_indices: List[int]
    has_duplicates: bool
    warning: Optional[str] = None
