from typing import Any, Dict, List, Optional, Protocol

from ...schemas.appointments import Cita, CitaCancelar, CitaCreate, CitaFilters, CitasEstadisticas
from ...schemas.registration import ProfessionalSubmitData, Token, UsuarioLogin


class BackendApi(Protocol):
    async def register_doctor(self, data: ProfessionalSubmitData) -> Token:
        ...

    async def register_patient(self, data: Dict[str, Any]) -> Token:
        ...

    async def login(self, credentials: UsuarioLogin) -> Token:
        ...

    async def create_appointment(self, data: CitaCreate, token: Optional[str]) -> Cita:
        ...

    async def cancel_appointment(self, cita_id: int, data: CitaCancelar, token: Optional[str]) -> Dict[str, Any]:
        ...

    async def list_appointments(self, filters: CitaFilters, token: Optional[str]) -> List[Cita]:
        ...

    async def upcoming_appointments(self, limit: int, token: Optional[str]) -> List[Cita]:
        ...

    async def get_appointment(self, cita_id: int, token: Optional[str]) -> Cita:
        ...

    async def appointment_statistics(self, token: Optional[str]) -> CitasEstadisticas:
        ...

    async def health(self) -> bool:
        ...
