import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ...application.ports.backend_api import BackendApi
from ...core.config import settings
from ...exceptions import BackendAuthError, BackendError, BackendUnavailable
from ...schemas.appointments import Cita, CitaCancelar, CitaCreate, CitaFilters, CitasEstadisticas
from ...schemas.registration import ProfessionalSubmitData, Token, UsuarioLogin

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "El servidor está tardando demasiado en responder. Intenta nuevamente."
NETWORK_MESSAGE = "No se pudo conectar con el servidor. Verifica tu conexión."
RATE_LIMIT_MESSAGE = "Demasiadas solicitudes. Por favor, espera un momento."
SESSION_EXPIRED_MESSAGE = "Sesión expirada. Inicia sesión nuevamente."

STATUS_MESSAGES = {
    404: "Recurso no encontrado",
    500: "Error interno del servidor",
    502: "Servicio temporalmente no disponible",
    503: "Servicio temporalmente no disponible",
    504: "Servicio temporalmente no disponible",
}


def detail_message(data: Any) -> Optional[str]:
    """Message carried by a FastAPI-style ``detail`` body, if any."""
    if not isinstance(data, dict):
        return None
    detail = data.get("detail")
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list) and detail:
        parts = []
        for err in detail:
            if not isinstance(err, dict):
                continue
            loc = err.get("loc") or []
            field = loc[-1] if loc else None
            parts.append(f"{field}: {err.get('msg', '')}")
        return ", ".join(parts) or None
    return None


def error_from_response(status: int, data: Any) -> BackendError:
    if status == 429:
        return BackendError(RATE_LIMIT_MESSAGE, 429)
    message = detail_message(data)
    if status == 401:
        return BackendAuthError(message or SESSION_EXPIRED_MESSAGE)
    if message is None:
        message = STATUS_MESSAGES.get(status, f"Error del servidor ({status})")
    if status in (502, 503, 504):
        return BackendUnavailable(message, 503)
    return BackendError(message, status if 400 <= status < 500 else 502)


class AiohttpBackendClient(BackendApi):
    """REST client for the MediLink backend.

    One ``aiohttp.ClientSession`` per call; no automatic retries.
    """

    def __init__(self, base_url: Optional[str] = None, timeout_seconds: Optional[float] = None, health_timeout_seconds: Optional[float] = None):
        base_url = base_url if base_url is not None else settings.API_URL
        if not base_url:
            raise ValueError("API_URL is not configured. Check your environment variables.")
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.API_TIMEOUT_SECONDS
        self.health_timeout_seconds = health_timeout_seconds or settings.HEALTH_TIMEOUT_SECONDS

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _request(self, method: str, path: str, token: Optional[str] = None, json: Any = None, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(method, url, json=json, params=params, headers=self._headers(token)) as response:
                    try:
                        data = await response.json(content_type=None)
                    except ValueError:
                        data = None
                    if 200 <= response.status < 300:
                        logger.debug(f"{response.status} {method} {path}")
                        return data
                    logger.error(f"{response.status} {method} {path}")
                    raise error_from_response(response.status, data)
        except asyncio.TimeoutError:
            logger.error(f"Timeout {method} {path} after {self.timeout_seconds}s")
            raise BackendUnavailable(TIMEOUT_MESSAGE, 504)
        except aiohttp.ClientError as e:
            logger.error(f"Network error {method} {path}: {e}")
            raise BackendUnavailable(NETWORK_MESSAGE)

    async def register_doctor(self, data: ProfessionalSubmitData) -> Token:
        out = await self._request("POST", "/api/registro/doctor", json=data.model_dump(mode="json", exclude_none=True))
        return Token.model_validate(out)

    async def register_patient(self, data: Dict[str, Any]) -> Token:
        out = await self._request("POST", "/api/registro/paciente", json=data)
        return Token.model_validate(out)

    async def login(self, credentials: UsuarioLogin) -> Token:
        out = await self._request("POST", "/api/usuarios/login", json=credentials.model_dump())
        return Token.model_validate(out)

    async def create_appointment(self, data: CitaCreate, token: Optional[str]) -> Cita:
        out = await self._request("POST", "/api/citas/", token=token, json=data.model_dump(exclude_none=True))
        return Cita.model_validate(out)

    async def cancel_appointment(self, cita_id: int, data: CitaCancelar, token: Optional[str]) -> Dict[str, Any]:
        out = await self._request("PUT", f"/api/citas/{cita_id}/cancelar", token=token, json=data.model_dump())
        return out or {}

    async def list_appointments(self, filters: CitaFilters, token: Optional[str]) -> List[Cita]:
        params = filters.model_dump(mode="json", exclude_none=True)
        out = await self._request("GET", "/api/citas/mis-citas", token=token, params=params or None)
        return [Cita.model_validate(item) for item in out or []]

    async def upcoming_appointments(self, limit: int, token: Optional[str]) -> List[Cita]:
        out = await self._request("GET", "/api/citas/proximas", token=token, params={"limit": limit})
        return [Cita.model_validate(item) for item in out or []]

    async def get_appointment(self, cita_id: int, token: Optional[str]) -> Cita:
        out = await self._request("GET", f"/api/citas/{cita_id}", token=token)
        return Cita.model_validate(out)

    async def appointment_statistics(self, token: Optional[str]) -> CitasEstadisticas:
        out = await self._request("GET", "/api/citas/estadisticas/mis-citas", token=token)
        return CitasEstadisticas.model_validate(out or {})

    async def health(self) -> bool:
        timeout = aiohttp.ClientTimeout(total=self.health_timeout_seconds)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(f"{self.base_url}/health") as response:
                    return 200 <= response.status < 300
        except (aiohttp.ClientError, asyncio.TimeoutError):
            return False
