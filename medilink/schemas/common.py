# medilink/schemas/common.py
from pydantic import BaseModel
from typing import Optional


class MessageResponse(BaseModel):
    success: bool = True
    message: str
    cita_id: Optional[int] = None


class HealthResponse(BaseModel):
    status: str
    backend_reachable: bool
    version: str
