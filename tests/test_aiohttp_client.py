import asyncio

import pytest
from aiohttp import test_utils, web

from medilink.exceptions import BackendAuthError, BackendError, BackendUnavailable
from medilink.infrastructure.backend.aiohttp_client import AiohttpBackendClient, detail_message, error_from_response
from medilink.schemas.appointments import CitaCreate, CitaFilters


CITA = {
    "id": 11,
    "paciente_id": 2,
    "doctor_id": 3,
    "fecha_hora": "2030-05-10T10:30:00",
    "duracion_minutos": 30,
    "motivo": "Dolor de cabeza fuerte",
    "es_videollamada": False,
    "estado": "pendiente",
    "campo_nuevo": "ignored",
}


def run_against(handlers, scenario, timeout_seconds=2):
    """Start an in-process backend, run ``scenario(client)`` against it."""
    async def main():
        app = web.Application()
        for method, path, handler in handlers:
            app.router.add_route(method, path, handler)
        server = test_utils.TestServer(app)
        await server.start_server()
        try:
            client = AiohttpBackendClient(base_url=str(server.make_url("/")), timeout_seconds=timeout_seconds)
            return await scenario(client)
        finally:
            await server.close()
    return asyncio.run(main())


def test_create_appointment_sends_bearer_and_json():
    seen = {}

    async def create(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["body"] = await request.json()
        return web.json_response(CITA, status=201)

    payload = CitaCreate(doctor_id=3, fecha_hora="2030-05-10T10:30:00", motivo="Dolor de cabeza fuerte")
    cita = run_against([("POST", "/api/citas/", create)], lambda c: c.create_appointment(payload, "tok"))

    assert cita.id == 11
    assert seen["auth"] == "Bearer tok"
    assert seen["body"] == {
        "doctor_id": 3,
        "fecha_hora": "2030-05-10T10:30:00",
        "motivo": "Dolor de cabeza fuerte",
        "es_videollamada": False,
    }


def test_list_appointments_passes_filters_as_query():
    seen = {}

    async def mine(request):
        seen["query"] = dict(request.query)
        return web.json_response([CITA])

    filters = CitaFilters(estado="confirmada", limit=5)
    out = run_against([("GET", "/api/citas/mis-citas", mine)], lambda c: c.list_appointments(filters, "tok"))
    assert len(out) == 1
    assert seen["query"] == {"estado": "confirmada", "limit": "5"}


def test_backend_detail_message_is_surfaced():
    async def conflict(request):
        return web.json_response({"detail": "El horario ya está ocupado"}, status=400)

    payload = CitaCreate(doctor_id=3, fecha_hora="2030-05-10T10:30:00", motivo="Dolor de cabeza fuerte")
    with pytest.raises(BackendError) as exc:
        run_against([("POST", "/api/citas/", conflict)], lambda c: c.create_appointment(payload, "tok"))
    assert exc.value.message == "El horario ya está ocupado"
    assert exc.value.status_code == 400


def test_unauthorized_maps_to_auth_error():
    async def stats(request):
        return web.json_response({}, status=401)

    with pytest.raises(BackendAuthError) as exc:
        run_against([("GET", "/api/citas/estadisticas/mis-citas", stats)], lambda c: c.appointment_statistics("old"))
    assert exc.value.status_code == 401


def test_timeout_is_reported_as_unavailable():
    async def slow(request):
        await asyncio.sleep(1)
        return web.json_response(CITA)

    with pytest.raises(BackendUnavailable) as exc:
        run_against([("GET", "/api/citas/11", slow)], lambda c: c.get_appointment(11, "tok"), timeout_seconds=0.2)
    assert exc.value.status_code == 504
    assert "tardando demasiado" in exc.value.message


def test_connection_refused_is_reported_as_unavailable():
    client = AiohttpBackendClient(base_url="http://127.0.0.1:1", timeout_seconds=2)
    with pytest.raises(BackendUnavailable) as exc:
        asyncio.run(client.get_appointment(1, None))
    assert exc.value.message == "No se pudo conectar con el servidor. Verifica tu conexión."


def test_health_never_raises():
    client = AiohttpBackendClient(base_url="http://127.0.0.1:1", health_timeout_seconds=1)
    assert asyncio.run(client.health()) is False

    async def ok(request):
        return web.json_response({"status": "ok"})

    assert run_against([("GET", "/health", ok)], lambda c: c.health()) is True


def test_missing_base_url():
    with pytest.raises(ValueError):
        AiohttpBackendClient(base_url="")


def test_validation_detail_list_is_joined():
    data = {"detail": [
        {"loc": ["body", "motivo"], "msg": "field required", "type": "missing"},
        {"loc": ["body", "doctor_id"], "msg": "not an int", "type": "int_parsing"},
    ]}
    assert detail_message(data) == "motivo: field required, doctor_id: not an int"


def test_status_fallback_messages():
    assert error_from_response(404, None).message == "Recurso no encontrado"
    assert error_from_response(500, {}).message == "Error interno del servidor"
    assert error_from_response(500, {}).status_code == 502
    assert isinstance(error_from_response(503, None), BackendUnavailable)
    assert error_from_response(418, None).message == "Error del servidor (418)"
    assert error_from_response(429, {"detail": "x"}).message == "Demasiadas solicitudes. Por favor, espera un momento."
