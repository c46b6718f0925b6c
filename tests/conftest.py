import itertools
from typing import Any, Dict, List, Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from odontocare.core.config import Settings
from odontocare.core.storage import MemoryStorage
from odontocare.main import OdontoCareApp
from odontocare.screens.base import Navigator, Notifier


class FakeBackend:
    """In-memory stand-in for the OdontoCare REST API."""

    def __init__(self):
        self.users: Dict[int, Dict[str, Any]] = {}
        self.patients: Dict[int, Dict[str, Any]] = {}
        self.appointments: Dict[int, Dict[str, Any]] = {}
        self.alerts: Dict[int, Dict[str, Any]] = {}
        self.activities: Dict[int, Dict[str, Any]] = {}
        self.requests: List[Dict[str, Any]] = []
        self.fail_paths = set()
        self._ids = itertools.count(100)

    def next_id(self) -> int:
        return next(self._ids)

    def add_user(self, email, senha="secret", nome="Maria Silva", tipo="paciente", id=None):
        user_id = id or self.next_id()
        self.users[user_id] = {"id": user_id, "nome": nome, "email": email, "senha": senha, "tipo": tipo}
        return user_id

    def add_patient(self, usuario_id, nome="Maria Silva", id=None, **fields):
        patient_id = id or self.next_id()
        record = {
            "id": patient_id,
            "usuarioId": usuario_id,
            "nome": nome,
            "dataNascimento": None,
            "telefone": None,
            "endereco": None,
            "pontos": 0,
            "ultimaConsulta": None,
        }
        record.update(fields)
        self.patients[patient_id] = record
        return patient_id

    def add_appointment(self, paciente_id, data, status="agendado", tipo="Consulta de rotina", observacoes=""):
        appointment_id = self.next_id()
        self.appointments[appointment_id] = {
            "id": appointment_id,
            "pacienteId": paciente_id,
            "data": data,
            "tipo": tipo,
            "observacoes": observacoes,
            "status": status,
        }
        return appointment_id

    def add_alert(self, paciente_id, titulo, data="2024-05-01T09:00:00", descricao=None, lido=False):
        alert_id = self.next_id()
        self.alerts[alert_id] = {
            "id": alert_id,
            "pacienteId": paciente_id,
            "titulo": titulo,
            "descricao": descricao,
            "data": data,
            "lido": lido,
        }
        return alert_id

    def add_activity(self, paciente_id, descricao, data, pontos=1, concluida=False):
        activity_id = self.next_id()
        self.activities[activity_id] = {
            "id": activity_id,
            "pacienteId": paciente_id,
            "descricao": descricao,
            "pontos": pontos,
            "data": data,
            "concluida": concluida,
        }
        return activity_id

    def paths(self, method: Optional[str] = None) -> List[str]:
        return [r["path"] for r in self.requests if method is None or r["method"] == method]


def _public_user(user):
    return {key: value for key, value in user.items() if key != "senha"}


def _get(table, record_id, label):
    if record_id not in table:
        raise HTTPException(status_code=404, detail=f"{label} não encontrado")
    return table[record_id]


def create_backend_app(db: FakeBackend) -> FastAPI:
    app = FastAPI()
    router = APIRouter()

    @app.middleware("http")
    async def record(request: Request, call_next):
        db.requests.append({
            "method": request.method,
            "path": request.url.path,
            "authorization": request.headers.get("authorization"),
        })
        if request.url.path in db.fail_paths:
            return JSONResponse(status_code=500, content={"message": "Erro interno"})
        return await call_next(request)

    @router.post("/auth/login")
    async def login(body: dict):
        for user in db.users.values():
            if user["email"] == body.get("email") and user["senha"] == body.get("senha"):
                return {"token": f"token-{user['id']}", **_public_user(user)}
        raise HTTPException(status_code=401, detail="Credenciais inválidas")

    @router.post("/auth/register")
    async def register(body: dict):
        user_id = db.add_user(body["email"], body["senha"], body["nome"], body.get("tipo", "paciente"))
        return _public_user(db.users[user_id])

    @router.get("/pacientes/usuario/{usuario_id}")
    async def patient_by_user(usuario_id: int):
        for patient in db.patients.values():
            if patient["usuarioId"] == usuario_id:
                return patient
        raise HTTPException(status_code=404, detail="Paciente não encontrado")

    @router.get("/pacientes/{patient_id}")
    async def patient_by_id(patient_id: int):
        return _get(db.patients, patient_id, "Paciente")

    @router.put("/pacientes/{patient_id}")
    async def put_patient(patient_id: int, body: dict):
        record = db.patients.get(patient_id, {"endereco": None, "ultimaConsulta": None})
        record.update(body)
        record["id"] = patient_id
        db.patients[patient_id] = record
        return record

    @router.patch("/pacientes/{patient_id}/pontos/{pontos}")
    async def add_points(patient_id: int, pontos: int):
        record = _get(db.patients, patient_id, "Paciente")
        record["pontos"] += pontos
        return record

    @router.patch("/pacientes/{patient_id}")
    async def patch_patient(patient_id: int, body: dict):
        record = _get(db.patients, patient_id, "Paciente")
        record.update(body)
        return record

    @router.get("/agendamentos")
    async def list_appointments():
        return list(db.appointments.values())

    @router.get("/agendamentos/paciente/{paciente_id}")
    async def appointments_by_patient(paciente_id: int):
        return [a for a in db.appointments.values() if a["pacienteId"] == paciente_id]

    @router.get("/agendamentos/{appointment_id}")
    async def get_appointment(appointment_id: int):
        return _get(db.appointments, appointment_id, "Agendamento")

    @router.post("/agendamentos")
    async def create_appointment(body: dict):
        appointment_id = db.add_appointment(
            body["pacienteId"], body["data"], body["status"], body["tipo"], body.get("observacoes", "")
        )
        return db.appointments[appointment_id]

    @router.put("/agendamentos/{appointment_id}")
    async def update_appointment(appointment_id: int, body: dict):
        record = _get(db.appointments, appointment_id, "Agendamento")
        record.update(body)
        return record

    @router.patch("/agendamentos/{appointment_id}/status/{status}")
    async def update_status(appointment_id: int, status: str):
        record = _get(db.appointments, appointment_id, "Agendamento")
        record["status"] = status
        return record

    @router.delete("/agendamentos/{appointment_id}")
    async def delete_appointment(appointment_id: int):
        _get(db.appointments, appointment_id, "Agendamento")
        del db.appointments[appointment_id]

    @router.get("/alertas")
    async def list_alerts():
        return list(db.alerts.values())

    @router.get("/alertas/paciente/{paciente_id}/nao-lidos")
    async def unread_alerts(paciente_id: int):
        return [a for a in db.alerts.values() if a["pacienteId"] == paciente_id and not a["lido"]]

    @router.get("/alertas/paciente/{paciente_id}")
    async def alerts_by_patient(paciente_id: int):
        return [a for a in db.alerts.values() if a["pacienteId"] == paciente_id]

    @router.patch("/alertas/paciente/{paciente_id}/marcar-todos-como-lidos")
    async def mark_all_read(paciente_id: int):
        for alert in db.alerts.values():
            if alert["pacienteId"] == paciente_id:
                alert["lido"] = True

    @router.patch("/alertas/{alert_id}/marcar-como-lido")
    async def mark_read(alert_id: int):
        record = _get(db.alerts, alert_id, "Alerta")
        record["lido"] = True
        return record

    @router.get("/atividades/paciente/{paciente_id}/data/{data}")
    async def activities_by_day(paciente_id: int, data: str):
        return [
            a for a in db.activities.values()
            if a["pacienteId"] == paciente_id and a["data"].startswith(data)
        ]

    @router.get("/atividades/paciente/{paciente_id}")
    async def activities_by_patient(paciente_id: int):
        return [a for a in db.activities.values() if a["pacienteId"] == paciente_id]

    @router.patch("/atividades/{activity_id}/marcar-como-concluida")
    async def complete_activity(activity_id: int):
        record = _get(db.activities, activity_id, "Atividade")
        if not record["concluida"]:
            record["concluida"] = True
            db.patients[record["pacienteId"]]["pontos"] += record["pontos"]
        return record

    @router.post("/atividades")
    async def create_activity(body: dict):
        activity_id = db.add_activity(
            body["pacienteId"], body["descricao"], body["data"], body["pontos"], body.get("concluida", False)
        )
        if body.get("concluida"):
            db.patients[body["pacienteId"]]["pontos"] += body["pontos"]
        return db.activities[activity_id]

    app.include_router(router, prefix="/api")
    return app


class RecordingNavigator(Navigator):
    def __init__(self):
        self.routes = []
        self.back = 0

    def navigate(self, route):
        self.routes.append(route)

    def go_back(self):
        self.back += 1


class RecordingNotifier(Notifier):
    def __init__(self):
        self.messages = []

    def alert(self, title, message):
        self.messages.append((title, message))

    @property
    def titles(self):
        return [title for title, _ in self.messages]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def test_settings():
    return Settings(API_URL="http://test/api", SESSION_BACKEND="memory")


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest_asyncio.fixture
async def odonto(backend, test_settings, storage):
    transport = httpx.ASGITransport(app=create_backend_app(backend))
    app = OdontoCareApp(settings=test_settings, storage=storage, transport=transport)
    yield app
    await app.close()


@pytest.fixture
def navigator():
    return RecordingNavigator()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def patient_account(backend):
    """User 7 with patient profile 42."""
    user_id = backend.add_user("maria@example.com", "secret", "Maria Silva", "paciente", id=7)
    patient_id = backend.add_patient(user_id, "Maria Silva", id=42, telefone="11 99999-0000", pontos=5)
    return {"user_id": user_id, "patient_id": patient_id, "email": "maria@example.com", "password": "secret"}


@pytest_asyncio.fixture
async def logged_in(odonto, patient_account):
    await odonto.session.login(patient_account["email"], patient_account["password"])
    return patient_account
