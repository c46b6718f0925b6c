from datetime import date
from typing import Dict, List, Optional, Union

from pydantic import BaseModel

from odontocare.core.cancellation import CancelToken
from odontocare.schemas.appointment import Appointment, AppointmentCreate, AppointmentStatus
from odontocare.screens.base import ScreenController
from odontocare.screens.formatting import (
    SELECTED_DATE_COLOR,
    format_datetime,
    local_date,
    noon_on,
    status_color,
)

DEFAULT_APPOINTMENT_TYPE = "Consulta de rotina"
CANCELLABLE_STATUSES = {AppointmentStatus.SCHEDULED.value, AppointmentStatus.CONFIRMED.value}

class DateMark(BaseModel):
    selected: bool = True
    marked: bool = False
    color: str

class AppointmentDraft(BaseModel):
    type: str = DEFAULT_APPOINTMENT_TYPE
    notes: str = ""

class AppointmentsScreen(ScreenController):
    load_error_message = "Não foi possível carregar os agendamentos."

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.appointments: List[Appointment] = []
        self.patient_id: Optional[int] = None
        self.selected_date: Optional[date] = None
        self.draft = AppointmentDraft()
        self.form_visible = False
        self._marks: Dict[str, DateMark] = {}

    async def load(self, token: CancelToken) -> None:
        user = await self.resolve_user(token)
        if user is None or not user.is_patient:
            return

        patient = await self.session.fetch_patient()
        token.raise_if_cancelled()
        self.patient_id = patient.id

        appointments = await self.api.appointments.get_by_patient_id(patient.id)
        token.raise_if_cancelled()
        self.appointments = appointments
        self._marks = self.build_marks(appointments)

    @staticmethod
    def build_marks(appointments: List[Appointment]) -> Dict[str, DateMark]:
        marks: Dict[str, DateMark] = {}
        for appointment in appointments:
            day = local_date(appointment.date).isoformat()
            marks[day] = DateMark(selected=True, marked=True, color=status_color(appointment.status))
        return marks

    @property
    def marked_dates(self) -> Dict[str, DateMark]:
        marks = dict(self._marks)
        if self.selected_date is not None:
            marks[self.selected_date.isoformat()] = DateMark(selected=True, color=SELECTED_DATE_COLOR)
        return marks

    @staticmethod
    def status_color(status: Optional[str]) -> str:
        return status_color(status)

    @staticmethod
    def can_cancel(appointment: Appointment) -> bool:
        return appointment.status in CANCELLABLE_STATUSES

    @staticmethod
    def describe(appointment: Appointment) -> str:
        return format_datetime(appointment.date)

    def open_new(self) -> None:
        self.selected_date = None
        self.draft = AppointmentDraft()
        self.form_visible = True

    def close_new(self) -> None:
        self.form_visible = False

    def select_date(self, day: Union[date, str]) -> None:
        if isinstance(day, str):
            day = date.fromisoformat(day)
        self.selected_date = day

    def set_type(self, value: str) -> None:
        self.draft.type = value

    def set_notes(self, value: str) -> None:
        self.draft.notes = value

    async def confirm(self) -> bool:
        if self.selected_date is None:
            self.notifier.alert("Erro", "Por favor, selecione uma data antes de confirmar.")
            return False
        if not self.patient_id:
            self.notifier.alert("Erro", "Informações do paciente não encontradas.")
            return False

        selected = self.selected_date
        # Always noon local time, away from any day boundary.
        payload = AppointmentCreate(
            patient_id=self.patient_id,
            date=noon_on(selected),
            type=self.draft.type,
            notes=self.draft.notes,
            status=AppointmentStatus.SCHEDULED.value,
        )
        created = await self.run_command(
            lambda: self.api.appointments.create(payload),
            "Não foi possível confirmar o agendamento.",
            success_message=f"Seu agendamento foi marcado para {selected.isoformat()}",
            refetch=True,
        )
        if created:
            self.form_visible = False
            self.selected_date = None
        return created

    async def cancel(self, appointment_id: int) -> bool:
        return await self.run_command(
            lambda: self.api.appointments.update_status(appointment_id, AppointmentStatus.CANCELLED.value),
            "Não foi possível cancelar o agendamento.",
            success_message="Agendamento cancelado com sucesso!",
            refetch=True,
        )
