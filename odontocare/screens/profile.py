from datetime import date, datetime
from enum import Enum
from typing import Callable, Dict, List, Optional

from odontocare.core.cancellation import CancelToken
from odontocare.core.exceptions import OdontoCareError
from odontocare.core.logger import logger
from odontocare.schemas.activity import Activity, ActivityCreate
from odontocare.schemas.patient import Patient
from odontocare.screens.base import Route, ScreenController
from odontocare.screens.formatting import NOT_INFORMED, format_date

class DailyActivity(Enum):
    """
    The fixed daily checklist.

    The backend has no activity type field, so records are matched to a slot
    by a keyword in their free-text description. Members are tried in
    declaration order and the first keyword found wins.
    """

    BREAKFAST_BRUSHING = ("Escovou os dentes após o café da manhã", 1, "café da manhã")
    LUNCH_BRUSHING = ("Escovou os dentes após o almoço", 1, "almoço")
    DINNER_BRUSHING = ("Escovou os dentes após o jantar", 1, "jantar")
    CHECKUP_BOOKED = ("Marcou uma avaliação dental", 2, "avaliação")
    CLEANING_DONE = ("Realizou limpeza dental", 3, "limpeza")

    def __init__(self, description: str, points: int, keyword: str):
        self.description = description
        self.points = points
        self.keyword = keyword

def match_activity(description: str) -> Optional[DailyActivity]:
    for activity in DailyActivity:
        if activity.keyword in description:
            return activity
    return None

def local_now() -> datetime:
    return datetime.now().astimezone()

class ProfileScreen(ScreenController):
    refetch_on_focus = True
    load_error_message = "Não foi possível carregar os dados do perfil."

    def __init__(self, *args, clock: Callable[[], datetime] = local_now, **kwargs):
        super().__init__(*args, **kwargs)
        self.clock = clock
        self.patient: Optional[Patient] = None
        self.activities: List[Activity] = []
        self.checked: Dict[DailyActivity, bool] = {activity: False for activity in DailyActivity}
        self.saving = False
        self._day: Optional[date] = None

    def today(self) -> date:
        return self.clock().date()

    async def load(self, token: CancelToken) -> None:
        user = await self.resolve_user(token)
        if user is None or not user.is_patient:
            return

        patient = await self.session.fetch_patient()
        token.raise_if_cancelled()
        self.patient = patient

        today = self.today()
        if today != self._day:
            # New day, fresh checklist.
            self._day = today
            self.checked = {activity: False for activity in DailyActivity}

        activities = await self.api.activities.get_by_patient_id_and_date(patient.id, today)
        token.raise_if_cancelled()
        self.activities = activities
        for record in activities:
            slot = match_activity(record.description)
            if slot is not None and record.completed:
                self.checked[slot] = True

    def is_disabled(self, activity: DailyActivity) -> bool:
        return self.checked[activity] or self.saving

    async def check(self, activity: DailyActivity) -> bool:
        if self.is_disabled(activity):
            return False
        if self.patient is None:
            self.notifier.alert("Erro", "Dados do paciente não disponíveis.")
            return False

        patient_id = self.patient.id
        existing = next(
            (record for record in self.activities if record.description == activity.description),
            None,
        )

        async def complete():
            if existing is not None:
                if not existing.completed:
                    await self.api.activities.mark_as_completed(existing.id)
                return existing
            return await self.api.activities.create(
                ActivityCreate(
                    patient_id=patient_id,
                    description=activity.description,
                    points=activity.points,
                    date=self.clock(),
                    completed=True,
                )
            )

        def patch(_):
            self.checked[activity] = True

        self.saving = True
        try:
            return await self.run_command(
                complete,
                "Não foi possível atualizar a atividade.",
                on_success=patch,
                refetch=True,
            )
        finally:
            self.saving = False

    async def update_profile(self, **fields) -> bool:
        def patch(updated):
            self.patient = updated

        return await self.run_command(
            lambda: self.session.update_patient_profile(fields),
            "Não foi possível atualizar o perfil.",
            success_message="Perfil atualizado com sucesso!",
            on_success=patch,
        )

    async def logout(self) -> None:
        try:
            await self.session.logout()
        except OdontoCareError as exc:
            logger.error(f"Logout failed: {exc}")
            self.notifier.alert("Erro", "Não foi possível sair da conta.")
            return
        self.navigator.navigate(Route.LOGIN)

    @property
    def points_label(self) -> str:
        return str(self.patient.points) if self.patient else "0"

    @property
    def last_visit_label(self) -> str:
        return format_date(self.patient.last_visit if self.patient else None)

    @property
    def phone_label(self) -> str:
        if self.patient and self.patient.phone:
            return self.patient.phone
        return NOT_INFORMED
