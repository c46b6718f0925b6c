from typing import List, Optional, Set

from odontocare.core.cancellation import CancelToken
from odontocare.schemas.alert import Alert
from odontocare.screens.base import ScreenController
from odontocare.screens.formatting import format_datetime

class AlertsScreen(ScreenController):
    refetch_on_focus = True
    load_error_message = "Não foi possível carregar os alertas."

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.alerts: List[Alert] = []
        self.patient_id: Optional[int] = None
        self.refreshing = False
        # Alerts this screen has seen as read; they never go back to unread.
        self._read_ids: Set[int] = set()

    async def load(self, token: CancelToken) -> None:
        user = await self.resolve_user(token)
        if user is None or not user.is_patient:
            return

        patient = await self.session.fetch_patient()
        token.raise_if_cancelled()
        self.patient_id = patient.id

        alerts = await self.api.alerts.get_by_patient_id(patient.id)
        token.raise_if_cancelled()
        self.alerts = [self._keep_read(alert) for alert in alerts]

    def _keep_read(self, alert: Alert) -> Alert:
        if alert.read:
            self._read_ids.add(alert.id)
            return alert
        if alert.id in self._read_ids:
            return alert.model_copy(update={"read": True})
        return alert

    async def refresh(self) -> None:
        self.refreshing = True
        try:
            await self.reload()
        finally:
            self.refreshing = False

    @property
    def unread_count(self) -> int:
        return sum(1 for alert in self.alerts if not alert.read)

    @staticmethod
    def describe(alert: Alert) -> str:
        return format_datetime(alert.date)

    async def mark_read(self, alert_id: int) -> bool:
        def patch(_):
            self._read_ids.add(alert_id)
            self.alerts = [
                alert.model_copy(update={"read": True}) if alert.id == alert_id else alert
                for alert in self.alerts
            ]

        return await self.run_command(
            lambda: self.api.alerts.mark_as_read(alert_id),
            "Não foi possível marcar o alerta como lido.",
            on_success=patch,
        )

    async def mark_all_read(self) -> bool:
        if not self.patient_id:
            return False

        def patch(_):
            self._read_ids.update(alert.id for alert in self.alerts)
            self.alerts = [alert.model_copy(update={"read": True}) for alert in self.alerts]

        return await self.run_command(
            lambda: self.api.alerts.mark_all_as_read(self.patient_id),
            "Não foi possível marcar todos os alertas como lidos.",
            success_message="Todos os alertas foram marcados como lidos.",
            on_success=patch,
        )
