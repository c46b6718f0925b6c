from typing import Any, List

from odontocare.api.client import ApiClient, parse, parse_list
from odontocare.core.exceptions import ApiError
from odontocare.core.logger import logger
from odontocare.schemas.alert import Alert

class AlertService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Alert]:
        try:
            data = await self.client.get("/alertas")
            return parse_list(Alert, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch alerts: {exc}")
            raise

    async def get_by_patient_id(self, patient_id: int) -> List[Alert]:
        try:
            data = await self.client.get(f"/alertas/paciente/{patient_id}")
            return parse_list(Alert, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch alerts of patient {patient_id}: {exc}")
            raise

    async def get_unread_by_patient_id(self, patient_id: int) -> List[Alert]:
        try:
            data = await self.client.get(f"/alertas/paciente/{patient_id}/nao-lidos")
            return parse_list(Alert, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch unread alerts of patient {patient_id}: {exc}")
            raise

    async def mark_as_read(self, alert_id: int) -> Any:
        try:
            return await self.client.patch(f"/alertas/{alert_id}/marcar-como-lido")
        except ApiError as exc:
            logger.error(f"Failed to mark alert {alert_id} as read: {exc}")
            raise

    async def mark_all_as_read(self, patient_id: int) -> Any:
        try:
            return await self.client.patch(f"/alertas/paciente/{patient_id}/marcar-todos-como-lidos")
        except ApiError as exc:
            logger.error(f"Failed to mark all alerts of patient {patient_id} as read: {exc}")
            raise
