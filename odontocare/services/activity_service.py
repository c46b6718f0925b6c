from datetime import date
from typing import Any, List

from odontocare.api.client import ApiClient, parse, parse_list
from odontocare.core.exceptions import ApiError
from odontocare.core.logger import logger
from odontocare.schemas.activity import Activity, ActivityCreate

class ActivityService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_by_patient_id(self, patient_id: int) -> List[Activity]:
        try:
            data = await self.client.get(f"/atividades/paciente/{patient_id}")
            return parse_list(Activity, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch activities of patient {patient_id}: {exc}")
            raise

    async def get_by_patient_id_and_date(self, patient_id: int, day: date) -> List[Activity]:
        try:
            data = await self.client.get(f"/atividades/paciente/{patient_id}/data/{day.isoformat()}")
            return parse_list(Activity, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch activities of patient {patient_id} on {day}: {exc}")
            raise

    async def mark_as_completed(self, activity_id: int) -> Any:
        try:
            return await self.client.patch(f"/atividades/{activity_id}/marcar-como-concluida")
        except ApiError as exc:
            logger.error(f"Failed to complete activity {activity_id}: {exc}")
            raise

    async def create(self, activity_data: ActivityCreate) -> Activity:
        try:
            data = await self.client.post(
                "/atividades", json=activity_data.model_dump(by_alias=True, mode="json")
            )
            return parse(Activity, data)
        except ApiError as exc:
            logger.error(f"Failed to create activity: {exc}")
            raise
