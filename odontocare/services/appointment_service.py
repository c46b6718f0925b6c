from typing import List

from odontocare.api.client import ApiClient, parse, parse_list
from odontocare.core.exceptions import ApiError
from odontocare.core.logger import logger
from odontocare.schemas.appointment import Appointment, AppointmentCreate

class AppointmentService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Appointment]:
        try:
            data = await self.client.get("/agendamentos")
            return parse_list(Appointment, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch appointments: {exc}")
            raise

    async def get_by_id(self, appointment_id: int) -> Appointment:
        try:
            data = await self.client.get(f"/agendamentos/{appointment_id}")
            return parse(Appointment, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch appointment {appointment_id}: {exc}")
            raise

    async def get_by_patient_id(self, patient_id: int) -> List[Appointment]:
        try:
            data = await self.client.get(f"/agendamentos/paciente/{patient_id}")
            return parse_list(Appointment, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch appointments of patient {patient_id}: {exc}")
            raise

    async def create(self, appointment_data: AppointmentCreate) -> Appointment:
        try:
            data = await self.client.post(
                "/agendamentos", json=appointment_data.model_dump(by_alias=True, mode="json")
            )
            return parse(Appointment, data)
        except ApiError as exc:
            logger.error(f"Failed to create appointment: {exc}")
            raise

    async def update(self, appointment_id: int, appointment_data: AppointmentCreate) -> Appointment:
        try:
            data = await self.client.put(
                f"/agendamentos/{appointment_id}",
                json=appointment_data.model_dump(by_alias=True, mode="json"),
            )
            return parse(Appointment, data)
        except ApiError as exc:
            logger.error(f"Failed to update appointment {appointment_id}: {exc}")
            raise

    async def update_status(self, appointment_id: int, status: str) -> Appointment:
        try:
            data = await self.client.patch(f"/agendamentos/{appointment_id}/status/{status}")
            return parse(Appointment, data)
        except ApiError as exc:
            logger.error(f"Failed to set status of appointment {appointment_id} to {status}: {exc}")
            raise

    async def delete(self, appointment_id: int) -> bool:
        try:
            await self.client.delete(f"/agendamentos/{appointment_id}")
        except ApiError as exc:
            logger.error(f"Failed to delete appointment {appointment_id}: {exc}")
            raise
        return True
