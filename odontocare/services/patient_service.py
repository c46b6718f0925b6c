from odontocare.api.client import ApiClient, parse
from odontocare.core.exceptions import ApiError, PatientProfileNotFound
from odontocare.core.logger import logger
from odontocare.schemas.patient import Patient, PatientUpsert, PatientUpdate

class PatientService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_by_id(self, patient_id: int) -> Patient:
        try:
            data = await self.client.get(f"/pacientes/{patient_id}")
            return parse(Patient, data)
        except ApiError as exc:
            logger.error(f"Failed to fetch patient {patient_id}: {exc}")
            raise

    async def get_by_user_id(self, user_id: int) -> Patient:
        try:
            data = await self.client.get(f"/pacientes/usuario/{user_id}")
        except ApiError as exc:
            logger.error(f"Failed to fetch patient for user {user_id}: {exc}")
            raise
        if not data:
            # A patient user without a profile is a failed lookup, never "no profile needed".
            logger.error(f"User {user_id} has no patient profile")
            raise PatientProfileNotFound(f"No patient profile for user {user_id}", status_code=404)
        try:
            return parse(Patient, data)
        except ApiError as exc:
            logger.error(f"Unreadable patient profile for user {user_id}: {exc}")
            raise

    async def update(self, patient_id: int, patient_data: PatientUpsert) -> Patient:
        try:
            data = await self.client.put(
                f"/pacientes/{patient_id}", json=patient_data.model_dump(by_alias=True)
            )
            return parse(Patient, data)
        except ApiError as exc:
            logger.error(f"Failed to update patient {patient_id}: {exc}")
            raise

    async def update_partial(self, patient_id: int, patient_data: PatientUpdate) -> Patient:
        try:
            data = await self.client.patch(
                f"/pacientes/{patient_id}",
                json=patient_data.model_dump(by_alias=True, exclude_unset=True),
            )
            return parse(Patient, data)
        except ApiError as exc:
            logger.error(f"Failed to partially update patient {patient_id}: {exc}")
            raise

    async def add_points(self, patient_id: int, points: int) -> Patient:
        try:
            data = await self.client.patch(f"/pacientes/{patient_id}/pontos/{points}")
            return parse(Patient, data)
        except ApiError as exc:
            logger.error(f"Failed to add {points} points to patient {patient_id}: {exc}")
            raise
