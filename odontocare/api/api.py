from typing import Optional

import httpx

from odontocare.api.client import ApiClient, build_http_client
from odontocare.core.config import Settings
from odontocare.middleware.request_hooks import TokenProvider
from odontocare.services.activity_service import ActivityService
from odontocare.services.alert_service import AlertService
from odontocare.services.appointment_service import AppointmentService
from odontocare.services.auth_service import AuthService
from odontocare.services.patient_service import PatientService

class Api:
    """One service per backend resource, all sharing a single HTTP client."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthService(client)
        self.patients = PatientService(client)
        self.appointments = AppointmentService(client)
        self.alerts = AlertService(client)
        self.activities = ActivityService(client)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        token_provider: TokenProvider,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "Api":
        http = build_http_client(settings, token_provider, transport=transport)
        return cls(ApiClient(http))

    async def close(self) -> None:
        await self.client.close()
