from typing import Optional

import httpx

from odontocare.api.api import Api
from odontocare.core.config import Settings, settings as default_settings
from odontocare.core.logger import logger
from odontocare.core.session import SessionKeys, SessionStore
from odontocare.core.storage import SessionStorage, build_storage
from odontocare.screens.alerts import AlertsScreen
from odontocare.screens.appointments import AppointmentsScreen
from odontocare.screens.base import LoggingNotifier, Navigator, Notifier
from odontocare.screens.home import HomeScreen
from odontocare.screens.login import LoginScreen
from odontocare.screens.profile import ProfileScreen
from odontocare.screens.register import RegisterScreen


class OdontoCareApp:
    """Wires storage, the HTTP client, the session store and the screens."""

    def __init__(
        self,
        settings: Settings = default_settings,
        storage: Optional[SessionStorage] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.storage = storage or build_storage(settings)
        keys = SessionKeys(settings.STORAGE_NAMESPACE)

        async def read_token():
            return await self.session.token()

        self.api = Api.from_settings(settings, read_token, transport=transport)
        self.session = SessionStore(self.storage, self.api, keys)

    async def start(self) -> None:
        logger.info(f"Starting {self.settings.PROJECT_NAME} client against {self.settings.API_URL}")
        await self.session.initialize()

    async def close(self) -> None:
        await self.api.close()
        await self.storage.close()

    def _screen(self, cls, navigator: Navigator, notifier: Optional[Notifier], **kwargs):
        return cls(self.session, self.api, navigator, notifier or LoggingNotifier(), **kwargs)

    def login_screen(self, navigator: Navigator, notifier: Optional[Notifier] = None) -> LoginScreen:
        return self._screen(LoginScreen, navigator, notifier)

    def register_screen(self, navigator: Navigator, notifier: Optional[Notifier] = None) -> RegisterScreen:
        return self._screen(RegisterScreen, navigator, notifier)

    def home_screen(self, navigator: Navigator, notifier: Optional[Notifier] = None) -> HomeScreen:
        return self._screen(HomeScreen, navigator, notifier)

    def appointments_screen(self, navigator: Navigator, notifier: Optional[Notifier] = None) -> AppointmentsScreen:
        return self._screen(AppointmentsScreen, navigator, notifier)

    def alerts_screen(self, navigator: Navigator, notifier: Optional[Notifier] = None) -> AlertsScreen:
        return self._screen(AlertsScreen, navigator, notifier)

    def profile_screen(self, navigator: Navigator, notifier: Optional[Notifier] = None, **kwargs) -> ProfileScreen:
        return self._screen(ProfileScreen, navigator, notifier, **kwargs)
