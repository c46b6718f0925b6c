from enum import Enum
from typing import Any, Awaitable, Callable, Optional

from odontocare.core.cancellation import CancelToken
from odontocare.core.exceptions import OdontoCareError, ViewCancelled
from odontocare.core.logger import logger
from odontocare.core.session import SessionStore
from odontocare.schemas.auth import User

class Route(str, Enum):
    LOGIN = "Login"
    REGISTER = "Cadastro"
    HOME = "Funcionalidades"
    APPOINTMENTS = "Agendamentos"
    ALERTS = "Alertas"
    PROFILE = "PerfilPaciente"

class Navigator:
    def navigate(self, route: Route) -> None:
        raise NotImplementedError

    def go_back(self) -> None:
        raise NotImplementedError

class Notifier:
    def alert(self, title: str, message: str) -> None:
        raise NotImplementedError

    def toast(self, message: str) -> None:
        self.alert("", message)

class LoggingNotifier(Notifier):
    def alert(self, title: str, message: str) -> None:
        logger.info(f"{title}: {message}" if title else message)

class ScreenController:
    """
    Shared lifecycle of every screen.

    Each load runs under its own CancelToken. Blurring or unmounting the
    screen cancels it, so a response that arrives late is dropped instead of
    being written into a screen nobody is looking at.
    """

    refetch_on_focus = False
    load_error_message = "Não foi possível carregar os dados."

    def __init__(self, session: SessionStore, api, navigator: Navigator, notifier: Notifier):
        self.session = session
        self.api = api
        self.navigator = navigator
        self.notifier = notifier
        self.loading = True
        self.unmounted = False
        self._token: Optional[CancelToken] = None

    async def mount(self) -> None:
        self.unmounted = False
        await self.reload()

    async def focus(self) -> None:
        if self.refetch_on_focus:
            await self.reload()

    def blur(self) -> None:
        if self._token is not None:
            self._token.cancel()

    def unmount(self) -> None:
        self.unmounted = True
        self.blur()

    def go_back(self) -> None:
        self.navigator.go_back()

    async def load(self, token: CancelToken) -> None:
        self.loading = False

    async def reload(self) -> None:
        if self.unmounted:
            return
        if self._token is not None:
            self._token.cancel()
        token = CancelToken()
        self._token = token
        self.loading = True
        try:
            await self.load(token)
        except ViewCancelled:
            return
        except OdontoCareError as exc:
            if token.cancelled:
                return
            logger.error(f"{type(self).__name__} failed to load: {exc}")
            self.notifier.alert("Erro", self.load_error_message)
        finally:
            if not token.cancelled:
                self.loading = False

    async def resolve_user(self, token: CancelToken) -> Optional[User]:
        user = await self.session.current_user()
        token.raise_if_cancelled()
        if user is None:
            self.navigator.navigate(Route.LOGIN)
        return user

    async def run_command(
        self,
        mutation: Callable[[], Awaitable[Any]],
        error_message: str,
        success_message: Optional[str] = None,
        on_success: Optional[Callable[[Any], None]] = None,
        refetch: bool = False,
    ) -> bool:
        """Issue a mutation, then patch local state and/or re-run the load."""
        try:
            result = await mutation()
        except OdontoCareError as exc:
            logger.error(f"{type(self).__name__} command failed: {exc}")
            self.notifier.alert("Erro", error_message)
            return False

        if on_success is not None:
            on_success(result)
        if success_message:
            self.notifier.alert("Sucesso", success_message)
        if refetch:
            await self.reload()
        return True
