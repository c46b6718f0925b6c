from odontocare.core.logger import logger
from odontocare.screens.base import Route, ScreenController

MENU = (Route.APPOINTMENTS, Route.ALERTS, Route.PROFILE)

class HomeScreen(ScreenController):
    """Feature menu shown after login."""

    menu = MENU

    def open(self, route: Route) -> bool:
        try:
            if route not in MENU:
                raise ValueError(f"{route} is not a menu entry")
            self.navigator.navigate(route)
        except Exception as exc:  # the navigator is host code and may raise anything
            logger.error(f"Failed to open {route}: {exc}")
            self.notifier.toast(f"Erro ao abrir tela: {exc}")
            return False
        return True
