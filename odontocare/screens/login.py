from odontocare.core.cancellation import CancelToken
from odontocare.core.exceptions import OdontoCareError
from odontocare.screens.base import Route, ScreenController

class LoginScreen(ScreenController):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.submitting = False

    @property
    def checking_auth(self) -> bool:
        return self.loading

    async def load(self, token: CancelToken) -> None:
        user = await self.session.current_user()
        token.raise_if_cancelled()
        if user is not None:
            self.navigator.navigate(Route.HOME)

    async def submit(self, email: str, password: str) -> bool:
        if email == "" or password == "":
            self.notifier.alert("Erro", "Por favor, preencha todos os campos.")
            return False

        self.submitting = True
        try:
            await self.session.login(email, password)
        except OdontoCareError:
            self.notifier.alert(
                "Erro de autenticação",
                "Email ou senha incorretos. Por favor, tente novamente.",
            )
            return False
        finally:
            self.submitting = False

        self.navigator.navigate(Route.HOME)
        return True

    def open_register(self) -> None:
        self.navigator.navigate(Route.REGISTER)
