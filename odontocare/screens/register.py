import re
from typing import Optional

from pydantic import BaseModel

from odontocare.core.exceptions import FormValidationError, OdontoCareError
from odontocare.core.logger import logger
from odontocare.schemas.auth import PATIENT_ROLE, UserCreate
from odontocare.schemas.patient import PatientUpsert
from odontocare.screens.base import Route, ScreenController

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")
BIRTH_DATE_PATTERN = re.compile(r"^\d{2}/\d{2}/\d{4}$")

class RegistrationForm(BaseModel):
    name: str = ""
    email: str = ""
    password: str = ""
    confirm_password: str = ""
    phone: str = ""
    birth_date: str = ""

def validate_registration(form: RegistrationForm) -> None:
    if not form.name or not form.email or not form.password or not form.confirm_password:
        raise FormValidationError("Por favor, preencha todos os campos obrigatórios.")

    if form.password != form.confirm_password:
        raise FormValidationError("As senhas não coincidem.")

    if not EMAIL_PATTERN.search(form.email):
        raise FormValidationError("Por favor, informe um email válido.")

    if form.birth_date and not BIRTH_DATE_PATTERN.match(form.birth_date):
        raise FormValidationError("A data de nascimento deve estar no formato DD/MM/AAAA.")

def to_iso_date(value: str) -> Optional[str]:
    """DD/MM/YYYY to YYYY-MM-DD; None when the value is empty or malformed."""
    if not value:
        return None
    parts = value.split("/")
    if len(parts) != 3:
        return None
    day, month, year = parts
    return f"{year}-{month}-{day}"

class RegisterScreen(ScreenController):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.form = RegistrationForm()
        self.submitting = False

    def change(self, field: str, value: str) -> None:
        self.form = self.form.model_copy(update={field: value})

    async def submit(self, form: Optional[RegistrationForm] = None) -> bool:
        form = form or self.form
        try:
            validate_registration(form)
        except FormValidationError as exc:
            self.notifier.alert("Erro", exc.message)
            return False

        self.submitting = True
        try:
            user = await self.api.auth.register(
                UserCreate(name=form.name, email=form.email, password=form.password, role=PATIENT_ROLE)
            )
            # The profile is written under the new user's id.
            await self.api.patients.update(
                user.id,
                PatientUpsert(
                    user_id=user.id,
                    name=form.name,
                    birth_date=to_iso_date(form.birth_date),
                    phone=form.phone,
                    points=0,
                ),
            )
            await self.session.login(form.email, form.password)
        except OdontoCareError as exc:
            logger.error(f"Registration failed: {exc}")
            self.notifier.alert(
                "Erro",
                "Não foi possível realizar o cadastro. Verifique os dados e tente novamente.",
            )
            return False
        finally:
            self.submitting = False

        self.notifier.alert("Sucesso", "Cadastro realizado com sucesso!")
        self.navigator.navigate(Route.HOME)
        return True
