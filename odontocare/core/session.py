import asyncio
from enum import Enum
from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import ValidationError

from odontocare.core.exceptions import OdontoCareError, SessionStorageError
from odontocare.core.logger import logger
from odontocare.core.storage import STORAGE_ERRORS, SessionStorage
from odontocare.schemas.auth import LoginResponse, User
from odontocare.schemas.patient import Patient, PatientUpdate

if TYPE_CHECKING:
    from odontocare.api.api import Api


class SessionStatus(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionKeys:
    def __init__(self, namespace: str):
        self.token = f"{namespace}:token"
        self.user = f"{namespace}:usuario"


class SessionStore:
    """
    Single owner of the authenticated identity and its patient profile.

    Screens receive the store by injection and only read from it; every write
    to persisted session storage goes through here.
    """

    def __init__(self, storage: SessionStorage, api: "Api", keys: SessionKeys):
        self.storage = storage
        self.api = api
        self.keys = keys
        self.user: Optional[User] = None
        self.patient: Optional[Patient] = None
        self.status = SessionStatus.UNKNOWN
        self.loading = True
        self._init_lock = asyncio.Lock()

    @property
    def is_authenticated(self) -> bool:
        return self.status is SessionStatus.AUTHENTICATED

    async def token(self) -> Optional[str]:
        return await self.storage.get_item(self.keys.token)

    async def _load_user(self) -> Optional[User]:
        try:
            raw = await self.storage.get_item(self.keys.user)
            if not raw:
                return None
            return LoginResponse.model_validate_json(raw).to_user()
        except (ValidationError, *STORAGE_ERRORS) as exc:
            # Unreadable cache means nobody is logged in.
            logger.warning(f"Discarding unreadable session identity: {exc}")
            return None

    async def _save(self, response: LoginResponse) -> None:
        try:
            await self.storage.set_item(self.keys.token, response.token)
            await self.storage.set_item(self.keys.user, response.model_dump_json(by_alias=True))
        except STORAGE_ERRORS as exc:
            logger.error(f"Failed to persist session: {exc}")
            await self._discard()
            raise SessionStorageError("Could not persist the session") from exc

    async def _clear(self) -> None:
        await self.storage.remove_item(self.keys.token)
        await self.storage.remove_item(self.keys.user)

    async def _discard(self) -> None:
        """Best-effort removal of a half-written session while another error propagates."""
        try:
            await self._clear()
        except STORAGE_ERRORS as exc:
            logger.error(f"Failed to remove persisted session: {exc}")

    async def initialize(self) -> None:
        async with self._init_lock:
            if self.status is not SessionStatus.UNKNOWN:
                return
            self.loading = True
            try:
                user = await self._load_user()
                if user is None:
                    self.status = SessionStatus.UNAUTHENTICATED
                    return
                self.user = user
                self.status = SessionStatus.AUTHENTICATED
                if user.is_patient:
                    self.patient = await self.api.patients.get_by_user_id(user.id)
            except OdontoCareError as exc:
                logger.error(f"Failed to restore session: {exc}")
                raise
            finally:
                self.loading = False

    async def current_user(self) -> Optional[User]:
        if self.status is SessionStatus.UNKNOWN:
            await self.initialize()
        return self.user

    async def login(self, email: str, password: str) -> User:
        self.loading = True
        try:
            response = await self.api.auth.login(email, password)
            await self._save(response)
            user = response.to_user()
            patient = None
            if user.is_patient:
                try:
                    patient = await self.api.patients.get_by_user_id(user.id)
                except OdontoCareError:
                    # A patient without a profile is not logged in.
                    await self._discard()
                    self.user = None
                    self.patient = None
                    raise
            self.user = user
            self.patient = patient
            self.status = SessionStatus.AUTHENTICATED
            return user
        except OdontoCareError as exc:
            logger.error(f"Login failed: {exc}")
            if self.user is None:
                self.status = SessionStatus.UNAUTHENTICATED
            raise
        finally:
            self.loading = False

    async def logout(self) -> None:
        self.loading = True
        try:
            await self._clear()
        except STORAGE_ERRORS as exc:
            logger.error(f"Logout failed: {exc}")
            raise SessionStorageError("Could not remove the persisted session") from exc
        finally:
            self.loading = False
        self.user = None
        self.patient = None
        self.status = SessionStatus.UNAUTHENTICATED

    async def fetch_patient(self) -> Optional[Patient]:
        """Fresh profile lookup for the current user, refreshing the cached copy."""
        user = await self.current_user()
        if user is None or not user.is_patient:
            return None
        self.patient = await self.api.patients.get_by_user_id(user.id)
        return self.patient

    async def update_patient_profile(self, fields: Dict[str, Any]) -> Patient:
        if self.patient is None:
            raise OdontoCareError("No patient profile loaded")
        try:
            update = PatientUpdate(**fields)
            updated = await self.api.patients.update_partial(self.patient.id, update)
        except OdontoCareError as exc:
            logger.error(f"Failed to update patient profile: {exc}")
            raise
        self.patient = updated
        return updated
