from odontocare.api.client import ApiClient, parse
from odontocare.core.exceptions import ApiError
from odontocare.core.logger import logger
from odontocare.schemas.auth import LoginRequest, LoginResponse, User, UserCreate

class AuthService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def login(self, email: str, password: str) -> LoginResponse:
        payload = LoginRequest(email=email, password=password)
        try:
            data = await self.client.post("/auth/login", json=payload.model_dump(by_alias=True))
            return parse(LoginResponse, data)
        except ApiError as exc:
            logger.error(f"Login failed for {email}: {exc}")
            raise

    async def register(self, user_data: UserCreate) -> User:
        try:
            data = await self.client.post("/auth/register", json=user_data.model_dump(by_alias=True))
            return parse(User, data)
        except ApiError as exc:
            logger.error(f"Registration failed for {user_data.email}: {exc}")
            raise
