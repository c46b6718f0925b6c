from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "OdontoCare"
    # Android emulators reach the host machine through 10.0.2.2
    API_URL: str = "http://10.0.2.2:8080/api"
    STORAGE_NAMESPACE: str = "@OdontoCare"
    SESSION_BACKEND: str = "file"  # file, memory, redis
    SESSION_FILE: str = "~/.odontocare/session.json"
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_URL: Optional[str] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        if not self.REDIS_URL:
            self.REDIS_URL = f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

settings = Settings()
