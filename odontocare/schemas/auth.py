from pydantic import BaseModel, Field
from typing import Optional

PATIENT_ROLE = "paciente"

class User(BaseModel):
    id: int
    name: str = Field(alias="nome")
    email: Optional[str] = None
    role: str = Field(alias="tipo")

    class Config:
        populate_by_name = True

    @property
    def is_patient(self) -> bool:
        return self.role == PATIENT_ROLE

class LoginRequest(BaseModel):
    email: str
    password: str = Field(alias="senha")

    class Config:
        populate_by_name = True

class LoginResponse(User):
    # The whole body doubles as the cached session identity.
    token: str

    def to_user(self) -> User:
        return User(id=self.id, name=self.name, email=self.email, role=self.role)

class UserCreate(BaseModel):
    name: str = Field(alias="nome")
    email: str
    password: str = Field(alias="senha")
    role: str = Field(default=PATIENT_ROLE, alias="tipo")

    class Config:
        populate_by_name = True
