from pydantic import BaseModel, Field
from typing import Optional

class Patient(BaseModel):
    id: int
    user_id: Optional[int] = Field(default=None, alias="usuarioId")
    name: str = Field(alias="nome")
    birth_date: Optional[str] = Field(default=None, alias="dataNascimento")
    phone: Optional[str] = Field(default=None, alias="telefone")
    address: Optional[str] = Field(default=None, alias="endereco")
    points: int = Field(default=0, alias="pontos")
    last_visit: Optional[str] = Field(default=None, alias="ultimaConsulta")

    class Config:
        populate_by_name = True

class PatientUpsert(BaseModel):
    """Full patient write, also used to create the profile right after registration."""
    user_id: int = Field(alias="usuarioId")
    name: str = Field(alias="nome")
    birth_date: Optional[str] = Field(default=None, alias="dataNascimento")
    phone: Optional[str] = Field(default=None, alias="telefone")
    points: int = Field(default=0, alias="pontos")

    class Config:
        populate_by_name = True

class PatientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, alias="nome")
    birth_date: Optional[str] = Field(default=None, alias="dataNascimento")
    phone: Optional[str] = Field(default=None, alias="telefone")
    address: Optional[str] = Field(default=None, alias="endereco")
    points: Optional[int] = Field(default=None, alias="pontos")
    last_visit: Optional[str] = Field(default=None, alias="ultimaConsulta")

    class Config:
        populate_by_name = True
