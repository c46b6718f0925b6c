from pydantic import BaseModel, Field
from datetime import datetime

class Activity(BaseModel):
    id: int
    patient_id: int = Field(alias="pacienteId")
    description: str = Field(alias="descricao")
    points: int = Field(default=0, alias="pontos")
    date: datetime = Field(alias="data")
    completed: bool = Field(default=False, alias="concluida")

    class Config:
        populate_by_name = True

class ActivityCreate(BaseModel):
    patient_id: int = Field(alias="pacienteId")
    description: str = Field(alias="descricao")
    points: int = Field(alias="pontos")
    date: datetime = Field(alias="data")
    completed: bool = Field(default=True, alias="concluida")

    class Config:
        populate_by_name = True
