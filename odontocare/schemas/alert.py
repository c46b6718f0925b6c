from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class Alert(BaseModel):
    id: int
    patient_id: int = Field(alias="pacienteId")
    title: str = Field(alias="titulo")
    description: Optional[str] = Field(default=None, alias="descricao")
    date: datetime = Field(alias="data")
    read: bool = Field(default=False, alias="lido")

    class Config:
        populate_by_name = True
