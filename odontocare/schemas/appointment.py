from enum import Enum
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional

class AppointmentStatus(str, Enum):
    SCHEDULED = "agendado"
    CONFIRMED = "confirmado"
    CANCELLED = "cancelado"

class Appointment(BaseModel):
    id: int
    patient_id: int = Field(alias="pacienteId")
    date: datetime = Field(alias="data")
    type: Optional[str] = Field(default=None, alias="tipo")
    notes: Optional[str] = Field(default=None, alias="observacoes")
    # Kept as a plain string, the server may send values outside AppointmentStatus
    status: Optional[str] = None

    class Config:
        populate_by_name = True

class AppointmentCreate(BaseModel):
    patient_id: int = Field(alias="pacienteId")
    date: datetime = Field(alias="data")
    type: str = Field(alias="tipo")
    notes: str = Field(default="", alias="observacoes")
    status: str = AppointmentStatus.SCHEDULED.value

    class Config:
        populate_by_name = True
