from datetime import date, datetime, time
from typing import Optional, Union

from odontocare.schemas.appointment import AppointmentStatus

STATUS_COLORS = {
    AppointmentStatus.SCHEDULED.value: "blue",
    AppointmentStatus.CONFIRMED.value: "green",
    AppointmentStatus.CANCELLED.value: "red",
}
FALLBACK_STATUS_COLOR = "orange"
SELECTED_DATE_COLOR = "blue"
NOT_INFORMED = "Não informado"


def status_color(status) -> str:
    """Colour of an appointment status; unknown values get the fallback colour."""
    if isinstance(status, AppointmentStatus):
        status = status.value
    if not isinstance(status, str):
        return FALLBACK_STATUS_COLOR
    return STATUS_COLORS.get(status, FALLBACK_STATUS_COLOR)


def to_local(value: datetime) -> datetime:
    # Naive timestamps are already local.
    if value.tzinfo is not None:
        return value.astimezone()
    return value


def local_date(value: datetime) -> date:
    return to_local(value).date()


def noon_on(day: date) -> datetime:
    return datetime.combine(day, time(12, 0, 0)).astimezone()


def format_datetime(value: datetime) -> str:
    value = to_local(value)
    return f"{value:%d/%m/%Y} às {value:%H:%M}"


def format_date(value: Optional[Union[str, date, datetime]]) -> str:
    if not value:
        return NOT_INFORMED
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, datetime):
        value = to_local(value)
    return f"{value:%d/%m/%Y}"
