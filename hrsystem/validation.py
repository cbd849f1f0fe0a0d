"""Validation rules for employee data."""

import calendar
import re
from typing import Any

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_DATE_RE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")

_MAX_NAME_BYTES = 50
_MAX_EMAIL_BYTES = 100


class ValidationError(ValueError):
    """Raised when employee data breaks a validation rule."""


def is_valid_email(email: str) -> bool:
    """Return whether ``email`` has the accepted address shape."""
    return _EMAIL_RE.fullmatch(email) is not None


def is_valid_date(date: str) -> bool:
    """Return whether ``date`` is a real calendar date written as YYYY-MM-DD."""
    match = _DATE_RE.fullmatch(date)
    if match is None:
        return False
    year, month, day = (int(part) for part in match.groups())
    if not 1 <= month <= 12:
        return False
    days = 29 if month == 2 and calendar.isleap(year) else calendar.mdays[month]
    return 1 <= day <= days


def _byte_len(text: str) -> int:
    return len(text.encode("utf-8"))


def _validate_fields(dto: Any) -> None:
    if not dto.primer_nombre.strip():
        raise ValidationError("primer nombre es requerido")
    if _byte_len(dto.primer_nombre) > _MAX_NAME_BYTES:
        raise ValidationError("primer nombre no puede exceder 50 caracteres")
    if dto.segundo_nombre is not None and _byte_len(dto.segundo_nombre) > _MAX_NAME_BYTES:
        raise ValidationError("segundo nombre no puede exceder 50 caracteres")
    if not dto.email.strip():
        raise ValidationError("email es requerido")
    if _byte_len(dto.email) > _MAX_EMAIL_BYTES:
        raise ValidationError("email no puede exceder 100 caracteres")
    if not is_valid_email(dto.email):
        raise ValidationError("formato de email inválido")
    if not dto.fecha_nac.strip():
        raise ValidationError("fecha de nacimiento es requerida")
    if not is_valid_date(dto.fecha_nac):
        raise ValidationError("formato de fecha inválido, use YYYY-MM-DD")
    if dto.sueldo <= 0:
        raise ValidationError("sueldo debe ser mayor a 0")
    if dto.comision < 0 or dto.comision > 100:
        raise ValidationError("comisión debe estar entre 0 y 100")
    if dto.cargo_id <= 0:
        raise ValidationError("cargo ID es requerido y debe ser mayor a 0")
    if dto.dpto_id <= 0:
        raise ValidationError("departamento ID es requerido y debe ser mayor a 0")
    if dto.gerente_id is not None and dto.gerente_id <= 0:
        raise ValidationError("gerente ID debe ser mayor a 0 si se proporciona")


def validate_create_empleado(dto: Any) -> None:
    """Check a new employee's data; raise ValidationError on the first problem."""
    _validate_fields(dto)


def validate_update_empleado(dto: Any) -> None:
    """Check an employee update; raise ValidationError on the first problem."""
    if dto.id <= 0:
        raise ValidationError("ID del empleado es requerido y debe ser mayor a 0")
    _validate_fields(dto)