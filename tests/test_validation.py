import dataclasses

import pytest

from hrsystem.dtos import CreateEmpleadoDTO, UpdateEmpleadoDTO
from hrsystem.validation import (
    ValidationError,
    is_valid_date,
    is_valid_email,
    validate_create_empleado,
    validate_update_empleado,
)


def _valid():
    return CreateEmpleadoDTO(
        primer_nombre="Ana",
        segundo_nombre=None,
        email="ana@example.com",
        fecha_nac="1990-01-15",
        sueldo=1000.0,
        comision=5.0,
        cargo_id=1,
        gerente_id=None,
        dpto_id=1,
    )


@pytest.mark.parametrize(
    "email, expected",
    [
        ("ana@example.com", True),
        ("a.b+c@sub.example.com", True),
        ("ana@example.c", False),
        ("ana.example.com", False),
        ("ana@example.com\n", False),
        ("", False),
    ],
)
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


@pytest.mark.parametrize(
    "date, expected",
    [
        ("1990-01-15", True),
        ("2000-02-29", True),
        ("1900-02-29", False),
        ("1990-13-01", False),
        ("1990-04-31", False),
        ("1990-1-15", False),
        ("90-01-15", False),
        ("1990/01/15", False),
        ("", False),
    ],
)
def test_is_valid_date(date, expected):
    assert is_valid_date(date) is expected


@pytest.mark.parametrize(
    "changes, message",
    [
        ({"primer_nombre": "   "}, "primer nombre es requerido"),
        ({"primer_nombre": "x" * 51}, "primer nombre no puede exceder 50 caracteres"),
        ({"segundo_nombre": "y" * 51}, "segundo nombre no puede exceder 50 caracteres"),
        ({"email": ""}, "email es requerido"),
        ({"email": "a" * 90 + "@example.com"}, "email no puede exceder 100 caracteres"),
        ({"email": "not-an-email"}, "formato de email inválido"),
        ({"fecha_nac": " "}, "fecha de nacimiento es requerida"),
        ({"fecha_nac": "15-01-1990"}, "formato de fecha inválido, use YYYY-MM-DD"),
        ({"sueldo": 0.0}, "sueldo debe ser mayor a 0"),
        ({"comision": -1.0}, "comisión debe estar entre 0 y 100"),
        ({"comision": 100.5}, "comisión debe estar entre 0 y 100"),
        ({"cargo_id": 0}, "cargo ID es requerido y debe ser mayor a 0"),
        ({"dpto_id": -2}, "departamento ID es requerido y debe ser mayor a 0"),
        ({"gerente_id": 0}, "gerente ID debe ser mayor a 0 si se proporciona"),
    ],
)
def test_create_rejects(changes, message):
    dto = dataclasses.replace(_valid(), **changes)
    with pytest.raises(ValidationError) as info:
        validate_create_empleado(dto)
    assert str(info.value) == message


def test_name_length_boundary_is_fifty_bytes():
    assert validate_create_empleado(dataclasses.replace(_valid(), primer_nombre="x" * 50)) is None
    with pytest.raises(ValidationError):
        validate_create_empleado(dataclasses.replace(_valid(), primer_nombre="á" * 26))


def test_commission_bounds_inclusive():
    assert validate_create_empleado(dataclasses.replace(_valid(), comision=100.0)) is None
    assert validate_create_empleado(dataclasses.replace(_valid(), comision=0.0)) is None
    with pytest.raises(ValidationError):
        validate_create_empleado(dataclasses.replace(_valid(), comision=100.01))


def test_first_failure_wins():
    dto = dataclasses.replace(_valid(), primer_nombre="", sueldo=-1.0)
    with pytest.raises(ValidationError, match="primer nombre es requerido"):
        validate_create_empleado(dto)


def test_update_requires_id():
    base = _valid()
    dto = UpdateEmpleadoDTO(id=0, **{f.name: getattr(base, f.name) for f in dataclasses.fields(base)})
    with pytest.raises(ValidationError) as info:
        validate_update_empleado(dto)
    assert str(info.value) == "ID del empleado es requerido y debe ser mayor a 0"


def test_update_applies_field_rules():
    base = dataclasses.replace(_valid(), email="bad")
    dto = UpdateEmpleadoDTO(id=3, **{f.name: getattr(base, f.name) for f in dataclasses.fields(base)})
    with pytest.raises(ValidationError, match="formato de email inválido"):
        validate_update_empleado(dto)


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_create_empleado(dataclasses.replace(_valid(), cargo_id=-1))