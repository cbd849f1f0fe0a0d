"""Employee persistence operations on top of an SQL database."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import NoResultFound, SQLAlchemyError

from hrsystem.dtos import (
    CargoDTO,
    CreateEmpleadoDTO,
    CreateEmpleadoResponseDTO,
    DepartamentoDTO,
    EmpleadoDetailResponseDTO,
    GerenteDTO,
    UpdateEmpleadoDTO,
    UpdateEmpleadoResponseDTO,
)
from hrsystem.validation import (
    ValidationError,
    validate_create_empleado,
    validate_update_empleado,
)

_UNIQUE_MARKERS = (
    "duplicate key value violates unique constraint",
    "unique constraint failed",
)
_FOREIGN_KEY_MARKERS = ("foreign key constraint",)

_GERENTE_NOMBRE = """
    CASE WHEN g.empl_id IS NOT NULL
         THEN g.empl_primer_nombre || ' ' || COALESCE(g.empl_segundo_nombre, '')
         ELSE NULL
    END"""

_JOINS = """
    FROM empleados e
    INNER JOIN cargos c ON e.empl_cargo_id = c.cargo_id
    INNER JOIN departamentos d ON e.empl_dpto_id = d.dpto_id
    INNER JOIN localizaciones l ON d.dpto_localiz_id = l.localiz_id
    INNER JOIN ciudades ci ON l.localiz_ciudad_id = ci.ciud_id
    LEFT JOIN empleados g ON e.empl_gerente_id = g.empl_id"""

_INSERT_SQL = text(
    """
    INSERT INTO empleados (empl_primer_nombre, empl_segundo_nombre, empl_email,
        empl_fecha_nac, empl_sueldo, empl_comision, empl_cargo_id,
        empl_gerente_id, empl_dpto_id)
    VALUES (:primer_nombre, :segundo_nombre, :email, :fecha_nac, :sueldo,
        :comision, :cargo_id, :gerente_id, :dpto_id)
    RETURNING empl_id"""
)

_UPDATE_SQL = text(
    """
    UPDATE empleados
    SET empl_primer_nombre = :primer_nombre, empl_segundo_nombre = :segundo_nombre,
        empl_email = :email, empl_fecha_nac = :fecha_nac, empl_sueldo = :sueldo,
        empl_comision = :comision, empl_cargo_id = :cargo_id,
        empl_gerente_id = :gerente_id, empl_dpto_id = :dpto_id
    WHERE empl_id = :id AND is_deleted = FALSE"""
)

_DETAIL_SQL = text(
    f"""
    SELECT e.empl_id, e.empl_primer_nombre, e.empl_segundo_nombre, e.empl_fecha_nac,
           c.cargo_nombre, d.dpto_nombre, {_GERENTE_NOMBRE} AS gerente_nombre,
           e.empl_sueldo, e.empl_comision, l.localiz_direccion, ci.ciud_nombre
    {_JOINS}
    WHERE e.empl_id = :id"""
)

_SELECT_SQL = text(
    f"""
    SELECT e.empl_id, e.empl_primer_nombre, e.empl_segundo_nombre, e.empl_email,
           e.empl_fecha_nac, e.empl_sueldo, e.empl_comision, c.cargo_nombre,
           {_GERENTE_NOMBRE} AS gerente_nombre,
           d.dpto_nombre, l.localiz_direccion, ci.ciud_nombre, e.is_deleted
    {_JOINS}
    WHERE e.empl_id = :id"""
)

_DELETE_SQL = text("SELECT success, message FROM p_delete_empleado(:id)")

_LIST_CARGOS_SQL = text("SELECT cargo_id, cargo_nombre FROM cargos ORDER BY cargo_id")

_LIST_CARGOS_CON_DATOS_SQL = text(
    """
    SELECT DISTINCT c.cargo_id, c.cargo_nombre, l.localiz_direccion, ci.ciud_nombre
    FROM cargos c
    INNER JOIN empleados e ON c.cargo_id = e.empl_cargo_id
    INNER JOIN departamentos d ON e.empl_dpto_id = d.dpto_id
    INNER JOIN localizaciones l ON d.dpto_localiz_id = l.localiz_id
    INNER JOIN ciudades ci ON l.localiz_ciudad_id = ci.ciud_id
    ORDER BY c.cargo_id"""
)

_LIST_DEPARTAMENTOS_SQL = text(
    "SELECT dpto_id, dpto_nombre FROM departamentos ORDER BY dpto_id"
)

_LIST_DEPARTAMENTOS_CON_DATOS_SQL = text(
    """
    SELECT d.dpto_id, d.dpto_nombre, l.localiz_direccion, ci.ciud_nombre
    FROM departamentos d
    INNER JOIN localizaciones l ON d.dpto_localiz_id = l.localiz_id
    INNER JOIN ciudades ci ON l.localiz_ciudad_id = ci.ciud_id
    ORDER BY d.dpto_id"""
)

_LIST_GERENTES_SQL = text(
    """
    SELECT empl_id,
           empl_primer_nombre || ' ' || COALESCE(empl_segundo_nombre, '') AS nombre_completo
    FROM empleados
    WHERE is_deleted = FALSE
    ORDER BY empl_id"""
)


class CrudError(Exception):
    """Raised when an employee operation cannot be carried out."""


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _as_optional_text(value: Any) -> str | None:
    return None if value is None else _as_text(value)


def _write_params(dto: CreateEmpleadoDTO | UpdateEmpleadoDTO) -> dict[str, Any]:
    return {
        "primer_nombre": dto.primer_nombre,
        "segundo_nombre": dto.segundo_nombre,
        "email": dto.email,
        "fecha_nac": dto.fecha_nac,
        "sueldo": dto.sueldo,
        "comision": dto.comision,
        "cargo_id": dto.cargo_id,
        "gerente_id": dto.gerente_id,
        "dpto_id": dto.dpto_id,
    }


def _write_error(err: Exception, action: str) -> CrudError:
    message = str(err).lower()
    if any(marker in message for marker in _UNIQUE_MARKERS):
        return CrudError("email ya existe en el sistema")
    if any(marker in message for marker in _FOREIGN_KEY_MARKERS):
        return CrudError("ID de cargo, gerente o departamento no válido")
    return CrudError(f"error {action} empleado: {err}")


def _detail(cls: type, row: Any) -> Any:
    (empl_id, primer, segundo, fecha, cargo, dpto, gerente,
     sueldo, comision, direccion, ciudad) = row
    return cls(
        id=int(empl_id),
        primer_nombre=_as_text(primer),
        segundo_nombre=_as_optional_text(segundo),
        fecha_nac=_as_text(fecha),
        cargo_nombre=_as_text(cargo),
        departamento_nombre=_as_text(dpto),
        gerente_nombre=_as_optional_text(gerente),
        sueldo=float(sueldo),
        comision=float(comision),
        direccion=_as_text(direccion),
        ciudad=_as_text(ciudad),
    )


class EmpleadoCrud:
    """Employee operations against a database engine."""

    def __init__(self, conn: Any) -> None:
        self._engine = conn

    def _fetch_all(self, statement: Any, what: str) -> list[Any]:
        try:
            with self._engine.begin() as conn:
                return list(conn.execute(statement))
        except SQLAlchemyError as err:
            raise CrudError(f"error consultando {what}: {err}") from err

    def _fetch_detail(self, cls: type, empl_id: int, what: str) -> Any:
        try:
            with self._engine.begin() as conn:
                row = conn.execute(_DETAIL_SQL, {"id": empl_id}).one()
        except SQLAlchemyError as err:
            raise CrudError(
                f"error obteniendo detalles del empleado {what}: {err}"
            ) from err
        return _detail(cls, row)

    def insert(self, dto: CreateEmpleadoDTO) -> CreateEmpleadoResponseDTO:
        """Create an employee and return its details."""
        try:
            validate_create_empleado(dto)
        except ValidationError as err:
            raise CrudError(f"validación fallida: {err}") from err
        try:
            with self._engine.begin() as conn:
                new_id = conn.execute(_INSERT_SQL, _write_params(dto)).scalar_one()
        except SQLAlchemyError as err:
            raise _write_error(err, "insertando") from err
        return self._fetch_detail(CreateEmpleadoResponseDTO, int(new_id), "creado")

    def update(self, dto: UpdateEmpleadoDTO) -> UpdateEmpleadoResponseDTO:
        """Overwrite an active employee's data and return its details."""
        try:
            validate_update_empleado(dto)
        except ValidationError as err:
            raise CrudError(f"validación fallida: {err}") from err
        params = _write_params(dto)
        params["id"] = dto.id
        try:
            with self._engine.begin() as conn:
                affected = conn.execute(_UPDATE_SQL, params).rowcount
        except SQLAlchemyError as err:
            raise _write_error(err, "actualizando") from err
        if not affected:
            raise CrudError("empleado no encontrado o ya está eliminado")
        return self._fetch_detail(UpdateEmpleadoResponseDTO, dto.id, "actualizado")

    def select(self, empleado_id: int) -> EmpleadoDetailResponseDTO:
        """Return one employee's details, deleted ones included."""
        if empleado_id <= 0:
            raise CrudError("ID debe ser mayor a 0")
        try:
            with self._engine.begin() as conn:
                row = conn.execute(_SELECT_SQL, {"id": empleado_id}).one()
        except NoResultFound as err:
            raise CrudError("empleado no encontrado") from err
        except SQLAlchemyError as err:
            raise CrudError(f"error consultando empleado: {err}") from err
        (empl_id, primer, segundo, email, fecha, sueldo, comision, cargo,
         gerente, dpto, direccion, ciudad, is_deleted) = row
        return EmpleadoDetailResponseDTO(
            id=int(empl_id),
            primer_nombre=_as_text(primer),
            segundo_nombre=_as_optional_text(segundo),
            email=_as_text(email),
            fecha_nac=_as_text(fecha),
            sueldo=float(sueldo),
            comision=float(comision),
            cargo_nombre=_as_text(cargo),
            gerente_nombre=_as_optional_text(gerente),
            departamento_nombre=_as_text(dpto),
            direccion=_as_text(direccion),
            ciudad=_as_text(ciudad),
            is_deleted=bool(is_deleted),
        )

    def delete(self, empleado_id: int) -> None:
        """Delete an employee through the database's deletion procedure."""
        if empleado_id <= 0:
            raise CrudError("ID debe ser mayor a 0")
        try:
            with self._engine.begin() as conn:
                success, message = conn.execute(_DELETE_SQL, {"id": empleado_id}).one()
        except SQLAlchemyError as err:
            raise CrudError(f"error ejecutando procedimiento almacenado: {err}") from err
        if not success:
            raise CrudError(message)

    def list_cargos(self) -> list[CargoDTO]:
        """Return every job title ordered by id."""
        rows = self._fetch_all(_LIST_CARGOS_SQL, "cargos")
        return [CargoDTO(id=int(cid), nombre=_as_text(name)) for cid, name in rows]

    def list_cargos_con_datos(self) -> list[dict[str, Any]]:
        """Return job titles in use together with where they are held."""
        rows = self._fetch_all(_LIST_CARGOS_CON_DATOS_SQL, "cargos con datos")
        return [
            {
                "cargo_id": int(cid),
                "cargo_nombre": _as_text(name),
                "direccion": _as_text(direccion),
                "ciudad": _as_text(ciudad),
            }
            for cid, name, direccion, ciudad in rows
        ]

    def list_departamentos(self) -> list[DepartamentoDTO]:
        """Return every department ordered by id."""
        rows = self._fetch_all(_LIST_DEPARTAMENTOS_SQL, "departamentos")
        return [DepartamentoDTO(id=int(did), nombre=_as_text(name)) for did, name in rows]

    def list_departamentos_con_datos(self) -> list[dict[str, Any]]:
        """Return every department with its address and city."""
        rows = self._fetch_all(
            _LIST_DEPARTAMENTOS_CON_DATOS_SQL, "departamentos con datos"
        )
        return [
            {
                "dpto_id": int(did),
                "dpto_nombre": _as_text(name),
                "direccion": _as_text(direccion),
                "ciudad": _as_text(ciudad),
            }
            for did, name, direccion, ciudad in rows
        ]

    def list_gerentes(self) -> list[GerenteDTO]:
        """Return active employees that can act as managers."""
        rows = self._fetch_all(_LIST_GERENTES_SQL, "gerentes")
        return [GerenteDTO(id=int(eid), nombre=_as_text(name)) for eid, name in rows]