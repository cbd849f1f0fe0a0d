"""Data transfer objects exchanged between the HR client and server."""

import dataclasses
import types
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, TypeVar, Union, get_args, get_origin

T = TypeVar("T", bound="JsonDTO")

_NONE_TYPE = type(None)


def _json(key: str, default: Any = None) -> Any:
    """Declare a dataclass field serialised under ``key``."""
    return field(default=default, metadata={"json": key})


def _to_jsonable(value: Any) -> Any:
    if isinstance(value, JsonDTO):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _to_jsonable(item) for key, item in value.items()}
    return value


def _decode(value: Any, hint: Any, fld: dataclasses.Field, key: str) -> Any:
    optional = False
    if get_origin(hint) in (Union, types.UnionType):
        args = get_args(hint)
        concrete = [arg for arg in args if arg is not _NONE_TYPE]
        optional = len(concrete) < len(args)
        hint = concrete[0] if len(concrete) == 1 else Any

    if value is None:
        return None if optional else fld.default
    if hint is Any:
        return value
    if hint is bool:
        if isinstance(value, bool):
            return value
    elif hint is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif hint is float:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
    elif hint is str:
        if isinstance(value, str):
            return value
    else:
        return value
    raise TypeError(
        f"cannot decode {type(value).__name__} into field {key!r} "
        f"of type {getattr(hint, '__name__', hint)}"
    )


class JsonDTO:
    """Base for dataclasses that map to JSON objects with fixed key names."""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping for this object."""
        return {
            fld.metadata.get("json", fld.name): _to_jsonable(getattr(self, fld.name))
            for fld in fields(self)
        }

    @classmethod
    def from_dict(cls: type[T], data: Any) -> T:
        """Build an instance from a decoded JSON object.

        Missing keys keep their zero value; keys match case-insensitively
        when no exact match exists. Values of the wrong type raise TypeError.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"cannot decode {type(data).__name__} into {cls.__name__}")
        lowered = {k.lower(): v for k, v in data.items() if isinstance(k, str)}
        kwargs: dict[str, Any] = {}
        for fld in fields(cls):
            key = fld.metadata.get("json", fld.name)
            if key in data:
                raw = data[key]
            elif key.lower() in lowered:
                raw = lowered[key.lower()]
            else:
                continue
            kwargs[fld.name] = _decode(raw, fld.type, fld, key)
        return cls(**kwargs)


@dataclass
class CreateEmpleadoDTO(JsonDTO):
    primer_nombre: str = _json("empl_primer_nombre", "")
    segundo_nombre: str | None = _json("empl_segundo_nombre")
    email: str = _json("empl_email", "")
    fecha_nac: str = _json("empl_fecha_nac", "")
    sueldo: float = _json("empl_sueldo", 0.0)
    comision: float = _json("empl_comision", 0.0)
    cargo_id: int = _json("empl_cargo_id", 0)
    gerente_id: int | None = _json("empl_gerente_id")
    dpto_id: int = _json("empl_dpto_id", 0)


@dataclass
class UpdateEmpleadoDTO(JsonDTO):
    id: int = _json("empl_id", 0)
    primer_nombre: str = _json("empl_primer_nombre", "")
    segundo_nombre: str | None = _json("empl_segundo_nombre")
    email: str = _json("empl_email", "")
    fecha_nac: str = _json("empl_fecha_nac", "")
    sueldo: float = _json("empl_sueldo", 0.0)
    comision: float = _json("empl_comision", 0.0)
    cargo_id: int = _json("empl_cargo_id", 0)
    gerente_id: int | None = _json("empl_gerente_id")
    dpto_id: int = _json("empl_dpto_id", 0)


@dataclass
class SelectEmpleadoDTO(JsonDTO):
    id: int = _json("empl_id", 0)


@dataclass
class DeleteEmpleadoDTO(JsonDTO):
    id: int = _json("empl_id", 0)


@dataclass
class EmpleadoResponseDTO(JsonDTO):
    id: int = _json("empl_id", 0)
    primer_nombre: str = _json("empl_primer_nombre", "")
    segundo_nombre: str | None = _json("empl_segundo_nombre")
    email: str = _json("empl_email", "")
    fecha_nac: str = _json("empl_fecha_nac", "")
    sueldo: float = _json("empl_sueldo", 0.0)
    comision: float = _json("empl_comision", 0.0)
    cargo_id: int = _json("empl_cargo_id", 0)
    gerente_id: int | None = _json("empl_gerente_id")
    dpto_id: int = _json("empl_dpto_id", 0)
    is_deleted: bool = _json("is_deleted", False)


@dataclass
class EmpleadoDetailResponseDTO(JsonDTO):
    id: int = _json("id", 0)
    primer_nombre: str = _json("primer_nombre", "")
    segundo_nombre: str | None = _json("segundo_nombre")
    email: str = _json("email", "")
    fecha_nac: str = _json("fecha_nac", "")
    sueldo: float = _json("sueldo", 0.0)
    comision: float = _json("comision", 0.0)
    cargo_nombre: str = _json("cargo_nombre", "")
    gerente_nombre: str | None = _json("gerente_nombre")
    departamento_nombre: str = _json("departamento_nombre", "")
    direccion: str = _json("direccion", "")
    ciudad: str = _json("ciudad", "")
    is_deleted: bool = _json("is_deleted", False)


@dataclass
class CargoDTO(JsonDTO):
    id: int = _json("cargo_id", 0)
    nombre: str = _json("cargo_nombre", "")


@dataclass
class DepartamentoDTO(JsonDTO):
    id: int = _json("dpto_id", 0)
    nombre: str = _json("dpto_nombre", "")


@dataclass
class DepartamentoConDatosDTO(JsonDTO):
    id: int = _json("dpto_id", 0)
    nombre: str = _json("dpto_nombre", "")
    direccion: str = _json("direccion", "")
    ciudad: str = _json("ciudad", "")


@dataclass
class GerenteDTO(JsonDTO):
    id: int = _json("empl_id", 0)
    nombre: str = _json("nombre_completo", "")


@dataclass
class CreateEmpleadoResponseDTO(JsonDTO):
    id: int = _json("empl_id", 0)
    primer_nombre: str = _json("empl_primer_nombre", "")
    segundo_nombre: str | None = _json("empl_segundo_nombre")
    fecha_nac: str = _json("empl_fecha_nac", "")
    cargo_nombre: str = _json("cargo_nombre", "")
    departamento_nombre: str = _json("departamento_nombre", "")
    gerente_nombre: str | None = _json("gerente_nombre")
    sueldo: float = _json("empl_sueldo", 0.0)
    comision: float = _json("empl_comision", 0.0)
    direccion: str = _json("direccion", "")
    ciudad: str = _json("ciudad", "")


@dataclass
class UpdateEmpleadoResponseDTO(JsonDTO):
    id: int = _json("empl_id", 0)
    primer_nombre: str = _json("empl_primer_nombre", "")
    segundo_nombre: str | None = _json("empl_segundo_nombre")
    fecha_nac: str = _json("empl_fecha_nac", "")
    cargo_nombre: str = _json("cargo_nombre", "")
    departamento_nombre: str = _json("departamento_nombre", "")
    gerente_nombre: str | None = _json("gerente_nombre")
    sueldo: float = _json("empl_sueldo", 0.0)
    comision: float = _json("empl_comision", 0.0)
    direccion: str = _json("direccion", "")
    ciudad: str = _json("ciudad", "")


@dataclass
class Request(JsonDTO):
    operation: str = _json("operation", "")
    data: Any = _json("data")


@dataclass
class Response(JsonDTO):
    success: bool = _json("success", False)
    message: str = _json("message", "")
    data: Any = _json("data")

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready mapping; ``data`` is left out when unset."""
        result = super().to_dict()
        if self.data is None:
            del result["data"]
        return result