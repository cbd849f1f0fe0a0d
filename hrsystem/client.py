"""Connection to the HR server and the catalogue lookups it offers."""

from __future__ import annotations

import json
import logging
import socket
from collections.abc import Callable, Sequence
from typing import Any

from hrsystem.dtos import (
    CargoDTO,
    DepartamentoConDatosDTO,
    DepartamentoDTO,
    GerenteDTO,
    JsonDTO,
    Request,
    Response,
)

log = logging.getLogger(__name__)


class ClientError(Exception):
    """Raised when a request to the server fails or is refused."""


class Client:
    """A connection to the HR server exchanging JSON lines."""

    def __init__(self) -> None:
        self._sock: socket.socket | None = None
        self._file: Any = None

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    def connect(self, host: str, port: str | int) -> None:
        """Open a TCP connection to ``host``:``port``."""
        address = f"[{host}]:{port}" if ":" in host else f"{host}:{port}"
        try:
            sock = socket.create_connection((host, int(port)))
        except (OSError, ValueError) as err:
            raise ClientError(f"error conectando al servidor: {err}") from err
        self._sock = sock
        self._file = sock.makefile("rwb")
        log.info("Conectado al servidor %s", address)

    def disconnect(self) -> None:
        """Close the connection if one is open."""
        if self._sock is None:
            return
        try:
            self._file.close()
        except OSError:
            pass
        self._sock.close()
        self._sock = None
        self._file = None
        log.info("Desconectado del servidor")

    def send_request(self, request: Request) -> Response:
        """Send ``request`` and wait for the server's response."""
        if self._file is None:
            raise ClientError("error enviando request: sin conexión")
        try:
            payload = json.dumps(request.to_dict(), ensure_ascii=False) + "\n"
            self._file.write(payload.encode("utf-8"))
            self._file.flush()
        except (OSError, TypeError, ValueError) as err:
            raise ClientError(f"error enviando request: {err}") from err
        try:
            while True:
                line = self._file.readline()
                if not line:
                    raise ClientError("error recibiendo response: EOF")
                if line.strip():
                    break
            return Response.from_dict(json.loads(line))
        except (OSError, ValueError, TypeError) as err:
            raise ClientError(f"error recibiendo response: {err}") from err

    def _fetch_list(self, operation: str, dto_cls: type[JsonDTO], what: str) -> list[Any]:
        response = self.send_request(Request(operation=operation, data=None))
        if not response.success:
            raise ClientError(response.message)
        data = response.data
        if data is None:
            return []
        try:
            if not isinstance(data, list):
                raise TypeError(f"cannot decode {type(data).__name__} into a list")
            return [dto_cls() if item is None else dto_cls.from_dict(item) for item in data]
        except TypeError as err:
            raise ClientError(f"error procesando lista de {what}: {err}") from err

    def get_cargos(self) -> list[CargoDTO]:
        """Return the job titles known to the server."""
        return self._fetch_list("LIST_CARGOS", CargoDTO, "cargos")

    def get_departamentos(self) -> list[DepartamentoDTO]:
        """Return the departments known to the server."""
        return self._fetch_list("LIST_DEPARTAMENTOS", DepartamentoDTO, "departamentos")

    def get_departamentos_con_datos(self) -> list[DepartamentoConDatosDTO]:
        """Return the departments with their address and city."""
        return self._fetch_list(
            "LIST_DEPARTAMENTOS_CON_DATOS",
            DepartamentoConDatosDTO,
            "departamentos con datos",
        )

    def get_gerentes(self) -> list[GerenteDTO]:
        """Return the employees that can act as managers."""
        return self._fetch_list("LIST_GERENTES", GerenteDTO, "gerentes")

    @staticmethod
    def _id_by_name(fetch: Callable[[], Sequence[Any]], nombre: str) -> int:
        try:
            items = fetch()
        except ClientError:
            return 0
        return next((item.id for item in items if item.nombre == nombre), 0)

    def get_cargo_id_by_name(self, nombre: str) -> int:
        """Return the id of the job title called ``nombre``, or 0."""
        return self._id_by_name(self.get_cargos, nombre)

    def get_dpto_id_by_name(self, nombre: str) -> int:
        """Return the id of the department called ``nombre``, or 0."""
        return self._id_by_name(self.get_departamentos, nombre)

    def get_gerente_id_by_name(self, nombre: str) -> int:
        """Return the id of the manager called ``nombre``, or 0."""
        return self._id_by_name(self.get_gerentes, nombre)