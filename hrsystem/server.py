"""TCP server answering employee requests sent as JSON lines."""

from __future__ import annotations

import json
import logging
import math
import os
import socketserver
from collections.abc import Callable, Mapping
from typing import Any, BinaryIO

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL

from hrsystem.crud import CrudError, EmpleadoCrud
from hrsystem.dtos import CreateEmpleadoDTO, Request, Response, UpdateEmpleadoDTO

log = logging.getLogger(__name__)

UNKNOWN_OPERATION_MESSAGE = (
    "Operación no válida. Operaciones disponibles: INSERT, UPDATE, SELECT, DELETE, "
    "LIST_CARGOS, LIST_CARGOS_CON_DATOS, LIST_DEPARTAMENTOS, "
    "LIST_DEPARTAMENTOS_CON_DATOS, LIST_GERENTES"
)


class _BadRequest(Exception):
    """Raised when a request's data cannot be used."""


def build_dsn(env: Mapping[str, str]) -> str:
    """Build the PostgreSQL connection URL from DB_* settings in ``env``."""
    port = env.get("DB_PORT", "")
    url = URL.create(
        "postgresql",
        username=env.get("DB_USER") or None,
        password=env.get("DB_PASSWORD") or None,
        host=env.get("DB_HOST") or None,
        port=int(port) if port else None,
        database=env.get("DB_NAME") or None,
        query={"sslmode": "disable"},
    )
    return url.render_as_string(hide_password=False)


def _employee_id(data: Any, operation: str) -> int:
    if not isinstance(data, Mapping):
        raise _BadRequest(f"Formato de datos inválido para {operation}")
    value = data.get("empl_id")
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
    ):
        raise _BadRequest(f"ID del empleado es requerido para {operation}")
    return int(value)


def _encode(response: Response) -> bytes:
    return (json.dumps(response.to_dict(), ensure_ascii=False) + "\n").encode("utf-8")


class _Handler(socketserver.StreamRequestHandler):
    def handle(self) -> None:
        peer = ":".join(str(part) for part in self.client_address[:2])
        log.info("✓ Cliente conectado desde: %s", peer)
        self.server.app.handle_stream(self.rfile, self.wfile)
        log.info("✓ Cliente %s desconectado", peer)


class _TCPServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, address: tuple[str, int], app: Server) -> None:
        self.app = app
        super().__init__(address, _Handler)


class Server:
    """Serves employee operations to clients over TCP."""

    def __init__(self, port: str = "", connect: Callable[[str], Any] | None = None) -> None:
        self.port = port
        self._connect = connect if connect is not None else create_engine
        self.engine: Any = None
        self.crud: EmpleadoCrud | None = None

    def connect_db(self) -> None:
        """Open the database from the environment and check that it answers."""
        try:
            engine = self._connect(build_dsn(os.environ))
        except Exception as err:
            raise ConnectionError(f"error conectando a la base de datos: {err}") from err
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as err:
            engine.dispose()
            raise ConnectionError(
                f"error haciendo ping a la base de datos: {err}"
            ) from err
        self.engine = engine
        self.crud = EmpleadoCrud(engine)
        log.info("✓ Conexión a PostgreSQL establecida exitosamente")

    def process_request(self, request: Request) -> Response:
        """Carry out one request and return the answer for the client."""
        handlers: dict[str, Callable[[], Response]] = {
            "INSERT": lambda: self._write(
                request.data, CreateEmpleadoDTO, "insert", "Empleado creado exitosamente"
            ),
            "UPDATE": lambda: self._write(
                request.data, UpdateEmpleadoDTO, "update", "Empleado actualizado exitosamente"
            ),
            "SELECT": lambda: self._select(request.data),
            "DELETE": lambda: self._delete(request.data),
            "LIST_CARGOS": lambda: self._list("list_cargos", "Lista de cargos obtenida"),
            "LIST_DEPARTAMENTOS_CON_DATOS": lambda: self._list(
                "list_departamentos_con_datos",
                "Departamentos con datos obtenidos exitosamente",
            ),
            "LIST_GERENTES": lambda: self._list("list_gerentes", "Lista de gerentes obtenida"),
        }
        handler = handlers.get(request.operation)
        if handler is None:
            return Response(success=False, message=UNKNOWN_OPERATION_MESSAGE)
        try:
            return handler()
        except (_BadRequest, CrudError) as err:
            return Response(success=False, message=str(err))

    def _write(self, data: Any, dto_cls: type, action: str, message: str) -> Response:
        try:
            dto = dto_cls.from_dict({} if data is None else data)
        except TypeError as err:
            return Response(success=False, message=f"Error en formato de datos: {err}")
        result = getattr(self.crud, action)(dto)
        return Response(success=True, message=message, data=result)

    def _select(self, data: Any) -> Response:
        result = self.crud.select(_employee_id(data, "SELECT"))
        return Response(success=True, message="Empleado encontrado", data=result)

    def _delete(self, data: Any) -> Response:
        self.crud.delete(_employee_id(data, "DELETE"))
        return Response(
            success=True,
            message="Empleado eliminado exitosamente y guardado en histórico",
        )

    def _list(self, action: str, message: str) -> Response:
        return Response(success=True, message=message, data=getattr(self.crud, action)())

    def handle_stream(self, rfile: BinaryIO, wfile: BinaryIO) -> None:
        """Answer JSON requests read line by line from ``rfile`` until it ends or breaks."""
        for line in rfile:
            if not line.strip():
                continue
            try:
                request = Request.from_dict(json.loads(line))
            except (ValueError, TypeError) as err:
                log.error("Error decodificando request: %s", err)
                break
            log.info("Operación recibida: %s", request.operation)
            response = self.process_request(request)
            try:
                wfile.write(_encode(response))
                wfile.flush()
            except OSError as err:
                log.error("Error enviando response: %s", err)
                break

    def start(self) -> None:
        """Connect to the database and serve clients until interrupted."""
        self.connect_db()
        try:
            try:
                tcp = _TCPServer(("", int(self.port) if self.port else 0), self)
            except (OSError, ValueError) as err:
                raise ConnectionError(f"error iniciando servidor: {err}") from err
            with tcp:
                log.info("✓ Servidor iniciado en puerto %s", tcp.server_address[1])
                log.info("✓ Esperando conexiones de clientes...")
                tcp.serve_forever()
        finally:
            self.engine.dispose()


def main(argv: list[str] | None = None) -> int:
    """Start the server on the port named by SERVER_PORT."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    server = Server(os.environ.get("SERVER_PORT", ""))
    log.info("=== SERVIDOR DE RECURSOS HUMANOS ===")
    log.info("Iniciando servidor...")
    try:
        server.start()
    except ConnectionError as err:
        log.critical("Error iniciando servidor: %s", err)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0