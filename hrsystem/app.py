"""Interactive menu for managing employees through the HR server."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from hrsystem.client import Client, ClientError
from hrsystem.dtos import (
    CreateEmpleadoDTO,
    DeleteEmpleadoDTO,
    EmpleadoDetailResponseDTO,
    Request,
    Response,
    SelectEmpleadoDTO,
    UpdateEmpleadoDTO,
)
from hrsystem.prompts import Console

log = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "8888"

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _atoi(text: str) -> int:
    if _INT_RE.fullmatch(text) is None:
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


class App:
    """Menu-driven front end that turns console answers into server requests."""

    def __init__(self, client: Any, console: Console | None = None) -> None:
        self.client = client
        self.console = console if console is not None else Console()

    def show_menu(self) -> None:
        """Print the main menu."""
        say = self.console.say
        say("\n=== SISTEMA DE RECURSOS HUMANOS ===")
        say("1. Crear empleado (INSERT)")
        say("2. Actualizar empleado (UPDATE)")
        say("3. Consultar empleado (SELECT)")
        say("4. Eliminar empleado (DELETE)")
        say("5. Salir")

    def print_response(self, response: Response) -> None:
        """Print the server's answer, with its data as indented JSON."""
        self.console.say("\n--- RESPUESTA DEL SERVIDOR ---")
        if not response.success:
            self.console.say(f"Error: {response.message}")
            return
        self.console.say(f"Éxito: {response.message}")
        if response.data is not None:
            payload = Request(data=response.data).to_dict()["data"]
            text = json.dumps(payload, indent=2, ensure_ascii=False, sort_keys=True)
            self.console.say(f"Datos: {text}")

    def run(self) -> None:
        """Show the menu and serve choices until the user leaves or input ends."""
        actions = {
            "1": self.handle_insert,
            "2": self.handle_update,
            "3": self.handle_select,
            "4": self.handle_delete,
        }
        try:
            while True:
                self.show_menu()
                option = self.console.read_input("Seleccione una opción: ")
                if option == "5":
                    self.console.say("¡Hasta luego!")
                    return
                action = actions.get(option)
                if action is None:
                    self.console.say("Opción no válida. Intente de nuevo.")
                else:
                    action()
        except EOFError:
            return
        finally:
            self.client.disconnect()

    def _send(self, operation: str, data: Any) -> None:
        try:
            response = self.client.send_request(Request(operation=operation, data=data))
        except ClientError as err:
            self.console.say(f"Error enviando petición: {err}")
            return
        self.print_response(response)

    def _read_catalogue_choices(self) -> tuple[int, int | None, int] | None:
        try:
            cargo_id = self.select_cargo()
        except ClientError as err:
            self.console.say(f"Error obteniendo cargos: {err}")
            return None
        try:
            gerente_id = self.select_gerente()
        except ClientError as err:
            self.console.say(f"Error obteniendo gerentes: {err}")
            return None
        try:
            dpto_id = self.select_departamento()
        except ClientError as err:
            self.console.say(f"Error obteniendo departamentos: {err}")
            return None
        return cargo_id, gerente_id, dpto_id

    def _read_personal_fields(self) -> dict[str, Any]:
        console = self.console
        return {
            "primer_nombre": console.read_name("Primer nombre: ", True),
            "segundo_nombre": console.read_name("Segundo nombre (opcional): ", False),
            "email": console.read_email("Email: "),
            "fecha_nac": console.read_date("Fecha de nacimiento (YYYY-MM-DD): "),
            "sueldo": console.read_positive_float("Sueldo: "),
            "comision": console.read_range_float("Comisión (%): ", 0, 100),
        }

    def handle_insert(self) -> None:
        """Ask for a new employee's data and create it."""
        self.console.say("\n--- CREAR EMPLEADO ---")
        fields = self._read_personal_fields()
        choices = self._read_catalogue_choices()
        if choices is None:
            return
        cargo_id, gerente_id, dpto_id = choices
        dto = CreateEmpleadoDTO(
            **fields, cargo_id=cargo_id, gerente_id=gerente_id, dpto_id=dpto_id
        )
        self._send("INSERT", dto)

    def handle_update(self) -> None:
        """Show an employee's current data and update the chosen fields."""
        say = self.console.say
        say("\n--- ACTUALIZAR EMPLEADO ---")
        try:
            empleado_id = self.console.read_int("ID del empleado a actualizar: ")
        except ValueError as err:
            say(f"Error en ID: {err}")
            return
        say("Obteniendo datos actuales del empleado...")
        try:
            current = self.get_empleado_actual(empleado_id)
        except ClientError as err:
            say(f"Error: {err}")
            return
        say("\nDatos actuales del empleado:")
        say(f"1. Primer nombre: {current.primer_nombre}")
        say(f"2. Segundo nombre: {current.segundo_nombre if current.segundo_nombre is not None else '(vacío)'}")
        say(f"3. Email: {current.email}")
        say(f"4. Fecha nacimiento: {current.fecha_nac}")
        say(f"5. Cargo: {current.cargo_nombre}")
        say(
            f"6. Departamento: {current.departamento_nombre} - "
            f"{current.direccion} - {current.ciudad}"
        )
        if current.gerente_nombre is not None:
            say(f"7. Gerente: {current.gerente_nombre}")
        else:
            say("7. Gerente: (sin gerente)")
        say(f"8. Sueldo: {current.sueldo:.2f}")
        say(f"9. Comisión: {current.comision:.2f}")
        campos = self.console.read_input(
            "\n¿Qué campos desea actualizar? (ej: 1,3,5 o 'todo'): "
        )
        if campos.strip().lower() == "todo":
            self.update_all_fields(empleado_id)
            return
        self.update_selected_fields(empleado_id, campos, current)

    def get_empleado_actual(self, empleado_id: int) -> EmpleadoDetailResponseDTO:
        """Fetch an active employee's current data from the server."""
        response = self.client.send_request(
            Request(operation="SELECT", data=SelectEmpleadoDTO(id=empleado_id))
        )
        if not response.success:
            raise ClientError(response.message)
        try:
            if response.data is None:
                empleado = EmpleadoDetailResponseDTO()
            else:
                empleado = EmpleadoDetailResponseDTO.from_dict(response.data)
        except TypeError as err:
            raise ClientError(f"error procesando datos del empleado: {err}") from err
        if empleado.is_deleted:
            raise ClientError("no se puede actualizar un empleado eliminado")
        empleado.fecha_nac = empleado.fecha_nac[:10]
        return empleado

    def update_selected_fields(
        self, empleado_id: int, campos: str, current: EmpleadoDetailResponseDTO
    ) -> None:
        """Ask for the fields listed in ``campos`` and send the update."""
        console = self.console
        primer_nombre = current.primer_nombre
        segundo_nombre = current.segundo_nombre
        email = current.email
        fecha_nac = current.fecha_nac
        sueldo = current.sueldo
        comision = current.comision
        cargo_id = 0
        dpto_id = 0
        gerente_nombre = current.gerente_nombre

        for field_name in campos.split(","):
            choice = field_name.strip()
            if choice == "1":
                primer_nombre = console.read_name("Nuevo primer nombre: ", True)
            elif choice == "2":
                segundo_nombre = console.read_name("Nuevo segundo nombre (opcional): ", False)
            elif choice == "3":
                email = console.read_email("Nuevo email: ")
            elif choice == "4":
                fecha_nac = console.read_date("Nueva fecha de nacimiento (YYYY-MM-DD): ")
            elif choice == "5":
                try:
                    cargo_id = self.select_cargo()
                except ClientError as err:
                    console.say(f"Error obteniendo cargos: {err}")
                    return
            elif choice == "6":
                try:
                    dpto_id = self.select_departamento()
                except ClientError as err:
                    console.say(f"Error obteniendo departamentos: {err}")
                    return
            elif choice == "7":
                try:
                    gerente_nombre = self.select_gerente_for_update()
                except ClientError as err:
                    console.say(f"Error obteniendo gerentes: {err}")
                    return
            elif choice == "8":
                sueldo = console.read_positive_float("Nuevo sueldo: ")
            elif choice == "9":
                comision = console.read_range_float("Nueva comisión (%): ", 0, 100)
            else:
                console.say(f"Campo '{field_name}' no válido. Use números del 1-9.")
                return

        if cargo_id == 0:
            cargo_id = self.client.get_cargo_id_by_name(current.cargo_nombre)
        if dpto_id == 0:
            dpto_id = self.client.get_dpto_id_by_name(current.departamento_nombre)
        gerente_id = (
            self.client.get_gerente_id_by_name(gerente_nombre) if gerente_nombre else None
        )

        dto = UpdateEmpleadoDTO(
            id=empleado_id,
            primer_nombre=primer_nombre,
            segundo_nombre=segundo_nombre,
            email=email,
            fecha_nac=fecha_nac,
            sueldo=sueldo,
            comision=comision,
            cargo_id=cargo_id,
            gerente_id=gerente_id,
            dpto_id=dpto_id,
        )
        self._send("UPDATE", dto)

    def update_all_fields(self, empleado_id: int) -> None:
        """Ask for every field again and send the update."""
        fields = self._read_personal_fields()
        choices = self._read_catalogue_choices()
        if choices is None:
            return
        cargo_id, gerente_id, dpto_id = choices
        dto = UpdateEmpleadoDTO(
            id=empleado_id,
            **fields,
            cargo_id=cargo_id,
            gerente_id=gerente_id,
            dpto_id=dpto_id,
        )
        self._send("UPDATE", dto)

    def handle_select(self) -> None:
        """Ask for an employee id and show that employee."""
        self.console.say("\n--- CONSULTAR EMPLEADO ---")
        try:
            empleado_id = self.console.read_int("ID del empleado: ")
        except ValueError as err:
            self.console.say(f"Error en ID: {err}")
            return
        self._send("SELECT", SelectEmpleadoDTO(id=empleado_id))

    def handle_delete(self) -> None:
        """Ask for an employee id and, once confirmed, delete that employee."""
        self.console.say("\n--- ELIMINAR EMPLEADO ---")
        try:
            empleado_id = self.console.read_int("ID del empleado a eliminar: ")
        except ValueError as err:
            self.console.say(f"Error en ID: {err}")
            return
        confirmacion = self.console.read_input("¿Está seguro? (s/N): ")
        if confirmacion.lower() != "s":
            self.console.say("Operación cancelada")
            return
        self._send("DELETE", DeleteEmpleadoDTO(id=empleado_id))

    def select_cargo(self) -> int:
        """List the job titles and ask until a listed id is chosen."""
        try:
            cargos = self.client.get_cargos()
        except ClientError as err:
            raise ClientError(f"error obteniendo cargos: {err}") from err
        self.console.say("\nCARGOS DISPONIBLES:")
        for cargo in cargos:
            self.console.say(f"  {cargo.id}. {cargo.nombre} ")
        ids = {cargo.id for cargo in cargos}
        while True:
            try:
                cargo_id = self.console.read_int("\nSeleccione el ID del cargo: ")
            except ValueError:
                self.console.say("ID inválido")
                continue
            if cargo_id in ids:
                return cargo_id
            self.console.say("ID de cargo no válido. Seleccione uno de la lista.")

    def select_departamento(self) -> int:
        """List the departments and ask until a listed id is chosen."""
        try:
            dptos = self.client.get_departamentos_con_datos()
        except ClientError as err:
            raise ClientError(f"error obteniendo departamentos: {err}") from err
        self.console.say("\nDEPARTAMENTOS DISPONIBLES:")
        for dpto in dptos:
            self.console.say(f"  {dpto.id}. {dpto.nombre} - {dpto.direccion} - {dpto.ciudad}")
        ids = {dpto.id for dpto in dptos}
        while True:
            try:
                dpto_id = self.console.read_int("\nSeleccione el ID del departamento: ")
            except ValueError:
                self.console.say("ID inválido")
                continue
            if dpto_id in ids:
                return dpto_id
            self.console.say("ID de departamento no válido. Seleccione uno de la lista.")

    def _list_gerentes(self) -> list[Any]:
        gerentes = self.client.get_gerentes()
        self.console.say("\nGERENTES DISPONIBLES:")
        self.console.say("  0. Sin gerente (opcional)")
        for gerente in gerentes:
            self.console.say(f"  {gerente.id}. {gerente.nombre}")
        return gerentes

    def select_gerente(self) -> int | None:
        """List the managers and ask until one is chosen; None means no manager."""
        try:
            gerentes = self._list_gerentes()
        except ClientError as err:
            raise ClientError(f"error obteniendo gerentes: {err}") from err
        ids = {gerente.id for gerente in gerentes}
        while True:
            answer = self.console.read_input(
                "\nSeleccione el ID del gerente (0 para ninguno): "
            )
            if answer in ("0", ""):
                return None
            try:
                gerente_id = _atoi(answer)
            except ValueError:
                self.console.say("ID inválido")
                continue
            if gerente_id in ids:
                return gerente_id
            self.console.say("ID de gerente no válido. Seleccione uno de la lista o 0.")

    def select_gerente_for_update(self) -> str:
        """Ask once for a manager and return the name; an empty string means none."""
        gerentes = self._list_gerentes()
        answer = self.console.read_input("\nSeleccione el ID del gerente (0 para ninguno): ")
        if answer in ("0", ""):
            return ""
        try:
            gerente_id = _atoi(answer)
        except ValueError as err:
            raise ClientError("ID inválido") from err
        for gerente in gerentes:
            if gerente.id == gerente_id:
                return gerente.nombre
        raise ClientError("ID de gerente no válido")


def main(argv: list[str] | None = None) -> int:
    """Connect to the HR server and run the interactive menu."""
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")
    console = Console()
    console.say("=== CLIENTE DE RECURSOS HUMANOS ===")
    client = Client()
    try:
        client.connect(DEFAULT_HOST, DEFAULT_PORT)
    except ClientError as err:
        log.critical("Error conectando: %s", err)
        return 1
    App(client, console).run()
    return 0