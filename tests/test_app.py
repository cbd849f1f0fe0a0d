import io

import pytest

from hrsystem.app import App
from hrsystem.client import ClientError
from hrsystem.dtos import (
    CargoDTO,
    CreateEmpleadoDTO,
    DeleteEmpleadoDTO,
    DepartamentoConDatosDTO,
    DepartamentoDTO,
    EmpleadoDetailResponseDTO,
    GerenteDTO,
    Response,
    SelectEmpleadoDTO,
    UpdateEmpleadoDTO,
)
from hrsystem.prompts import Console


class FakeClient:
    def __init__(self, responses=None, fail=False):
        self.responses = list(responses or [])
        self.fail = fail
        self.sent = []
        self.disconnected = False
        self.cargos = [CargoDTO(id=1, nombre="Analista")]
        self.dptos = [DepartamentoConDatosDTO(id=2, nombre="Ventas", direccion="Calle 1", ciudad="Lima")]
        self.gerentes = [GerenteDTO(id=4, nombre="Luis ")]

    def send_request(self, request):
        self.sent.append(request)
        if self.responses:
            return self.responses.pop(0)
        return Response(success=True, message="ok")

    def get_cargos(self):
        if self.fail:
            raise ClientError("boom")
        return self.cargos

    def get_departamentos(self):
        return [DepartamentoDTO(id=d.id, nombre=d.nombre) for d in self.dptos]

    def get_departamentos_con_datos(self):
        return self.dptos

    def get_gerentes(self):
        return self.gerentes

    def get_cargo_id_by_name(self, nombre):
        return next((c.id for c in self.cargos if c.nombre == nombre), 0)

    def get_dpto_id_by_name(self, nombre):
        return next((d.id for d in self.get_departamentos() if d.nombre == nombre), 0)

    def get_gerente_id_by_name(self, nombre):
        return next((g.id for g in self.gerentes if g.nombre == nombre), 0)

    def disconnect(self):
        self.disconnected = True


def make_app(text, client=None):
    out = io.StringIO()
    client = client if client is not None else FakeClient()
    app = App(client, Console(io.StringIO(text), out))
    return app, client, out


def test_delete_cancelled_sends_nothing():
    app, client, out = make_app("5\nn\n")
    app.handle_delete()
    assert client.sent == []
    assert "Operación cancelada" in out.getvalue()


def test_delete_confirmed_sends_request():
    app, client, out = make_app("7\nS\n")
    app.handle_delete()
    assert client.sent[0].operation == "DELETE"
    assert client.sent[0].data == DeleteEmpleadoDTO(id=7)
    assert "Éxito: ok" in out.getvalue()


def test_select_with_bad_id_reports_error():
    app, client, out = make_app("abc\n")
    app.handle_select()
    assert client.sent == []
    assert "Error en ID:" in out.getvalue()


def test_select_sends_id():
    app, client, _ = make_app("12\n")
    app.handle_select()
    assert client.sent[0].operation == "SELECT"
    assert client.sent[0].data == SelectEmpleadoDTO(id=12)


def test_insert_builds_dto_from_answers():
    answers = "Ana\n\nana@example.com\n1990-01-15\n1500\n10\n1\n0\n2\n"
    app, client, _ = make_app(answers)
    app.handle_insert()
    assert client.sent[0].operation == "INSERT"
    assert client.sent[0].data == CreateEmpleadoDTO(
        primer_nombre="Ana",
        segundo_nombre=None,
        email="ana@example.com",
        fecha_nac="1990-01-15",
        sueldo=1500.0,
        comision=10.0,
        cargo_id=1,
        gerente_id=None,
        dpto_id=2,
    )


def test_insert_stops_when_cargos_unavailable():
    answers = "Ana\n\nana@example.com\n1990-01-15\n1500\n10\n"
    app, client, out = make_app(answers, FakeClient(fail=True))
    app.handle_insert()
    assert client.sent == []
    assert "Error obteniendo cargos: error obteniendo cargos: boom" in out.getvalue()


def test_select_cargo_retries_until_listed_id():
    app, _, out = make_app("x\n9\n1\n")
    assert app.select_cargo() == 1
    text = out.getvalue()
    assert "ID inválido" in text
    assert "ID de cargo no válido. Seleccione uno de la lista." in text


def test_select_departamento_lists_details():
    app, _, out = make_app("2\n")
    assert app.select_departamento() == 2
    assert "  2. Ventas - Calle 1 - Lima" in out.getvalue()


@pytest.mark.parametrize("answer", ["0\n", "\n"])
def test_select_gerente_none(answer):
    app, _, _ = make_app(answer)
    assert app.select_gerente() is None


def test_select_gerente_returns_listed_id():
    app, _, _ = make_app("3\n4\n")
    assert app.select_gerente() == 4


def test_select_gerente_for_update_returns_name_or_empty():
    app, _, _ = make_app("4\n0\n")
    assert app.select_gerente_for_update() == "Luis "
    assert app.select_gerente_for_update() == ""


def test_select_gerente_for_update_rejects_unknown_id():
    app, _, _ = make_app("99\n")
    with pytest.raises(ClientError, match="ID de gerente no válido"):
        app.select_gerente_for_update()


def test_get_empleado_actual_truncates_date():
    data = {"id": 3, "primer_nombre": "Ana", "fecha_nac": "1990-01-15T00:00:00Z"}
    client = FakeClient([Response(success=True, message="Empleado encontrado", data=data)])
    app, _, _ = make_app("", client)
    empleado = app.get_empleado_actual(3)
    assert empleado.fecha_nac == "1990-01-15"
    assert empleado.primer_nombre == "Ana"


def test_get_empleado_actual_rejects_deleted():
    data = {"id": 3, "is_deleted": True}
    client = FakeClient([Response(success=True, message="Empleado encontrado", data=data)])
    app, _, _ = make_app("", client)
    with pytest.raises(ClientError, match="no se puede actualizar un empleado eliminado"):
        app.get_empleado_actual(3)


def test_get_empleado_actual_propagates_server_error():
    client = FakeClient([Response(success=False, message="empleado no encontrado")])
    app, _, _ = make_app("", client)
    with pytest.raises(ClientError, match="empleado no encontrado"):
        app.get_empleado_actual(3)


def _current():
    return EmpleadoDetailResponseDTO(
        id=3,
        primer_nombre="Ana",
        email="ana@example.com",
        fecha_nac="1990-01-15",
        sueldo=100.0,
        comision=5.0,
        cargo_nombre="Analista",
        gerente_nombre="Luis ",
        departamento_nombre="Ventas",
        direccion="Calle 1",
        ciudad="Lima",
    )


def test_update_selected_fields_keeps_other_values():
    app, client, _ = make_app("Eva\n2000\n")
    app.update_selected_fields(3, "1, 8", _current())
    assert client.sent[0].operation == "UPDATE"
    assert client.sent[0].data == UpdateEmpleadoDTO(
        id=3,
        primer_nombre="Eva",
        segundo_nombre=None,
        email="ana@example.com",
        fecha_nac="1990-01-15",
        sueldo=2000.0,
        comision=5.0,
        cargo_id=1,
        gerente_id=4,
        dpto_id=2,
    )


def test_update_selected_fields_clears_manager():
    app, client, _ = make_app("0\n")
    app.update_selected_fields(3, "7", _current())
    assert client.sent[0].data.gerente_id is None
    assert client.sent[0].data.primer_nombre == "Ana"


def test_update_selected_fields_rejects_unknown_field():
    app, client, out = make_app("")
    app.update_selected_fields(3, "1,x", _current())
    assert client.sent == []
    assert "Campo 'x' no válido. Use números del 1-9." in out.getvalue()


def test_print_response_sorts_data_keys():
    app, _, out = make_app("")
    app.print_response(Response(success=True, message="hecho", data={"b": 1, "a": 2}))
    assert 'Datos: {\n  "a": 2,\n  "b": 1\n}' in out.getvalue()


def test_print_response_error():
    app, _, out = make_app("")
    app.print_response(Response(success=False, message="falló"))
    text = out.getvalue()
    assert "Error: falló" in text
    assert "Datos" not in text


def test_run_exits_and_disconnects():
    app, client, out = make_app("9\n5\n")
    app.run()
    text = out.getvalue()
    assert "Opción no válida. Intente de nuevo." in text
    assert "¡Hasta luego!" in text
    assert client.disconnected is True


def test_run_stops_at_end_of_input():
    app, client, _ = make_app("3\n")
    app.run()
    assert client.disconnected is True
    assert client.sent[0].operation == "SELECT"