import io

import pytest

from hrsystem.prompts import Console


def _console(text):
    out = io.StringIO()
    return Console(io.StringIO(text), out), out


def test_read_input_trims_and_writes_prompt():
    console, out = _console("  hola  \n")
    assert console.read_input("Nombre: ") == "hola"
    assert out.getvalue() == "Nombre: "


def test_read_input_raises_at_end_of_input():
    console, _ = _console("")
    with pytest.raises(EOFError):
        console.read_input("x")


def test_say_writes_line():
    console, out = _console("")
    console.say("Operación cancelada")
    assert out.getvalue() == "Operación cancelada\n"


@pytest.mark.parametrize("text, expected", [("42\n", 42), ("+7\n", 7), ("-3\n", -3)])
def test_read_int(text, expected):
    console, _ = _console(text)
    assert console.read_int("ID: ") == expected


@pytest.mark.parametrize("text", ["abc\n", "4_2\n", "1.5\n", "\n", "99999999999999999999\n"])
def test_read_int_rejects(text):
    console, _ = _console(text)
    with pytest.raises(ValueError):
        console.read_int("ID: ")


def test_read_email_retries_until_valid():
    console, out = _console("bad\nana@example.com\n")
    assert console.read_email("Email: ") == "ana@example.com"
    assert out.getvalue().count("Email inválido. Use formato: [email]") == 1


def test_read_date_retries_until_valid():
    console, out = _console("1990-02-30\n1990-01-15\n")
    assert console.read_date("Fecha: ") == "1990-01-15"
    assert "Fecha inválida. Use formato: YYYY-MM-DD (ej: 1990-01-15)" in out.getvalue()


def test_read_positive_float_rejects_zero_and_text():
    console, out = _console("0\nabc\n-5\n1500.5\n")
    assert console.read_positive_float("Sueldo: ") == 1500.5
    assert out.getvalue().count("Debe ser un número mayor a 0") == 3


def test_read_range_float_bounds():
    console, out = _console("150\n100\n")
    assert console.read_range_float("Comisión: ", 0, 100) == 100.0
    assert "Debe ser un número entre 0.00 y 100.00" in out.getvalue()


def test_read_name_optional_empty_gives_none():
    console, _ = _console("   \n")
    assert console.read_name("Segundo: ", False) is None


def test_read_name_required_retries():
    console, out = _console("\nAna\n")
    assert console.read_name("Primer: ", True) == "Ana"
    assert "Este campo es requerido" in out.getvalue()


def test_read_name_too_long_retries():
    long_name = "x" * 51
    console, out = _console(f"{long_name}\n{'x' * 50}\n")
    assert console.read_name("Primer: ", True) == "x" * 50
    assert "Máximo 50 caracteres permitidos" in out.getvalue()


def test_retry_loop_stops_at_end_of_input():
    console, _ = _console("bad\n")
    with pytest.raises(EOFError):
        console.read_email("Email: ")