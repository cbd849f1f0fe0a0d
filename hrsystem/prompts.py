"""Line-based console prompts with input validation."""

import re
import sys
from typing import TextIO

from hrsystem.validation import is_valid_date, is_valid_email

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_MAX_NAME_BYTES = 50


def _parse_int(text: str) -> int:
    if _INT_RE.fullmatch(text) is None:
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


def _parse_float(text: str) -> float:
    if not text or "_" in text:
        raise ValueError(f"invalid number: {text!r}")
    return float(text)


class Console:
    """Reads trimmed answers from a text stream and writes prompts to another."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None) -> None:
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout

    def say(self, text: str = "") -> None:
        """Write ``text`` followed by a newline."""
        self._out.write(f"{text}\n")
        self._out.flush()

    def read_input(self, prompt: str) -> str:
        """Show ``prompt`` and return the next line, trimmed.

        Raises EOFError when the input is exhausted.
        """
        self._out.write(prompt)
        self._out.flush()
        line = self._in.readline()
        if line == "":
            raise EOFError("no more input")
        return line.strip()

    def read_int(self, prompt: str) -> int:
        """Read a decimal integer; raise ValueError when the answer is not one."""
        return _parse_int(self.read_input(prompt))

    def read_email(self, prompt: str) -> str:
        """Ask until a valid e-mail address is given."""
        while True:
            email = self.read_input(prompt)
            if is_valid_email(email):
                return email
            self.say("Email inválido. Use formato: [email]")

    def read_date(self, prompt: str) -> str:
        """Ask until a valid YYYY-MM-DD date is given."""
        while True:
            date = self.read_input(prompt)
            if is_valid_date(date):
                return date
            self.say("Fecha inválida. Use formato: YYYY-MM-DD (ej: 1990-01-15)")

    def read_positive_float(self, prompt: str) -> float:
        """Ask until a number greater than zero is given."""
        while True:
            try:
                value = _parse_float(self.read_input(prompt))
            except ValueError:
                value = None
            if value is None or value <= 0:
                self.say("Debe ser un número mayor a 0")
                continue
            return value

    def read_range_float(self, prompt: str, minimum: float, maximum: float) -> float:
        """Ask until a number between ``minimum`` and ``maximum`` is given."""
        while True:
            try:
                value = _parse_float(self.read_input(prompt))
            except ValueError:
                value = None
            if value is None or value < minimum or value > maximum:
                self.say(f"Debe ser un número entre {minimum:.2f} y {maximum:.2f}")
                continue
            return value

    def read_name(self, prompt: str, required: bool) -> str | None:
        """Ask for a name of at most 50 bytes; an optional empty answer gives None."""
        while True:
            name = self.read_input(prompt).strip()
            if not name:
                if not required:
                    return None
                self.say("Este campo es requerido")
                continue
            if len(name.encode("utf-8")) > _MAX_NAME_BYTES:
                self.say("Máximo 50 caracteres permitidos")
                continue
            return name