# hrsystem

A small human-resources system for employee records. It has two parts:

- a **server** (`hrsystem-server`) that reads and writes employees, positions
  (*cargos*), departments and managers (*gerentes*) in a PostgreSQL database and
  answers requests over TCP;
- an interactive **console client** (`hrsystem-client`, menus and prompts in
  Spanish) for creating, updating, looking up and deleting employees.

## Installation

```
pip install .
```

The server opens the database through SQLAlchemy with a `postgresql://` URL, so
a PostgreSQL driver that SQLAlchemy uses by default (such as `psycopg2`) must be
installed alongside it.

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

The server reads its settings from the environment:

| Variable      | Meaning                                        |
|---------------|------------------------------------------------|
| `SERVER_PORT` | TCP port to listen on (empty: any free port)   |
| `DB_HOST`     | database host                                  |
| `DB_PORT`     | database port                                  |
| `DB_USER`     | database user                                  |
| `DB_PASSWORD` | database user's password                       |
| `DB_NAME`     | database name                                  |

Then start it:

```
hrsystem-server
```

It connects with `sslmode=disable`, runs `SELECT 1` to check the database, then
listens on all interfaces and serves each client in its own thread until that
client disconnects or sends a line that is not a valid request. It exits with
status 1 when the database or the port cannot be opened.

## Running the client

```
hrsystem-client
```

The client connects to `localhost:8888` and shows a menu:

```
=== SISTEMA DE RECURSOS HUMANOS ===
1. Crear empleado (INSERT)
2. Actualizar empleado (UPDATE)
3. Consultar empleado (SELECT)
4. Eliminar empleado (DELETE)
5. Salir
```

Input is checked as it is typed: the first name is required and the second
name optional, each at most 50 bytes in UTF-8; e-mail addresses must look like
`ana@example.com`; dates are real calendar dates written `YYYY-MM-DD`; the
salary must be greater than 0 and the commission between 0 and 100. Position,
department and manager are picked from lists fetched from the server. When
updating, you can choose individual fields (for example `1,3,5`) or `todo` to
enter everything again. Deleting asks for confirmation (`s` to proceed). The
client stops at option 5 or when its input ends.

## Protocol

Each request and each response is one JSON object on its own line.

Request:

```json
{"operation": "SELECT", "data": {"empl_id": 7}}
```

A successful response has `"success": true`, a `message` and, when there is
something to return, a `data` field; a failed one has `"success": false` and
the reason in `message`, with no `data`.

Operations: `INSERT`, `UPDATE`, `SELECT`, `DELETE`, `LIST_CARGOS`,
`LIST_DEPARTAMENTOS_CON_DATOS`, `LIST_GERENTES`. Any other operation gets an
unsuccessful response listing the operations.

## Using it from Python

- `hrsystem.dtos` holds the data types. Each converts to and from the JSON
  field names with `to_dict()` and `from_dict()`; `Request` and `Response` are
  the protocol envelopes.
- `hrsystem.validation` has `is_valid_email()`, `is_valid_date()`,
  `validate_create_empleado()` and `validate_update_empleado()`, which raise
  `ValidationError` on the first broken rule.
- `hrsystem.crud.EmpleadoCrud` takes an SQLAlchemy engine and performs the
  database operations, raising `CrudError` with a readable message.
- `hrsystem.server.Server` answers requests; `process_request()` handles one
  `Request`, and `handle_stream()` serves a pair of binary streams.
- `hrsystem.client.Client` talks to a running server, with `send_request()` and
  the `get_cargos()`, `get_departamentos_con_datos()` and `get_gerentes()`
  listings.
- `hrsystem.app.App` is the menu, driven by a `hrsystem.prompts.Console` that
  can read from and write to any text streams.

```python
from hrsystem.dtos import CreateEmpleadoDTO
from hrsystem.validation import ValidationError, validate_create_empleado

dto = CreateEmpleadoDTO.from_dict({
    "empl_primer_nombre": "Ana",
    "empl_email": "ana@example.com",
    "empl_fecha_nac": "1990-01-15",
    "empl_sueldo": 1500.0,
    "empl_comision": 5.0,
    "empl_cargo_id": 1,
    "empl_dpto_id": 2,
})

try:
    validate_create_empleado(dto)
except ValidationError as exc:
    print(exc)
```

## What it does not do

- It does not create the database. The tables `empleados`, `cargos`,
  `departamentos`, `localizaciones` and `ciudades`, and the function
  `p_delete_empleado` that deletion calls, must already exist.
- The server does not answer `LIST_DEPARTAMENTOS`. The client looks up the
  current department's id through that operation when an update leaves the
  department (field 6) unchanged, so such an update is refused by the server
  as having no department.
- The client's host and port are fixed at `localhost:8888`; there are no
  command-line options.