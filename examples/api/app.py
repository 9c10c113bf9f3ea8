"""API — a JSON employee directory.

Demonstrates placeholder routes, ``c.render(json=...)``, request JSON
bodies, ``HTTPError`` for failures and an ``under`` route that guards
the write endpoints with Basic credentials.

Run:
    cd examples/api && python app.py daemon
"""

import threading
from dataclasses import asdict, dataclass

from mojito import App, Context, HTTPError, NotFound

CREDENTIALS = "admin:s3cret"

app = App()


# ---------------------------------------------------------------------------
# In-memory storage
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Employee:
    id: int
    name: str
    title: str


_employees: dict[int, Employee] = {
    1: Employee(1, "Hubert Farnsworth", "Founder"),
    2: Employee(2, "Philip J. Fry", "Delivery Boy"),
}
_next_id = 3
_lock = threading.Lock()


def _lookup(c: Context) -> Employee:
    try:
        employee_id = int(c.param("id"))
    except ValueError:
        raise NotFound("No such employee") from None
    with _lock:
        employee = _employees.get(employee_id)
    if employee is None:
        raise NotFound("No such employee")
    return employee


def _payload(c: Context) -> dict:
    try:
        body = c.req.json()
    except ValueError:
        raise HTTPError(400, "Body must be JSON") from None
    if not isinstance(body, dict) or not str(body.get("name", "")).strip():
        raise HTTPError(400, "name is required")
    return body


# ---------------------------------------------------------------------------
# Public routes
# ---------------------------------------------------------------------------


@app.routes.get("/employees")
def list_employees(c: Context) -> None:
    with _lock:
        employees = sorted(_employees.values(), key=lambda e: e.id)
    c.render(json={"data": [asdict(e) for e in employees]})


@app.routes.get("/employees/:id")
def get_employee(c: Context) -> None:
    c.render(json={"data": asdict(_lookup(c))})


# ---------------------------------------------------------------------------
# Guarded routes
# ---------------------------------------------------------------------------


def authorized(c: Context) -> bool:
    if c.req.headers.authorization() == CREDENTIALS:
        return True
    c.res.headers["WWW-Authenticate"] = 'Basic realm="employees"'
    c.render(json={"error": "unauthorized"}, status=401)
    return False


admin = app.routes.under("/admin", authorized)


@admin.post("/employees")
def create_employee(c: Context) -> None:
    global _next_id
    body = _payload(c)
    with _lock:
        employee = Employee(_next_id, body["name"].strip(), str(body.get("title", "")))
        _employees[employee.id] = employee
        _next_id += 1
    c.render(json={"data": asdict(employee)}, status=201)


@admin.put("/employees/:id")
def update_employee(c: Context) -> None:
    employee = _lookup(c)
    body = _payload(c)
    updated = Employee(employee.id, body["name"].strip(), str(body.get("title", employee.title)))
    with _lock:
        _employees[employee.id] = updated
    c.render(json={"data": asdict(updated)})


@admin.delete("/employees/:id")
def delete_employee(c: Context) -> None:
    employee = _lookup(c)
    with _lock:
        del _employees[employee.id]
    c.render(status=204)


if __name__ == "__main__":
    app.start()
