"""Hello World — the smallest mojito app.

Demonstrates hooks, placeholder routes with defaults, inline templates,
JSON responses and static files.

Run:
    python app.py daemon --listen http://*:3000
"""

from pathlib import Path

from mojito import App, AppConfig, Context, Hook

PUBLIC = Path(__file__).parent / "public"

app = App(AppConfig(static_dirs=(str(PUBLIC),)))

app.renderer.add_template("greet", "Hello, {{ name }}!")


@app.hook(Hook.BEFORE_DISPATCH)
def who(c: Context) -> None:
    c.stash["who"] = "Mojolicious"


@app.hook(Hook.AFTER_DISPATCH)
def goodbye(c: Context) -> None:
    if c.req.path == "/":
        c.res.content.add_chunk(b"\n... and Goodbye!")


@app.routes.get("/")
def index(c: Context) -> None:
    c.render(text=f"Hello, {c.stash['who']}!")


app.routes.get("/greet/:name", {"name": "World", "template": "greet"})


@app.routes.get("/api/status")
def status(c: Context) -> None:
    c.render(json={"status": "ok", "who": c.stash["who"]})


@app.routes.post("/created")
def created(c: Context) -> None:
    c.res.headers["X-Custom"] = "mojito"
    c.render(text="Created", status=201)


if __name__ == "__main__":
    app.start()
