import logging
import os
from pathlib import Path
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from .datetimes import format_display
from .models import Collection
from .router import ViewRouter
from .screens import AppointmentScreen, EntityScreen

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
templates.env.globals["format_display"] = format_display

app = FastAPI(title="Clinic Appointment System")
# one browser tab's worth of state
app.state.router = ViewRouter()


def _router(request: Request) -> ViewRouter:
    return request.app.state.router


def _home() -> RedirectResponse:
    # 303 so the browser follows a form POST with a GET
    return RedirectResponse("/", status_code=303)


async def _screen(request: Request) -> EntityScreen:
    return await _router(request).current()


def _record_or_404(screen: EntityScreen, record_id: str):
    record = screen.find(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"No {screen.kind.label} {record_id} loaded")
    return record


@app.get("/")
async def index(request: Request):
    """Render the active view; a pending alert is shown once."""
    screen = await _screen(request)
    alert = screen.state.alert
    if alert:
        screen.dismiss_alert()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "view": screen.collection.value,
            "views": [c.value for c in Collection],
            "kind": screen.kind,
            "state": screen.state,
            "is_appointments": isinstance(screen, AppointmentScreen),
            "alert": alert,
        },
    )


@app.post("/view/{view}")
async def switch_view(request: Request, view: str):
    try:
        collection = Collection(view)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown view {view!r}")
    await _router(request).activate(collection)
    return _home()


@app.post("/submit")
async def submit(request: Request):
    screen = await _screen(request)
    form = await request.form()
    screen.update_draft({key: value for key, value in form.items() if isinstance(value, str)})
    await screen.submit()
    return _home()


@app.post("/edit/{record_id}")
async def begin_edit(request: Request, record_id: str):
    screen = await _screen(request)
    screen.begin_edit(_record_or_404(screen, record_id))
    return _home()


@app.post("/cancel")
async def cancel_edit(request: Request):
    screen = await _screen(request)
    screen.cancel_edit()
    return _home()


@app.get("/delete/{record_id}")
async def confirm_delete(request: Request, record_id: str):
    """Blocking confirmation page standing in for ``window.confirm``."""
    screen = await _screen(request)
    _record_or_404(screen, record_id)
    return templates.TemplateResponse(
        request,
        "confirm.html",
        {"record_id": record_id, "message": f"Delete this {screen.kind.label}?"},
    )


@app.post("/delete/{record_id}")
async def delete(request: Request, record_id: str):
    screen = await _screen(request)
    form = await request.form()
    answer = form.get("confirm") == "yes"
    await screen.remove(record_id, confirm=lambda _message: answer)
    return _home()
