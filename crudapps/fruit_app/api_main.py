from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import parse_qs

from fastapi import FastAPI, Form, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.types import ASGIApp, Receive, Scope, Send

from crudapps.config import SEED_ON_STARTUP
from crudapps.errors import AppError, ValidationError
from crudapps.logging_setup import configure_logging

from .seed import seed_base
from .services import (
    create_fruit,
    delete_fruit,
    edit_context,
    get_fruit,
    init_db,
    list_fruits,
    list_users,
    parse_fruit_form,
    parse_season_id,
    update_fruit,
)

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))


class MethodOverrideMiddleware:
    """
    HTML forms only send GET/POST: `POST /fruits/1?_method=DELETE` is
    dispatched as `DELETE /fruits/1`.
    """

    OVERRIDABLE = {"PUT", "PATCH", "DELETE"}

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["method"] == "POST":
            params = parse_qs(scope.get("query_string", b"").decode("latin-1"))
            override = (params.get("_method") or [""])[0].upper()
            if override in self.OVERRIDABLE:
                scope = dict(scope, method=override)
        await self.app(scope, receive, send)


app = FastAPI(title="Fruit App", version="1.0.0")
app.add_middleware(MethodOverrideMiddleware)



# Startup

@app.on_event("startup")
def startup() -> None:
    configure_logging()
    init_db()
    if SEED_ON_STARTUP:
        seed_base()



# Error pages

def _error_page(request: Request, status_code: int, code: str, message: str) -> Response:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"code": code, "message": message},
        status_code=status_code,
    )


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError) -> Response:
    return _error_page(request, exc.status_code, exc.code, exc.message)


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    return _error_page(request, ValidationError.status_code, ValidationError.code, "Invalid request.")


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException) -> Response:
    return _error_page(request, exc.status_code, "http_error", str(exc.detail))


@app.exception_handler(Exception)
def unexpected_error_handler(request: Request, exc: Exception) -> Response:
    logger.exception("%s %s failed", request.method, request.url.path)
    return _error_page(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "server_error", "Something went wrong.")



# Pages

def _redirect_to_index() -> RedirectResponse:
    return RedirectResponse(url="/fruits", status_code=status.HTTP_303_SEE_OTHER)


@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return _redirect_to_index()


@app.get("/fruits", response_class=HTMLResponse)
def index(request: Request) -> Response:
    return templates.TemplateResponse(request, "index.html", {"fruits": list_fruits()})


@app.get("/fruits/new", response_class=HTMLResponse)
def render_new(request: Request) -> Response:
    return templates.TemplateResponse(request, "new.html", {"users": list_users(), "form": {}, "errors": {}})


@app.get("/fruits/{fruit_id}", response_class=HTMLResponse)
def show(request: Request, fruit_id: int) -> Response:
    return templates.TemplateResponse(request, "show.html", {"fruit": get_fruit(fruit_id)})


@app.post("/fruits")
def post_fruit(
    request: Request,
    name: str = Form(""),
    color: str = Form(""),
    readyToEat: str | None = Form(None),
    userId: str = Form(""),
) -> Response:
    form = {"name": name, "color": color, "readyToEat": readyToEat, "userId": userId}
    try:
        data = parse_fruit_form(form)
    except ValidationError as e:
        return templates.TemplateResponse(
            request,
            "new.html",
            {"users": list_users(), "form": form, "errors": e.details or {}},
            status_code=e.status_code,
        )
    create_fruit(data)
    return _redirect_to_index()


@app.delete("/fruits/{fruit_id}")
def remove_fruit(fruit_id: int) -> Response:
    delete_fruit(fruit_id)
    return _redirect_to_index()


@app.get("/fruits/{fruit_id}/edit", response_class=HTMLResponse)
def render_edit(request: Request, fruit_id: int) -> Response:
    return templates.TemplateResponse(request, "edit.html", {**edit_context(fruit_id), "form": {}, "errors": {}})


@app.put("/fruits/{fruit_id}")
def edit_fruit(
    request: Request,
    fruit_id: int,
    name: str = Form(""),
    color: str = Form(""),
    readyToEat: str | None = Form(None),
    userId: str = Form(""),
    season: str = Form(""),
) -> Response:
    form = {"name": name, "color": color, "readyToEat": readyToEat, "userId": userId}
    try:
        data = parse_fruit_form(form)
        season_id = parse_season_id(season)
    except ValidationError as e:
        return templates.TemplateResponse(
            request,
            "edit.html",
            {**edit_context(fruit_id), "form": form, "errors": e.details or {}},
            status_code=e.status_code,
        )
    update_fruit(fruit_id, data, season_id=season_id)
    return _redirect_to_index()
