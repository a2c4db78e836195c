import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Depends, Body
from fastapi.responses import JSONResponse

from scaffold_rental.config import settings
from scaffold_rental.agents.context import ServiceContext
from scaffold_rental.agents.identity import IdentityAgent
from scaffold_rental.agents.records import CustomerStore, InventoryStore, RentalOrderStore
from scaffold_rental.auth import AuthGuard
from scaffold_rental.dashboard import build_dashboard
from scaffold_rental.errors import (
    AuthenticationRequired,
    ConnectionUnavailable,
    PermissionDenied,
    ReadOnlyFieldError,
    RemoteConflict,
    RemoteNotFound,
    StoreError,
)
from scaffold_rental.forms.base import FormMode
from scaffold_rental.formatters import format_currency, format_number
from scaffold_rental.labels import ROLE_LABELS
from scaffold_rental.navigation import visible_menu
from scaffold_rental.schemas.user import UserRole
from scaffold_rental.views.list_view import ListView
from scaffold_rental.views.screens import SCREENS

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
logger = logging.getLogger(__name__)

PLACEHOLDERS = {
    "invoices": ("Faktur & Pembayaran", "Modul faktur dan pembayaran akan segera tersedia."),
    "accounting": ("Sistem Akuntansi", "Modul akuntansi (Chart of Accounts, Journal Entry, General Ledger) akan segera tersedia."),
    "tax": ("Perpajakan Indonesia", "Modul perpajakan (PPN 11%, PPh 23, e-Faktur) akan segera tersedia."),
    "reports": ("Laporan Keuangan", "Modul laporan keuangan (Laba Rugi, Neraca, Arus Kas) akan segera tersedia."),
}

STORE_ERROR_STATUS = {
    RemoteConflict: 409,
    RemoteNotFound: 404,
    ConnectionUnavailable: 503,
}


def _store_error_status(error: StoreError) -> int:
    for error_type, status_code in STORE_ERROR_STATUS.items():
        if isinstance(error, error_type):
            return status_code
    return 502


def _guard(request: Request) -> AuthGuard:
    return AuthGuard(request.app.state.identity, request.app.state.access_token)


async def require_login(request: Request) -> str:
    token = await _guard(request).require_authenticated()
    # the stored session may have been refreshed
    if token != request.app.state.access_token:
        request.app.state.access_token = token
        request.app.state.context.set_access_token(token)
    return token


async def require_staff(request: Request) -> UserRole:
    await require_login(request)
    return await _guard(request).require_role(UserRole.ADMIN, UserRole.USER)


def placeholder_page(title: str, message: str):
    async def page():
        return {"title": title, "message": message}
    return page


def _screen(request: Request, entity: str) -> ListView:
    return SCREENS[entity](request.app.state.context)


def _row_payload(row) -> dict:
    return {"key": row.key, **row.cells, "badges": row.badges}


def _apply_payload(view: ListView, payload: dict) -> dict[str, str]:
    """Copy request fields into the open form; returns unknown-field errors."""
    model = view.form.model
    names = {info.alias or name: name for name, info in model.model_fields.items()}
    unknown = {}
    for field, value in payload.items():
        name = names.get(field, field)
        if name not in view.form.draft:
            unknown[field] = "Field tidak dikenal"
            continue
        if view.form.mode == FormMode.EDIT and name == model.key_field:
            if value != view.form.original_key:
                raise ReadOnlyFieldError(name)
            continue
        view.form.set_field(name, value)
    return unknown


def _submit_response(view: ListView, result, status_code: int) -> JSONResponse:
    if result.ok:
        notice = view.notifier.last
        return JSONResponse(
            status_code=status_code,
            content={"record": result.record.to_wire(), "message": notice.message if notice else None},
        )
    if result.error is not None:
        return JSONResponse(
            status_code=_store_error_status(result.error),
            content={"detail": result.error.message, "draft": view.form.build_record().to_wire()},
        )
    return JSONResponse(status_code=422, content={"errors": result.errors})


def entity_routes(app: FastAPI, entity: str):

    @app.get(f"/{entity}", dependencies=[Depends(require_login)], name=f"list_{entity}")
    async def list_records(request: Request, search: str = ""):
        view = _screen(request, entity)
        await view.load()
        return {
            "title": view.schema.title,
            "search_placeholder": view.schema.search_placeholder,
            "columns": [{"key": column.key, "label": column.label} for column in view.schema.columns],
            "rows": [_row_payload(row) for row in view.search(search)],
            "empty": view.is_empty,
            "empty_message": view.schema.empty_message,
        }

    @app.get(f"/{entity}/{{key}}", dependencies=[Depends(require_login)], name=f"get_{entity}")
    async def get_record(request: Request, key: str):
        record = await _screen(request, entity).store.get(key)
        return record.to_wire()

    @app.post(f"/{entity}", dependencies=[Depends(require_staff)], name=f"create_{entity}")
    async def create_record(request: Request, payload: dict = Body(...)):
        view = _screen(request, entity)
        view.start_create()
        unknown = _apply_payload(view, payload)
        if unknown:
            return JSONResponse(status_code=422, content={"errors": unknown})
        result = await view.save()
        return _submit_response(view, result, 201)

    @app.put(f"/{entity}/{{key}}", dependencies=[Depends(require_staff)], name=f"update_{entity}")
    async def update_record(request: Request, key: str, payload: dict = Body(...)):
        view = _screen(request, entity)
        record = await view.store.get(key)
        view.form.open_edit(record)
        unknown = _apply_payload(view, payload)
        if unknown:
            return JSONResponse(status_code=422, content={"errors": unknown})
        result = await view.save()
        return _submit_response(view, result, 200)

    @app.delete(f"/{entity}/{{key}}", dependencies=[Depends(require_staff)], name=f"delete_{entity}")
    async def delete_record(request: Request, key: str):
        view = _screen(request, entity)
        view.request_delete(key)
        if not await view.confirm_delete():
            raise view.last_error
        return {"message": view.notifier.last.message}


def create_app(context: ServiceContext | None = None, identity: IdentityAgent | None = None) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.identity = identity or IdentityAgent()
        app.state.access_token = await app.state.identity.get_access_token()
        app.state.context = context or ServiceContext()
        app.state.context.set_access_token(app.state.access_token)
        await app.state.context.connect()
        yield
        await app.state.context.close()

    app = FastAPI(title="Scaffolding Rental", lifespan=lifespan)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return JSONResponse(status_code=_store_error_status(exc), content={"detail": exc.message})

    @app.exception_handler(AuthenticationRequired)
    async def authentication_handler(request: Request, exc: AuthenticationRequired):
        return JSONResponse(status_code=401, content={"detail": str(exc)})

    @app.exception_handler(PermissionDenied)
    async def permission_handler(request: Request, exc: PermissionDenied):
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(ReadOnlyFieldError)
    async def read_only_handler(request: Request, exc: ReadOnlyFieldError):
        return JSONResponse(status_code=422, content={"errors": {exc.field: str(exc)}})

    @app.get("/health")
    async def health(request: Request):
        return {"status": "ok", "connected": request.app.state.context.is_connected}

    @app.get("/oauth/callback")
    async def oauth_callback(request: Request):
        code = request.query_params.get('code')
        if not code:
            return JSONResponse(status_code=400, content={"error": "No code provided"})

        result = await request.app.state.identity.get_access_and_refresh_token(code)

        if result.get("error"):
            return JSONResponse(status_code=400, content={"error": result.get("error")})

        request.app.state.access_token = result["access_token"]
        request.app.state.context.set_access_token(result["access_token"])
        return {"principal": result["principal"], "expires_at": result["expires_at"].isoformat()}

    @app.get("/auth/state")
    async def auth_state(request: Request):
        return {"state": (await _guard(request).state()).value}

    @app.post("/logout", dependencies=[Depends(require_login)])
    async def logout(request: Request):
        await request.app.state.identity.logout(request.app.state.access_token)
        request.app.state.access_token = None
        request.app.state.context.set_access_token(None)
        return {"message": "Berhasil keluar"}

    @app.get("/profile", dependencies=[Depends(require_login)])
    async def get_profile(request: Request):
        profile = await request.app.state.identity.get_caller_profile(request.app.state.access_token)
        if profile is None:
            return JSONResponse(status_code=404, content={"detail": "Profil belum dibuat"})
        return {**profile.model_dump(mode="json"), "role_label": ROLE_LABELS[profile.role]}

    @app.put("/profile", dependencies=[Depends(require_login)])
    async def save_profile(request: Request, payload: dict = Body(...)):
        try:
            profile = await _guard(request).setup_profile(payload.get("name", ""), payload.get("email", ""))
        except ValueError as e:
            return JSONResponse(status_code=422, content={"detail": str(e)})
        return {**profile.model_dump(mode="json"), "message": "Profil berhasil disimpan"}

    @app.get("/menu", dependencies=[Depends(require_login)])
    async def menu(request: Request):
        role = await request.app.state.identity.get_caller_role(request.app.state.access_token)
        return {"role": role.value, "items": visible_menu(role)}

    @app.get("/dashboard", dependencies=[Depends(require_login)])
    async def dashboard(request: Request):
        context = request.app.state.context
        summary = build_dashboard(
            await CustomerStore(context).list(),
            await InventoryStore(context).list(),
            await RentalOrderStore(context).list(),
        )
        return {
            "total_customers": format_number(summary.total_customers),
            "total_inventory_items": format_number(summary.total_inventory_items),
            "active_orders": format_number(summary.active_orders),
            "inventory_value": format_currency(summary.inventory_value),
            "inventory_summary": [item.to_wire() for item in summary.inventory_summary],
            "recent_orders": [order.to_wire() for order in summary.recent_orders],
        }

    for page, (title, message) in PLACEHOLDERS.items():
        app.add_api_route(
            f"/{page}",
            placeholder_page(title, message),
            methods=["GET"],
            dependencies=[Depends(require_login)],
            name=page,
        )

    for entity in SCREENS:
        entity_routes(app, entity)

    return app


app = create_app()
