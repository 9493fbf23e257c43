"""
Todo API Server — HTTP Host for TodoService
============================================
FastAPI application that routes REST calls into TodoService.

Launch:
    python -m todoapi.cli start                          # Via CLI
    uvicorn todoapi.server:create_app --factory          # Direct

Endpoints:
    GET    /api/todo         → 200, all items
    GET    /api/todo/{id}    → 200 item | 404
    POST   /api/todo         → 201 item + Location | 400
    PUT    /api/todo/{id}    → 204 | 400 | 404
    DELETE /api/todo/{id}    → 204 | 404
    GET    /api/health       → 200, liveness + item count
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, StrictStr

from todoapi import __version__
from todoapi.config import ServerConfig
from todoapi.errors import InvalidInput, NotFound, TodoError
from todoapi.models import GET_TODO_ROUTE, TODO_PREFIX, TodoItem
from todoapi.service import TodoService
from todoapi.store import get_store

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Request Models
# ─────────────────────────────────────────────────────────────

class TodoItemBody(BaseModel):
    """JSON body of POST/PUT. Types are not coerced ("1" is not an id)."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[StrictInt] = None
    name: Optional[StrictStr] = None
    is_complete: StrictBool = Field(False, alias="isComplete")

    def to_item(self) -> TodoItem:
        return TodoItem(id=self.id, name=self.name, is_complete=self.is_complete)


def _body_to_item(body: Optional[TodoItemBody]) -> Optional[TodoItem]:
    return body.to_item() if body is not None else None


def get_service(request: Request) -> TodoService:
    return request.app.state.service


# ─────────────────────────────────────────────────────────────
#  Routes — /api/todo
# ─────────────────────────────────────────────────────────────

router = APIRouter(prefix=TODO_PREFIX, tags=["todo"])


@router.get("")
async def get_all(service: TodoService = Depends(get_service)):
    """Return every stored item."""
    return JSONResponse([item.to_dict() for item in service.list_all()])


@router.get("/{todo_id}", name=GET_TODO_ROUTE)
async def get_by_id(todo_id: int, service: TodoService = Depends(get_service)):
    """Return one item by id."""
    return JSONResponse(service.get_by_id(todo_id).to_dict())


@router.post("")
async def create(
    request: Request,
    body: Optional[TodoItemBody] = Body(None),
    service: TodoService = Depends(get_service),
):
    """Create an item; Location points at its GetTodo route."""
    created = service.create(_body_to_item(body))
    location = request.url_for(created.locator.route, **created.locator.params)
    return JSONResponse(
        created.item.to_dict(),
        status_code=201,
        headers={"Location": str(location)},
    )


@router.put("/{todo_id}")
async def update(
    todo_id: int,
    body: Optional[TodoItemBody] = Body(None),
    service: TodoService = Depends(get_service),
):
    """Replace name and isComplete. The whole item is required (no PATCH)."""
    service.replace(todo_id, _body_to_item(body))
    return Response(status_code=204)


@router.delete("/{todo_id}")
async def delete(todo_id: int, service: TodoService = Depends(get_service)):
    service.delete(todo_id)
    return Response(status_code=204)


# ─────────────────────────────────────────────────────────────
#  Error Mapping
# ─────────────────────────────────────────────────────────────

ERROR_STATUS = {
    InvalidInput: 400,
    NotFound: 404,
}


def status_for(exc: TodoError) -> int:
    """HTTP status for a service error; unmapped kinds are server errors."""
    for error_type in type(exc).__mro__:
        if error_type in ERROR_STATUS:
            return ERROR_STATUS[error_type]
    return 500


async def handle_todo_error(request: Request, exc: TodoError):
    return JSONResponse({"detail": str(exc)}, status_code=status_for(exc))


async def handle_validation_error(request: Request, exc: RequestValidationError):
    # Unparseable bodies and path ids are bad input, not 422
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse({"detail": jsonable_encoder(exc.errors())}, status_code=400)


# ─────────────────────────────────────────────────────────────
#  App Factory
# ─────────────────────────────────────────────────────────────

def create_app(
    service: Optional[TodoService] = None,
    config: Optional[ServerConfig] = None,
) -> FastAPI:
    """Build the app and run the startup seed before returning it.

    Args:
        service: Service to expose. Built over ``config.store`` if omitted.
        config: Server configuration. Defaults to ``ServerConfig()``.
    """
    config = config or ServerConfig()
    if service is None:
        service = TodoService(get_store(config.store))

    if config.seed:
        seeded = service.initialize(config.seed_name)
        if seeded is not None:
            logger.info("Seeded empty store with %r (id=%s)", seeded.name, seeded.id)

    app = FastAPI(title="Todo API", version=__version__)
    app.state.service = service
    app.state.config = config

    app.include_router(router)
    app.add_exception_handler(TodoError, handle_todo_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)

    @app.get("/api/health")
    async def api_health():
        """Return liveness and the current item count."""
        return JSONResponse({"status": "ok", "items": service.count()})

    return app


def run_server(config: Optional[ServerConfig] = None):
    """Launch the Todo API with uvicorn."""
    import uvicorn

    config = config or ServerConfig.from_env()
    app = create_app(config=config)

    print(f"\n─── Todo API {__version__} ───")
    print(f"  http://{config.host}:{config.port}{TODO_PREFIX}")
    print(f"  Store: {config.store}")
    print(f"  Press Ctrl+C to stop\n")

    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level)


if __name__ == "__main__":
    run_server()
