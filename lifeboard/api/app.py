"""FastAPI application exposing board upload and simulation endpoints.

Routes live under /api/boards. Lifeboard errors are translated to HTTP
status codes in one place:

    InputError, ShapeError, ValidationError, RangeError -> 400
    NotFoundError                                       -> 404
    NotConvergedError and anything else                 -> 500
"""

import logging
from contextlib import asynccontextmanager
from typing import Dict, Optional, Type

from fastapi import APIRouter, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse

from ..config import Settings
from ..core.grid import Grid
from ..errors import (
    InputError,
    LifeboardError,
    NotConvergedError,
    NotFoundError,
    RangeError,
    ShapeError,
    ValidationError,
)
from ..service.board_service import BoardService
from ..storage.board_store import create_store
from .schemas import BoardIdDto, BoardStateDto, ErrorDto

logger = logging.getLogger(__name__)

ERROR_STATUS: Dict[Type[LifeboardError], int] = {
    InputError: status.HTTP_400_BAD_REQUEST,
    ShapeError: status.HTTP_400_BAD_REQUEST,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    RangeError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    NotConvergedError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_ERROR_RESPONSES = {
    400: {'model': ErrorDto},
    404: {'model': ErrorDto},
    500: {'model': ErrorDto},
}

router = APIRouter(prefix='/api/boards', tags=['boards'])


def status_for(error: Exception) -> int:
    """HTTP status code for an exception raised by the service."""
    for error_type, code in ERROR_STATUS.items():
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _service(request: Request) -> BoardService:
    return request.app.state.service


def _dto(grid: Grid) -> BoardStateDto:
    return BoardStateDto(board=grid.to_rows())


@router.post('', status_code=status.HTTP_201_CREATED, response_model=BoardIdDto, responses=_ERROR_RESPONSES)
def upload_board(body: BoardStateDto, request: Request) -> BoardIdDto:
    """Upload a new board and return its id."""
    board_id = _service(request).upload(body.board)
    return BoardIdDto(id=board_id)


@router.get('/{board_id}', response_model=BoardStateDto, responses=_ERROR_RESPONSES)
def get_board(board_id: str, request: Request) -> BoardStateDto:
    """Current state of a board."""
    return _dto(_service(request).get(board_id))


@router.get('/{board_id}/next', response_model=BoardStateDto, responses=_ERROR_RESPONSES)
def get_next_state(board_id: str, request: Request) -> BoardStateDto:
    """Advance the board one generation."""
    return _dto(_service(request).next(board_id))


@router.get('/{board_id}/states', response_model=BoardStateDto, responses=_ERROR_RESPONSES)
def get_state_after_steps(board_id: str, request: Request,
                          steps: int = Query(..., description="Generations to advance")) -> BoardStateDto:
    """Advance the board by a number of generations."""
    return _dto(_service(request).after_steps(board_id, steps))


@router.get('/{board_id}/final', response_model=BoardStateDto, responses=_ERROR_RESPONSES)
def get_final_state(board_id: str, request: Request,
                    max_iterations: int = Query(..., alias='maxIterations',
                                                description="Upper bound on generations")) -> BoardStateDto:
    """Advance the board until a generation equals its predecessor."""
    return _dto(_service(request).final(board_id, max_iterations))


async def _lifeboard_error_handler(request: Request, exc: LifeboardError) -> JSONResponse:
    code = status_for(exc)
    level = logging.ERROR if code >= 500 else logging.WARNING
    logger.log(level, f"{request.method} {request.url.path} failed with {code}: {exc}")
    return JSONResponse(status_code=code, content={'detail': str(exc), 'error': type(exc).__name__})


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"{request.method} {request.url.path} failed unexpectedly")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={'detail': str(exc), 'error': type(exc).__name__})


def create_app(settings: Optional[Settings] = None, service: Optional[BoardService] = None) -> FastAPI:
    """Build the application.

    Args:
        settings: Runtime settings (read from environment if None)
        service: Pre-built service; when None one is created from settings
            on startup, loading any existing board snapshot

    Returns:
        Configured FastAPI application
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, 'service', None) is None:
            store = create_store(settings.store_path, autosave=settings.autosave)
            app.state.service = BoardService(store, min_rows=settings.min_rows, min_cols=settings.min_cols)
        logger.info(f"Serving {len(app.state.service.store)} boards")
        try:
            yield
        finally:
            app.state.service.store.persist()
            logger.info("Board store persisted on shutdown")

    app = FastAPI(title="Lifeboard", description="Conway's Game of Life boards over HTTP",
                  version='1.0.0', lifespan=lifespan)
    app.state.settings = settings
    app.state.service = service
    app.include_router(router)
    app.add_exception_handler(LifeboardError, _lifeboard_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
    return app
