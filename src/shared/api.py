"""FastAPI exception handlers for the shared error taxonomy."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from shared.exceptions import (
    CapacityExceededError,
    InsufficientStockError,
    RpcTransportError,
    UnauthorizedInternalError,
)

# Stable codes let RPC clients map responses back to exception classes.
INSUFFICIENT_STOCK = "insufficient_stock"
CAPACITY_EXCEEDED = "capacity_exceeded"
UNAUTHORIZED_INTERNAL = "unauthorized_internal"
RPC_TRANSPORT = "rpc_transport"


async def _insufficient_stock(_request: Request, exc: InsufficientStockError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"code": INSUFFICIENT_STOCK, "error": exc.messages})


async def _capacity_exceeded(_request: Request, exc: CapacityExceededError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"code": CAPACITY_EXCEEDED, "error": exc.messages})


async def _unauthorized(_request: Request, exc: UnauthorizedInternalError) -> JSONResponse:
    return JSONResponse(status_code=401, content={"code": UNAUTHORIZED_INTERNAL, "detail": exc.message})


async def _rpc_transport(_request: Request, exc: RpcTransportError) -> JSONResponse:
    return JSONResponse(status_code=502, content={"code": RPC_TRANSPORT, "detail": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's handlers plus the ones for our own exceptions.

    Starlette resolves handlers along the exception's MRO, so the 409
    handlers win over Protean's generic ValidationError handler.
    """
    register_exception_handlers(app)
    app.add_exception_handler(InsufficientStockError, _insufficient_stock)
    app.add_exception_handler(CapacityExceededError, _capacity_exceeded)
    app.add_exception_handler(UnauthorizedInternalError, _unauthorized)
    app.add_exception_handler(RpcTransportError, _rpc_transport)
