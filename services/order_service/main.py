from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from shared.config.database import create_tables
from shared.observability import setup_observability
from shared.security import limiter
from .errors import CheckoutError
from .models import Order, OrderLine  # noqa: F401 (registers models with SQLAlchemy Base)
from .router import router, public_router

order_app = FastAPI(title="Order Service", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(order_app, "order_service")

# --- SECURITY SETUP ---
order_app.state.limiter = limiter
order_app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

order_app.include_router(public_router)
order_app.include_router(router)


@order_app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@order_app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Malformed bodies are client errors like any other validation failure
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "invalid request body"},
    )


@order_app.on_event("startup")
async def startup_event():
    await create_tables()
