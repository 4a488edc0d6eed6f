import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Mount

from formulary.config import get_settings
from formulary.exceptions import FormNotFoundError
from formulary.logging_setup import configure_logging
from formulary.routers.forms import router as forms_router


# --- Localhost-only middleware ---

class LocalhostOnlyMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        client_host = request.client.host if request.client else None
        if client_host not in ("127.0.0.1", "::1", "localhost"):
            return JSONResponse(
                status_code=403,
                content={"error_code": "forbidden", "message": "Localhost access only"},
            )
        return await call_next(request)


# --- FastAPI app ---

api = FastAPI(title="Formulary", version="0.1.0")
api.include_router(forms_router)


# --- Exception handlers ---

@api.exception_handler(FormNotFoundError)
async def not_found_handler(request: Request, exc: FormNotFoundError):
    return JSONResponse(status_code=404, content={"error_code": "not_found", "message": str(exc)})


# --- Starlette root app ---

app = Starlette(
    middleware=[Middleware(LocalhostOnlyMiddleware)],
    routes=[Mount("/", app=api)],
)


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "formulary.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
