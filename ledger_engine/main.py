"""
Ledger Engine FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ledger_engine.config import get_settings
from ledger_engine.errors import InvalidInput
from ledger_engine.logging_config import setup_logging
from ledger_engine.api.health import router as health_router
from ledger_engine.api.accounts import router as accounts_router

settings = get_settings()
setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Account balances with an atomic transaction log",
)


@app.exception_handler(RequestValidationError)
async def invalid_input_handler(request: Request, exc: RequestValidationError):
    """Undecodable or incomplete request bodies are a plain 400."""
    return JSONResponse(
        status_code=InvalidInput.status_code,
        content={"detail": InvalidInput.detail},
    )


# Register routers
app.include_router(health_router)
app.include_router(accounts_router)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
