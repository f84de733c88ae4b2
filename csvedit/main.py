# csvedit/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from csvedit.config import get_settings, setup_logging
from csvedit.errors import CsvEditError, IOFailure
from csvedit.routes import router as api_router

logger = logging.getLogger(__name__)

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(title="CSV Editor")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.exception_handler(CsvEditError)
async def csv_edit_error_handler(request: Request, exc: CsvEditError):
    if isinstance(exc, IOFailure):
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.details, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    return JSONResponse(status_code=400, content={"error": "Invalid request", "details": details})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error", "details": str(exc)})


@app.get("/")
def root():
    return {"message": "CSV Editor API. Files live under /api/files"}


def run():
    import uvicorn

    uvicorn.run("csvedit.main:app", host=settings.host, port=settings.port)
