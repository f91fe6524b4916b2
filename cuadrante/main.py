import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from cuadrante.core.config import settings
from cuadrante.core.database import create_tables
from cuadrante.core.exceptions import InvalidLocation, NotFound, PersistenceError, ValidationError
from cuadrante.core.logging import setup_logging
from cuadrante.api.v1.employees import router as employees_router
from cuadrante.api.v1.extras import router as extras_router
from cuadrante.api.v1.roster import router as roster_router
from cuadrante.api.v1.vacations import router as vacations_router
from cuadrante.api.v1.documents import router as documents_router
from cuadrante.api.v1.payroll import router as payroll_router
from cuadrante.api.v1.locations import router as locations_router

setup_logging()
logger = logging.getLogger(__name__)

Path(settings.MEDIA_DIR).mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # SQL backend: create tables on start (SQLite / local setups)
    if settings.STORE_BACKEND == "sql":
        await create_tables()
    else:
        Path(settings.DATA_DIR).mkdir(parents=True, exist_ok=True)
    logger.info("Cuadrante API started (%s store, locations: %s)",
                settings.STORE_BACKEND, ", ".join(settings.locations))
    yield


app = FastAPI(
    title="Cuadrante API",
    description=f"Personal, cuadrantes y vacaciones – {settings.BUSINESS_NAME}",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Domain errors → HTTP ──────────────────────────────────────────────────────

@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": "No encontrado", "table": exc.table})


@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Error al guardar los datos, inténtalo de nuevo"})


@app.exception_handler(InvalidLocation)
async def invalid_location_handler(request: Request, exc: InvalidLocation):
    return JSONResponse(
        status_code=422,
        content={"detail": f"Local desconocido: {exc.location}", "locations": settings.locations},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=422, content={"detail": str(exc)})


API_PREFIX = "/api/v1"

app.include_router(locations_router, prefix=API_PREFIX)
app.include_router(employees_router, prefix=API_PREFIX)
app.include_router(extras_router, prefix=API_PREFIX)
app.include_router(vacations_router, prefix=API_PREFIX)
app.include_router(documents_router, prefix=API_PREFIX)
app.include_router(roster_router, prefix=API_PREFIX)
app.include_router(payroll_router, prefix=API_PREFIX)

app.mount(settings.MEDIA_URL, StaticFiles(directory=settings.MEDIA_DIR), name="media")


@app.get("/health")
async def health_check():
    return {"status": "ok", "service": "Cuadrante API", "version": "1.0.0"}
