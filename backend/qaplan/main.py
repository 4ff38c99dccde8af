"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from qaplan.config import get_settings
from qaplan.database import init_db
from qaplan.exceptions import NotFoundError, PlanValidationError
from qaplan.routers import allocations, people, risks, scenarios, work_items

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("QA resource planning API started (%s)", settings.app_env)
    yield


app = FastAPI(
    title="QA Resource Planning",
    description="QA staffing plan: people, pods, work items, allocations and risk",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(PlanValidationError)
async def validation_handler(request: Request, exc: PlanValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


app.include_router(people.router)
app.include_router(scenarios.router)
app.include_router(work_items.router)
app.include_router(allocations.router)
app.include_router(risks.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
