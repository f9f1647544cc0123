# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.auth.routes import router as auth_router
from app.core.config import get_settings
from app.core.database import Base, SessionLocal, engine
from app.core.errors import AppError, app_error_handler
from app.core.logging import logger
from app.core.seed import seed_defaults
from app.event.routes import router as event_router
from app.ticket.routes import router as ticket_router
from app.voice.routes import router as voice_router

Base.metadata.create_all(bind=engine)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Seed reference data before serving requests.
    """
    with SessionLocal() as db:
        seed_defaults(db, demo_data=settings.SEED_DEMO_DATA)
    logger.info(f"{settings.APP_NAME} {settings.APP_VERSION} ready")
    yield


app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)

# Routers
app.include_router(auth_router)
app.include_router(ticket_router)
app.include_router(event_router)
app.include_router(voice_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
