import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# routers
from app.backend.api.routers.foods import router as foods_router  # type: ignore[import]
from app.backend.api.routers.users import router as users_router  # type: ignore[import]
from app.backend.database import Base, engine

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Food Expiry Tracker API v1")

# CORS (development defaults) - restrict with ALLOWED_ORIGINS
_default_allowed_origins = [
    "http://localhost",
    "http://127.0.0.1",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:8000",
    "http://127.0.0.1:8000",
]

_env_origins = os.getenv("ALLOWED_ORIGINS")
if _env_origins:
    allowed_origins = [
        origin.strip() for origin in _env_origins.split(",") if origin.strip()
    ]
else:
    allowed_origins = _default_allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/api/v1/health")
def health():
    return {"status": "ok"}


app.include_router(users_router, prefix="/api/v1/users", tags=["users"])
app.include_router(foods_router, prefix="/api/v1/foods", tags=["foods"])


@app.on_event("startup")
def on_startup() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info(f"Schema ensured on {engine.url.render_as_string(hide_password=True)}")
