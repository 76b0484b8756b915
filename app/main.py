import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.infrastructure.logging import bind_request_context, clear_request_context, configure_logging, get_logger
from app.interfaces.api.v1.error_handlers import register_error_handlers
from app.interfaces.api.v1.router import api_router

logger = get_logger(__name__)

OPENAPI_DESCRIPTION = """
School registry API: user signup/login and school registration CRUD.

How to call this API:
- Register at `POST /signup`, then log in at `POST /auth` with email and password.
- Use `Authorization: Bearer <access_token>` on protected endpoints
  (`GET /schools/{id}`, `PUT /schools/{id}`, `GET /schools`).
- `POST /schools/registration` is rate limited per client.
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Service health and connectivity checks."},
    {"name": "auth", "description": "User signup, login and token issuance."},
    {"name": "schools", "description": "School registration, listing, retrieval, update and deletion."},
]


@asynccontextmanager
async def lifespan(_: FastAPI):
    configure_logging()
    logger.info("app_startup", app_name=settings.app_name, version=settings.app_version)
    yield
    logger.info("app_shutdown", app_name=settings.app_name)


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=OPENAPI_DESCRIPTION,
    openapi_tags=OPENAPI_TAGS,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url, "http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
    bind_request_context(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client=request.client.host if request.client else None,
    )
    try:
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        logger.info("request_completed", status_code=response.status_code)
        return response
    finally:
        clear_request_context()


@app.get("/")
def root():
    return {"message": f"{settings.app_name} is running"}


register_error_handlers(app)
app.include_router(api_router)
