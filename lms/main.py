import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from lms.api.routes import assignments, auth, courses, quizzes
from lms.core.config import get_settings
from lms.core.logging import configure_logging
from lms.db.base import Base
from lms.db.session import engine
from lms.domain.errors import ConcurrentModificationError, DomainError
from lms.services.errors import ApplicationError

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


class UTF8Middleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        response = await call_next(request)
        if response.headers.get("content-type", "").startswith("application/json"):
            response.headers["Content-Type"] = "application/json; charset=utf-8"
        return response


def create_app() -> FastAPI:
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title=settings.project_name)
    app.add_middleware(UTF8Middleware)

    @app.exception_handler(ApplicationError)
    async def application_error_handler(request: Request, exc: ApplicationError):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.exception_handler(ConcurrentModificationError)
    async def conflict_handler(request: Request, exc: ConcurrentModificationError):
        logger.warning(f"Conflict on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": exc.message})

    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": exc.message})

    app.include_router(auth.router, tags=["auth"])
    app.include_router(courses.router, tags=["courses"])
    app.include_router(quizzes.router, tags=["quizzes"])
    app.include_router(assignments.router, tags=["assignments"])
    return app


app = create_app()
