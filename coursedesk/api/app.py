from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError
from .error import ClientError, ServerError
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error on {request.url.path}: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error on {request.url.path}: {exc.base_error.code} - {exc.base_error.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.body())


async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    error_dict = {"code": "VALIDATION_ERROR", "message": "; ".join(messages) or "Invalid request"}
    logger.warning(f"Validation error on {request.url.path}: {error_dict['message']}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": error_dict})


async def handle_integrity_error(request: Request, exc: IntegrityError):
    error_dict = {"code": "DUPLICATE_KEY", "message": "A record with these values already exists"}
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": error_dict})


def create_app(ApplicationConfig, lifespan=None) -> FastAPI:
    app = FastAPI(title="CourseDesk API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from coursedesk.api.routes import auth, billing, courses, health_check, instructors, user

    prefix = ApplicationConfig.API_PREFIX or ""

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, prefix=prefix, tags=["Authentication"])
    app.include_router(user.router, prefix=prefix, tags=["User"])
    app.include_router(instructors.router, prefix=prefix, tags=["Instructors"])
    app.include_router(courses.router, prefix=prefix, tags=["Courses"])
    app.include_router(billing.router, prefix=prefix, tags=["Billing"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(IntegrityError, handle_integrity_error)

    return app
