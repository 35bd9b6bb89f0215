from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from contextlib import asynccontextmanager
from user_api.core.config import settings
from user_api.core.database import engine, Base, check_database
from user_api.core.exceptions import (
    UserConflictError,
    UserIdMismatchError,
    UserNotFoundError,
    UserValidationError,
)
from user_api.core.logging import configure_logging
from user_api.services.user_validation import errors_by_field
from user_api.api.routes import users

VALIDATION_TITLE = "One or more validation errors occurred."

configure_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: create the users table (and its unique indexes) if it doesn't exist.
    Schema migrations are out of scope, so create_all is the only schema step.
    """
    Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="User API",
    description="CRUD service for user records",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware - allows browser clients to make requests to the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router, prefix=settings.API_PREFIX)


def validation_problem(errors: dict) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"title": VALIDATION_TITLE, "status": 400, "errors": errors},
    )


@app.exception_handler(UserValidationError)
async def user_validation_error_handler(request: Request, exc: UserValidationError):
    return validation_problem(errors_by_field(exc.errors))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Unparseable bodies and bad parameters answer 400 in the same shape as field errors"""
    errors: dict = {}
    for error in exc.errors():
        field = str(error["loc"][-1]) if error.get("loc") else "request"
        errors.setdefault(field, []).append(error["msg"])
    return validation_problem(errors)


@app.exception_handler(UserConflictError)
async def user_conflict_error_handler(request: Request, exc: UserConflictError):
    return PlainTextResponse(exc.message, status_code=status.HTTP_409_CONFLICT)


@app.exception_handler(UserNotFoundError)
async def user_not_found_error_handler(request: Request, exc: UserNotFoundError):
    return Response(status_code=status.HTTP_404_NOT_FOUND)


@app.exception_handler(UserIdMismatchError)
async def user_id_mismatch_error_handler(request: Request, exc: UserIdMismatchError):
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {"message": "User API", "version": "1.0.0"}


@app.get("/health")
def health():
    """Health check endpoint - reports whether the database answers"""
    if not check_database():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy"},
        )
    return {"status": "healthy"}
