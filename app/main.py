# app/main.py
import logging
import secrets

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .routes import auth, store_overwrites, store_times
from .storage import StorageError

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

# Default docs routes are replaced by the basic-auth protected ones below
app = FastAPI(title="Store Hours API", docs_url=None, redoc_url=None, openapi_url=None)

app.include_router(store_times.router)
app.include_router(store_overwrites.router)
app.include_router(auth.router)


# --- Error responses: every error body is {"message": ...} ---

def format_validation_errors(errors) -> str:
    parts = []
    for error in errors:
        # Drop the "body"/"path" prefix FastAPI puts in front of field names
        location = ".".join(str(p) for p in error.get("loc", ())[1:])
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": format_validation_errors(exc.errors())},
    )

@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    # Not recovered from: the data file has to be fixed or re-seeded by an operator
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Storage unavailable"},
    )


# --- Documentation behind basic auth ---

docs_security = HTTPBasic()

def verify_docs_credentials(credentials: HTTPBasicCredentials = Depends(docs_security)) -> str:
    correct_username = secrets.compare_digest(
        credentials.username.encode("utf8"),
        settings.docs_username.encode("utf8")
    )
    correct_password = secrets.compare_digest(
        credentials.password.encode("utf8"),
        settings.docs_password.encode("utf8")
    )
    if not (correct_username and correct_password):
        logger.warning(f"Rejected documentation access for user '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid documentation credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username

@app.get("/openapi.json", include_in_schema=False)
async def openapi_document(_: str = Depends(verify_docs_credentials)):
    if app.openapi_schema is None:
        app.openapi_schema = get_openapi(
            title=app.title,
            version=app.version,
            description="Weekly store times and date-specific overwrites",
            routes=app.routes,
            servers=[{"url": settings.docs_host}],
        )
    return app.openapi_schema

@app.get("/docs", include_in_schema=False)
async def swagger_ui(_: str = Depends(verify_docs_credentials)):
    return get_swagger_ui_html(openapi_url="/openapi.json", title=f"{app.title} - Docs")


# --- Index ---

@app.get("/", include_in_schema=False)
async def index():
    return {
        '[GET] /store-times': 'Get all store times',
        '[GET] /store-times/:id': 'Get a store time by id',
        '[GET] /store-times/day/:day_of_week': 'Get store times for a day of the week (0-6)',
        '[POST] /store-times': 'Create a new store time',
        '[PUT] /store-times/:id': 'Update a store time by id',
        '[DELETE] /store-times/:id': 'Delete a store time by id',
        '[GET] /store-overwrites': 'Get all store overwrites',
        '[GET] /store-overwrites/:id': 'Get a store overwrite by id',
        '[GET] /store-overwrites/date/:month/:day': 'Get store overwrites for a date',
        '[POST] /store-overwrites': 'Create a new store overwrite',
        '[PUT] /store-overwrites/:id': 'Update a store overwrite by id',
        '[DELETE] /store-overwrites/:id': 'Delete a store overwrite by id',
        '[POST] /auth': 'Exchange email and password for a JWT',
        '[GET] /auth/verify': 'Verify a bearer token',
    }


if __name__ == "__main__":
    logger.info(f"Starting server on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)
