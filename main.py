from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from apis import boards, tasks
from helpers.errors import InvalidFieldError, LifecycleError
from init_db import init_database
from settings import ENVIRONMENT, CORS_ORIGINS, logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_database()
    yield


app = FastAPI(
    title="Kanban Board API",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    lifespan=lifespan
)

# CORS middleware for development
if ENVIRONMENT == "development":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )


@app.exception_handler(LifecycleError)
async def lifecycle_error_handler(request: Request, exc: LifecycleError) -> JSONResponse:
    """Translate lifecycle errors into a tagged JSON error body."""
    if exc.status_code >= 500:
        logger.error("Request failed", extra={"path": request.url.path, "kind": exc.kind, "error": exc.message})
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Bodies that are not a JSON object of fields get the same tagged error shape."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body") or "body"
    error = InvalidFieldError(field, f"{field}: {first.get('msg', 'invalid request')}")
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


app.include_router(boards.router, prefix="/api")
app.include_router(tasks.router, prefix="/api")


@app.get("/api/health")
async def root():
    """API health check."""
    return {"message": "Kanban Board API is running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
