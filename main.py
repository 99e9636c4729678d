from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from contextlib import asynccontextmanager
from os import environ

from limiter import limiter
from exceptions import DevDropError, failure
from endpoints.endpoints_notes import router_notes
from endpoints.endpoints_files import router_files
from endpoints.endpoints_cloudinary import router_cloudinary
from endpoints.endpoints_realtime import router_realtime
from database import db


# lifespan (before yield - on start, after yield - on exit)
@asynccontextmanager
async def lifespan(
    app: FastAPI,
):
    await db.create_all_tables()
    yield


app = FastAPI(
    title="DevDrop",
    description="Share code snippets and files in real time",
    summary="Collaborative code editor",
    lifespan=lifespan,
    version="1.0",
)

app.state.limiter = limiter

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=environ.get("CORS_ORIGINS", "http://localhost:3000").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(DevDropError)
def devdrop_error_handler(request: Request, exc: DevDropError):
    return failure(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    return failure(message, 422)


app.include_router(router_realtime)
app.include_router(router_notes)
app.include_router(router_files)
app.include_router(router_cloudinary)
