import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from config.settings import settings
from routes.admin_routes import router as admin_router
from routes.auth_routes import router as auth_router
from routes.student_routes import router as student_router
from services.auth_service import get_token_codec
from services.errors import DrillTrackerError
from services.user_store import get_user_store

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


# -----------------------------
# STARTUP
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Build the codec now so a blank SECRET_KEY stops the server immediately
    get_token_codec()
    try:
        get_user_store().ensure_indexes()
    except PyMongoError:
        logger.exception("Index creation failed. Check MONGODB_URI and DB_NAME.")
    yield


# -----------------------------
app = FastAPI(
    title="Drill Tracker Backend",
    description="API for school drill completion tracking and preparedness scores",
    version="1.0.0",
    lifespan=lifespan,
)

# --- REGISTER ROUTERS ---
app.include_router(auth_router)
app.include_router(student_router)
app.include_router(admin_router)

# --- CORS MIDDLEWARE ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# -----------------------------
# ERROR HANDLERS
@app.exception_handler(DrillTrackerError)
async def handle_domain_error(request: Request, exc: DrillTrackerError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError):
    logger.info("Rejected request body on %s: %s", request.url.path, exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})

@app.exception_handler(PyMongoError)
async def handle_store_error(request: Request, exc: PyMongoError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})

@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Server error"})


# -----------------------------
# ROOT ENDPOINTS
@app.get("/")
def read_root():
    return {"message": "Welcome to the Drill Tracker backend!", "docs": "/docs"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
