"""
FastAPI Main Application
Backend API cho nền tảng học lập trình: khóa học, quiz, badge, portfolio
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from academy.config import get_settings
from academy.controllers import (
    auth_router,
    badges_router,
    chapter_elements_router,
    chapters_router,
    courses_router,
    external_badges_router,
    lessons_router,
    portfolio_router,
    progress_router,
    quiz_forms_router,
    quiz_questions_router,
    quiz_submissions_router,
    tags_router,
)
from academy.database import Base, engine
from academy.exceptions import AppError, AuthError, PersistenceError
import academy.models  # noqa: F401  (đăng ký tất cả bảng với Base.metadata)
import logging
from contextlib import asynccontextmanager

settings = get_settings()

# Configure logging
logging.basicConfig(level=logging.DEBUG if settings.DEBUG else logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting up...")
    Base.metadata.create_all(bind=engine)
    yield
    # Shutdown
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Exception Handlers
@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    message = exc.message
    if isinstance(exc, PersistenceError):
        logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc.__cause__)
        if not settings.DEBUG:
            message = "Internal server error"
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": message}, headers=headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    return JSONResponse(
        status_code=422,
        content=jsonable_encoder({"detail": exc.errors(), "body": exc.body}),
    )


app.include_router(auth_router)
app.include_router(courses_router)
app.include_router(lessons_router)
app.include_router(chapters_router)
app.include_router(chapter_elements_router)
app.include_router(quiz_forms_router)
app.include_router(quiz_submissions_router)
app.include_router(quiz_questions_router)
app.include_router(badges_router)
app.include_router(external_badges_router)
app.include_router(portfolio_router)
app.include_router(progress_router)
app.include_router(tags_router)


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
