from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from coffeechat.core.config import settings
from coffeechat.core.errors import AppError, Internal
from coffeechat.core.logging import configure_logging, get_logger
from coffeechat.db.base import Base, engine
from coffeechat.api.routes import health as health_router
from coffeechat.api.routes import messages as messages_router
from coffeechat.api.routes import review as review_router

configure_logging()
log = get_logger("coffeechat")

app = FastAPI(title=settings.APP_NAME, debug=settings.APP_ENV == "development")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CLIENT_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    log.info("startup", app=settings.APP_NAME, app_env=settings.APP_ENV.value)


@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        log.error("request_failed", path=request.url.path, detail=exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"detail": "Validation error", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
def store_error_handler(request: Request, exc: SQLAlchemyError):
    log.error("store_error", path=request.url.path, exc_info=exc)
    return app_error_handler(request, Internal())


@app.get("/")
def root():
    return {"message": "CoffeeChat API running"}


app.include_router(health_router.router)
app.include_router(messages_router.router)
app.include_router(review_router.router)
