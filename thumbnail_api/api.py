from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.sessions import SessionMiddleware
from sqlalchemy.orm import Session
from functools import lru_cache
from contextlib import asynccontextmanager
import logging

from thumbnail_api import config
from thumbnail_api.database import Base, SessionLocal, engine
from thumbnail_api.errors import NotAuthenticated, NotFound, ThumbnailError
from thumbnail_api.generation import GeminiImageGenerator
from thumbnail_api.logging_config import configure_logging
from thumbnail_api.media import CloudinaryPublisher
from thumbnail_api.pricing import PRICING_PLANS
from thumbnail_api.schemas import GenerateRequest, ThumbnailOut
from thumbnail_api.service import create_thumbnail, delete_thumbnail, get_thumbnail, list_thumbnails
from thumbnail_api.tracing import setup_tracing

from prometheus_fastapi_instrumentator import Instrumentator


configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables are ready")
    yield
    engine.dispose()


app = FastAPI(
    title="Thumbnail Generation API",
    description="Generates AI thumbnails and tracks their generation status",
    version="1.0.0",
    lifespan = lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(
    SessionMiddleware,
    secret_key=config.SESSION_SECRET,
    max_age=config.SESSION_MAX_AGE,
    same_site="none" if config.HTTPS_ONLY_COOKIES else "lax",
    https_only=config.HTTPS_ONLY_COOKIES,
)

Instrumentator().instrument(app).expose(app)
if config.TRACING_ENABLED:
    setup_tracing(app, engine)


@app.exception_handler(ThumbnailError)
async def thumbnail_error_handler(request: Request, exc: ThumbnailError):
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc)})


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_owner_id(request: Request) -> str:
    user_id = request.session.get("user_id")
    if not request.session.get("is_logged_in") or not user_id:
        raise NotAuthenticated()
    return str(user_id)


@lru_cache(maxsize=1)
def get_generator():
    return GeminiImageGenerator.from_api_key(config.GEMINI_API_KEY, config.GEMINI_MODEL)


def get_publisher():
    return CloudinaryPublisher(config.IMAGES_DIR)


def get_strict_delete() -> bool:
    return config.STRICT_DELETE


@app.get("/", response_class=PlainTextResponse)
def health():
    return "Server is Live!"


@app.get("/api/pricing")
def pricing():
    return {"plans": [plan.model_dump() for plan in PRICING_PLANS]}


# create a pending record, generate and upload the image, return the reconciled record
@app.post("/api/thumbnail/generate")
def generate_thumbnail(
    request: GenerateRequest,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    generator: GeminiImageGenerator = Depends(get_generator),
    publisher: CloudinaryPublisher = Depends(get_publisher),
):
    try:
        thumbnail = create_thumbnail(db, owner_id, request, generator, publisher)
    except ThumbnailError:
        raise
    except Exception:
        logger.error("Unexpected error while generating thumbnail", extra={"user_id": owner_id}, exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Thumbnail generation failed"})

    return {
        "message": "Thumbnail generated successfully",
        "thumbnail": ThumbnailOut.model_validate(thumbnail).model_dump(mode="json"),
    }


# clients poll this until image_url is set or is_generating turns false
@app.get("/api/thumbnail/{thumbnail_id}")
def read_thumbnail(thumbnail_id: str, db: Session = Depends(get_db), owner_id: str = Depends(get_owner_id)):
    thumbnail = get_thumbnail(db, owner_id, thumbnail_id)
    return {"thumbnail": ThumbnailOut.model_validate(thumbnail).model_dump(mode="json")}


@app.delete("/api/thumbnail/{thumbnail_id}")
def remove_thumbnail(
    thumbnail_id: str,
    db: Session = Depends(get_db),
    owner_id: str = Depends(get_owner_id),
    strict: bool = Depends(get_strict_delete),
):
    deleted = delete_thumbnail(db, owner_id, thumbnail_id)
    if strict and not deleted:
        raise NotFound()
    return {"message": "Thumbnail deleted successfully"}


@app.get("/api/user/thumbnails")
def read_user_thumbnails(db: Session = Depends(get_db), owner_id: str = Depends(get_owner_id)):
    thumbnails = list_thumbnails(db, owner_id)
    return {"thumbnails": [ThumbnailOut.model_validate(t).model_dump(mode="json") for t in thumbnails]}
