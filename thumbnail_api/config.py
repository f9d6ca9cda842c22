import os

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "")
if not DATABASE_URL:
    raise ValueError("DATABASE_URL env variable is not set")

SESSION_SECRET = os.getenv("SESSION_SECRET", "change-me")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", 60 * 60 * 24 * 7))
HTTPS_ONLY_COOKIES = os.getenv("ENVIRONMENT", "development") == "production"

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if origin.strip()
]

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY", "")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-3-pro-image-preview")

# Cloudinary picks up CLOUDINARY_URL from the environment on its own
IMAGES_DIR = os.getenv("IMAGES_DIR", os.path.join(os.getcwd(), "images"))

# Report a miss on DELETE as 404 instead of the lenient success message
STRICT_DELETE = _as_bool(os.getenv("STRICT_DELETE", "false"))

TRACING_ENABLED = _as_bool(os.getenv("TRACING_ENABLED", "false"))
OTEL_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "thumbnail-api")
OTEL_EXPORTER_OTLP_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
