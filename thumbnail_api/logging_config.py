import logging.config

from thumbnail_api.config import LOG_LEVEL, OTEL_SERVICE_NAME

# otel* fields are filled by the logging instrumentation when tracing is on
JSON_FIELDS = (
    "%(asctime)s %(levelname)s %(name)s %(message)s "
    "%(otelTraceID)s %(otelSpanID)s"
)


def build_logging_config(level=LOG_LEVEL, service_name=OTEL_SERVICE_NAME):
    handler = {"handlers": ["stdout_json"], "level": level}
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "fmt": JSON_FIELDS,
                "rename_fields": {"levelname": "level", "asctime": "timestamp"},
                "static_fields": {"service": service_name},
            },
        },
        "handlers": {
            "stdout_json": {
                "formatter": "json",
                "class": "logging.StreamHandler",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {**handler, "propagate": True},
            "uvicorn.error": {**handler, "propagate": False},
            "uvicorn.access": {**handler, "propagate": False},
        },
    }


def configure_logging(level=LOG_LEVEL):
    logging.config.dictConfig(build_logging_config(level))
