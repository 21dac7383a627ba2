import logging
import sys
import os
from types import FrameType
from loguru import logger
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry._logs import set_logger_provider

# Loggers whose own handlers are replaced so every line goes through loguru once
HIJACKED_LOGGERS = (
    "uvicorn",
    "uvicorn.error",
    "uvicorn.access",
    "gunicorn.error",
    "gunicorn.access",
    "fastapi",
    "httpx",
    "httpcore",
)

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> <level>{level}</level>: "
    "<cyan>[{name}:{line}]</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """
    Redirects standard logging to Loguru.
    Drops OpenTelemetry's own records so the OTel sink cannot feed itself.
    """

    def emit(self, record: logging.LogRecord) -> None:
        if record.name.startswith("opentelemetry"):
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the logging call
        frame: FrameType | None = logging.currentframe()
        depth = 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _add_otel_sink(endpoint: str) -> None:
    """
    Attach an OTLP log exporter to loguru.

    Failures are reported on stderr and never raised; the console keeps running with console logging only.
    """
    try:
        resource = Resource.create(
            {
                "service.name": os.getenv("OTEL_SERVICE_NAME", "propconnect-admin"),
                "deployment.environment": os.getenv("DEPLOYMENT_ENV", "production"),
            }
        )

        logger_provider = LoggerProvider(resource=resource)
        set_logger_provider(logger_provider)

        insecure = os.getenv("OTEL_EXPORTER_OTLP_INSECURE", "false").lower() == "true"
        exporter = OTLPLogExporter(endpoint=endpoint, insecure=insecure)
        logger_provider.add_log_record_processor(BatchLogRecordProcessor(exporter))

        otel_handler = LoggingHandler(level=logging.INFO, logger_provider=logger_provider)
        logger.add(otel_handler, level="INFO", serialize=True)

        logger.info("Logging (Loguru Sink) Active.")
    except Exception as e:
        print(f"Log Setup Failed: {e}", file=sys.stderr)


def setup_logging(level: str | None = None):
    """
    Route all logging of the console through loguru.

    Replaces the root handlers and the handlers of the server and HTTP client loggers with an
    InterceptHandler, installs a colourised stderr sink, and adds an OpenTelemetry sink when
    `OTEL_EXPORTER_OTLP_ENDPOINT` is set.

    Parameters:
        level (str | None): Minimum level for the console sink; defaults to the `LOG_LEVEL` env var or "INFO".

    Returns:
        The configured loguru logger.
    """
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(logging.DEBUG if level == "DEBUG" else logging.INFO)

    for name in HIJACKED_LOGGERS:
        log = logging.getLogger(name)
        log.handlers = []
        log.propagate = False
        log.addHandler(InterceptHandler())

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=CONSOLE_FORMAT,
        colorize=True,
        enqueue=True,
    )

    endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if endpoint:
        _add_otel_sink(endpoint)

    return logger
