import structlog
import logging


def setup_logging(level: str = "INFO", json_logs: bool = True):
    """Setup structured logging configuration"""
    log_level = getattr(logging, str(level).upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        logger_factory=structlog.PrintLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        cache_logger_on_first_use=True,
    )


def emit_test_log(message: str, level: str = "INFO", **kwargs):
    """Emit a test log message"""
    logger = structlog.get_logger()
    log_method = getattr(logger, level.lower(), logger.info)
    log_method(message, **kwargs)
