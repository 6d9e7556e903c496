"""
Logging Configuration

Human-readable colored output while developing, one JSON object per line
in production. Request and discovery context (request_id, user_id, domain,
operation) passed through `extra=` is carried into the JSON output.
"""
import logging
import logging.handlers
import sys
import json
from pathlib import Path
from typing import Optional, Dict, Any
from datetime import datetime, timezone

from config.settings import settings

CONTEXT_FIELDS = ("request_id", "user_id", "domain", "operation")

# Libraries that log every request at INFO
NOISY_LOGGERS = (
    "aiohttp",
    "httpx",
    "httpcore",
    "hpack",
    "urllib3",
    "asyncio",
    "openai",
    "supabase",
    "postgrest",
    "uvicorn.access"
)


class JSONFormatter(logging.Formatter):
    """One JSON document per record"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        payload.update({
            name: getattr(record, name)
            for name in CONTEXT_FIELDS
            if getattr(record, name, None) is not None
        })

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info)
            }

        payload.update(getattr(record, "extra_fields", {}))

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredFormatter(logging.Formatter):
    """Level-colored console lines for local development"""

    LEVEL_COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;35m"
    }
    RESET = "\033[0m"

    def __init__(self):
        super().__init__("%(clock)s │ %(colored_level)s │ %(name)-32s │ %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        color = self.LEVEL_COLORS.get(record.levelno, "")
        record.colored_level = f"{color}{record.levelname:<8}{self.RESET}"
        record.clock = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        return super().format(record)


class LoggingConfig:
    """Configure the root logger once at startup"""

    PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def setup(
        cls,
        log_level: Optional[str] = None,
        log_file: Optional[Path] = None,
        enable_console: bool = True,
        enable_file: bool = False,
        enable_json: Optional[bool] = None
    ) -> None:
        """
        Install handlers on the root logger

        Args:
            log_level: Level name; DEBUG when settings.debug is on
            log_file: Rotating log file, defaults to logs/<env>.log
            enable_console: Log to stdout
            enable_file: Also log to a rotating file
            enable_json: JSON output; defaults to on in production
        """
        level_name = (log_level or ("DEBUG" if settings.debug else settings.log_level)).upper()
        level = getattr(logging, level_name, logging.INFO)
        use_json = settings.is_production() if enable_json is None else enable_json

        root = logging.getLogger()
        root.setLevel(level)
        root.handlers.clear()

        if enable_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(cls._formatter(use_json, console=True))
            root.addHandler(console)

        if enable_file:
            path = log_file or settings.log_dir / f"{settings.app_env}.log"
            path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                path,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
                encoding="utf-8"
            )
            file_handler.setFormatter(cls._formatter(use_json, console=False))
            root.addHandler(file_handler)

        quiet_level = max(level, logging.WARNING)
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(quiet_level)

        logging.getLogger(__name__).info(
            f"✅ Logging configured: level={level_name}, env={settings.app_env}, json={use_json}"
        )

    @classmethod
    def _formatter(cls, use_json: bool, console: bool) -> logging.Formatter:
        if use_json:
            return JSONFormatter()
        if console and settings.is_development():
            return ColoredFormatter()
        return logging.Formatter(cls.PLAIN_FORMAT)


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    **kwargs
) -> None:
    """Convenience wrapper around LoggingConfig.setup"""
    LoggingConfig.setup(
        log_level=log_level,
        log_file=Path(log_file) if log_file else None,
        **kwargs
    )


def log_error(logger: logging.Logger, error: Exception, context: Dict[str, Any]) -> None:
    """Log an exception with its type and request context attached"""
    logger.error(
        f"Error: {error}",
        exc_info=error,
        extra={"extra_fields": {
            "error_type": type(error).__name__,
            "context": context
        }}
    )
