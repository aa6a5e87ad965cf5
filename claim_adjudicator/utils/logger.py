"""
Logging
-------
Single `claim_adjudicator` logger shared by the engine, the services and the API.

- DEBUG mode: colored console lines
- otherwise: JSON on the console plus a rotating JSON log file
- CloudWatch: JSON events pushed to CLOUDWATCH_LOG_GROUP when AWS credentials are set

Adjudication context (policy id, provenance, disposition, trace id) is passed
through `extra=` and lands as top-level keys in every JSON record.
"""

import logging
import json
import sys
import os
from datetime import datetime, timezone
from functools import wraps
from logging.handlers import RotatingFileHandler
from typing import Any, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError, NoCredentialsError

from claim_adjudicator.config import config

CONTEXT_FIELDS = ("policy_id", "provenance", "disposition", "trace_id")
CLOUDWATCH_STREAM = "adjudication-api-stream"

logger = logging.getLogger("claim_adjudicator")


# =========================================================
# 🧩 Formatters
# =========================================================
class JSONFormatter(logging.Formatter):
    """One JSON object per record, with adjudication context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "policy_id": getattr(record, "policy_id", "unknown"),
        }
        for field in CONTEXT_FIELDS[1:]:
            value = getattr(record, field, None)
            if value is not None:
                entry[field] = getattr(value, "value", value)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Color-coded single lines for local development."""
    COLORS = {"DEBUG": "\033[36m", "INFO": "\033[32m", "WARNING": "\033[33m", "ERROR": "\033[31m", "END": "\033[0m"}

    def format(self, record):
        color = self.COLORS.get(record.levelname, "")
        return f"{color}{super().format(record)}{self.COLORS['END']}"


# =========================================================
# ☁️ CloudWatch Handler
# =========================================================
class CloudWatchHandler(logging.Handler):
    """Ships JSON-formatted records to a CloudWatch Logs stream."""

    def __init__(self, log_group: str, log_stream: str = CLOUDWATCH_STREAM, client=None, region: Optional[str] = None):
        super().__init__()
        self.log_group = log_group
        self.log_stream = log_stream
        self.setFormatter(JSONFormatter())
        self.client = client if client is not None else self._create_client(region or config.AWS_REGION)
        if self.client is not None:
            self._ensure_destination()

    @staticmethod
    def _create_client(region: str):
        try:
            return boto3.client("logs", region_name=region)
        except (BotoCoreError, NoCredentialsError) as e:
            logger.warning(f"CloudWatch client unavailable, shipping disabled: {e}")
            return None

    def _ensure_destination(self):
        """Create the group and stream; an existing one is fine, anything else disables shipping."""
        steps = (
            (self.client.create_log_group, {"logGroupName": self.log_group}),
            (self.client.create_log_stream, {"logGroupName": self.log_group, "logStreamName": self.log_stream}),
        )
        for create, kwargs in steps:
            try:
                create(**kwargs)
            except ClientError as e:
                if e.response.get("Error", {}).get("Code") != "ResourceAlreadyExistsException":
                    logger.error(f"CloudWatch setup failed for {self.log_group}/{self.log_stream}: {e}")
                    self.client = None
                    return
            except NoCredentialsError:
                logger.warning("AWS credentials not found, CloudWatch disabled")
                self.client = None
                return

    def emit(self, record: logging.LogRecord):
        if self.client is None:
            return
        try:
            self.client.put_log_events(
                logGroupName=self.log_group,
                logStreamName=self.log_stream,
                logEvents=[{"timestamp": int(record.created * 1000), "message": self.format(record)}],
            )
        except (ClientError, BotoCoreError):
            self.handleError(record)


# =========================================================
# 🧱 Handler Setup
# =========================================================
def _aws_credentials_present() -> bool:
    return bool(os.getenv("AWS_ACCESS_KEY_ID") and os.getenv("AWS_SECRET_ACCESS_KEY"))


def configure_logging(cfg=config) -> logging.Logger:
    """(Re)build the handlers of the shared logger from configuration."""
    logger.setLevel(getattr(logging, cfg.LOG_LEVEL.upper(), logging.INFO))
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(logging.DEBUG if cfg.DEBUG else logging.INFO)
    console.setFormatter(
        ColoredFormatter("%(asctime)s - %(levelname)s - %(message)s") if cfg.DEBUG else JSONFormatter()
    )
    logger.addHandler(console)

    if not cfg.DEBUG:
        file_handler = RotatingFileHandler(cfg.LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=5)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(JSONFormatter())
        logger.addHandler(file_handler)

    if cfg.CLOUDWATCH_LOG_GROUP and _aws_credentials_present():
        cw_handler = CloudWatchHandler(cfg.CLOUDWATCH_LOG_GROUP, region=cfg.AWS_REGION)
        cw_handler.setLevel(logging.INFO)
        logger.addHandler(cw_handler)

    return logger


configure_logging(config)


# =========================================================
# 🧩 Context-Aware Logging Decorator
# =========================================================
def _policy_id_of(args: tuple, kwargs: dict) -> Optional[Any]:
    if kwargs.get("policy_id") is not None:
        return kwargs["policy_id"]
    if not args:
        return None
    subject = args[0]
    if isinstance(subject, dict):
        return subject.get("policyId") or subject.get("policy_id")
    return getattr(subject, "policy_id", None) or getattr(subject, "policyId", None)


def log_with_context(level: str = "info"):
    """
    Log each call of the wrapped function with the policy id it was given.

        @log_with_context("debug")
        def adjudicate(request, ...): ...

    The id comes from a `policy_id` kwarg, or from the first argument: a raw
    request body (`policyId`) or a model (`policy_id`).
    """
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            policy_id = _policy_id_of(args, kwargs)
            log = getattr(logger, level, logger.info)
            log(f"Executing {func.__name__}", extra={"policy_id": policy_id if policy_id is not None else "unknown"})
            return func(*args, **kwargs)
        return wrapper
    return decorator
