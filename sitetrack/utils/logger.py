"""
Centralized logging configuration for the SiteTrack workflow engine.
Provides structured logging with correlation IDs and CloudWatch integration.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional
import uuid

import boto3
from botocore.exceptions import ClientError

from ..core.config import config

_RESERVED_ATTRS = frozenset([
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname',
    'filename', 'module', 'lineno', 'funcName', 'created',
    'msecs', 'relativeCreated', 'thread', 'threadName', 'taskName',
    'processName', 'process', 'getMessage', 'correlation_id',
    'exc_info', 'exc_text', 'stack_info',
])


class CorrelationFilter(logging.Filter):
    """Filter to add correlation ID to log records"""

    def __init__(self, correlation_id: Optional[str] = None):
        super().__init__()
        self._correlation_id = correlation_id or 'none'

    def filter(self, record):
        if not hasattr(record, 'correlation_id'):
            record.correlation_id = self._correlation_id
        return True


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging"""

    def format(self, record):
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'correlation_id': getattr(record, 'correlation_id', 'none'),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        # Extra fields passed through `extra=`
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class CloudWatchHandler(logging.Handler):
    """Custom handler to send logs to CloudWatch"""

    def __init__(self, log_group: str, log_stream: str, logs_client=None):
        super().__init__()
        self.log_group = log_group
        self.log_stream = log_stream
        self.logs_client = logs_client or boto3.client('logs', region_name=config.aws.region)

        self._ensure_log_group_exists()
        self._ensure_log_stream_exists()

    def _ensure_log_group_exists(self):
        try:
            self.logs_client.create_log_group(logGroupName=self.log_group)
        except ClientError as e:
            if e.response['Error']['Code'] != 'ResourceAlreadyExistsException':
                raise

    def _ensure_log_stream_exists(self):
        try:
            self.logs_client.create_log_stream(
                logGroupName=self.log_group,
                logStreamName=self.log_stream
            )
        except ClientError as e:
            if e.response['Error']['Code'] != 'ResourceAlreadyExistsException':
                raise

    def emit(self, record):
        """Send log record to CloudWatch"""
        try:
            self.logs_client.put_log_events(
                logGroupName=self.log_group,
                logStreamName=self.log_stream,
                logEvents=[{
                    'timestamp': int(record.created * 1000),
                    'message': self.format(record)
                }]
            )
        except Exception:
            # Don't let logging errors break the application
            self.handleError(record)


def get_logger(name: str, correlation_id: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance with proper configuration.

    Args:
        name: Logger name (typically module name)
        correlation_id: Optional correlation ID for request tracing

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure the logger once
    if logger.handlers:
        return logger

    logger.setLevel(getattr(logging, config.monitoring.log_level.upper(), logging.INFO))

    correlation_filter = CorrelationFilter(correlation_id)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.DEBUG)

    if config.monitoring.enable_cloudwatch:
        json_formatter = JSONFormatter()
        console_handler.setFormatter(json_formatter)

        try:
            log_stream = f"{datetime.now(timezone.utc).strftime('%Y/%m/%d')}/{uuid.uuid4()}"
            cloudwatch_handler = CloudWatchHandler(config.get_log_group_name(name), log_stream)
            cloudwatch_handler.setFormatter(json_formatter)
            cloudwatch_handler.addFilter(correlation_filter)
            logger.addHandler(cloudwatch_handler)
        except Exception as e:
            # If CloudWatch setup fails, continue with console logging
            sys.stderr.write(f"CloudWatch logging disabled for {name}: {e}\n")
    else:
        simple_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s'
        )
        console_handler.setFormatter(simple_formatter)

    console_handler.addFilter(correlation_filter)
    logger.addHandler(console_handler)

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def _correlation_filters(logger: logging.Logger):
    for handler in logger.handlers:
        for filter_obj in handler.filters:
            if isinstance(filter_obj, CorrelationFilter):
                yield filter_obj


def set_correlation_id(logger: logging.Logger, correlation_id: str) -> None:
    """Set correlation ID for all handlers on a logger"""
    for filter_obj in _correlation_filters(logger):
        filter_obj._correlation_id = correlation_id


class LoggerContext:
    """Context manager for temporarily setting correlation ID"""

    def __init__(self, logger: logging.Logger, correlation_id: str):
        self.logger = logger
        self.correlation_id = correlation_id
        self.previous_correlation_ids = []

    def __enter__(self):
        for filter_obj in _correlation_filters(self.logger):
            self.previous_correlation_ids.append(filter_obj._correlation_id)
            filter_obj._correlation_id = self.correlation_id
        return self.logger

    def __exit__(self, exc_type, exc_val, exc_tb):
        for filter_obj, previous in zip(_correlation_filters(self.logger), self.previous_correlation_ids):
            filter_obj._correlation_id = previous


def with_correlation_id(logger: logging.Logger, correlation_id: str) -> LoggerContext:
    """Create a context manager for temporary correlation ID setting"""
    return LoggerContext(logger, correlation_id)
