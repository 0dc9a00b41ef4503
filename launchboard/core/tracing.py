# launchboard/core/tracing.py - Structured logging with per-request trace IDs

import os
import socket
import traceback
import sys
import json
import random
from datetime import datetime, timezone
from typing import Optional, Dict
from loguru import logger
from contextvars import ContextVar

from launchboard.core.config import settings

SERVICE_NAME = "launchboard-api"
SERVICE_VERSION = "1.0.0"

# Context variables for trace propagation across awaits
_trace_id_context: ContextVar[str] = ContextVar('trace_id', default='no-trace')
_span_id_context: ContextVar[str] = ContextVar('span_id', default='no-span')


def generate_trace_id() -> str:
    """Generate a 128-bit trace ID as 32-character hex string"""
    return f"{random.getrandbits(128):032x}"


def generate_span_id() -> str:
    """Generate a 64-bit span ID as 16-character hex string"""
    return f"{random.getrandbits(64):016x}"


def start_trace(trace_id: Optional[str] = None) -> str:
    """Begin a new trace for the current context and return its ID"""
    trace_id = trace_id or generate_trace_id()
    _trace_id_context.set(trace_id)
    _span_id_context.set(generate_span_id())
    return trace_id


def bind_trace_context(record) -> None:
    """Loguru patcher: stamp the caller's trace and span ids onto every record"""
    record["extra"].setdefault("trace_id", _trace_id_context.get())
    record["extra"].setdefault("span_id", _span_id_context.get())


def format_stack_trace(exception_info) -> Optional[str]:
    """Format exception stack trace for logging"""
    if not exception_info:
        return None

    try:
        if hasattr(exception_info, 'type') and hasattr(exception_info, 'traceback'):
            if exception_info.traceback:
                return ''.join(traceback.format_exception(
                    exception_info.type,
                    exception_info.value,
                    exception_info.traceback
                ))
        return str(exception_info)
    except Exception:
        return "Error formatting stack trace"


def setup_structured_logging(enable_json: bool = None):
    """Replace loguru's default sink with a JSON or human-readable one"""
    if enable_json is None:
        enable_json = settings.should_use_json_logging

    logger.remove()
    logger.configure(patcher=bind_trace_context)

    hostname = socket.gethostname()
    pid = os.getpid()
    environment = settings.ENVIRONMENT

    if enable_json:
        def json_sink(message):
            record = message.record

            # Filled in by bind_trace_context on the calling thread
            trace_id = record["extra"].get("trace_id", "no-trace")
            span_id = record["extra"].get("span_id", "no-span")

            log_entry = {
                "@timestamp": datetime.now(timezone.utc).isoformat(),
                "level": record["level"].name,
                "message": record["message"],
                "service": {
                    "name": SERVICE_NAME,
                    "version": SERVICE_VERSION,
                    "environment": environment,
                },
                "host": {"hostname": hostname},
                "process": {"pid": pid},
                "log": {
                    "origin": {
                        "file": {
                            "name": record["file"].name,
                            "line": record["line"],
                        },
                        "function": record["function"]
                    },
                    "logger": record["name"]
                },
                "trace": {
                    "id": trace_id,
                    "span_id": span_id
                },
            }

            extra_filtered = {k: v for k, v in record["extra"].items()
                              if k not in ("trace_id", "span_id") and not k.startswith("_")}
            if extra_filtered:
                log_entry["custom"] = extra_filtered

            if record["exception"]:
                log_entry["error"] = {
                    "type": record["exception"].type.__name__ if record["exception"].type else "UnknownError",
                    "message": str(record["exception"].value) if record["exception"].value else "Unknown error",
                    "stack_trace": format_stack_trace(record["exception"]),
                }

            try:
                sys.stderr.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")
            except (TypeError, ValueError) as e:
                fallback = {
                    "@timestamp": datetime.now(timezone.utc).isoformat(),
                    "level": record["level"].name,
                    "message": str(record["message"]),
                    "error": f"JSON serialization failed: {e}"
                }
                sys.stderr.write(json.dumps(fallback) + "\n")
            sys.stderr.flush()

        logger.add(json_sink, level=settings.LOG_LEVEL, enqueue=True, catch=True)
    else:
        def format_with_trace(record):
            trace_id = record["extra"].get("trace_id", "no-trace")
            trace_info = f" [trace:{trace_id[:8]}]" if trace_id != "no-trace" else ""
            return (
                "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}:{function}:{line}</cyan>" + trace_info + " - <level>{message}</level>\n{exception}"
            )

        logger.add(
            sys.stderr,
            format=format_with_trace,
            level=settings.LOG_LEVEL,
            colorize=True,
            enqueue=True,
            catch=True
        )


def get_current_trace_span_ids() -> tuple[str, str]:
    """Get the current trace_id and span_id ('no-trace' outside a request)"""
    return _trace_id_context.get(), _span_id_context.get()


def get_current_trace_id() -> str:
    """Get current trace ID"""
    trace_id, _ = get_current_trace_span_ids()
    return trace_id


def get_trace_context() -> Dict[str, str]:
    """Get trace context"""
    trace_id, span_id = get_current_trace_span_ids()
    return {"trace_id": trace_id, "span_id": span_id}


def log_with_trace(level: str, message: str, **kwargs):
    """Log through loguru with the current trace context bound"""
    trace_id, span_id = get_current_trace_span_ids()
    extra_data = {
        "trace_id": trace_id,
        "span_id": span_id,
        **kwargs
    }

    log_func = getattr(logger.bind(**extra_data), level.lower(), None)
    if log_func is None:
        logger.error(f"Invalid log level: {level}")
        return
    log_func(message)


# Convenience functions
def info(message: str, **kwargs):
    """Log info with trace context"""
    log_with_trace("info", message, **kwargs)


def debug(message: str, **kwargs):
    """Log debug with trace context"""
    log_with_trace("debug", message, **kwargs)


def warning(message: str, **kwargs):
    """Log warning with trace context"""
    log_with_trace("warning", message, **kwargs)


def error(message: str, **kwargs):
    """Log error with trace context"""
    log_with_trace("error", message, **kwargs)


__all__ = [
    'setup_structured_logging', 'bind_trace_context', 'start_trace', 'get_current_trace_span_ids', 'get_current_trace_id',
    'get_trace_context', 'log_with_trace', 'info', 'debug', 'warning', 'error'
]
