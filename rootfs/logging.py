# rootfs/logging.py
import logging
import os
from typing import Any, Dict, Optional

# argument names whose values are file payloads, never logged verbatim
CONTENT_KEYS = frozenset({"content", "contents"})


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def summarize_value(value: Any) -> str:
    if isinstance(value, str):
        value = value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return repr(value)


def summarize_args(args: Dict[str, Any]) -> Dict[str, Any]:
    safe = dict(args)
    for k in safe.keys() & CONTENT_KEYS:
        safe[k] = summarize_value(safe[k])
    return safe


def log_tool_call(logger: logging.Logger, name: str, args: Dict[str, Any]):
    logger.info("tool_call %s %s", name, summarize_args(args))
