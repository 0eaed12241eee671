"""Server-sent events decoding for streaming chat endpoints.

Only ``data:`` lines carry payloads. Blank lines, comments and ``event:`` /
``id:`` fields are skipped; ``[DONE]`` ends the stream. Lines that fail to
decode as JSON are logged and skipped so one bad frame does not lose the
rest of the response.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator, Union

from ..logging import get_logger, log_event

DONE_MARKER = "[DONE]"

_logger = get_logger("provider_bridge.transport.sse")


def _data_field(line: Union[str, bytes]) -> str | None:
    if isinstance(line, bytes):
        line = line.decode("utf-8", errors="replace")
    line = line.strip()
    if not line.startswith("data:"):
        return None
    return line[5:].strip()


def iter_sse_events(lines: Iterable[Union[str, bytes]]) -> Iterator[Dict[str, Any]]:
    """Yield decoded JSON payloads from raw SSE lines until ``[DONE]``."""
    for line in lines:
        data = _data_field(line)
        if not data:
            continue
        if data == DONE_MARKER:
            return
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as e:
            log_event(_logger, "stream.decode_failed", error=str(e), length=len(data))
            continue
        if isinstance(payload, dict):
            yield payload


__all__ = ["DONE_MARKER", "iter_sse_events"]
