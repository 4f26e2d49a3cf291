"""Request-scoped logging helpers and in-memory log store."""
from __future__ import annotations

import logging
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

DEFAULT_MAX_REQUESTS = 256


class RequestLogStore:
    """Lightweight in-memory store so engineers can inspect milestones.

    Only the most recently used ``max_requests`` request IDs are kept.
    """

    def __init__(self, max_requests: int = DEFAULT_MAX_REQUESTS) -> None:
        self.max_requests = max_requests
        self._records: "OrderedDict[str, List[Mapping[str, Any]]]" = OrderedDict()

    def append(self, request_id: str, entry: Mapping[str, Any]) -> None:
        if request_id in self._records:
            self._records.move_to_end(request_id)
        self._records.setdefault(request_id, []).append(entry)
        while len(self._records) > self.max_requests:
            self._records.popitem(last=False)

    def get(self, request_id: str) -> List[Mapping[str, Any]]:
        return list(self._records.get(request_id, []))

    def __len__(self) -> int:
        return len(self._records)

    def clear(self) -> None:
        self._records.clear()


request_log_store = RequestLogStore()


@dataclass
class RequestContext:
    """State bag that injects IDs into every log line for a WeatherKit call."""

    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    endpoint: str | None = None
    _store: RequestLogStore = field(default=request_log_store, repr=False)

    def with_endpoint(self, endpoint: str | None) -> "RequestContext":
        if endpoint:
            self.endpoint = endpoint
        return self

    def extra(self, **fields: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"request_id": self.request_id}
        if self.endpoint:
            payload["endpoint"] = self.endpoint
        for key, value in fields.items():
            if value is not None:
                payload[key] = value
        return payload

    def log(
        self,
        logger: logging.Logger,
        level: int,
        message: str,
        *,
        exc_info: bool | BaseException | None = None,
        **fields: Any,
    ) -> None:
        extra_payload = self.extra(**fields)
        logger.log(level, message, extra=extra_payload, exc_info=exc_info)
        self._store.append(
            self.request_id,
            {
                "timestamp": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                "level": logging.getLevelName(level),
                "message": message,
                "extra": extra_payload,
            },
        )

    def debug(self, logger: logging.Logger, message: str, **fields: Any) -> None:
        self.log(logger, logging.DEBUG, message, **fields)

    def info(self, logger: logging.Logger, message: str, **fields: Any) -> None:
        self.log(logger, logging.INFO, message, **fields)


def log_event(
    logger: logging.Logger,
    context: RequestContext | None,
    message: str,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    """Route a milestone through ``context`` when given, else straight to ``logger``."""

    if context:
        context.log(logger, level, message, **fields)
    else:
        logger.log(level, message, extra={key: value for key, value in fields.items() if value is not None})


__all__ = ["RequestContext", "RequestLogStore", "log_event", "request_log_store"]
