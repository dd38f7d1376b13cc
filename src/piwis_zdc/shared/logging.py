"""Structured logging for session loading.

Every record carries the component that emitted it and a correlation ID,
usually the name of the export being loaded, in its ``extra`` data. One load
can then be followed through the logs. The library itself never prints.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, MutableMapping, Optional, Tuple

MS_PER_SECOND = 1000


class CorrelationLogger(logging.LoggerAdapter):
    """Logger adapter that tags records with a component and a correlation ID.

    Per-call ``extra`` data is merged over the adapter's own fields instead of
    replacing them.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Export being processed, if any
            component: Component name; defaults to the last part of ``name``
        """
        super().__init__(
            logging.getLogger(name),
            {
                "component": component or name.split(".")[-1],
                "correlation_id": correlation_id,
            },
        )

    @property
    def component(self) -> str:
        return self.extra["component"]

    @property
    def correlation_id(self) -> Optional[str]:
        return self.extra["correlation_id"]

    def bind(self, correlation_id: Optional[str]) -> "CorrelationLogger":
        """Return a logger for the same component tagged with another export."""
        return CorrelationLogger(self.logger.name, correlation_id, self.component)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> Tuple[Any, MutableMapping[str, Any]]:
        extra: Dict[str, Any] = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs

    @contextmanager
    def timed(self, message: str, **extra: Any) -> Iterator[Dict[str, Any]]:
        """Log ``message`` at debug level once the block completes.

        The yielded dict may be filled with more fields inside the block; the
        record also gets ``processing_time_ms``. Nothing is logged when the
        block raises.
        """
        start_time = time.time()
        fields: Dict[str, Any] = dict(extra)
        yield fields
        fields["processing_time_ms"] = (time.time() - start_time) * MS_PER_SECOND
        self.debug(message, extra=fields)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Export being processed, if any
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)
