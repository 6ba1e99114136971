# testnet_client/workflows/poller.py
"""
Fixed-interval polling for workflow status and template listings.

Every cycle issues a fresh fetch and its result replaces the previous one
(last write wins). Fetch errors are logged and the loop keeps going.
"""

import logging
import threading
from typing import Callable, Generic, List, Optional, Tuple, TypeVar

from testnet_client.core.models import WorkflowStatus, WorkflowTemplateSummary
from testnet_client.workflows.service import TemplateService, WorkflowService

logger = logging.getLogger(__name__)

T = TypeVar("T")

WORKFLOW_STATUS_INTERVAL_SECONDS = 10.0
TEMPLATE_LIST_INTERVAL_SECONDS = 30.0


class StatusPoller(Generic[T]):
    """Background loop calling fetch() every interval seconds."""

    def __init__(
        self,
        fetch: Callable[[], T],
        interval: float,
        on_result: Optional[Callable[[T], None]] = None,
        name: str = "poller",
    ):
        """
        Initialize poller.

        Args:
            fetch: Zero-argument call producing a fresh result
            interval: Seconds between cycles
            on_result: Called with every successful result
            name: Used for the thread name and log lines
        """
        self.fetch = fetch
        self.interval = interval
        self.on_result = on_result
        self.name = name

        self._latest: Optional[T] = None
        self._last_error: Optional[Exception] = None
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def latest(self) -> Optional[T]:
        with self._lock:
            return self._latest

    @property
    def last_error(self) -> Optional[Exception]:
        with self._lock:
            return self._last_error

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def poll_once(self) -> Optional[T]:
        """Run one cycle. Returns the fetched result, or None if the fetch failed."""
        try:
            result = self.fetch()
        except Exception as e:
            logger.error(f"[{self.name}] poll failed: {e}")
            with self._lock:
                self._last_error = e
            return None

        with self._lock:
            self._latest = result
            self._last_error = None

        if self.on_result is not None:
            try:
                self.on_result(result)
            except Exception as e:
                logger.error(f"[{self.name}] result callback failed: {e}", exc_info=True)

        return result

    def start(self) -> None:
        if self.running:
            logger.warning(f"[{self.name}] already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name=self.name, daemon=True)
        self._thread.start()
        logger.info(f"[{self.name}] started, interval {self.interval}s")

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None
        logger.info(f"[{self.name}] stopped")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            self.poll_once()
            # wait() returns early when stop() is called
            self._stop_event.wait(self.interval)


# ============================================
# CADENCES
# ============================================

def workflow_status_poller(
    service: WorkflowService,
    workflow_id: str,
    on_result: Optional[Callable[[WorkflowStatus], None]] = None,
    interval: float = WORKFLOW_STATUS_INTERVAL_SECONDS,
) -> StatusPoller[WorkflowStatus]:
    return StatusPoller(
        fetch=lambda: service.get_workflow(workflow_id),
        interval=interval,
        on_result=on_result,
        name=f"workflow-{workflow_id}",
    )


def template_list_poller(
    service: TemplateService,
    on_result: Optional[Callable[[Tuple[List[WorkflowTemplateSummary], int]], None]] = None,
    interval: float = TEMPLATE_LIST_INTERVAL_SECONDS,
) -> StatusPoller[Tuple[List[WorkflowTemplateSummary], int]]:
    return StatusPoller(
        fetch=service.list_templates,
        interval=interval,
        on_result=on_result,
        name="template-list",
    )
