# testnet_client/run_status_poller.py
"""Poll a workflow's status and log it until it finishes (development)."""

import logging
import signal
import sys
import threading

from testnet_client.container import settings, workflow_service
from testnet_client.core.models import WorkflowStatus
from testnet_client.workflows.poller import workflow_status_poller

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

finished = threading.Event()


def log_status(status: WorkflowStatus) -> None:
    logger.info(
        f"{status.workflow_id}: {status.state.value} "
        f"({len(status.nodes)} nodes, {len(status.validators)} validators)"
    )
    for name, link in status.monitoring.items():
        logger.info(f"  {name}: {link}")

    if status.state.is_terminal():
        finished.set()


def main():
    """Main entry point."""
    if len(sys.argv) != 2:
        print("usage: python -m testnet_client.run_status_poller <workflow-id>")
        sys.exit(2)

    workflow_id = sys.argv[1]

    poller = workflow_status_poller(
        workflow_service,
        workflow_id,
        on_result=log_status,
        interval=settings.workflow_poll_interval_seconds,
    )

    def signal_handler(sig, frame):
        logger.info(f"Received signal {sig}, stopping...")
        finished.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    logger.info("=" * 80)
    logger.info(f"Endpoint: {settings.grpc_address}")
    logger.info(f"Workflow: {workflow_id}")
    logger.info(f"Poll Interval: {poller.interval}s")
    logger.info("=" * 80)

    poller.start()
    finished.wait()
    poller.stop(timeout=5)


if __name__ == "__main__":
    main()
