import signal
import threading

from appearance_switch.core.application import ApplicationOrchestrator
from appearance_switch.core.config import get_config
from appearance_switch.services.appearance import AppearanceError
from appearance_switch.utils.logger import configure_logging, get_logger
from appearance_switch.utils.run_loop import RunLoop

logger = get_logger(__name__)


def main() -> int:
    config = get_config()
    configure_logging(config.logging.level)

    run_loop = RunLoop()
    try:
        orchestrator = ApplicationOrchestrator(run_loop, config)
    except AppearanceError as e:
        logger.error(f"[MAIN] {e}")
        return 1

    shutdown = threading.Event()

    def _request_shutdown(signum, _frame):
        logger.info(f"[MAIN] Received signal {signum}, shutting down")
        shutdown.set()

    signal.signal(signal.SIGINT, _request_shutdown)
    signal.signal(signal.SIGTERM, _request_shutdown)

    run_loop.start()
    orchestrator.start()

    if orchestrator.should_show_window_on_launch():
        logger.info("[MAIN] Settings window requested on launch")

    try:
        while not shutdown.wait(timeout=1.0):
            pass
    finally:
        orchestrator.stop()
        run_loop.quit(timeout=5.0)

    return 0
