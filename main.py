# ------------------------------------------------------------------------------
# Main Script for the Family Pane Display Server
# main.py
# ------------------------------------------------------------------------------
from config import load_config
config = load_config()
from logging_config import get_logger
logger = get_logger(__name__)
import atexit

from core.events_core import EventBus
from core.store import Store
from web.web_interface import create_web_interface

# --------------------------------------------------------------------------
# Configuration Parameters
# --------------------------------------------------------------------------
_debug = config["DEBUG_MODE"]

logger.info(f"Debug mode is {'enabled' if _debug else 'disabled'}.")
logger.info(f"Environment: {config['APP_ENV']}")

# -----------------------------
# Open the Store
# -----------------------------
store = Store(config["DATABASE_PATH"])
store.initialize()

bus = EventBus(queue_size=config["EVENT_QUEUE_SIZE"])


def _shutdown():
    bus.close()
    store.close()


# Register the cleanup function
atexit.register(_shutdown)

# Expose the Flask app as the WSGI entry point.
app = create_web_interface(store=store, bus=bus, config=config)

if __name__ == "__main__":
    host, port = config["HOST"], config["PORT"]
    logger.info(f"Family Pane server running on http://{host}:{port}")
    logger.info(f"Health check: http://localhost:{port}/health")
    try:
        app.run(host=host, port=port, debug=_debug, threaded=True, use_reloader=False)
    except KeyboardInterrupt:
        logger.info("KeyboardInterrupt received. Shutting down...")
