import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """
    Configure logging for the whole console.
    Call this once from app.py before any page runs.
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


logger = logging.getLogger("tms_console")
