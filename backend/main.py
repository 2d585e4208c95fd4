import uvicorn
import os
import sys
import logging
from pathlib import Path


# Configure logging
def configure_logging():
    log_dir = None
    database_path = os.getenv("DATABASE_PATH")
    if database_path:
        log_dir = Path(database_path).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / "backend.log" if log_dir else "backend.log"

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="[{asctime}] [{levelname}] {name}: {message}",
        style="{",
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout),
        ],
    )
    # Suppress uvicorn access logs to avoid duplication with stdout
    logging.getLogger("uvicorn.access").handlers = []
    logging.getLogger("uvicorn.access").propagate = False


if __name__ == "__main__":
    configure_logging()
    logger = logging.getLogger("backend")
    logger.info("Starting Athos Explorer backend...")

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(
        "athos.app:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=port,
        reload=os.getenv("RELOAD", "false").lower() == "true",
        log_level="info",
    )
