"""Launch script that starts the FastAPI app under Uvicorn."""

from __future__ import annotations

import logging
import os

import uvicorn

logger = logging.getLogger("leadbot.launcher")


def main() -> None:
    port = int(os.environ.get("PORT", "8000"))
    host = os.environ.get("HOST", "0.0.0.0")
    logger.debug("Starting uvicorn on %s:%s", host, port)
    uvicorn.run("leadbot.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
