"""
Purpose:
- `python -m registry_proxy` starts Uvicorn on settings.host:settings.port (PORT env overrides).
"""

import sys
import uvicorn
from loguru import logger
from .core.settings import settings

def main() -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=settings.log_level,
        format="{time:HH:mm:ss} | {level: <8} | {message}",
    )
    logger.info("Server running on port {}", settings.port)
    uvicorn.run("registry_proxy.main:app", host=settings.host, port=settings.port)

if __name__ == "__main__":
    main()
