import logging

import uvicorn

from src.api import create_app
from src.config import get_config


def main() -> None:
    config = get_config()
    logging.basicConfig(level=config.logging.level)

    uvicorn.run(
        create_app(),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
