"""
Run the service with uvicorn: `python -m jokebox` or the `jokebox` script.

Host and port come from settings (HOST, PORT). If startup fails (bad config,
MongoDB unreachable) uvicorn exits with a non-zero status.
"""

import uvicorn

from jokebox.config import settings


def main() -> None:
    uvicorn.run(
        "jokebox.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
