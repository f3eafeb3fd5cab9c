"""Serve the webhook over TLS."""

import sys

import uvicorn

from src.core.config import get_settings
from src.core.logging import configure_logging, structured_log


def main() -> int:
    settings = get_settings()
    configure_logging(settings.log_level)
    try:
        uvicorn.run(
            "src.main:app",
            host=settings.host,
            port=settings.port,
            ssl_certfile=settings.tls_cert_file,
            ssl_keyfile=settings.tls_key_file,
            log_level=settings.log_level.lower(),
            # A second worker process would hold its own registry and hand out duplicate ids
            workers=1,
        )
    except (OSError, ValueError) as e:
        structured_log(
            "CRITICAL",
            "Failed to start server",
            operation="server.start",
            error={"type": type(e).__name__, "message": str(e)},
        )
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
