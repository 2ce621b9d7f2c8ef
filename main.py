"""
APRE Reporting API - server entry point

Runs the FastAPI application with uvicorn using the web settings from
apre.config.
"""

import uvicorn

from apre.config import config


def main():
    uvicorn.run(
        "apre.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=config.web.reload,
        log_level=config.web.log_level
    )


if __name__ == "__main__":
    main()
