"""Run the API with uvicorn: ``python -m catalog_api``."""
import argparse

import uvicorn

from catalog_api.config import settings


def main():
    parser = argparse.ArgumentParser(description=settings.APP_NAME)
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    args = parser.parse_args()

    uvicorn.run(
        "catalog_api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
