"""
Run the Household Ledger API server.

Usage:
    python -m household_ledger [--port PORT] [--host HOST] [--reload]
"""

import argparse
import uvicorn

from household_ledger.config import settings


def main():
    parser = argparse.ArgumentParser(description="Household Ledger")
    parser.add_argument("--port", type=int, default=8000, help="Port to run on")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    uvicorn.run(
        "household_ledger.api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
