"""
Run the Opsboard API with uvicorn.

Usage:
    python run.py
    python run.py --reload              # Development mode with auto-reload
    python run.py --storage mongo       # Persist BIs, tasks and canvas in MongoDB
    python run.py --storage mongo --workers 4
"""
import argparse
import os
import sys

import uvicorn


def main():
    parser = argparse.ArgumentParser(description="Run the Opsboard API server")
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--storage",
        choices=["memory", "mongo"],
        default=None,
        help="Storage backend for the CRUD stores (default: STORAGE_BACKEND or memory)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of worker processes (mongo storage only, ignored with --reload)"
    )

    args = parser.parse_args()

    # Must be set before the app reads its settings
    if args.storage:
        os.environ["STORAGE_BACKEND"] = args.storage
    from opsboard.config.settings import Settings
    settings = Settings()
    storage = settings.storage_backend.lower()

    workers = 1 if args.reload else args.workers
    if workers > 1 and storage == "memory":
        # Each worker would hold its own in-memory store


    print("Starting Opsboard API server...")
    print(f"  Host: {args.host}")
    print(f"  Port: {args.port}")
    print(f"  Reload: {args.reload}")
    print(f"  Storage: {storage}")
    if settings.missing_glpi_settings:
        print(f"  GLPI: missing {', '.join(settings.missing_glpi_settings)} (ticket endpoints will return 500)")
    if workers > 1:
        print(f"  Workers: {workers}")
    print()

    uvicorn.run(
        "opsboard.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        workers=workers
    )


if __name__ == "__main__":
    main()
