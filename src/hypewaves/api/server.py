"""
ASGI Entry Point for the hypewaves API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` first so that the settings read at
import time (dataset path, layout knobs) see them.

Usage
-----
Run via the module entry point:
    $ python -m hypewaves.api.server

Or via uvicorn directly:
    $ uvicorn hypewaves.api.server:app --reload
"""

import os
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env BEFORE importing the application factory.
env_path = Path(".env")
load_dotenv(dotenv_path=env_path)

from hypewaves.api.app import create_app  # noqa: E402

# Factory invocation
app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    host = os.getenv("HYPEWAVES_HOST", "127.0.0.1")
    port = int(os.getenv("HYPEWAVES_PORT", "8000"))
    uvicorn.run(
        "hypewaves.api.server:app",
        host=host,
        port=port,
        reload=True,
        log_level="info",
    )


if __name__ == "__main__":
    main()
