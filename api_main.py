"""ASGI entry point.

Run with `uvicorn api_main:app` or `python api_main.py`.
"""

import uvicorn

from timed_queue.api.fastapi_app import app
from timed_queue.config import SERVER_HOST, SERVER_PORT

__all__ = ["app"]


if __name__ == "__main__":
    uvicorn.run(app, host=SERVER_HOST, port=SERVER_PORT)
