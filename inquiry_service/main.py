from __future__ import annotations

import uvicorn

from inquiry_service.application.app import App
from inquiry_service.infrastructure.config import HOST, PORT

app = App()


def run() -> None:
    # log_config=None keeps uvicorn on the structlog handlers set up by the app
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    run()
