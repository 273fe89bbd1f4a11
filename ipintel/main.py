import uvicorn

from ipintel.core.app_factory import create_app
from ipintel.core.config import settings

app = create_app()


def run() -> None:
    """Serve the lookup API with uvicorn (console script ``ipintel-api``)."""
    uvicorn.run(
        "ipintel.main:app",
        host=settings.app.host,
        port=settings.app.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
