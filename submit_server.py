# submit_server.py
import logging

from settings import load_settings
from webapp import create_app

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = load_settings()
app = create_app(settings)


def main():
    logger.info(
        "Fish Parque server running on port %s (email %s)",
        settings.port, "enabled" if settings.mail else "disabled",
    )
    app.run(host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
