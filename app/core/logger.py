import logging

from app.core.config import settings

handlers = [logging.StreamHandler()]  # console (stdout)
if settings.LOG_FILE:
    handlers.append(logging.FileHandler(settings.LOG_FILE))

# Set up logging configuration at the start of the app
logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=handlers,
)

logger = logging.getLogger("app")
