from contextlib import asynccontextmanager
import logging
from pathlib import Path

from resume_analyzer.core.config import settings
from resume_analyzer.core.deps import get_resume_store
from resume_analyzer.core.matching_config import get_matching_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
    get_matching_config()
    store = get_resume_store()
    logger.info("resume_store_ready path=%s", settings.resume_db_path)
    yield
    close = getattr(store, "close", None)
    if callable(close):
        close()
