from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from typing import Optional
from dotenv import load_dotenv
from pathlib import Path
import os
import sys
import logging
from services.analysis_client import AnalysisClient
from services.session_store import SessionStore
from routers import meeting

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Validate required environment variables
REQUIRED_ENV_VARS = ["OPENAI_API_KEY"]

TEMPLATES_DIR = Path(__file__).parent / "templates"


def validate_environment():
    """Validate that all required environment variables are set."""
    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
    if missing:
        logger.error(f"Missing required environment variables: {missing}")
        sys.exit(1)
    logger.info("Environment validation passed")


def create_app(
    analysis_client: Optional[AnalysisClient] = None,
    session_ttl_seconds: Optional[float] = None
) -> FastAPI:
    """Build the application around an explicitly provided analysis client.

    When no client is given, the environment is validated and a client is
    built from OPENAI_API_KEY / OPENAI_MODEL.
    """
    if analysis_client is None:
        validate_environment()
        analysis_client = AnalysisClient.from_env()

    application = FastAPI(title="SyncPoint AI", version="0.1.0")
    application.state.analysis_client = analysis_client
    application.state.session_store = SessionStore(analysis_client, ttl_seconds=session_ttl_seconds)
    application.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # Include routers
    application.include_router(meeting.router)

    @application.get("/health")
    def health():
        return {"status": "ok"}

    logger.info(
        f"Application ready: model={analysis_client.model}, "
        f"session_ttl_seconds={application.state.session_store.ttl_seconds}"
    )
    return application


app = create_app()
