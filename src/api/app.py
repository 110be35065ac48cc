"""Litestar application factory."""

from litestar import Litestar
from litestar.config.cors import CORSConfig
from litestar.datastructures import State
from litestar.di import Provide
from loguru import logger

from api.dependencies import provide_contest_service
from api.routes import ContestController, PastContestController
from infrastructure.config import Settings
from infrastructure.logging import configure_logging
from services import ContestService, create_contest_service


def create_app(
    settings: Settings | None = None,
    contest_service: ContestService | None = None,
) -> Litestar:
    """Build the application. ``contest_service`` overrides the one built from settings."""
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    if not settings.has_clist_credentials:
        logger.warning("clist credentials not configured, primary tier will be skipped")

    service = contest_service or create_contest_service(settings)

    return Litestar(
        route_handlers=[ContestController, PastContestController],
        dependencies={
            "contest_service": Provide(provide_contest_service, sync_to_thread=False),
        },
        state=State({"contest_service": service}),
        cors_config=CORSConfig(
            allow_origins=list(settings.cors_allow_origins),
            allow_methods=["GET"],
            expose_headers=["x-contest-source"],
        ),
    )
