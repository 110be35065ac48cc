"""API routes for contest lists."""

from typing import Any

from litestar import Controller, Response, get
from litestar.status_codes import HTTP_200_OK
from loguru import logger

from api.schemas.contest import ContestResponse
from services.contest import ContestService
from services.resolver import Resolution

SOURCE_HEADER = "x-contest-source"


def build_response(resolution: Resolution) -> Response[list[dict[str, Any]]]:
    """JSON array of contests plus the header naming the tier that produced them."""
    body = [ContestResponse.from_contest(contest).to_json() for contest in resolution.contests]
    return Response(
        content=body,
        status_code=HTTP_200_OK,
        headers={SOURCE_HEADER: resolution.tier.value, "Cache-Control": "no-store"},
    )


class ContestController(Controller):
    """Controller for upcoming and ongoing contests."""

    path = "/contests"

    @get(status_code=HTTP_200_OK)
    async def list_contests(self, contest_service: ContestService) -> Response[list[dict[str, Any]]]:
        """
        Get ongoing and upcoming contests.

        Ongoing contests come first, then upcoming ones by start time.
        The ``x-contest-source`` header names the tier that answered
        (primary, direct, secondary or none).
        """
        logger.debug("API request for upcoming contests")
        resolution = await contest_service.get_upcoming()
        return build_response(resolution)


class PastContestController(Controller):
    """Controller for recently finished contests."""

    path = "/pastcontests"

    @get(status_code=HTTP_200_OK)
    async def list_past_contests(
        self, contest_service: ContestService
    ) -> Response[list[dict[str, Any]]]:
        """Get contests that ended within the trailing window, most recent first."""
        logger.debug("API request for past contests")
        resolution = await contest_service.get_past()
        return build_response(resolution)
