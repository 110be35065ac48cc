from litestar.datastructures import State

from services.contest import ContestService


def provide_contest_service(state: State) -> ContestService:
    """Contest service stored on the application state at startup."""
    return state.contest_service
