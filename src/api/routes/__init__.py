from api.routes.contest import ContestController, PastContestController

__all__ = ["ContestController", "PastContestController"]
