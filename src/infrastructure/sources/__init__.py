"""Upstream contest sources."""

from .base import ContestQuery, ContestSource, QueryKind
from .clist import ClistSource
from .codechef import CodeChefSource
from .codeforces import CodeforcesSource
from .kontests import KontestsSource
from .leetcode import LeetCodeSource

__all__ = [
    "ClistSource",
    "CodeChefSource",
    "CodeforcesSource",
    "ContestQuery",
    "ContestSource",
    "KontestsSource",
    "LeetCodeSource",
    "QueryKind",
]
