"""Canonical platform tags and mapping from provider resource strings."""

from urllib.parse import urlparse

CODEFORCES = "codeforces"
CODECHEF = "codechef"
LEETCODE = "leetcode"
ATCODER = "atcoder"
HACKERRANK = "hackerrank"
HACKEREARTH = "hackerearth"
TOPCODER = "topcoder"
GEEKSFORGEEKS = "geeksforgeeks"


# Aliases seen in aggregator payloads ("site" names, hosts, endpoint slugs).
PLATFORM_ALIASES: dict[str, str] = {
    "codeforces": CODEFORCES,
    "codeforces.com": CODEFORCES,
    "codechef": CODECHEF,
    "code_chef": CODECHEF,
    "codechef.com": CODECHEF,
    "leetcode": LEETCODE,
    "leet_code": LEETCODE,
    "leetcode.com": LEETCODE,
    "atcoder": ATCODER,
    "at_coder": ATCODER,
    "atcoder.jp": ATCODER,
    "hackerrank": HACKERRANK,
    "hacker_rank": HACKERRANK,
    "hackerrank.com": HACKERRANK,
    "hackerearth": HACKEREARTH,
    "hacker_earth": HACKEREARTH,
    "hackerearth.com": HACKEREARTH,
    "topcoder": TOPCODER,
    "top_coder": TOPCODER,
    "topcoder.com": TOPCODER,
    "geeksforgeeks": GEEKSFORGEEKS,
    "geeksforgeeks.org": GEEKSFORGEEKS,
    "practice.geeksforgeeks.org": GEEKSFORGEEKS,
}


def normalize_platform(resource: str) -> str:
    """
    Map a provider resource/site string to a lowercase platform tag.

    Known hosts and site names resolve through ``PLATFORM_ALIASES``; anything
    else falls back to the first dotted segment ("codeforces.com" -> "codeforces").
    """
    value = resource.strip().lower()
    if "://" in value:
        value = urlparse(value).netloc or value
    if value.startswith("www."):
        value = value[len("www."):]

    compact = value.replace(" ", "").replace("-", "")
    if compact in PLATFORM_ALIASES:
        return PLATFORM_ALIASES[compact]
    if value in PLATFORM_ALIASES:
        return PLATFORM_ALIASES[value]

    return value.split(".", 1)[0]
