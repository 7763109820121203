"""Line comparison helpers shared by the patch appliers."""

from thefuzz import fuzz

SEARCH_RANGE = 50
HALF_SEARCH_RANGE = SEARCH_RANGE // 2
FUZZY_MATCH_THRESHOLD = 0.7
LENIENT_MATCH_THRESHOLD = 0.6
WHITESPACE_MATCH_SCORE = 0.95
PREFIX_MATCH_SCORE = 0.8
SUBSTRING_MATCH_SCORE = 0.75


def normalize_whitespace(text: str) -> str:
    """Trim and collapse every whitespace run to a single space."""
    return " ".join(text.split())


def lines_equal(actual: str, expected: str) -> bool:
    if actual == expected:
        return True
    if actual.strip() == expected.strip():
        return True
    return normalize_whitespace(actual) == normalize_whitespace(expected)


def similarity_score(a: str, b: str) -> float:
    """
    Score how alike two lines are, from 0.0 to 1.0.

    Exact equality scores 1.0 and whitespace-only differences score
    WHITESPACE_MATCH_SCORE. A line contained in the other scores
    PREFIX_MATCH_SCORE (at the start) or SUBSTRING_MATCH_SCORE (anywhere),
    raised toward 1.0 by the length ratio. Anything else falls back to the
    Jaccard index of the two word sets.
    """
    if a == b:
        return 1.0
    a_norm = normalize_whitespace(a)
    b_norm = normalize_whitespace(b)
    if a_norm == b_norm:
        return WHITESPACE_MATCH_SCORE
    if not a_norm or not b_norm:
        return 0.0

    shorter, longer = sorted((a_norm, b_norm), key=len)
    length_ratio = len(shorter) / len(longer)
    if longer.startswith(shorter):
        return PREFIX_MATCH_SCORE + (1.0 - PREFIX_MATCH_SCORE) * length_ratio
    if shorter in longer:
        return SUBSTRING_MATCH_SCORE + (1.0 - SUBSTRING_MATCH_SCORE) * length_ratio

    a_words = set(a_norm.split())
    b_words = set(b_norm.split())
    union = a_words | b_words
    if not union:
        return 1.0
    return len(a_words & b_words) / len(union)


def edit_distance_score(a: str, b: str) -> float:
    """Similarity from a normalized edit distance, for the alternate applier."""
    if a == b:
        return 1.0
    if normalize_whitespace(a) == normalize_whitespace(b):
        return WHITESPACE_MATCH_SCORE
    if not a or not b:
        return 0.0
    return fuzz.ratio(a, b) / 100.0


def is_context_match(actual: str, expected: str) -> bool:
    if lines_equal(actual, expected):
        return True
    return similarity_score(actual, expected) >= FUZZY_MATCH_THRESHOLD


def is_flexible_match(actual: str, expected: str) -> bool:
    if lines_equal(actual, expected):
        return True
    return similarity_score(actual, expected) > LENIENT_MATCH_THRESHOLD


def window_candidates(
    line_count: int, anchor_len: int, expected: int, cursor: int
) -> list[int]:
    """
    Start positions to try around `expected`, nearest first.

    Positions before `cursor` are never offered, and every candidate leaves
    room for the whole anchor.
    """
    low = max(cursor, expected - HALF_SEARCH_RANGE)
    high = min(line_count - anchor_len, expected + HALF_SEARCH_RANGE)
    return sorted(range(low, high + 1), key=lambda pos: (abs(pos - expected), pos))
