"""Jaro and Jaro-Winkler similarity over Unicode code points."""

PREFIX_LIMIT = 4
PREFIX_WEIGHT = 0.1


def jaro_similarity(a: str, b: str) -> float:
    """Compute the Jaro similarity of two strings.

    Characters match when equal and no further apart than
    ``max(len(a), len(b)) // 2 - 1`` positions; each character of ``b`` is
    matched at most once. Transpositions are matched characters that differ
    at the same ordinal position among matches, counted as halves.

    Returns:
        Similarity in [0.0, 1.0]. 0.0 if either string is empty or no
        characters match.

    Example:
        >>> round(jaro_similarity("MARTHA", "MARHTA"), 4)
        0.9444
    """
    len1 = len(a)
    len2 = len(b)
    if len1 == 0 or len2 == 0:
        return 0.0

    match_distance = max(0, max(len1, len2) // 2 - 1)
    a_matches = [False] * len1
    b_matches = [False] * len2

    matches = 0
    for i in range(len1):
        start = max(0, i - match_distance)
        end = min(i + match_distance + 1, len2)
        for j in range(start, end):
            if not b_matches[j] and a[i] == b[j]:
                a_matches[i] = b_matches[j] = True
                matches += 1
                break

    if matches == 0:
        return 0.0

    transpositions = 0
    k = 0
    for i in range(len1):
        if not a_matches[i]:
            continue
        while not b_matches[k]:
            k += 1
        if a[i] != b[k]:
            transpositions += 1
        k += 1

    return (
        matches / len1
        + matches / len2
        + (matches - transpositions / 2) / matches
    ) / 3


def jaro_winkler_similarity(a: str, b: str) -> float:
    """Compute Jaro-Winkler similarity with prefix weighting.

    The common prefix (capped at 4 characters) boosts the Jaro score by
    ``prefix * 0.1 * (1 - jaro)``. The boost is applied at every Jaro
    level, without the 0.7 cut-off some implementations use.

    Example:
        >>> round(jaro_winkler_similarity("MARTHA", "MARHTA"), 4)
        0.9611
    """
    jaro = jaro_similarity(a, b)
    if jaro == 0.0:
        return 0.0

    prefix = 0
    for x, y in zip(a[:PREFIX_LIMIT], b[:PREFIX_LIMIT]):
        if x != y:
            break
        prefix += 1

    return jaro + prefix * PREFIX_WEIGHT * (1 - jaro)


__all__ = ["jaro_similarity", "jaro_winkler_similarity", "PREFIX_LIMIT", "PREFIX_WEIGHT"]
