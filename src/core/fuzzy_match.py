"""Edit-distance similarity scoring for catalog searches."""


def levenshtein_distance(first: str, second: str) -> int:
    """Count the single-character inserts, deletes and substitutions turning one string into the other.

    Args:
        first: Source string
        second: Target string

    Returns:
        Minimum edit count (0 when the strings are equal)
    """
    rows = len(second) + 1
    cols = len(first) + 1

    # dist[i][j] is the distance between second[:i] and first[:j]
    dist = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        dist[i][0] = i
    for j in range(cols):
        dist[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if second[i - 1] == first[j - 1]:
                dist[i][j] = dist[i - 1][j - 1]
            else:
                dist[i][j] = 1 + min(dist[i - 1][j - 1], dist[i][j - 1], dist[i - 1][j])

    return dist[-1][-1]


def similarity(first: str, second: str) -> float:
    """Score how close two strings are, from 0.0 (nothing shared) to 1.0 (identical).

    Comparison is case-insensitive. The score is the share of the longer
    string left untouched by the edit distance, so it is symmetric in its
    arguments. Two empty strings score 1.0.

    Args:
        first: One string to compare
        second: The other string to compare

    Returns:
        Similarity in [0.0, 1.0]
    """
    first_lower = first.lower()
    second_lower = second.lower()
    longer, shorter = (
        (first_lower, second_lower) if len(first_lower) >= len(second_lower) else (second_lower, first_lower)
    )

    if not longer:
        return 1.0

    distance = levenshtein_distance(longer, shorter)
    return (len(longer) - distance) / len(longer)
