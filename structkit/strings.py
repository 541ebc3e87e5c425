"""
structkit.strings — String metrics.

    levenshtein_distance("kitten", "sitting")  → 3
    similarity("kitten", "sitting")            → 0.571...
    longest_common_prefix(["flow", "flight"])  → "fl"

Levenshtein (1965): the distance between two strings is the minimum number
of single-character insertions, deletions and substitutions that turn one
into the other.  The similarity score normalizes that count by the longer
string, so it lives in [0, 1]:

    similarity(a, b) = (max(|a|, |b|) - lev(a, b)) / max(|a|, |b|)

with similarity("", "") defined as 1.

Cost is O(|a|·|b|) time.  There is no guard against very long inputs.
"""

from typing import Sequence


# ═══════════════════════════════════════════════════════════════════
#  EDIT DISTANCE
# ═══════════════════════════════════════════════════════════════════

def levenshtein_distance(a: str, b: str) -> int:
    """
    Standard Levenshtein distance between two strings.

    Cell [i][j] of the cost table is the distance between a[:i] and b[:j]:

        D[i][0] = i,  D[0][j] = j
        D[i][j] = min(D[i-1][j] + 1,                       # deletion
                      D[i][j-1] + 1,                       # insertion
                      D[i-1][j-1] + (a[i-1] != b[j-1]))    # substitution

    Only two rows of the table are kept at a time.
    """
    m, n = len(a), len(b)
    if m == 0:
        return n
    if n == 0:
        return m

    prev = list(range(n + 1))
    curr = [0] * (n + 1)

    for i in range(1, m + 1):
        curr[0] = i
        for j in range(1, n + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            curr[j] = min(
                prev[j] + 1,        # deletion
                curr[j - 1] + 1,    # insertion
                prev[j - 1] + cost, # substitution
            )
        prev, curr = curr, prev

    return prev[n]


def similarity(a: str, b: str) -> float:
    """
    Similarity score in [0, 1] derived from the edit distance.

    1.0 = identical (including two empty strings)
    0.0 = nothing in common position-wise (every character must change)
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - levenshtein_distance(a, b)) / max_len


# ═══════════════════════════════════════════════════════════════════
#  COMMON AFFIXES
# ═══════════════════════════════════════════════════════════════════

def longest_common_prefix(strings: Sequence[str]) -> str:
    """Longest prefix shared by every string ("" for no strings)."""
    if not strings:
        return ""
    if len(strings) == 1:
        return strings[0]

    first = strings[0]
    limit = min(len(s) for s in strings)
    end = 0
    while end < limit and all(s[end] == first[end] for s in strings):
        end += 1
    return first[:end]


def longest_common_suffix(strings: Sequence[str]) -> str:
    """Longest suffix shared by every string ("" for no strings)."""
    if not strings:
        return ""
    if len(strings) == 1:
        return strings[0]

    reversed_prefix = longest_common_prefix([s[::-1] for s in strings])
    return reversed_prefix[::-1]
