from collections.abc import Sequence
from difflib import get_close_matches

from mdweek.core.errors import AmbiguousError
from mdweek.core.models import Day, Task

__all__ = ["find_task"]

FUZZY_MATCH_CUTOFF = 0.8

Entry = tuple[Day, Task]


def _match_id_prefix(ref: str, pool: Sequence[Entry]) -> Entry | None:
    ref_lower = ref.lower()
    matches = [e for e in pool if e[1].id.lower().startswith(ref_lower)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        exact = next((e for e in matches if e[1].id.lower() == ref_lower), None)
        if exact:
            return exact
        sample = [e[1].id[:8] for e in matches[:3]]
        raise AmbiguousError(ref, count=len(matches), sample=sample)
    return None


def _match_substring(ref: str, pool: Sequence[Entry]) -> Entry | None:
    ref_lower = ref.lower()
    exact = [e for e in pool if e[1].text.lower() == ref_lower]
    if len(exact) == 1:
        return exact[0]
    matches = exact or [e for e in pool if ref_lower in e[1].text.lower()]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        sample = [f"{e[0].label} {e[1].text}" for e in matches[:3]]
        raise AmbiguousError(ref, count=len(matches), sample=sample)
    return None


def _match_fuzzy(ref: str, pool: Sequence[Entry]) -> Entry | None:
    texts = [e[1].text.lower() for e in pool]
    matches = get_close_matches(ref.lower(), texts, n=1, cutoff=FUZZY_MATCH_CUTOFF)
    if matches:
        return pool[texts.index(matches[0])]
    return None


def find_task(ref: str, pool: Sequence[Entry]) -> Entry | None:
    """Resolve ref by id prefix, then text match, then close fuzzy match."""
    ref = ref.strip()
    if not ref or not pool:
        return None
    return _match_id_prefix(ref, pool) or _match_substring(ref, pool) or _match_fuzzy(ref, pool)
