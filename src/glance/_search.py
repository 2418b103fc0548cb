"""Substring-per-token phrase search over normalized tokens."""

from __future__ import annotations

from collections.abc import Sequence

import ahocorasick

from ._tokenizer import normalize_query


def _build_automaton(query_tokens: Sequence[str]) -> ahocorasick.Automaton:
    ac = ahocorasick.Automaton()
    for token in set(query_tokens):
        ac.add_word(token, token)
    ac.make_automaton()
    return ac


def _contained_terms(
    ac: ahocorasick.Automaton, normalized_tokens: Sequence[str]
) -> list[frozenset[str]]:
    """For each document token, the query terms occurring inside it."""
    found: list[frozenset[str]] = []
    for token in normalized_tokens:
        if not token:
            found.append(frozenset())
            continue
        found.append(frozenset(term for _, term in ac.iter(token)))
    return found


def find_matches(normalized_tokens: Sequence[str], query: str) -> list[int]:
    """Return every token index where the query phrase starts.

    The query is tokenized and normalized like the document. A window matches
    when each document token contains the query token at the same offset.
    Overlapping matches are all reported, in ascending order.
    """
    query_tokens = normalize_query(query)
    if not query_tokens or not normalized_tokens:
        return []

    span = len(query_tokens)
    n = len(normalized_tokens)
    if span > n:
        return []

    contained = _contained_terms(_build_automaton(query_tokens), normalized_tokens)

    matches: list[int] = []
    for start in range(n - span + 1):
        if all(
            term in contained[start + j] for j, term in enumerate(query_tokens)
        ):
            matches.append(start)
    return matches
