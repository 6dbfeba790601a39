from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from .contract import Source

RawCitation = Mapping[str, Any]


def map_citations(citations: Optional[Iterable[RawCitation]]) -> List[Source]:
    """
    Keep only citations that point at a web page: { "web": { title, uri } }.

    Order is preserved and duplicate URIs are kept.
    """
    sources: List[Source] = []
    for entry in citations or []:
        if not isinstance(entry, Mapping):
            continue
        web = entry.get("web")
        if not isinstance(web, Mapping) or not web:
            continue
        sources.append(
            Source(
                title=str(web.get("title") or ""),
                uri=str(web.get("uri") or ""),
            )
        )
    return sources
