"""Keyword extraction for index entries.

Pure function with no external dependencies.
"""

from __future__ import annotations

from flux_docs.domain.model import Record


def extract_keywords(record: Record) -> list[str]:
    """Collect the searchable keywords of a record.

    Sources, in order:
    - title words, lowercased
    - related record names, as stored
    - section titles, lowercased
    - prop names from every reference entry, lowercased

    Returns:
        Deduplicated keywords in first-seen order.
    """
    keywords: list[str] = []

    if record.title:
        keywords.extend(record.title.lower().split())

    keywords.extend(record.related)

    for section in record.sections:
        if section.title:
            keywords.append(section.title.lower())

    for entry in record.reference.values():
        for prop in entry.props:
            if prop.name:
                keywords.append(prop.name.lower())

    return list(dict.fromkeys(keywords))
