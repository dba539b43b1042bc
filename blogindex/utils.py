import math


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def normalize_terms(value) -> list[str]:
    """
    Normalize a tag/category frontmatter value into a list of strings,
    dropping empties and case-insensitive duplicates (first spelling wins).
    """
    if not value:
        return []
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (list, tuple, set)):
        items = [str(item) for item in value if item is not None]
    else:
        items = [str(value)]

    seen = set()
    terms = []
    for item in items:
        term = item.strip()
        if not term or term_key(term) in seen:
            continue
        seen.add(term_key(term))
        terms.append(term)
    return terms


def term_key(term: str) -> str:
    return term.strip().casefold()
