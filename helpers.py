import math
import re


def consolidate_text(text):
    consolidated = text.replace('\r', ' ').replace('\n', ' ')
    consolidated = re.sub(' +', ' ', consolidated)
    return consolidated


def round_half_up(value):
    # Python's round() is banker's rounding; scores round .5 upwards
    return int(math.floor(value + 0.5))


def clean_labels(labels):
    """Normalise a skill/role list coming from the backend.

    Accepts None, a single string or any iterable. Values are stringified and
    whitespace-collapsed, blanks are dropped and exact duplicates removed while
    keeping the first occurrence.
    """
    if labels is None:
        return []
    if isinstance(labels, str):
        labels = [labels]

    cleaned = []
    for label in labels:
        if label is None:
            continue
        text = consolidate_text(str(label)).strip()
        if text and text not in cleaned:
            cleaned.append(text)
    return cleaned
