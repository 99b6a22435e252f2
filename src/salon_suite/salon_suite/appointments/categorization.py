from __future__ import annotations

from typing import Optional

# First match wins, so the more specific keywords come first.
_CATEGORY_KEYWORDS = (
    ("Extensions", ("extension", "tape-in", "tape in", "weft", "k-tip")),
    ("Highlights", ("highlight", "balayage", "foil", "babylight", "ombre")),
    ("Color", ("color", "colour", "gloss", "toner", "root touch", "tint", "glaze")),
    ("Blowout", ("blowout", "blow out", "blow dry", "blow-dry")),
    ("Haircut", ("haircut", "cut", "trim", "fringe", "bang")),
    ("Treatment", ("treatment", "keratin", "olaplex", "mask", "conditioning", "smoothing")),
    ("Styling", ("style", "styling", "updo", "braid", "curl", "event")),
    ("Extras", ("add-on", "add on", "extra", "consultation")),
)

OTHER = "Other"


def service_category(service_name: Optional[str]) -> str:
    """Bucket a free-text service name into a reporting category."""

    name = (service_name or "").strip().lower()
    if not name:
        return OTHER

    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return OTHER
