from __future__ import annotations

from dataclasses import dataclass

from hmda_etl.models.canonical import is_blank, to_text


@dataclass(frozen=True)
class BorrowerName:
    first_name: str
    last_name: str


def split_borrower_name(full_name: object) -> BorrowerName:
    """Split "Last, First Middle" or "First Last" into first and last names."""
    if is_blank(full_name):
        return BorrowerName(first_name="", last_name="")

    text = to_text(full_name)
    if "," in text:
        last, _, rest = text.partition(",")
        rest = rest.split(",", 1)[0].strip()
        first = rest.split(" ", 1)[0] if rest else ""
        return BorrowerName(first_name=first, last_name=last.strip())

    first, _, last = text.partition(" ")
    return BorrowerName(first_name=first, last_name=last.strip())
