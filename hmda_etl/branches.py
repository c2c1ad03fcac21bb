from __future__ import annotations

from collections.abc import Callable, Mapping
import re
from types import MappingProxyType

from hmda_etl.models.canonical import is_blank, to_text

_BRANCH_NUMBER = re.compile(r"^\d{3}$")

_BRANCHES: dict[str, str] = {
    "101": "Columbus",
    "103": "Leesburg",
    "104": "Savannah Hwy 17",
    "107": "Savannah Hodgson",
    "108": "Centerville",
    "109": "Warner Robins",
    "110": "Valdosta",
    "114": "Statesboro",
    "116": "LaGrange",
    "125": "Albany NW",
    "127": "Thomaston",
    "129": "Manchester",
    "131": "Fayetteville",
    "134": "Cedartown",
    "136": "Rockmart",
    "137": "Chickamauga",
    "201": "Rochelle",
    "203": "Cordele",
    "204": "Ashburn",
    "205": "Moultrie",
    "206": "Tifton",
    "208": "Sylvester",
    "209": "Fitzgerald",
    "210": "Douglas",
    "212": "Broxton",
    "213": "Quitman",
    "216": "Eastman",
    "218": "Macon",
    "219": "Northwest GA LPO",
    "220": "Pooler LPO",
    "221": "Birmingham LPO",
    "223": "Augusta LPO",
    "226": "Tallahassee LPO",
    "401": "Savannah",
    "402": "Valdosta Mortgage",
    "403": "Macon",
    "404": "Athens",
    "405": "Lagrange",
    "406": "Warner Robins",
    "407": "Albany",
    "408": "Columbus",
    "409": "Statesboro",
    "410": "Augusta",
    "412": "Pooler",
    "413": "Birmingham",
    "414": "Milledgeville",
    "415": "Atlanta",
    "416": "Tallahassee",
}

BRANCH_DIRECTORY: Mapping[str, str] = MappingProxyType(_BRANCHES)

# Maps a loan officer name to a branch number, or "" when unknown.
OfficerBranchLookup = Callable[[str], str]

# Universal Loan Identifiers carry the 20-character LEI followed by the
# application number, whose first three digits are the branch number.
_ULI_BRANCH_SLICE = slice(20, 23)


def normalize_branch_number(value: object) -> str:
    return to_text(value)


def lookup_branch_name(branch_number: object) -> str:
    """Return the directory name for a branch number, or "" when it is unknown."""
    if is_blank(branch_number):
        return ""
    return BRANCH_DIRECTORY.get(normalize_branch_number(branch_number), "")


def branch_from_uli(uli: object) -> str:
    """Extract a known branch number from characters 21-23 of a ULI."""
    text = to_text(uli)
    if len(text) <= _ULI_BRANCH_SLICE.stop:
        return ""
    candidate = text[_ULI_BRANCH_SLICE]
    if _BRANCH_NUMBER.match(candidate) and candidate in BRANCH_DIRECTORY:
        return candidate
    return ""


def _normalize_officer_name(name: str) -> str:
    return " ".join(name.strip().lower().split())


def build_officer_lookup(officer_branches: Mapping[str, str] | None) -> OfficerBranchLookup:
    """Build a case- and whitespace-insensitive officer name to branch lookup."""
    table = {
        _normalize_officer_name(name): normalize_branch_number(branch)
        for name, branch in (officer_branches or {}).items()
        if not is_blank(name) and not is_blank(branch)
    }

    def _lookup(officer_name: str) -> str:
        if is_blank(officer_name):
            return ""
        return table.get(_normalize_officer_name(officer_name), "")

    return _lookup


def no_officer_lookup(officer_name: str) -> str:
    return ""
