"""
Icon name normalization and codepoint assignment.

Responsibilities:
- category + resource filtering
- display name -> camelCase identifier
- collision suffixing
- codepoint assignment in encounter order
- deterministic, locale-aware output ordering
"""

from __future__ import annotations

import keyword
import logging
from typing import Iterable, List, Optional, Set, Tuple

from .models import AssetRecord, AssignmentResult, NormalizedIcon, RecordFailure
from .rules import BASE_CODEPOINT, CATEGORY_PREFIX, IDENTIFIER_PATTERN, MAX_CODEPOINT, UNSAFE_CHARS

logger = logging.getLogger(__name__)


class IconNameError(ValueError):
    """A single asset record could not be turned into an icon."""


def qualifies(record: AssetRecord, category_prefix: str = CATEGORY_PREFIX) -> bool:
    if record.resource_url is None:
        return False
    return record.origin_path is not None and record.origin_path.startswith(category_prefix)


def normalize_name(display_name: Optional[str]) -> str:
    """
    Turn a display name into a camelCase identifier candidate.

    Rules:
    - Lower-case the whole name.
    - Every char outside [a-zA-Z0-9 ] becomes one space.
    - Split on single spaces, upper-case the first char of each token, join.
    - Lower-case the first char of the joined result.

    The result is not validated; "3D Box" yields "3dBox" and "***" yields "".
    """
    if display_name is None:
        raise IconNameError("asset has no display name")

    name = UNSAFE_CHARS.sub(" ", display_name.lower())
    name = "".join(word[:1].upper() + word[1:] for word in name.split(" "))
    return name[:1].lower() + name[1:]


def _unavailable(name: str, taken: Set[str]) -> bool:
    # Python keywords can't be constant names in the generated icons.py
    return name in taken or keyword.iskeyword(name)


def resolve_collision(base: str, taken: Set[str]) -> str:
    """
    Return `base`, or `base1`, `base2`, ... whichever is first free.

    A name is free when it is not in `taken` and is not a Python keyword,
    so "import" becomes "import1".
    """
    if not _unavailable(base, taken):
        return base
    dup = 1
    while _unavailable(f"{base}{dup}", taken):
        dup += 1
    return f"{base}{dup}"


def collation_key(identifier: str) -> Tuple[str, str]:
    # case-insensitive first, lower-case before upper-case on ties
    return identifier.casefold(), identifier.swapcase()


def _assign_one(record: AssetRecord, taken: Set[str], codepoint: int) -> NormalizedIcon:
    if codepoint > MAX_CODEPOINT:
        raise IconNameError(f"no codepoint left after 0x{MAX_CODEPOINT:X}")

    base = normalize_name(record.display_name)
    if not IDENTIFIER_PATTERN.match(base):
        raise IconNameError(f"name normalizes to invalid identifier {base!r}")

    identifier = resolve_collision(base, taken)
    return NormalizedIcon(identifier=identifier, resource_url=record.resource_url, codepoint=codepoint)


def assign_icons(
    records: Iterable[AssetRecord],
    category_prefix: str = CATEGORY_PREFIX,
    base_codepoint: int = BASE_CODEPOINT,
) -> AssignmentResult:
    """
    Build the icon set for one export run.

    Codepoints are handed out in the order records are encountered, starting at
    `base_codepoint`. A record that fails is logged, reported and skipped; it
    does not consume a codepoint. The returned icons are sorted by identifier.
    """
    qualifying = [r for r in records if qualifies(r, category_prefix)]

    taken: Set[str] = set()
    codepoint = base_codepoint
    icons: List[NormalizedIcon] = []
    failures: List[RecordFailure] = []

    for i, record in enumerate(qualifying):
        try:
            icon = _assign_one(record, taken, codepoint)
        except Exception as e:
            logger.warning(f"Skipping asset {record.display_name!r}: {e}")
            failures.append(RecordFailure(index=i, display_name=record.display_name, issue=str(e)))
            continue

        taken.add(icon.identifier)
        icons.append(icon)
        codepoint += 1

    if not qualifying:
        logger.warning(f"No assets found under {category_prefix!r}; exporting an empty icon set")

    icons.sort(key=lambda icon: collation_key(icon.identifier))
    logger.info(f"Assigned {len(icons)} icons ({len(failures)} skipped) from {len(qualifying)} qualifying assets")

    return AssignmentResult(icons=icons, failures=failures, qualifying=len(qualifying))
