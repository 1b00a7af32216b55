"""Parse a module's metadata.md file.

Format (markers are case-insensitive, values run until the next "@marker"
or the end of the file):

    @descrição: Build a REST API from scratch.
    Covers routing and persistence.
    @link desafio: https://example.com/challenge

A marker starts a line or follows whitespace, so addresses such as
team@example.com stay inside the value.
"""

import re

from .types import ModuleMetadata

METADATA_FILENAME = "metadata.md"

_VALUE_END = r"(?=(?:^|(?<=\s))@\w|\Z)"

_DESCRIPTION_RE = re.compile(
    r"@descri[çc][ãa]o\s*:?(.*?)" + _VALUE_END, re.IGNORECASE | re.DOTALL | re.MULTILINE
)
_CHALLENGE_RE = re.compile(
    r"@link\s+desafio\s*:(.*?)" + _VALUE_END, re.IGNORECASE | re.DOTALL | re.MULTILINE
)


def _extract(pattern: re.Pattern, text: str) -> str | None:
    match = pattern.search(text)
    if not match:
        return None
    return match.group(1).strip()


def parse_module_metadata(text: str | None) -> ModuleMetadata:
    """Extract description and challenge link; missing markers give None."""
    if not text:
        return ModuleMetadata()
    return ModuleMetadata(
        description=_extract(_DESCRIPTION_RE, text),
        challenge_url=_extract(_CHALLENGE_RE, text),
    )


def is_metadata_file(name: str) -> bool:
    return name.strip().lower() == METADATA_FILENAME
