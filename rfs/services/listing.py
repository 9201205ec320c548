"""Paginated HTML listing of the current snapshot."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from html import escape
from typing import Sequence

from rfs.schemas.files import FileEntry
from rfs.utils.formatting import format_count, format_size

PAGE_SIZE = 20

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width, initial-scale=1" />
<title>Random File Server</title>
<style>
body { font-family: sans-serif; margin: 1rem; background: #111; color: #ddd; }
a { color: #8cf; }
.info { margin-bottom: 1rem; }
.paginator a { display: inline-block; padding: 0.2rem 0.5rem; margin: 0.1rem; border: 1px solid #444; text-decoration: none; }
.paginator a.current { background: #8cf; color: #111; }
.files { display: flex; flex-wrap: wrap; gap: 1rem; margin: 1rem 0; }
.file { width: 240px; overflow: hidden; word-break: break-all; }
.file img, .file video, .file audio { display: block; width: 100%; min-height: 1rem; }
</style>
</head>
<body>
<div class="info">{info_element}</div>
<div class="paginator">{paginator_elements}</div>
<div class="files">{file_elements}</div>
<div class="paginator">{paginator_elements}</div>
</body>
</html>
"""


def total_pages_for(total_files: int) -> int:
    return math.ceil(total_files / PAGE_SIZE)


@dataclass(frozen=True)
class Listing:
    """One page of the file listing plus totals for the whole snapshot."""
    files: tuple[FileEntry, ...]
    total_files: int
    total_size: int
    total_pages: int
    page: int

    @classmethod
    def build(cls, snapshot: Sequence[FileEntry], page: int) -> "Listing":
        """Slice out ``page`` (clamped to >= 1; past the end is empty)."""
        page = max(page, 1)
        start = (page - 1) * PAGE_SIZE
        return cls(
            files=tuple(snapshot[start:start + PAGE_SIZE]),
            total_files=len(snapshot),
            total_size=sum(entry.size for entry in snapshot),
            total_pages=total_pages_for(len(snapshot)),
            page=page,
        )


def _lossy(value: str) -> str:
    """Replace undecodable filename bytes with U+FFFD so the page can be encoded."""
    return os.fsencode(value).decode("utf-8", "replace")


def _file_element(entry: FileEntry) -> str:
    href = escape("/" + _lossy(entry.path))
    elements = f'<a href="{href}" target="_blank">{escape(_lossy(entry.name))}</a>'

    kind = entry.media_kind
    if kind in ("audio", "video"):
        elements += f'<{kind} src="{href}" controls></{kind}>'
    elif kind == "image":
        elements += f'<img src="{href}" />'
    else:
        elements += "<img />"

    elements += f"<div>{escape(entry.content_type)} - {format_size(entry.size)}</div>"
    return f'<div class="file">{elements}</div>'


def render_listing(listing: Listing) -> str:
    """Render the listing page as a full HTML document."""
    info_element = (
        f"<div>{format_count(listing.total_files)} total files - "
        f"{format_size(listing.total_size)}</div>"
    )

    paginator = []
    for page in range(1, listing.total_pages + 1):
        if page == listing.page:
            paginator.append(f'<a class="current">{page}</a>')
        else:
            paginator.append(f'<a href="?page={page}">{page}</a>')

    file_elements = "".join(_file_element(entry) for entry in listing.files)

    return (
        _PAGE_TEMPLATE
        .replace("{info_element}", info_element)
        .replace("{paginator_elements}", "".join(paginator))
        .replace("{file_elements}", file_elements)
    )
