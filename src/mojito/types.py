"""File extensions mapped to MIME types.

The first entry of each tuple is the one to send in ``Content-Type``;
the rest are aliases seen in ``Accept`` headers. Extensions not listed
here fall back to :mod:`mimetypes`.
"""

import mimetypes
from pathlib import PurePosixPath

TYPES: dict[str, tuple[str, ...]] = {
    "appcache": ("text/cache-manifest",),
    "atom": ("application/atom+xml",),
    "bin": ("application/octet-stream",),
    "css": ("text/css",),
    "gif": ("image/gif",),
    "gz": ("application/x-gzip",),
    "htm": ("text/html",),
    "html": ("text/html;charset=UTF-8",),
    "ico": ("image/x-icon",),
    "jpeg": ("image/jpeg",),
    "jpg": ("image/jpeg",),
    "js": ("application/javascript",),
    "json": ("application/json;charset=UTF-8",),
    "mp3": ("audio/mpeg",),
    "mp4": ("video/mp4",),
    "ogg": ("audio/ogg",),
    "ogv": ("video/ogg",),
    "pdf": ("application/pdf",),
    "png": ("image/png",),
    "rss": ("application/rss+xml",),
    "svg": ("image/svg+xml",),
    "ttf": ("font/ttf",),
    "txt": ("text/plain;charset=UTF-8",),
    "webm": ("video/webm",),
    "woff": ("font/woff",),
    "woff2": ("font/woff2",),
    "xml": ("application/xml", "text/xml"),
    "zip": ("application/zip",),
}

DEFAULT_TYPE = "application/octet-stream"


def content_type_for(name: str) -> str:
    """Content-Type for a file name, by extension."""
    ext = PurePosixPath(name).suffix.lstrip(".").lower()
    if ext in TYPES:
        return TYPES[ext][0]
    guessed, _ = mimetypes.guess_type(name)
    return guessed or DEFAULT_TYPE
