"""Path helpers and async file-system wrappers.

Path helpers are synchronous and never touch the disk (``get_relative_path``
aside, which resolves against the working directory). File-system wrappers
are coroutines that run the blocking call with ``asyncio.to_thread``.
``OSError`` from the file system is re-raised as ``OperationFailed``.
"""

import asyncio
import logging
import mimetypes
import os
import re
import shutil
import stat
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Literal, TypeVar

from friendlyfy.errors import InvalidInput, OperationFailed
from friendlyfy.numbers import format_file_size

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Checked before the platform's mimetypes registry
_MIME_TYPES = {
    # Images
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "bmp": "image/bmp",
    "ico": "image/x-icon",
    # Documents
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "ppt": "application/vnd.ms-powerpoint",
    "pptx": "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "txt": "text/plain",
    "rtf": "application/rtf",
    # Archives
    "zip": "application/zip",
    "rar": "application/x-rar-compressed",
    "7z": "application/x-7z-compressed",
    "tar": "application/x-tar",
    "gz": "application/gzip",
    # Audio
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "aac": "audio/aac",
    # Video
    "mp4": "video/mp4",
    "avi": "video/x-msvideo",
    "mov": "video/quicktime",
    "wmv": "video/x-ms-wmv",
    "flv": "video/x-flv",
    "webm": "video/webm",
    # Code
    "js": "application/javascript",
    "html": "text/html",
    "css": "text/css",
    "json": "application/json",
    "xml": "application/xml",
    "php": "application/x-httpd-php",
    "py": "text/x-python",
    "java": "text/x-java-source",
    "cpp": "text/x-c++src",
    "c": "text/x-csrc",
    "cs": "text/x-csharp",
    "go": "text/x-go",
    "rs": "text/x-rust",
    "rb": "text/x-ruby",
    "sh": "application/x-sh",
    "sql": "application/sql",
}

_DEFAULT_MIME = "application/octet-stream"


def _require_path(*paths: Any, what: str = "File path") -> None:
    for p in paths:
        if not isinstance(p, (str, os.PathLike)):
            raise InvalidInput(f"{what} must be a string, got {type(p).__name__!r}")


def _extension(filename: str) -> str:
    return os.path.splitext(os.path.basename(filename))[1]


def get_file_extension(filename: str) -> str:
    """Lowercase extension without the dot ("photo.JPG" -> "jpg")."""
    _require_path(filename, what="Filename")
    return _extension(os.fspath(filename))[1:].lower()


def get_filename_without_extension(filename: str) -> str:
    _require_path(filename, what="Filename")
    name = os.path.basename(os.fspath(filename))
    return os.path.splitext(name)[0]


def is_absolute_path(path: str) -> bool:
    _require_path(path)
    return os.path.isabs(path)


def normalize_path(path: str) -> str:
    _require_path(path)
    return os.path.normpath(path)


def join_paths(*paths: str) -> str:
    """Join and normalize path segments."""
    _require_path(*paths)
    if not paths:
        return "."
    return os.path.normpath(os.path.join(*paths))


def get_relative_path(start: str, target: str) -> str:
    _require_path(start, target, what="Paths")
    return os.path.relpath(target, start)


def get_dirname(path: str) -> str:
    _require_path(path)
    return os.path.dirname(os.fspath(path)) or "."


def get_basename(path: str, ext: str = "") -> str:
    """Final path component, minus ``ext`` when it is a proper suffix."""
    _require_path(path)
    name = os.path.basename(os.fspath(path).rstrip(os.sep)) or os.fspath(path)
    if ext and name.endswith(ext) and name != ext:
        return name[: -len(ext)]
    return name


def get_mime_type(filename: str) -> str:
    """Guess a MIME type from the extension, defaulting to octet-stream."""
    ext = get_file_extension(filename)
    if ext in _MIME_TYPES:
        return _MIME_TYPES[ext]
    guessed, _ = mimetypes.guess_type(f"file.{ext}") if ext else (None, None)
    return guessed or _DEFAULT_MIME


def sanitize_filename(
    filename: str,
    *,
    max_length: int = 255,
    replacement: str = "_",
    keep_extension: bool = True,
) -> str:
    """Make a filename safe to store on common file systems.

    Reserved characters become ``replacement``, control characters are
    dropped, leading and trailing dots and whitespace are trimmed, and the
    result is cut to ``max_length`` (keeping the extension if asked). An
    empty result becomes "file".
    """
    _require_path(filename, what="Filename")
    cleaned = re.sub(r'[<>:"/\\|?*]', replacement, filename)
    cleaned = re.sub(r"[\x00-\x1f\x80-\x9f]", "", cleaned)
    cleaned = re.sub(r"^[\s.]+|[\s.]+$", "", cleaned)

    if keep_extension:
        ext = _extension(cleaned)
        stem = cleaned[: len(cleaned) - len(ext)] if ext else cleaned
        room = max(max_length - len(ext), 0)
        if len(stem) > room:
            cleaned = stem[:room] + ext
    else:
        cleaned = cleaned[:max_length]

    return cleaned or "file"


@dataclass(frozen=True, kw_only=True)
class FileStats:
    size: int
    is_file: bool
    is_directory: bool
    is_symbolic_link: bool
    created_at: datetime
    modified_at: datetime
    accessed_at: datetime


@dataclass(frozen=True)
class DirEntryInfo:
    """A directory listing entry."""

    name: str
    is_file: bool
    is_directory: bool
    is_symbolic_link: bool


async def _run(action: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
    try:
        return await asyncio.to_thread(fn, *args, **kwargs)
    except OSError as e:
        logger.warning("Failed to %s: %s", action, e)
        raise OperationFailed(action, e.strerror or str(e)) from e


def _stat_or_none(path: str) -> os.stat_result | None:
    try:
        return os.stat(path)
    except (OSError, ValueError):
        return None


async def file_exists(path: str) -> bool:
    """True if anything exists at ``path``."""
    _require_path(path)
    return await asyncio.to_thread(os.path.exists, path)


async def dir_exists(path: str) -> bool:
    _require_path(path, what="Directory path")
    return await asyncio.to_thread(os.path.isdir, path)


async def is_file(path: str) -> bool:
    _require_path(path)
    result = await asyncio.to_thread(_stat_or_none, path)
    return result is not None and stat.S_ISREG(result.st_mode)


async def is_directory(path: str) -> bool:
    _require_path(path, what="Directory path")
    result = await asyncio.to_thread(_stat_or_none, path)
    return result is not None and stat.S_ISDIR(result.st_mode)


def _stats(path: str) -> FileStats:
    info = os.stat(path)
    link = os.lstat(path)

    def when(seconds: float) -> datetime:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)

    created = getattr(info, "st_birthtime", info.st_ctime)
    return FileStats(
        size=info.st_size,
        is_file=stat.S_ISREG(info.st_mode),
        is_directory=stat.S_ISDIR(info.st_mode),
        is_symbolic_link=stat.S_ISLNK(link.st_mode),
        created_at=when(created),
        modified_at=when(info.st_mtime),
        accessed_at=when(info.st_atime),
    )


async def get_file_stats(path: str) -> FileStats:
    _require_path(path)
    return await _run("get file stats", _stats, path)


def _read(path: str, encoding: str | None) -> str | bytes:
    if encoding is None:
        with open(path, "rb") as f:
            return f.read()
    with open(path, encoding=encoding) as f:
        return f.read()


async def read_file(path: str, *, encoding: str | None = "utf-8") -> str | bytes:
    """Read a whole file as text, or as bytes when ``encoding`` is None."""
    _require_path(path)
    logger.debug("Reading %s", path)
    return await _run("read file", _read, path, encoding)


_WRITE_FLAGS = {
    "w": os.O_WRONLY | os.O_CREAT | os.O_TRUNC,
    "a": os.O_WRONLY | os.O_CREAT | os.O_APPEND,
    "x": os.O_WRONLY | os.O_CREAT | os.O_EXCL,
}


def _write(path: str, data: bytes, flag: str, mode: int) -> None:
    fd = os.open(path, _WRITE_FLAGS[flag], mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)


async def write_file(
    path: str,
    content: str | bytes,
    *,
    encoding: str = "utf-8",
    mode: int = 0o666,
    flag: Literal["w", "a", "x"] = "w",
) -> None:
    """Write text or bytes.

    ``flag`` is "w" (truncate), "a" (append) or "x" (fail if the file
    exists). ``mode`` applies only when the file is created.
    """
    _require_path(path)
    if flag not in _WRITE_FLAGS:
        raise InvalidInput(f"Invalid flag '{flag}'. Valid flags: w, a, x")
    if isinstance(content, str):
        data = content.encode(encoding)
    elif isinstance(content, (bytes, bytearray)):
        data = bytes(content)
    else:
        raise InvalidInput(
            f"Content must be str or bytes, got {type(content).__name__!r}"
        )

    logger.debug("Writing %d bytes to %s", len(data), path)
    await _run("write file", _write, path, data, flag, mode)


def _mkdir(path: str, recursive: bool, mode: int) -> None:
    if recursive:
        os.makedirs(path, mode=mode, exist_ok=True)
    else:
        os.mkdir(path, mode)


async def create_dir(path: str, *, recursive: bool = True, mode: int = 0o755) -> None:
    """Create a directory; with ``recursive`` an existing one is fine."""
    _require_path(path, what="Directory path")
    logger.debug("Creating directory %s", path)
    await _run("create directory", _mkdir, path, recursive, mode)


async def delete_file(path: str) -> None:
    _require_path(path)
    logger.debug("Deleting %s", path)
    await _run("delete file", os.unlink, path)


async def delete_dir(path: str, *, recursive: bool = False) -> None:
    """Remove a directory; without ``recursive`` it must be empty."""
    _require_path(path, what="Directory path")
    logger.debug("Deleting directory %s (recursive=%s)", path, recursive)
    await _run("delete directory", shutil.rmtree if recursive else os.rmdir, path)


def _scan(path: str) -> list[DirEntryInfo]:
    with os.scandir(path) as entries:
        return [
            DirEntryInfo(
                name=entry.name,
                is_file=entry.is_file(),
                is_directory=entry.is_dir(),
                is_symbolic_link=entry.is_symlink(),
            )
            for entry in entries
        ]


async def list_dir(
    path: str, *, with_file_types: bool = False
) -> list[str] | list[DirEntryInfo]:
    """Sorted entry names, or ``DirEntryInfo`` records with ``with_file_types``."""
    _require_path(path, what="Directory path")
    entries = sorted(await _run("list directory", _scan, path), key=lambda e: e.name)
    if with_file_types:
        return entries
    return [entry.name for entry in entries]


def _copy(src: str, dest: str, overwrite: bool) -> None:
    if not overwrite and os.path.exists(dest):
        raise FileExistsError(17, "File exists", dest)
    shutil.copyfile(src, dest)


async def copy_file(src: str, dest: str, *, overwrite: bool = True) -> None:
    _require_path(src, dest, what="Source and destination paths")
    logger.debug("Copying %s to %s", src, dest)
    await _run("copy file", _copy, src, dest, overwrite)


async def move_file(src: str, dest: str) -> None:
    """Move or rename, across file systems if needed."""
    _require_path(src, dest, what="Source and destination paths")
    logger.debug("Moving %s to %s", src, dest)
    await _run("move file", shutil.move, src, dest)


async def get_file_size(path: str, *, binary: bool = False, precision: int = 2) -> str:
    """Human-readable size of a file ("1.50 KB")."""
    _require_path(path)
    info = await _run("get file size", os.stat, path)
    return format_file_size(info.st_size, precision=precision, binary=binary)
