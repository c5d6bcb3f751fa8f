"""Validation of uploaded markdown files."""

from pathlib import Path

from mdtree.config import Settings


class UploadError(Exception):
    """An upload was rejected before reaching the converter."""

    status_code = 400


class InvalidUploadError(UploadError):
    """The file is not a markdown or plain-text file."""


class UploadTooLargeError(UploadError):
    """The file exceeds the configured size limit."""

    status_code = 413


def check_file_type(filename: str | None, content_type: str | None, settings: Settings) -> None:
    """Accept allowed extensions or allowed MIME types.

    Raises:
        InvalidUploadError: if neither matches.
    """
    suffix = Path(filename or "").suffix.lower()
    mime = (content_type or "").split(";", 1)[0].strip().lower()
    if suffix in settings.allowed_extensions or mime in settings.allowed_content_types:
        return
    allowed = ", ".join(settings.allowed_extensions)
    raise InvalidUploadError(f"Invalid file type. Only {allowed} files are allowed.")


def check_file_size(size: int, settings: Settings) -> None:
    """Raises UploadTooLargeError when size exceeds max_upload_bytes."""
    if size > settings.max_upload_bytes:
        raise UploadTooLargeError(
            f"File too large ({size} bytes, limit {settings.max_upload_bytes} bytes)"
        )


def decode_upload(data: bytes) -> str:
    """Decode as UTF-8 (BOM tolerated); undecodable bytes are replaced."""
    return data.decode("utf-8-sig", errors="replace")
