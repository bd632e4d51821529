"""Upload service layer: per-category validation, storage, deletion and health."""

import logging
import os
import re
import shutil
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from fastapi import UploadFile

from intern_admin.config import settings
from intern_admin.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)

IMAGE_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp")
DOCUMENT_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)

_PREFIX_RE = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class UploadRule:
    subdir: str
    prefix: str
    mime_types: tuple
    size_setting: str
    type_message: str

    @property
    def max_size(self) -> int:
        return int(getattr(settings, self.size_setting))


UPLOAD_RULES = {
    "photo": UploadRule(
        subdir="photos",
        prefix="photo",
        mime_types=IMAGE_MIME_TYPES,
        size_setting="MAX_IMAGE_SIZE",
        type_message="Only image files (JPEG, JPG, PNG, GIF, WebP) are allowed for photos",
    ),
    "document": UploadRule(
        subdir="documents",
        prefix="document",
        mime_types=DOCUMENT_MIME_TYPES,
        size_setting="MAX_DOCUMENT_SIZE",
        type_message="Only JPG, PNG, PDF or DOC/DOCX files are allowed",
    ),
    "payment": UploadRule(
        subdir="payments",
        prefix="payment",
        mime_types=IMAGE_MIME_TYPES,
        size_setting="MAX_IMAGE_SIZE",
        type_message="Only image files are allowed for payment proofs",
    ),
}


def _upload_root() -> Path:
    return Path(settings.UPLOAD_DIR).resolve()


def ensure_upload_dirs():
    for rule in UPLOAD_RULES.values():
        os.makedirs(_upload_root() / rule.subdir, exist_ok=True)


def _safe_prefix(value: str | None, fallback: str) -> str:
    text = _PREFIX_RE.sub("", str(value or "").strip())
    return text or fallback


def _public_path(subdir: str, filename: str) -> str:
    return f"/uploads/{subdir}/{filename}"


async def save_upload(file: UploadFile, category: str, prefix: str | None = None) -> dict:
    rule = UPLOAD_RULES[category]
    if file is None or not file.filename:
        raise InvalidInputError("No file was uploaded")

    mime_type = (file.content_type or "").lower()
    if mime_type not in rule.mime_types:
        raise InvalidInputError(rule.type_message)

    content = await file.read()
    if len(content) > rule.max_size:
        limit_mb = rule.max_size // (1024 * 1024)
        raise InvalidInputError(f"File is too large. Maximum size is {limit_mb} MB")

    folder = _upload_root() / rule.subdir
    os.makedirs(folder, exist_ok=True)

    ext = Path(file.filename).suffix.lower()
    filename = f"{_safe_prefix(prefix, rule.prefix)}-{uuid.uuid4().hex}{ext}"
    with open(folder / filename, "wb") as f:
        f.write(content)

    file_path = _public_path(rule.subdir, filename)
    logger.info("[uploads] saved %s (%s bytes)", file_path, len(content))
    return {
        "file_path": file_path,
        "file_name": filename,
        "original_name": file.filename,
        "file_size": len(content),
        "mime_type": mime_type,
        "full_url": f"{settings.PUBLIC_BASE_URL.rstrip('/')}{file_path}",
    }


async def save_many(files: List[UploadFile], category: str = "document") -> List[dict]:
    if not files:
        raise InvalidInputError("No file was uploaded")
    if len(files) > settings.MAX_MULTIPLE_FILES:
        raise InvalidInputError(f"Too many files. Maximum is {settings.MAX_MULTIPLE_FILES}")

    saved: List[dict] = []
    try:
        for file in files:
            saved.append(await save_upload(file, category))
    except InvalidInputError:
        for item in saved:
            _remove_quietly(resolve_upload_path(item["file_path"]))
        raise
    return saved


def resolve_upload_path(file_path: str) -> Path:
    """Map a public ``/uploads/...`` path to a file inside the uploads root.

    Paths that do not start with ``/uploads/`` or that escape the root are
    rejected.
    """
    text = str(file_path or "").strip()
    if not text.startswith("/uploads/"):
        raise InvalidInputError("Invalid file path")

    root = _upload_root()
    target = (root / text[len("/uploads/"):]).resolve()
    if target == root or root not in target.parents:
        raise InvalidInputError("Invalid file path")
    return target


def delete_upload(file_path: str | None):
    if not file_path:
        raise InvalidInputError("File path is required")
    target = resolve_upload_path(file_path)
    if not target.is_file():
        raise NotFoundError("File not found")
    target.unlink()
    logger.info("[uploads] deleted %s", file_path)


def _remove_quietly(path: Path):
    try:
        path.unlink()
    except FileNotFoundError:
        pass


def _is_writable(directory: Path) -> bool:
    probe = directory / f".probe-{uuid.uuid4().hex}.tmp"
    try:
        probe.write_text("ok")
        probe.unlink()
    except OSError as exc:
        logger.warning("[uploads] %s is not writable: %s", directory, exc)
        return False
    return True


def _disk_space(root: Path) -> dict | None:
    try:
        usage = shutil.disk_usage(root)
    except OSError as exc:
        logger.warning("[uploads] disk usage unavailable for %s: %s", root, exc)
        return None
    gib = 1024 ** 3
    return {"free": usage.free / gib, "total": usage.total / gib, "used": usage.used / gib}


def get_health() -> dict:
    root = _upload_root()
    subdirectories = {}
    for rule in UPLOAD_RULES.values():
        directory = root / rule.subdir
        exists = directory.is_dir()
        subdirectories[rule.subdir] = {
            "exists": exists,
            "writable": exists and _is_writable(directory),
        }

    uploads_dir = root.is_dir()
    return {
        "healthy": uploads_dir and all(d["exists"] and d["writable"] for d in subdirectories.values()),
        "uploads_dir": uploads_dir,
        "subdirectories": subdirectories,
        "total_space": _disk_space(root) if uploads_dir else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
