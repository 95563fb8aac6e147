"""
content/uploads.py -- Local-disk storage for uploaded resume files.

Files land in <UPLOAD_DIR>/resumes/ under a generated name
(admin-resume-<unix-ms>-<random>.pdf). The client-supplied filename is never
used on disk, so path traversal through the upload name is impossible.
api/main.py mounts UPLOAD_DIR at /uploads, which makes the returned URL
directly servable.

Validation (type and size) happens in the route. This module only writes.
"""

import logging
import secrets
import time
from pathlib import Path

from core.config import get_settings

logger = logging.getLogger("portfolio.uploads")

RESUME_SUBDIR = "resumes"
UPLOAD_URL_PREFIX = "/uploads"

PDF_MAGIC = b"%PDF-"


def looks_like_pdf(data: bytes) -> bool:
    """Return True if data starts with the PDF file signature."""
    return data.startswith(PDF_MAGIC)


def save_resume(data: bytes) -> str:
    """Write a resume PDF to disk and return its public URL."""
    settings = get_settings()
    target_dir = Path(settings.upload_dir) / RESUME_SUBDIR
    target_dir.mkdir(parents=True, exist_ok=True)

    filename = f"admin-resume-{int(time.time() * 1000)}-{secrets.token_hex(4)}.pdf"
    path = target_dir / filename
    path.write_bytes(data)
    logger.info("Stored resume upload %s (%d bytes)", path, len(data))

    return f"{settings.public_base_url.rstrip('/')}{UPLOAD_URL_PREFIX}/{RESUME_SUBDIR}/{filename}"
