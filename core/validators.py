"""
Core Validators - Upload validation, storage naming and money amounts.

This module provides:
- File upload validators (size, extension, declared and detected MIME type)
- Batch validation for multipart uploads
- Randomized storage filenames for uploaded attachments
- Money amount parsing bounded to the precision of the amount columns

Usage:
    from core.validators import validate_file_upload, validate_upload_batch

    is_valid, error = validate_file_upload(upload, file_type='application')
    validate_upload_batch(request.FILES.getlist('attachments'), file_type='application')
"""

import logging
import os
import secrets
import time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional, Set, Tuple

import magic
from django.conf import settings

from .exceptions import InvalidInputError

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('security.validators')


# =============================================================================
# FILE UPLOAD VALIDATION
# =============================================================================

# Maximum file sizes by type (in bytes)
MAX_FILE_SIZES = {
    'application': 5 * 1024 * 1024,   # 5MB
    'project': 10 * 1024 * 1024,      # 10MB
    'default': 10 * 1024 * 1024,      # 10MB
}

# Allowed MIME types by category
ALLOWED_MIME_TYPES = {
    'application': {
        'application/pdf',
        'application/msword',
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
        'application/vnd.ms-powerpoint',
        'application/vnd.openxmlformats-officedocument.presentationml.presentation',
        'image/jpeg',
        'image/png',
    },
    'project': {
        'application/pdf',
        'application/msword',
        'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
        'application/vnd.ms-powerpoint',
        'application/vnd.openxmlformats-officedocument.presentationml.presentation',
        'image/jpeg',
        'image/png',
        'image/gif',
        'text/plain',
    },
}

# Allowed extensions by category
ALLOWED_EXTENSIONS = {
    'application': {'.pdf', '.doc', '.docx', '.ppt', '.pptx', '.jpg', '.jpeg', '.png'},
    'project': {'.pdf', '.doc', '.docx', '.ppt', '.pptx', '.jpg', '.jpeg', '.png', '.gif', '.txt'},
}

# Maximum number of files per upload batch
MAX_FILES_PER_UPLOAD = 5

INVALID_TYPE_MESSAGE = 'Invalid file type. Only PDF, Word, PowerPoint, and image files are allowed.'


# Office formats are containers; libmagic may report the container type
# instead of the document type, depending on its version.
CONTAINER_MIME_TYPES = {
    '.docx': {'application/zip'},
    '.pptx': {'application/zip'},
    '.doc': {'application/CDFV2', 'application/x-ole-storage'},
    '.ppt': {'application/CDFV2', 'application/x-ole-storage'},
}

# Bytes read from the head of a file for content detection
SNIFF_BYTES = 2048


def detect_content_type(file) -> str:
    """Detect the MIME type of an upload from its leading bytes."""
    head = file.read(SNIFF_BYTES)
    file.seek(0)
    return magic.from_buffer(head, mime=True)


def validate_file_upload(
    file,
    file_type: str = 'application',
    max_size: Optional[int] = None,
    allowed_extensions: Optional[Set[str]] = None,
    allowed_mime_types: Optional[Set[str]] = None,
) -> Tuple[bool, Optional[str]]:
    """
    Validate an uploaded file.

    Checks:
    - File size
    - File extension
    - Declared MIME type
    - MIME type detected from the file content

    Args:
        file: The uploaded file object
        file_type: Type category ('application', 'project')
        max_size: Maximum file size in bytes (overrides default)
        allowed_extensions: Set of allowed extensions (overrides default)
        allowed_mime_types: Set of allowed MIME types (overrides default)

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not file:
        return True, None

    if max_size is None:
        max_size = MAX_FILE_SIZES.get(file_type, MAX_FILE_SIZES['default'])
    if allowed_extensions is None:
        allowed_extensions = ALLOWED_EXTENSIONS.get(file_type, set())
    if allowed_mime_types is None:
        allowed_mime_types = ALLOWED_MIME_TYPES.get(file_type, set())

    if file.size > max_size:
        return False, f"File size exceeds maximum of {max_size / (1024 * 1024):.1f}MB"

    filename = getattr(file, 'name', '') or ''
    ext = os.path.splitext(filename.lower())[1]
    if allowed_extensions and ext not in allowed_extensions:
        return False, INVALID_TYPE_MESSAGE

    declared = getattr(file, 'content_type', None)
    if allowed_mime_types and declared not in allowed_mime_types:
        security_logger.warning(f"UPLOAD_REJECTED: name={filename} declared={declared}")
        return False, INVALID_TYPE_MESSAGE

    if allowed_mime_types:
        detected = detect_content_type(file)
        accepted = allowed_mime_types | CONTAINER_MIME_TYPES.get(ext, set())
        if detected not in accepted:
            security_logger.warning(
                f"FILE_TYPE_MISMATCH: name={filename} declared={declared} detected={detected}"
            )
            return False, INVALID_TYPE_MESSAGE

    return True, None


def validate_upload_batch(
    files: Iterable,
    file_type: str = 'application',
    max_files: int = MAX_FILES_PER_UPLOAD,
    max_size: Optional[int] = None,
) -> list:
    """
    Validate every file of a multipart upload.

    Raises:
        InvalidInputError: on the first invalid file or when too many files
            are attached.

    Returns:
        The files as a list.
    """
    files = [f for f in files if f]
    if len(files) > max_files:
        raise InvalidInputError(
            f"A maximum of {max_files} attachments is allowed",
            field='attachments'
        )

    for upload in files:
        is_valid, error = validate_file_upload(upload, file_type=file_type, max_size=max_size)
        if not is_valid:
            raise InvalidInputError(error, field='attachments')

    return files


def randomized_filename(original_name: str, fieldname: str = 'attachments') -> str:
    """
    Build a collision-resistant storage name.

    Format: ``<fieldname>-<epoch millis>-<random>.<ext>``
    """
    ext = os.path.splitext(original_name)[1].lower()
    unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}"
    return f"{fieldname}-{unique_suffix}{ext}"


def application_upload_to(instance, filename: str) -> str:
    """``upload_to`` callable placing application files in the configured directory."""
    upload_dir = getattr(settings, 'APPLICATION_UPLOAD_DIR', 'uploads/applications')
    return f"{upload_dir}/{randomized_filename(filename)}"


def project_upload_to(instance, filename: str) -> str:
    """``upload_to`` callable placing project files in the configured directory."""
    upload_dir = getattr(settings, 'PROJECT_UPLOAD_DIR', 'uploads/projects')
    return f"{upload_dir}/{randomized_filename(filename)}"


# =============================================================================
# MONEY AMOUNTS
# =============================================================================

CENTS = Decimal('0.01')

# Budgets are stored as DecimalField(max_digits=12, decimal_places=2)
AMOUNT_MAX_DIGITS = 12
AMOUNT_DECIMAL_PLACES = 2
AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_MAX_DIGITS - AMOUNT_DECIMAL_PLACES)


def parse_amount(value, field: str, label: str) -> Decimal:
    """
    Parse a money amount from request input.

    Args:
        value: The raw value (string, number or Decimal)
        field: Field name reported with the error
        label: Human readable name used in error messages

    Returns:
        The amount rounded to cents

    Raises:
        InvalidInputError: not a finite number, negative, or too large for
            the amount columns
    """
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(f"{label} must be a number", field=field)

    if not amount.is_finite():
        raise InvalidInputError(f"{label} must be a number", field=field)
    if amount < 0:
        raise InvalidInputError(f"{label} must not be negative", field=field)

    if amount < AMOUNT_LIMIT:
        amount = amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    if amount >= AMOUNT_LIMIT:
        raise InvalidInputError(f"{label} must be less than {AMOUNT_LIMIT:,.0f}", field=field)
    return amount
