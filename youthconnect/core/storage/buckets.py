"""Bucket layout and object naming for uploaded files."""

import re
import secrets
import string
import time
from typing import Optional, Tuple

UPLOADS = "uploads"
DOCUMENTS = "documents"
IMAGES = "images"
VIDEOS = "videos"
AUDIO = "audio"
TEMP = "temp"

BUCKETS: Tuple[str, ...] = (UPLOADS, DOCUMENTS, IMAGES, VIDEOS, AUDIO, TEMP)

# First matching prefix wins.
CONTENT_TYPE_BUCKETS: Tuple[Tuple[str, str], ...] = (
    ("image/", IMAGES),
    ("video/", VIDEOS),
    ("audio/", AUDIO),
    ("application/pdf", DOCUMENTS),
    ("application/msword", DOCUMENTS),
    ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", DOCUMENTS),
    ("application/vnd.ms-excel", DOCUMENTS),
    ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", DOCUMENTS),
    ("application/vnd.ms-powerpoint", DOCUMENTS),
    ("application/vnd.openxmlformats-officedocument.presentationml.presentation", DOCUMENTS),
    ("text/", DOCUMENTS),
    ("application/", DOCUMENTS),
)

_KEY_ALPHABET = string.ascii_lowercase + string.digits

_SAFE_EXTENSION = re.compile(r"[A-Za-z0-9]{1,10}")
FALLBACK_EXTENSION = "bin"


def bucket_for_content_type(content_type: Optional[str]) -> str:
    """Pick the bucket a file of the given MIME type is stored in."""
    normalized = (content_type or "").strip().lower()
    for prefix, bucket in CONTENT_TYPE_BUCKETS:
        if normalized.startswith(prefix):
            return bucket
    return UPLOADS


def file_extension(filename: str) -> str:
    """
    Text after the last dot, or the whole name when there is no dot.

    Anything but 1 to 10 letters or digits becomes ``bin``, so client
    filenames never put slashes or dots into object keys.
    """
    candidate = filename.rsplit(".", 1)[-1] if filename else ""
    if _SAFE_EXTENSION.fullmatch(candidate):
        return candidate
    return FALLBACK_EXTENSION


def generate_object_key(filename: str, now_ms: Optional[int] = None) -> str:
    """
    Build a unique object key that keeps the file's extension.

    Keys look like ``1718000000000-k3j9x0q2m1abc.pdf``: the upload time in
    epoch milliseconds, 13 random base-36 characters and the extension.
    """
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_KEY_ALPHABET) for _ in range(13))
    return f"{timestamp}-{suffix}.{file_extension(filename)}"


def public_read_policy(bucket: str) -> dict:
    """Bucket policy that lets anyone GET objects."""
    return {
        "Version": "2012-10-17",
        "Statement": [
            {
                "Effect": "Allow",
                "Principal": {"AWS": ["*"]},
                "Action": ["s3:GetObject"],
                "Resource": [f"arn:aws:s3:::{bucket}/*"],
            }
        ],
    }
