"""
Object storage for YouthConnect.

Files live in an S3-compatible store (MinIO), routed into buckets by
content type.
"""

from .buckets import (
    AUDIO,
    BUCKETS,
    DOCUMENTS,
    IMAGES,
    TEMP,
    UPLOADS,
    VIDEOS,
    bucket_for_content_type,
    generate_object_key,
)
from .service import StorageService, create_s3_client

__all__ = [
    "AUDIO",
    "BUCKETS",
    "DOCUMENTS",
    "IMAGES",
    "StorageService",
    "TEMP",
    "UPLOADS",
    "VIDEOS",
    "bucket_for_content_type",
    "create_s3_client",
    "generate_object_key",
]
