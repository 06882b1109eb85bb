"""
URL-path API versioning.

Every router is mounted under ``/api/<version>``; the version is read back
from the path for request logs.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Request

from .. import __version__


class APIVersion(str, Enum):
    """Published API versions."""

    V1 = "v1"


# Router prefixes mounted under each version
VERSIONED_RESOURCES = ("recommendations", "discovery", "analytics", "storage")


class VersionedAPIRouter(APIRouter):
    """APIRouter whose prefix starts with ``/api/<version>``."""

    def __init__(
        self,
        version: APIVersion = APIVersion.V1,
        prefix: str = "",
        tags: Optional[List[Union[str, Enum]]] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            prefix=f"/api/{version.value}{prefix}", tags=tags or [], **kwargs
        )
        self.version = version


def get_api_version(request: Request) -> APIVersion:
    """
    Version addressed by a request path.

    Paths outside ``/api/<version>`` (docs, ``/api/version``) and unknown
    versions report the current version.
    """
    parts = request.url.path.strip("/").split("/")
    if len(parts) >= 2 and parts[0] == "api":
        try:
            return APIVersion(parts[1])
        except ValueError:
            pass
    return APIVersion.V1


def get_version_info() -> Dict[str, Any]:
    """Payload of ``GET /api/version``."""
    current = APIVersion.V1.value
    return {
        "service_version": __version__,
        "current_version": current,
        "supported_versions": [version.value for version in APIVersion],
        "deprecated_versions": [],
        "versioning_strategy": "URL path versioning",
        "resources": [f"/api/{current}/{name}" for name in VERSIONED_RESOURCES],
    }


def create_versioned_router(
    version: APIVersion = APIVersion.V1,
    prefix: str = "",
    tags: Optional[List[Union[str, Enum]]] = None,
    **kwargs: Any,
) -> VersionedAPIRouter:
    return VersionedAPIRouter(version=version, prefix=prefix, tags=tags, **kwargs)
