"""External collaborators: identity provider client and upload storage."""

from label_cms.services.base import APIError, BaseAPIClient
from label_cms.services.oauth import OAuthClient, get_oauth_client
from label_cms.services.storage import LocalFileStorage, UploadKind, get_file_storage

__all__ = [
    "APIError",
    "BaseAPIClient",
    "OAuthClient",
    "get_oauth_client",
    "LocalFileStorage",
    "UploadKind",
    "get_file_storage",
]
