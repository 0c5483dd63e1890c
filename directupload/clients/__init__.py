"""
HTTP clients for the two phases of a direct upload.
"""
from directupload.clients.presign_client import PresignClient
from directupload.clients.storage_client import StorageClient

__all__ = ["PresignClient", "StorageClient"]
