"""Services: the remote document service client and the credential provider."""

from .credentials import CredentialProvider
from .document_service import DocumentServiceClient
from .downloads import FileSaver

__all__ = ["CredentialProvider", "DocumentServiceClient", "FileSaver"]
