"""Data models for dokumentovac."""

from .documents import DocumentPageResult, DocumentSubmission

__all__ = ["DocumentPageResult", "DocumentSubmission"]
