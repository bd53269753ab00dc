"""
Blob Storage Models

Pydantic models for the items handed back to callers, plus the tagged
content variants accepted by `save` and the batch result returned by
`get` and `remove`.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, TypeVar, Union
from pydantic import BaseModel, Field

T = TypeVar("T")


class BlobItem(BaseModel):
    """One stored blob as exposed to callers."""

    name: str = Field(..., description="Blob name (without path)")
    path: str = Field(..., description="Full path to the blob inside the container")

    # Present only when returned from `get`
    data: Any = Field(default=None, description="Decoded content, or the parsed JSON value")
    encoding: Optional[str] = Field(default=None, description="Encoding label from the data URL")
    type: Optional[str] = Field(default=None, description="MIME type from the data URL")
    extension: Optional[str] = Field(default=None, description="File extension of the blob name")

    # Pass-through listing properties
    blob_type: Optional[str] = None
    created_on: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    last_accessed_on: Optional[datetime] = None
    size: Optional[int] = None
    content_type: Optional[str] = None
    metadata: Optional[Dict[str, str]] = None


class DataUrl(BaseModel):
    """Parsed `data:<type>;<encoding>,<payload>` string."""

    type: str
    encoding: str
    data: str

    def to_string(self) -> str:
        return f"data:{self.type};{self.encoding},{self.data}"


class TextContent(BaseModel):
    """Content uploaded verbatim."""

    text: str


class StructuredContent(BaseModel):
    """Content serialised to JSON and wrapped in an application/json data URL."""

    value: Any


BlobContent = Union[TextContent, StructuredContent]


@dataclass
class BlobFailure:
    """A single blob that could not be downloaded, decoded or deleted."""

    path: str
    error: str
    error_code: Optional[str] = None


@dataclass(eq=False)
class BatchResult(Sequence[T]):
    """
    Successful items of a batch operation together with per-item failures.

    Behaves as a read-only sequence of the successful items, so callers that
    only care about what succeeded can treat it as a list, including
    comparing it with one.
    """

    items: List[T] = field(default_factory=list)
    failures: List[BlobFailure] = field(default_factory=list)

    def __getitem__(self, index):
        return self.items[index]

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other):
        if isinstance(other, BatchResult):
            return self.items == other.items and self.failures == other.failures
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return list(self.items) == list(other)
        return NotImplemented

    __hash__ = None

    @property
    def ok(self) -> bool:
        return not self.failures
