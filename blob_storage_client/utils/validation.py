import posixpath
from typing import Any, Optional
from ..exceptions import ValidationException
from ..models import BlobContent, StructuredContent, TextContent

UNALLOWED_PATH_CHARACTERS = ["\\", ":", "*", "?", '"', "<", ">", "|"]

# Reserved path meaning "every blob in the container"
ALL_BLOBS = "*"


def require_path(path: Optional[str], action: str) -> str:
    if not path:
        raise ValidationException(f"Path is required to {action}")
    return path


def validate_save_path(path: Optional[str]) -> str:
    """Reject empty paths and paths containing reserved characters."""
    require_path(path, "save blob")
    found = [char for char in UNALLOWED_PATH_CHARACTERS if char in path]
    if found:
        raise ValidationException(
            f"Path contains unallowed characters: {' '.join(UNALLOWED_PATH_CHARACTERS)}",
            details={"path": path, "characters": found},
        )
    return path


def to_prefix(path: str) -> str:
    return "" if path == ALL_BLOBS else path


def as_content(content: Any) -> BlobContent:
    """
    Normalise the `content` argument of save into a tagged variant.

    Strings become TextContent, everything else StructuredContent. None and
    empty strings are rejected.
    """
    if isinstance(content, (TextContent, StructuredContent)):
        tagged = content
    elif isinstance(content, str):
        tagged = TextContent(text=content)
    else:
        tagged = StructuredContent(value=content)

    if isinstance(tagged, TextContent):
        empty = not tagged.text
    else:
        empty = tagged.value is None
    if empty:
        raise ValidationException("Content is required to save blob")
    return tagged


def blob_name(path: str) -> str:
    """Leaf segment of a blob path."""
    return posixpath.basename(path.rstrip("/"))


def blob_extension(name: str) -> Optional[str]:
    extension = posixpath.splitext(name)[1]
    return extension[1:] or None
