import json
from typing import Any, Optional
from ..exceptions import ValidationException
from ..models import DataUrl

DATA_URL_SCHEME = "data:"
JSON_MIME_TYPE = "application/json"
JSON_ENCODING = "utf-8"


def parse_data_url(text: Any) -> Optional[DataUrl]:
    """
    Parse `data:<type>;<encoding>,<payload>`.

    Returns None for anything that is not a data URL (not a string, no
    `data:` prefix or no comma). Raises ValidationException when the part
    before the first comma is not exactly one `<type>;<encoding>` pair.
    The payload is everything after the first comma, verbatim.
    """
    if not text or not isinstance(text, str):
        return None
    if not text.startswith(DATA_URL_SCHEME) or "," not in text:
        return None

    header, payload = text[len(DATA_URL_SCHEME):].split(",", 1)
    parts = header.split(";")
    if len(parts) != 2:
        raise ValidationException("Data URL is malformed.", details={"header": header})

    return DataUrl(type=parts[0], encoding=parts[1], data=payload)


def to_json_data_url(value: Any) -> str:
    """Serialise a structured value into an application/json data URL."""
    try:
        payload = json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise ValidationException(f"Content is not JSON serialisable: {e}")
    return DataUrl(type=JSON_MIME_TYPE, encoding=JSON_ENCODING, data=payload).to_string()


def is_json(data_url: DataUrl) -> bool:
    return data_url.type == JSON_MIME_TYPE
