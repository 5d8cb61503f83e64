"""
Request descriptor encoding: URLs, query strings and multipart forms.

One serialization rule is used for every query string and every multipart
form field:
- None and "" values are skipped
- booleans become "true" / "false"
- lists and tuples repeat the key once per item (k=a&k=b)
- everything else is str()'d
Keys keep the order of the source object.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import urlencode

from pydantic import BaseModel


def _as_mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if isinstance(data, BaseModel):
        return data.model_dump()
    if isinstance(data, Mapping):
        return data
    raise TypeError(f"Cannot serialize {type(data).__name__} as request fields")


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _skip(value: Any) -> bool:
    return value is None or value == ""


def serialize_fields(data: Any, exclude: Iterable[str] = ()) -> List[Tuple[str, str]]:
    """Flatten a mapping or model into (key, value) string pairs."""
    excluded = set(exclude)
    pairs: List[Tuple[str, str]] = []
    for key, value in _as_mapping(data).items():
        if key in excluded or _skip(value):
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _stringify(item)) for item in value if not _skip(item))
        else:
            pairs.append((key, _stringify(value)))
    return pairs


def build_query(data: Any, exclude: Iterable[str] = ()) -> str:
    """Query string (without '?') for every defined field of data."""
    return urlencode(serialize_fields(data, exclude))


def build_url(base_url: str, path: str, *path_params: Any, query: Any = None) -> str:
    """
    base + path + "/{param}" for each path param + "?query".

    Path params are interpolated verbatim; only the query is percent-encoded.
    """
    url = base_url.rstrip("/") + path
    for param in path_params:
        url = url.rstrip("/") + f"/{param}"
    if query is not None:
        qs = query if isinstance(query, str) else build_query(query)
        if qs:
            url = f"{url}?{qs}"
    return url


@dataclass
class MultipartForm:
    """Multipart body: scalar form fields plus named file parts."""
    fields: List[Tuple[str, str]] = field(default_factory=list)
    files: Dict[str, Any] = field(default_factory=dict)

    def keys(self) -> List[str]:
        return [k for k, _ in self.fields] + list(self.files)

    def __contains__(self, name: str) -> bool:
        return name in self.keys()

    def get(self, name: str) -> Optional[Any]:
        for key, value in self.fields:
            if key == name:
                return value
        return self.files.get(name)


def build_multipart(data: Any, file_field: str) -> MultipartForm:
    """
    Multipart form for an upload request.

    Every scalar field is appended as its own form field; the value under
    `file_field` becomes the file part of that name. The file value may be an
    open file object, bytes, or a (filename, fileobj[, content_type]) tuple.
    """
    mapping = dict(_as_mapping(data))
    upload = mapping.pop(file_field, None)
    if upload is None:
        raise ValueError(f"Missing file for multipart field '{file_field}'")
    form = MultipartForm(fields=serialize_fields(mapping))
    form.files[file_field] = upload
    return form
