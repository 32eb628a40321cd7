"""Response media type selection and rendering."""

from __future__ import annotations

import uuid
from typing import Any, Dict, List, Optional, Sequence, Tuple
from xml.etree import ElementTree

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from pydantic.alias_generators import to_pascal

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

_ALIASES = {
    "application/json": JSON_MEDIA_TYPE,
    "text/json": JSON_MEDIA_TYPE,
    "application/xml": XML_MEDIA_TYPE,
    "text/xml": XML_MEDIA_TYPE,
    "*/*": JSON_MEDIA_TYPE,
    "application/*": JSON_MEDIA_TYPE,
    "text/*": JSON_MEDIA_TYPE,
}


def _parse_accept(header: str) -> List[Tuple[str, float]]:
    ranges: List[Tuple[str, float]] = []
    for part in header.split(","):
        media, *params = [piece.strip() for piece in part.split(";")]
        if not media:
            continue
        quality = 1.0
        for param in params:
            key, _, value = param.partition("=")
            if key.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        if quality > 0:
            ranges.append((media.lower(), quality))
    # sorted() is stable, so equal qualities keep header order
    return sorted(ranges, key=lambda item: item[1], reverse=True)


def choose_media_type(accept: Optional[str]) -> Optional[str]:
    """Pick JSON or XML for an ``Accept`` header, or None if neither fits."""

    if not accept or not accept.strip():
        return JSON_MEDIA_TYPE
    for media, _quality in _parse_accept(accept):
        if media in _ALIASES:
            return _ALIASES[media]
        if media.endswith("+json"):
            return JSON_MEDIA_TYPE
        if media.endswith("+xml"):
            return XML_MEDIA_TYPE
    return None


def _to_plain(payload: Any, by_alias: bool = True) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=by_alias)
    if isinstance(payload, (list, tuple)):
        return [_to_plain(item, by_alias) for item in payload]
    return jsonable_encoder(payload)


def _fill(element: ElementTree.Element, data: Dict[str, Any]) -> None:
    for key, value in data.items():
        child = ElementTree.SubElement(element, to_pascal(key))
        if value is not None:
            child.text = str(value).lower() if isinstance(value, bool) else str(value)


def render_xml(payload: Any, root_name: str) -> bytes:
    """Serialise a model, a list of models or a scalar as an XML document.

    Lists become ``ArrayOf{root_name}`` with one ``root_name`` element per item.
    """

    # snake_case keys so to_pascal yields FullName, GamesPlayed, ...
    plain = _to_plain(payload, by_alias=False)
    if isinstance(plain, list):
        root = ElementTree.Element(f"ArrayOf{root_name}")
        for item in plain:
            _fill(ElementTree.SubElement(root, root_name), item)
    elif isinstance(plain, dict):
        root = ElementTree.Element(root_name)
        _fill(root, plain)
    else:
        root = ElementTree.Element(root_name)
        root.text = "" if plain is None else str(plain)
    return ElementTree.tostring(root, encoding="utf-8", xml_declaration=True)


def render(
    payload: Any,
    media_type: str,
    *,
    root_name: str,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    """Build a response carrying ``payload`` in the negotiated media type."""

    if media_type == XML_MEDIA_TYPE:
        return Response(
            content=render_xml(payload, root_name),
            status_code=status_code,
            headers=headers,
            media_type=f"{XML_MEDIA_TYPE}; charset=utf-8",
        )
    return JSONResponse(
        content=_to_plain(payload), status_code=status_code, headers=headers
    )


def render_id(user_id: uuid.UUID, media_type: str, **kwargs: Any) -> Response:
    return render(str(user_id), media_type, root_name="guid", **kwargs)


def is_json_content_type(content_type: Optional[str]) -> bool:
    """True for ``application/json`` and ``application/*+json`` bodies."""

    if not content_type:
        return False
    media = content_type.split(";", 1)[0].strip().lower()
    return media == JSON_MEDIA_TYPE or (
        media.startswith("application/") and media.endswith("+json")
    )


def supported_media_types() -> Sequence[str]:
    return (JSON_MEDIA_TYPE, XML_MEDIA_TYPE)


__all__ = [
    "JSON_MEDIA_TYPE",
    "XML_MEDIA_TYPE",
    "choose_media_type",
    "is_json_content_type",
    "render",
    "render_id",
    "render_xml",
    "supported_media_types",
]
