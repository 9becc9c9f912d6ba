from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from retrojanet.domain import janet
from retrojanet.domain.models import TargetAnnotation, TargetField
from retrojanet.syntax.model import ImportDecl, SourceAnnotation, SourceParameter


class Binding(str, Enum):
    """How a parameter value travels with the request."""

    FIELD = "field"
    FIELD_MAP = "field_map"
    BODY = "body"
    HEADER = "header"
    HEADERS = "headers"
    PART = "part"
    PART_MAP = "part_map"
    PATH = "path"
    QUERY = "query"
    QUERY_MAP = "query_map"
    URL = "url"


# Retrofit parameter annotation -> binding
RETROFIT_BINDINGS: dict[str, Binding] = {
    "Field": Binding.FIELD,
    "FieldMap": Binding.FIELD_MAP,
    "Body": Binding.BODY,
    "Header": Binding.HEADER,
    "Headers": Binding.HEADERS,
    "Part": Binding.PART,
    "PartMap": Binding.PART_MAP,
    "Path": Binding.PATH,
    "Query": Binding.QUERY,
    "QueryMap": Binding.QUERY_MAP,
    "Url": Binding.URL,
}


@dataclass(frozen=True)
class JanetBinding:
    name: str
    takes_value: bool = False
    # (retrofit argument, janet argument)
    secondary: Optional[tuple[str, str]] = None
    stub: bool = False


# binding -> Janet parameter annotation
JANET_BINDINGS: dict[Binding, JanetBinding] = {
    Binding.FIELD: JanetBinding("Field", takes_value=True),
    Binding.FIELD_MAP: JanetBinding("FieldMap", stub=True),
    Binding.BODY: JanetBinding("Body"),
    Binding.HEADER: JanetBinding("RequestHeader", takes_value=True),
    Binding.HEADERS: JanetBinding("Headers", stub=True),
    Binding.PART: JanetBinding("Part", takes_value=True, secondary=("encoding", "encoding")),
    Binding.PART_MAP: JanetBinding("PartMap", stub=True),
    Binding.PATH: JanetBinding("Path", takes_value=True, secondary=("encoded", "encoded")),
    Binding.QUERY: JanetBinding("Query", takes_value=True, secondary=("encoded", "encodeName")),
    Binding.QUERY_MAP: JanetBinding("QueryMap", stub=True),
    Binding.URL: JanetBinding("Url", stub=True),
}

STUB_MARKER = "!!!//TODO"

_FILE_TYPE_MARKERS = ("TypedFile", "File")
_REQUEST_BODY_MARKER = "RequestBody"


def substitute_type(type_text: str) -> tuple[str, tuple[ImportDecl, ...]]:
    """
    Swap Retrofit/OkHttp payload types for Janet body types.
    Substring match on purpose: List<TypedFile>, okhttp3.RequestBody etc.
    """
    if any(marker in type_text for marker in _FILE_TYPE_MARKERS):
        return janet.FILE_BODY, (janet.body_import(janet.FILE_BODY),)
    if _REQUEST_BODY_MARKER in type_text:
        return janet.BYTES_ARRAY_BODY, (janet.body_import(janet.BYTES_ARRAY_BODY),)
    return type_text, ()


def map_annotation(
    source: SourceAnnotation,
) -> Optional[tuple[TargetAnnotation, tuple[ImportDecl, ...]]]:
    """Translate one Retrofit binding annotation, or None if it is not one."""
    binding = RETROFIT_BINDINGS.get(source.name)
    if binding is None:
        return None
    rule = JANET_BINDINGS[binding]

    if rule.stub:
        # not valid Java on purpose; grep for !!!//TODO
        return TargetAnnotation(name=f"{rule.name}{STUB_MARKER}"), ()

    imports = (janet.annotation_import(rule.name),)
    if not rule.takes_value:
        return TargetAnnotation(name=rule.name), imports

    value = source.value_of("value")
    secondary = source.value_of(rule.secondary[0]) if rule.secondary else None
    if secondary is not None:
        pairs = (("value", value or '""'), (rule.secondary[1], secondary))
        return TargetAnnotation(name=rule.name, pairs=pairs), imports
    return TargetAnnotation(name=rule.name, value=value), imports


def map_parameter(param: SourceParameter) -> TargetField:
    field_type, imports = substitute_type(param.type)

    annotation: Optional[TargetAnnotation] = None
    for source in param.annotations:
        mapped = map_annotation(source)
        if mapped is None:
            continue
        annotation, extra = mapped
        imports = imports + extra
        break

    return TargetField(
        name=param.name,
        type=field_type,
        annotation=annotation,
        imports=imports,
    )
