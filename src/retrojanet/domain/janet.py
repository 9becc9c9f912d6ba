from __future__ import annotations

from retrojanet.syntax.model import ImportDecl

# Janet target scheme
ANNOTATIONS_PKG = "io.techery.janet.http.annotations"
BODY_PKG = "io.techery.janet.body"

HTTP_ACTION = "HttpAction"
RESPONSE = "Response"
FILE_BODY = "FileBody"
BYTES_ARRAY_BODY = "BytesArrayBody"

ACTION_SUFFIX = "Action"
RESPONSE_FIELD = "response"
RESPONSE_GETTER = "getResponse"


def annotation_import(simple_name: str) -> ImportDecl:
    return ImportDecl(name=f"{ANNOTATIONS_PKG}.{simple_name}")


def body_import(simple_name: str) -> ImportDecl:
    return ImportDecl(name=f"{BODY_PKG}.{simple_name}")
