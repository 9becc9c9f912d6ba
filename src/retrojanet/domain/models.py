from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from retrojanet.syntax.model import ImportDecl


class HttpVerb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"


class BodyEncoding(str, Enum):
    SIMPLE = "SIMPLE"
    FORM_URL_ENCODED = "FORM_URL_ENCODED"
    MULTIPART = "MULTIPART"


EMPTY_PATH = '""'


class ActionSpec(BaseModel):
    """What a single Retrofit method says about its request."""

    model_config = ConfigDict(frozen=True)

    verb: HttpVerb = HttpVerb.GET
    encoding: BodyEncoding = BodyEncoding.SIMPLE
    path: str = EMPTY_PATH  # raw expression text, quotes included
    headers: Optional[str] = None

    @property
    def is_simple_get(self) -> bool:
        return (
            self.verb == HttpVerb.GET
            and self.headers is None
            and self.encoding == BodyEncoding.SIMPLE
        )


class TargetAnnotation(BaseModel):
    """
    Janet annotation in one of three forms:
      marker:  @Body              (no value, no pairs)
      compact: @Path("id")        (value only)
      full:    @Path(value = "id", encoded = true)
    """

    model_config = ConfigDict(frozen=True)

    name: str
    value: Optional[str] = None
    pairs: tuple[tuple[str, str], ...] = ()

    def render(self) -> str:
        if self.pairs:
            args = ", ".join(f"{k} = {v}" for k, v in self.pairs)
            return f"@{self.name}({args})"
        if self.value is not None:
            return f"@{self.name}({self.value})"
        return f"@{self.name}"


class TargetField(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    annotation: Optional[TargetAnnotation] = None
    imports: tuple[ImportDecl, ...] = ()


class ConstructorDecl(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    parameters: tuple[tuple[str, str], ...] = ()  # (type, name)
    statements: tuple[str, ...] = ()


class AccessorDecl(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    return_type: str
    returns: str


class TargetDeclaration(BaseModel):
    model_config = ConfigDict(frozen=True)

    package: Optional[str] = None
    name: str
    annotation: TargetAnnotation
    fields: tuple[TargetField, ...] = ()
    constructor: ConstructorDecl
    response_field: Optional[TargetField] = None
    accessor: Optional[AccessorDecl] = None
    imports: tuple[ImportDecl, ...] = Field(default_factory=tuple)

    @property
    def file_name(self) -> str:
        return f"{self.name}.java"
