from __future__ import annotations

from typing import Optional

from retrojanet.domain.models import EMPTY_PATH, ActionSpec, BodyEncoding, HttpVerb
from retrojanet.syntax.model import SourceMethod

_VERB_ANNOTATIONS = {
    "GET": HttpVerb.GET,
    "POST": HttpVerb.POST,
    "PUT": HttpVerb.PUT,
    "DELETE": HttpVerb.DELETE,
    "HEAD": HttpVerb.HEAD,
    "PATCH": HttpVerb.PATCH,
}

_ENCODING_ANNOTATIONS = {
    "FormUrlEncoded": BodyEncoding.FORM_URL_ENCODED,
    "Multipart": BodyEncoding.MULTIPART,
}

_HEADERS_ANNOTATION = "Headers"


def interpret_method(method: SourceMethod) -> Optional[ActionSpec]:
    """
    Read the Retrofit annotations of one method, e.g.
      @FormUrlEncoded
      @POST("/login")
    into an ActionSpec. Returns None when no verb annotation is present.

    The verb is last-wins. The path is taken once: from the first annotation,
    starting at the first verb annotation, whose `value` argument is set.
    """
    verb: Optional[HttpVerb] = None
    encoding = BodyEncoding.SIMPLE
    path: Optional[str] = None
    headers: Optional[str] = None

    for ann in method.annotations:
        if ann.name in _VERB_ANNOTATIONS:
            verb = _VERB_ANNOTATIONS[ann.name]
        elif ann.name in _ENCODING_ANNOTATIONS:
            encoding = _ENCODING_ANNOTATIONS[ann.name]
        elif ann.name == _HEADERS_ANNOTATION:
            headers = ann.value_of("value")

        if path is None and verb is not None:
            path = ann.value_of("value")

    if verb is None:
        return None

    return ActionSpec(
        verb=verb,
        encoding=encoding,
        path=path if path is not None else EMPTY_PATH,
        headers=headers,
    )
