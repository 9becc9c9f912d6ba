from __future__ import annotations

import re
from typing import Iterable, Optional, Sequence

from retrojanet.domain import janet
from retrojanet.domain.models import (
    AccessorDecl,
    ActionSpec,
    BodyEncoding,
    ConstructorDecl,
    HttpVerb,
    TargetAnnotation,
    TargetDeclaration,
    TargetField,
)
from retrojanet.syntax.model import ImportDecl

_VOID_TYPE = re.compile(r"\bVoid\b")


def action_class_name(method_name: str) -> str:
    # getUser -> GetUserAction (rest of the name untouched)
    return method_name[:1].upper() + method_name[1:] + janet.ACTION_SUFFIX


def is_no_value(response_type: str) -> bool:
    text = response_type.strip()
    return text == "void" or bool(_VOID_TYPE.search(text))


def build_action_annotation(spec: ActionSpec) -> TargetAnnotation:
    """
    @HttpAction("/x") for a plain GET, otherwise the named form with only
    the attributes that differ from their defaults.
    """
    if spec.is_simple_get:
        return TargetAnnotation(name=janet.HTTP_ACTION, value=spec.path)

    pairs: list[tuple[str, str]] = [("value", spec.path)]
    if spec.headers is not None:
        pairs.append(("headers", spec.headers))
    if spec.encoding != BodyEncoding.SIMPLE:
        pairs.append(("type", f"{janet.HTTP_ACTION}.Type.{spec.encoding.value}"))
    if spec.verb != HttpVerb.GET:
        pairs.append(("method", f"{janet.HTTP_ACTION}.Method.{spec.verb.value}"))
    return TargetAnnotation(name=janet.HTTP_ACTION, pairs=tuple(pairs))


def response_imports(
    source_imports: Iterable[ImportDecl], response_type: str
) -> list[ImportDecl]:
    # best-effort: carries `com.x.User` for `User`, misses `Call<User>`
    return [imp for imp in source_imports if response_type in imp.name]


def dedupe_imports(imports: Iterable[ImportDecl]) -> tuple[ImportDecl, ...]:
    seen: set[ImportDecl] = set()
    out: list[ImportDecl] = []
    for imp in imports:
        if imp in seen:
            continue
        seen.add(imp)
        out.append(imp)
    return tuple(out)


def build_declaration(
    package: Optional[str],
    method_name: str,
    spec: ActionSpec,
    fields: Sequence[TargetField],
    source_imports: Sequence[ImportDecl],
    response_type: str,
) -> TargetDeclaration:
    """
    Assemble one Janet action class. Never raises on odd input; the result
    may not compile and is meant to be reviewed by hand.
    """
    name = action_class_name(method_name)
    imports: list[ImportDecl] = [janet.annotation_import(janet.HTTP_ACTION)]

    params: list[tuple[str, str]] = []
    statements: list[str] = []
    for f in fields:
        imports.extend(f.imports)
        params.append((f.type, f.name))
        statements.append(f"this.{f.name} = {f.name};")

    response_field: Optional[TargetField] = None
    accessor: Optional[AccessorDecl] = None
    if not is_no_value(response_type):
        response_field = TargetField(
            name=janet.RESPONSE_FIELD,
            type=response_type,
            annotation=TargetAnnotation(name=janet.RESPONSE),
            imports=(janet.annotation_import(janet.RESPONSE),),
        )
        imports.extend(response_field.imports)
        accessor = AccessorDecl(
            name=janet.RESPONSE_GETTER,
            return_type=response_type,
            returns=f"this.{janet.RESPONSE_FIELD}",
        )

    imports.extend(response_imports(source_imports, response_type))

    return TargetDeclaration(
        package=package,
        name=name,
        annotation=build_action_annotation(spec),
        fields=tuple(fields),
        constructor=ConstructorDecl(
            name=name,
            parameters=tuple(params),
            statements=tuple(statements),
        ),
        response_field=response_field,
        accessor=accessor,
        imports=dedupe_imports(imports),
    )
