from retrojanet.codegen.fields import (
    JANET_BINDINGS,
    RETROFIT_BINDINGS,
    map_annotation,
    map_parameter,
    substitute_type,
)
from retrojanet.syntax.model import ImportDecl, SourceAnnotation, SourceParameter

ANN = "io.techery.janet.http.annotations"


def param(type_, name, *annotations) -> SourceParameter:
    return SourceParameter(type=type_, name=name, annotations=annotations)


def ann(name, value=None, **pairs) -> SourceAnnotation:
    return SourceAnnotation(name=name, value=value, pairs=tuple(pairs.items()))


def test_every_retrofit_binding_has_a_janet_rule():
    assert set(RETROFIT_BINDINGS.values()) == set(JANET_BINDINGS)


def test_field_maps_to_field_with_value():
    f = map_parameter(param("String", "user", ann("Field", '"user"')))
    assert f.name == "user"
    assert f.type == "String"
    assert f.annotation.render() == '@Field("user")'
    assert f.imports == (ImportDecl(f"{ANN}.Field"),)


def test_header_maps_to_request_header():
    f = map_parameter(param("String", "token", ann("Header", '"Authorization"')))
    assert f.annotation.render() == '@RequestHeader("Authorization")'
    assert f.imports == (ImportDecl(f"{ANN}.RequestHeader"),)


def test_body_is_a_marker():
    f = map_parameter(param("User", "user", ann("Body")))
    assert f.annotation.render() == "@Body"
    assert f.imports == (ImportDecl(f"{ANN}.Body"),)


def test_path_compact_and_full_forms():
    compact = map_parameter(param("long", "id", ann("Path", '"id"')))
    assert compact.annotation.render() == '@Path("id")'

    full = map_parameter(
        param("String", "id", SourceAnnotation("Path", pairs=(("value", '"id"'), ("encoded", "true"))))
    )
    assert full.annotation.render() == '@Path(value = "id", encoded = true)'


def test_query_encoded_becomes_encode_name():
    f = map_parameter(
        param("String", "q", SourceAnnotation("Query", pairs=(("value", '"q"'), ("encoded", "true"))))
    )
    assert f.annotation.render() == '@Query(value = "q", encodeName = true)'

    f = map_parameter(param("String", "q", ann("Query", '"q"')))
    assert f.annotation.render() == '@Query("q")'


def test_part_carries_encoding():
    f = map_parameter(
        param(
            "String",
            "desc",
            SourceAnnotation("Part", pairs=(("value", '"desc"'), ("encoding", '"8-bit"'))),
        )
    )
    assert f.annotation.render() == '@Part(value = "desc", encoding = "8-bit")'
    assert f.imports == (ImportDecl(f"{ANN}.Part"),)


def test_stub_mappings_emit_placeholders_without_imports():
    for tag in ("FieldMap", "Headers", "PartMap", "QueryMap", "Url"):
        f = map_parameter(param("Map<String, String>", "m", ann(tag)))
        assert f.annotation.render() == f"@{tag}!!!//TODO"
        assert f.imports == ()


def test_unknown_annotation_is_dropped():
    f = map_parameter(param("String", "s", ann("Nullable")))
    assert f.annotation is None
    assert f.imports == ()
    assert map_annotation(ann("Nullable")) is None


def test_first_binding_annotation_wins():
    f = map_parameter(param("String", "s", ann("Nullable"), ann("Query", '"a"'), ann("Field", '"b"')))
    assert f.annotation.render() == '@Query("a")'
    assert f.imports == (ImportDecl(f"{ANN}.Query"),)


def test_file_types_become_file_body():
    for type_ in ("TypedFile", "File", "java.io.File", "List<TypedFile>"):
        assert substitute_type(type_)[0] == "FileBody"

    f = map_parameter(param("TypedFile", "photo", ann("Part", '"photo"')))
    assert f.type == "FileBody"
    assert f.imports == (
        ImportDecl("io.techery.janet.body.FileBody"),
        ImportDecl(f"{ANN}.Part"),
    )

    # regardless of the binding annotation
    f = map_parameter(param("File", "raw", ann("Body")))
    assert f.type == "FileBody"


def test_request_body_becomes_bytes_array_body():
    f = map_parameter(param("RequestBody", "payload", ann("Body")))
    assert f.type == "BytesArrayBody"
    assert f.imports[0] == ImportDecl("io.techery.janet.body.BytesArrayBody")


def test_plain_types_are_untouched():
    assert substitute_type("Map<String, Integer>") == ("Map<String, Integer>", ())
