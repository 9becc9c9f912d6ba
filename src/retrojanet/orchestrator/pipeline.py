from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from retrojanet.codegen.builder import build_declaration
from retrojanet.codegen.emit import save_declaration
from retrojanet.codegen.fields import map_parameter
from retrojanet.domain.models import TargetDeclaration
from retrojanet.extractors.retrofit.interpreter import interpret_method
from retrojanet.syntax.java_tree import read_java_file
from retrojanet.syntax.model import ImportDecl, SourceMethod, SourceUnit

_SOURCE_SCHEME_MARKER = "retrofit"


@dataclass(frozen=True)
class ConvertedFile:
    method_name: str
    method_line: int
    declaration: TargetDeclaration
    path: Path


@dataclass
class ConvertResult:
    source: Path
    package: Optional[str]
    output_dir: Path
    methods_seen: int = 0
    files: list[ConvertedFile] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


def carried_imports(unit: SourceUnit) -> tuple[ImportDecl, ...]:
    # Retrofit imports have no place in the generated classes
    return tuple(imp for imp in unit.imports if _SOURCE_SCHEME_MARKER not in imp.name)


def convert_method(
    method: SourceMethod,
    package: Optional[str],
    source_imports: tuple[ImportDecl, ...],
) -> Optional[TargetDeclaration]:
    """Method -> action declaration, or None for methods without a verb."""
    spec = interpret_method(method)
    if spec is None:
        return None
    fields = [map_parameter(p) for p in method.parameters]
    return build_declaration(
        package=package,
        method_name=method.name,
        spec=spec,
        fields=fields,
        source_imports=source_imports,
        response_type=method.response_type,
    )


def iter_convert(unit: SourceUnit, result: ConvertResult) -> Iterator[ConvertedFile]:
    """
    Convert and write one method at a time, yielding after each write so the
    caller can report progress. `result` is filled in as a side effect.
    """
    source_imports = carried_imports(unit)
    for method in unit.methods:
        result.methods_seen += 1
        decl = convert_method(method, result.package, source_imports)
        if decl is None:
            result.skipped.append(method.name)
            continue
        out_path = save_declaration(decl, result.output_dir)
        converted = ConvertedFile(
            method_name=method.name,
            method_line=method.line,
            declaration=decl,
            path=out_path,
        )
        result.files.append(converted)
        yield converted


def start_convert(
    source_path: Path,
    package: Optional[str] = None,
    output_dir: Optional[Path] = None,
) -> tuple[ConvertResult, Iterator[ConvertedFile]]:
    """
    Parse the source once, resolve package/output defaults, and return the
    (initially empty) result plus a lazy iterator that does the writing.
    """
    source_path = source_path.resolve()
    unit = read_java_file(source_path)
    result = ConvertResult(
        source=source_path,
        package=package if package is not None else unit.package,
        output_dir=(output_dir or Path.cwd()).resolve(),
    )
    return result, iter_convert(unit, result)


def run_convert(
    source_path: Path,
    package: Optional[str] = None,
    output_dir: Optional[Path] = None,
) -> ConvertResult:
    result, files = start_convert(source_path, package=package, output_dir=output_dir)
    for _ in files:
        pass
    return result
