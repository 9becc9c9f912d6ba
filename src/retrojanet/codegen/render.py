from __future__ import annotations

from retrojanet.domain.models import TargetDeclaration, TargetField

_INDENT = "    "


def _field_lines(f: TargetField) -> list[str]:
    lines = []
    if f.annotation is not None:
        lines.append(f"{_INDENT}{f.annotation.render()}")
    lines.append(f"{_INDENT}{f.type} {f.name};")
    return lines


def render_declaration(decl: TargetDeclaration) -> str:
    """Render a TargetDeclaration as a Java compilation unit."""
    lines: list[str] = []
    if decl.package:
        lines.append(f"package {decl.package};")
        lines.append("")

    if decl.imports:
        lines.extend(imp.render() for imp in decl.imports)
        lines.append("")

    lines.append(decl.annotation.render())
    lines.append(f"public class {decl.name} {{")

    # members: request fields, response field, constructor, accessor
    members: list[list[str]] = [_field_lines(f) for f in decl.fields]
    if decl.response_field is not None:
        members.append(_field_lines(decl.response_field))

    ctor = decl.constructor
    params = ", ".join(f"{t} {n}" for t, n in ctor.parameters)
    ctor_lines = [f"{_INDENT}public {ctor.name}({params}) {{"]
    ctor_lines.extend(f"{_INDENT}{_INDENT}{s}" for s in ctor.statements)
    ctor_lines.append(f"{_INDENT}}}")
    members.append(ctor_lines)

    if decl.accessor is not None:
        acc = decl.accessor
        members.append(
            [
                f"{_INDENT}public {acc.return_type} {acc.name}() {{",
                f"{_INDENT}{_INDENT}return {acc.returns};",
                f"{_INDENT}}}",
            ]
        )

    for m in members:
        lines.append("")
        lines.extend(m)

    lines.append("}")
    return "\n".join(lines) + "\n"
