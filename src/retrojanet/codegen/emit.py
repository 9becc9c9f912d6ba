from __future__ import annotations

from pathlib import Path

from retrojanet.codegen.render import render_declaration
from retrojanet.domain.models import TargetDeclaration
from retrojanet.errors import OutputDirectoryError


def save_declaration(decl: TargetDeclaration, output_dir: Path) -> Path:
    """
    Write <Name>.java into output_dir (created if missing).
    An existing file is overwritten.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirectoryError(f"Folder {output_dir} couldn't be made: {e}") from e

    out_path = output_dir / decl.file_name
    try:
        out_path.write_text(render_declaration(decl), encoding="utf-8")
    except OSError as e:
        raise OutputDirectoryError(f"Cannot write {out_path}: {e}") from e
    return out_path
