from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SourceAnnotation:
    """
    One annotation as written in the source, e.g.
      @GET("/users")                      -> single member value
      @Query(value = "q", encoded = true) -> named pairs
      @Body                               -> marker (no arguments)
    Values are kept as raw expression text.
    """

    name: str
    value: Optional[str] = None
    pairs: tuple[tuple[str, str], ...] = ()

    def value_of(self, key: str) -> Optional[str]:
        if self.value is not None:
            return self.value if key == "value" else None
        for k, v in self.pairs:
            if k == key:
                return v
        return None


@dataclass(frozen=True)
class SourceParameter:
    type: str
    name: str
    annotations: tuple[SourceAnnotation, ...] = ()


@dataclass(frozen=True)
class SourceMethod:
    name: str
    response_type: str
    parameters: tuple[SourceParameter, ...] = ()
    annotations: tuple[SourceAnnotation, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class ImportDecl:
    name: str
    static: bool = False
    wildcard: bool = False

    def render(self) -> str:
        prefix = "import static " if self.static else "import "
        suffix = ".*" if self.wildcard else ""
        return f"{prefix}{self.name}{suffix};"


@dataclass(frozen=True)
class SourceUnit:
    package: Optional[str]
    imports: tuple[ImportDecl, ...]
    methods: tuple[SourceMethod, ...]
