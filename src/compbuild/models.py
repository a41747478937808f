"""Data models for the component build pipeline.

Defines the core dataclasses shared by the compiler and emitter:
- ComponentMeta: Descriptor of one discovered component (manifest schema)
- FileRecord: Cached in-memory representation of one source file
- Manifest: Snapshot of every component found during one build
- RenderedChunk / RenderedOutput: What a Renderer returns for one format
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from .errors import TransformError

# Marker that makes a source file worth handing to the Parser
COMPONENT_DECORATOR = "@Component"

_SOURCE_SUFFIXES = (".ts", ".tsx")
_DECLARATION_SUFFIX = ".d.ts"


def is_source_file(file_path: Path | str) -> bool:
    """Check whether a path names a TypeScript source file (not a declaration file)."""
    name = Path(file_path).name.lower()
    if name.endswith(_DECLARATION_SUFFIX):
        return False
    return name.endswith(_SOURCE_SUFFIXES)


def is_transformable(src_text: str) -> bool:
    """Check whether source text contains component syntax."""
    return COMPONENT_DECORATOR in src_text


@dataclass
class ComponentMeta:
    """Structured description of one component extracted from source text.

    Attributes:
        tag_name: Custom element tag (e.g. "my-button")
        component_class: Name of the implementing class
        module_path: Path of the file the component was found in
        style_urls: Stylesheet references declared by the component
        styles: Processed style text attached by the StyleProcessor
        props: Names of the component's public properties
        shadow: Whether the component renders into a shadow root
        is_lazy: Whether the component is loaded on demand
    """

    tag_name: str
    component_class: str
    module_path: str
    style_urls: list[str] = field(default_factory=list)
    styles: list[str] = field(default_factory=list)
    props: list[str] = field(default_factory=list)
    shadow: bool = False
    is_lazy: bool = True

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "tagName": self.tag_name,
            "componentClass": self.component_class,
            "modulePath": self.module_path,
            "styleUrls": list(self.style_urls),
            "styles": list(self.styles),
            "props": list(self.props),
            "shadow": self.shadow,
            "isLazy": self.is_lazy,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ComponentMeta":
        """Deserialize from dictionary."""
        return cls(
            tag_name=data["tagName"],
            component_class=data["componentClass"],
            module_path=data["modulePath"],
            style_urls=list(data.get("styleUrls", [])),
            styles=list(data.get("styles", [])),
            props=list(data.get("props", [])),
            shadow=bool(data.get("shadow", False)),
            is_lazy=bool(data.get("isLazy", True)),
        )


@dataclass
class FileRecord:
    """One source file as seen by the build.

    The record is owned by the FileRecordCache and mutated in place by the
    transformer and its collaborators. src_text_without_decorators starts out
    equal to src_text; the Parser may overwrite it.

    Attributes:
        file_name: Base name of the file
        file_path: Absolute path, unique key within one build
        src_text: Raw source text
        src_text_without_decorators: Source text with decorators removed
        is_source_file: True for .ts/.tsx files
        is_transformable: True when the source contains component syntax
        cmp_meta: Component descriptor, None until successfully parsed
    """

    file_name: str
    file_path: Path
    src_text: str
    src_text_without_decorators: str
    is_source_file: bool
    is_transformable: bool
    cmp_meta: Optional[ComponentMeta] = None

    @classmethod
    def create(cls, file_path: Path, src_text: str) -> "FileRecord":
        """Create a record, deriving the source and transformable flags."""
        source = is_source_file(file_path)
        return cls(
            file_name=file_path.name,
            file_path=file_path,
            src_text=src_text,
            src_text_without_decorators=src_text,
            is_source_file=source,
            is_transformable=source and is_transformable(src_text),
        )

    @property
    def has_component(self) -> bool:
        return self.cmp_meta is not None

    def set_component_meta(self, meta: ComponentMeta) -> None:
        """Attach component metadata. Metadata may only be set once per build.

        Raises:
            TransformError: If metadata was already attached
        """
        if self.cmp_meta is not None:
            raise TransformError(self.file_path, "component metadata already set")
        self.cmp_meta = meta


@dataclass
class Manifest:
    """Components discovered by one build."""

    components: list[ComponentMeta] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: list[FileRecord]) -> "Manifest":
        return cls(components=[r.cmp_meta for r in records if r.cmp_meta is not None])

    def to_dict(self) -> dict[str, Any]:
        return {"components": [c.to_dict() for c in self.components]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Manifest":
        return cls(components=[ComponentMeta.from_dict(c) for c in data.get("components", [])])


@dataclass
class RenderedChunk:
    """One logical unit of a rendered module graph.

    Attributes:
        name: Logical chunk name (entry name for entry chunks)
        code: Rendered JavaScript source
        is_entry: True for entry points, False for lazy chunks
    """

    name: str
    code: str
    is_entry: bool = False


@dataclass
class RenderedOutput:
    """Result of rendering a module graph in one format."""

    chunks: list[RenderedChunk] = field(default_factory=list)

    @property
    def entries(self) -> list[RenderedChunk]:
        return [c for c in self.chunks if c.is_entry]

    @property
    def lazy_chunks(self) -> list[RenderedChunk]:
        return [c for c in self.chunks if not c.is_entry]
