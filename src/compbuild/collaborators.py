"""Collaborator protocols consumed by the build pipeline.

Parsing component syntax, style preprocessing, bundling and rendering are
provided by the host application. The pipeline only depends on these
narrow interfaces.
"""

import inspect
from typing import TYPE_CHECKING, Any, Awaitable, Iterable, Optional, Protocol, TypeVar, Union, runtime_checkable

if TYPE_CHECKING:
    from .config import BuildConfig
    from .emit.formats import FormatOptions
    from .models import FileRecord, RenderedOutput

T = TypeVar("T")

# Opaque module graph produced by a Bundler
ModuleGraph = Any


@runtime_checkable
class Parser(Protocol):
    """Extracts component metadata from a source file.

    Implementations mutate the record in place: they call
    record.set_component_meta() when component syntax is found and may
    overwrite record.src_text_without_decorators. May be sync or async.
    """

    def parse(self, record: "FileRecord", config: "BuildConfig") -> Union[None, Awaitable[None]]: ...


@runtime_checkable
class StyleProcessor(Protocol):
    """Attaches or rewrites style data on a component record."""

    async def process(self, record: "FileRecord", config: "BuildConfig") -> None: ...


@runtime_checkable
class Bundler(Protocol):
    """Resolves transformed files into a module graph."""

    def bundle(self, files: Iterable["FileRecord"]) -> ModuleGraph: ...


@runtime_checkable
class Renderer(Protocol):
    """Renders a module graph with format-specific options.

    Returns None when the graph produced no output.
    """

    def render(
        self, graph: ModuleGraph, options: "FormatOptions"
    ) -> Union[Optional["RenderedOutput"], Awaitable[Optional["RenderedOutput"]]]: ...


class NullStyleProcessor:
    """No-op style processor for builds without stylesheets."""

    async def process(self, record: "FileRecord", config: "BuildConfig") -> None:
        """Leave the record untouched."""
        pass


async def maybe_await(value: Union[T, Awaitable[T]]) -> T:
    """Await the value if a collaborator returned an awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value  # type: ignore[return-value]
