"""
Multi-format module emission.

Given one resolved module graph, produces every requested output variant:

1. Decide which formats are needed (modern always when a target asks for it,
   legacy only for es5 builds).
2. Render the graph once per format.
3. For every destination of a rendered format, write the entry modules and
   then that destination's own copy of the lazy chunks.
4. Write the shortcut files of every target.

A render failure aborts emission. Files written before the failure stay on
disk.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from ..collaborators import ModuleGraph, Renderer, maybe_await
from ..config import BuildConfig, OutputFormat, OutputTarget
from ..errors import EmitError
from ..models import RenderedOutput
from .formats import FormatOptions, destinations, format_options, required_formats
from .lazy import write_entry_modules, write_lazy_modules
from .shortcuts import generate_shortcuts

logger = logging.getLogger(__name__)


@dataclass
class EmitResult:
    """Summary of one emit() call.

    Attributes:
        formats: Formats that were rendered
        written: Every file written, in write order per destination
        shortcuts: Shortcut files written
    """

    formats: list[OutputFormat] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    shortcuts: list[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.written and not self.shortcuts


class ModuleEmitter:
    """Fans a module graph out into per-format, per-destination outputs.

    Args:
        config: Build configuration (is_dev, build_es5, namespace, webpack_build)
        renderer: Renderer turning the graph into code for one format
    """

    def __init__(self, config: BuildConfig, renderer: Renderer):
        self.config = config
        self.renderer = renderer
        self.render_count = 0

    async def emit(self, graph: ModuleGraph, targets: Iterable[OutputTarget]) -> EmitResult:
        """Render and write every output variant requested by targets.

        Raises:
            EmitError: If rendering fails
        """
        targets = list(targets)
        result = EmitResult()

        formats = required_formats(self.config, targets)
        if not formats:
            logger.debug("No output target requests a module build, nothing to emit")
            return result

        rendered_any = False
        for output_format in formats:
            options = format_options(self.config, output_format)
            output = await self._render(graph, options)
            result.formats.append(output_format)
            if output is None:
                logger.info(f"Renderer produced no {output_format.value} output")
                continue
            rendered_any = True

            for dest_dir in destinations(targets, output_format):
                result.written.extend(await write_entry_modules(dest_dir, output, options))
                result.written.extend(await write_lazy_modules(dest_dir, output, options))

        if rendered_any:
            result.shortcuts = await generate_shortcuts(self.config, targets)

        logger.info(
            f"Emitted {len(result.written)} module files and {len(result.shortcuts)} shortcuts "
            f"({', '.join(f.value for f in result.formats)})"
        )
        return result

    async def _render(self, graph: ModuleGraph, options: FormatOptions) -> Optional[RenderedOutput]:
        self.render_count += 1
        try:
            return await maybe_await(self.renderer.render(graph, options))
        except EmitError:
            raise
        except Exception as e:
            raise EmitError(f"Failed to render {options.target} output: {e}") from e
