"""Module emission: per-format rendering, lazy chunks and shortcut files."""

from .formats import FormatOptions, format_options, required_formats
from .module_emitter import EmitResult, ModuleEmitter
from .shortcuts import generate_shortcuts

__all__ = [
    "EmitResult",
    "FormatOptions",
    "ModuleEmitter",
    "format_options",
    "generate_shortcuts",
    "required_formats",
]
