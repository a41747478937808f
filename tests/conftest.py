"""Pytest configuration and fixtures for compbuild tests.

compbuild.output binds its output stream at import time, which under pytest
is a capture object that may be closed by the time a later test logs.
Every test gets a fresh in-memory stream instead.
"""

import asyncio
import io
import re
import sys
import warnings

import pytest

from compbuild import output
from compbuild.models import ComponentMeta, FileRecord

# Suppress ResourceWarnings from file cleanup in Python 3.13
if sys.version_info >= (3, 13):
    warnings.filterwarnings("ignore", category=ResourceWarning)


@pytest.fixture(autouse=True)
def output_stream():
    """Route timestamped output into a StringIO for the duration of a test."""
    stream = io.StringIO()
    output.init_timer(output_stream=stream)
    output.set_verbose(True)
    output.set_output_file(None)
    yield stream
    output.init_timer(output_stream=sys.__stdout__)


def run(coro):
    """Run an async coroutine in a new event loop."""
    return asyncio.run(coro)


_TAG_RE = re.compile(r"tag:\s*['\"]([\w-]+)['\"]")
_CLASS_RE = re.compile(r"export\s+class\s+(\w+)")
_STYLE_RE = re.compile(r"styleUrl:\s*['\"]([^'\"]+)['\"]")
_DECORATOR_RE = re.compile(r"@Component\(\{.*?\}\)\s*", re.DOTALL)


class RegexParser:
    """Small stand-in for the component parser.

    Recognizes @Component({ tag: '...' }) followed by an exported class and
    strips the decorator from src_text_without_decorators.
    """

    def __init__(self):
        self.parsed: list[str] = []

    def parse(self, record: FileRecord, config) -> None:
        self.parsed.append(record.file_name)
        tag = _TAG_RE.search(record.src_text)
        cls = _CLASS_RE.search(record.src_text)
        if tag is None or cls is None:
            return
        style = _STYLE_RE.search(record.src_text)
        record.src_text_without_decorators = _DECORATOR_RE.sub("", record.src_text)
        record.set_component_meta(
            ComponentMeta(
                tag_name=tag.group(1),
                component_class=cls.group(1),
                module_path=str(record.file_path),
                style_urls=[style.group(1)] if style else [],
            )
        )


class RecordingStyleProcessor:
    """Style processor that records calls and attaches placeholder styles."""

    def __init__(self):
        self.processed: list[str] = []

    async def process(self, record: FileRecord, config) -> None:
        await asyncio.sleep(0)
        self.processed.append(record.file_name)
        for url in record.cmp_meta.style_urls:
            record.cmp_meta.styles.append(f"/* {url} */")


def component_source(tag: str, class_name: str, style_url: str = "") -> str:
    style = f", styleUrl: '{style_url}'" if style_url else ""
    return f"import {{ Component }} from '@stencil/core';\n\n@Component({{ tag: '{tag}'{style} }})\nexport class {class_name} {{}}\n"


@pytest.fixture
def parser():
    return RegexParser()


@pytest.fixture
def style_processor():
    return RecordingStyleProcessor()
