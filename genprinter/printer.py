"""Printer for a single generated source file.

The printer accumulates indented lines, tracks the imports those lines refer
to through ``ImportRegistry``, and writes the finished file as:

    // Code generated by <generator> DO NOT EDIT.

    package <name>

    import (
    	"fmt"
    	errors "github.com/pkg/errors"
    )
    <content>

The header follows https://golang.org/s/generatedcode so that linters and
other tools skip the file. Imports are ordered by path, so the output does not
depend on the order in which the generator resolved them.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from io import BytesIO
from typing import Any, Protocol

from genprinter.config import PrinterConfig
from genprinter.exceptions import OutputError, UnbalancedIndentError
from genprinter.imports import Import, ImportRegistry

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def write(self, data: bytes, /) -> Any: ...


class Printer:
    """Assembles one generated file.

    Example:
        >>> p = Printer('main')
        >>> fmt = p.new_import('fmt', 'fmt')
        >>> p.line('func hello() {')
        >>> with p.indented():
        ...     p.line('%s.Println("hello")', fmt())
        >>> p.line('}')
        >>> print(p.render())
    """

    def __init__(self, package: str, config: PrinterConfig | None = None):
        """Initialize an empty printer.

        Args:
            package: Name written on the ``package`` line.
            config: Printer settings; defaults are used when omitted.
        """
        self.package = package
        self.config = config or PrinterConfig()
        self.imports = ImportRegistry(vendor_marker=self.config.vendor_marker)
        self._lines: list[str] = []
        self._depth = 0
        self._has_content = False

    @property
    def depth(self) -> int:
        return self._depth

    def line(self, fmt: str, *args: Any) -> None:
        """Append a line at the current indentation.

        With ``args`` the line is ``fmt % args``; without them ``fmt`` is used
        verbatim, so a literal ``%`` needs no escaping.
        """
        self._has_content = True
        text = fmt % args if args else fmt
        self._lines.append(self.config.indent * self._depth + text + '\n')

    def blank(self) -> None:
        """Append an empty line."""
        self._has_content = True
        self._lines.append('\n')

    def indent(self) -> None:
        self._depth += 1

    def dedent(self) -> None:
        """Remove one level of indentation.

        Raises:
            UnbalancedIndentError: If nothing is indented.
        """
        if self._depth == 0:
            raise UnbalancedIndentError()
        self._depth -= 1

    @contextmanager
    def indented(self) -> Iterator[None]:
        """Indent every line written inside the ``with`` block."""
        self.indent()
        try:
            yield
        finally:
            self.dedent()

    def has_content(self) -> bool:
        return self._has_content

    def new_import(self, name: str | None, path: str) -> Import:
        """Return a deferred import that is only added to the file when called.

        Args:
            name: Preferred alias, or None to use the last path segment.
            path: Import path.
        """
        return self.imports.new_import(name, path)

    def header(self) -> str:
        """Render the generated-code notice, package line and import block."""
        parts = [
            f'// Code generated by {self.config.generator} DO NOT EDIT.\n',
            '\n',
            f'package {self.package}\n',
        ]
        if self.imports:
            parts.append('\n')
            parts.append('import (\n')
            for alias, path in self.imports.sorted_imports():
                if alias == path:
                    parts.append(f'\t"{path}"\n')
                else:
                    parts.append(f'\t{alias} "{path}"\n')
            parts.append(')\n')
        return ''.join(parts)

    def content(self) -> str:
        return ''.join(self._lines)

    def write_to(self, sink: Sink) -> int:
        """Write the header followed by the content to a binary sink.

        Args:
            sink: Any object with a ``write(bytes)`` method.

        Returns:
            The total number of bytes written.

        Raises:
            OutputError: If the sink fails or accepts only part of a chunk.
                ``bytes_written`` holds the number of bytes written before the
                failure; nothing is written after it.
        """
        written = 0
        for chunk in (self.header(), self.content()):
            data = chunk.encode('utf-8')
            try:
                count = sink.write(data)
            except (OSError, ValueError) as e:
                raise OutputError(bytes_written=written, cause=e) from e
            if not isinstance(count, int):
                count = len(data)
            written += count
            if count < len(data):
                raise OutputError(bytes_written=written, cause=OSError('short write'))
        logger.debug(f'Wrote {written} bytes for package {self.package}')
        return written

    def render(self) -> str:
        """Return the complete file as text."""
        buffer = BytesIO()
        self.write_to(buffer)
        return buffer.getvalue().decode('utf-8')
