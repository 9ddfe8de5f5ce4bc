"""File writing utilities for generated source files.

This module writes a finished ``Printer`` to a local path or to any location
universal-pathlib understands (``s3://``, ``memory://``, ...).
"""

import logging
from pathlib import Path

from upath import UPath

from genprinter.exceptions import OutputError
from genprinter.printer import Printer

logger = logging.getLogger(__name__)


class GeneratedFileWriter:
    """Writes printers to files.

    Example:
        >>> writer = GeneratedFileWriter()
        >>> printer = Printer('main')
        >>> printer.line('func main() {}')
        >>> writer.write(printer, Path('derived.gen.go'))
        74
    """

    def __init__(self, skip_empty: bool = True):
        """Initialize the writer.

        Args:
            skip_empty: Do not create files for printers that received no lines.
        """
        self.skip_empty = skip_empty

    def write(self, printer: Printer, path: UPath | Path | str) -> int:
        """Write the printer's file to ``path``.

        Parent directories are created as needed.

        Args:
            printer: The printer holding the generated file.
            path: Destination path or URL.

        Returns:
            Number of bytes written, 0 if the printer was empty and skipped.

        Raises:
            OutputError: If the file cannot be opened or written.
        """
        path = UPath(path)

        if self.skip_empty and not printer.has_content():
            logger.info(f'Skipping {path}: no generated content')
            return 0

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open('wb') as f:
                return printer.write_to(f)
        except OutputError as e:
            raise OutputError(
                bytes_written=e.bytes_written, output_path=str(path), cause=e.cause
            ) from e
        except OSError as e:
            raise OutputError(output_path=str(path), cause=e) from e
