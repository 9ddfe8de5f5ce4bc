"""genprinter - assemble generated source files.

genprinter is the output layer of a code generator. Generator logic writes
indented lines into a ``Printer`` and asks it for imports; the printer gives
every import path one stable alias and writes the file with a sorted import
block, so the output is identical from run to run.

Quick Start:
    >>> from genprinter import Printer
    >>>
    >>> p = Printer('derived')
    >>> errors = p.new_import('errors', 'github.com/pkg/errors')
    >>> p.line('func fail() error {')
    >>> with p.indented():
    ...     p.line('return %s.New("fail")', errors())
    >>> p.line('}')
    >>> with open('derived.gen.go', 'wb') as f:
    ...     p.write_to(f)

CLI Usage:
    $ genprinter resolve fmt=fmt fmt=example.com/pkg/fmt --table
"""

from importlib.metadata import PackageNotFoundError, version

from genprinter.config import PrinterConfig, get_config
from genprinter.exceptions import (
    ConfigurationError,
    ContractViolationError,
    GenPrinterError,
    ImportConflictError,
    OutputError,
    UnbalancedIndentError,
)
from genprinter.file_writer import GeneratedFileWriter
from genprinter.imports import (
    Import,
    ImportRegistry,
    make_alias,
    make_fullpath,
    unvendor,
)
from genprinter.printer import Printer

__all__ = [
    # Main classes
    'Printer',
    'Import',
    'ImportRegistry',
    'GeneratedFileWriter',
    # Helpers
    'make_alias',
    'make_fullpath',
    'unvendor',
    # Configuration
    'PrinterConfig',
    'get_config',
    # Exceptions
    'GenPrinterError',
    'ContractViolationError',
    'UnbalancedIndentError',
    'ImportConflictError',
    'OutputError',
    'ConfigurationError',
]

try:
    __version__ = version('genprinter')
except PackageNotFoundError:
    __version__ = 'unknown'
