"""Import registration and alias resolution for generated files.

Generators ask for imports before they know whether the generated code will
use them. ``ImportRegistry.new_import`` hands out an ``Import`` handle and only
calling that handle adds the import to the file. Each distinct import path gets
exactly one alias:

1. The preferred name, when no other path holds it yet.
2. Otherwise the full path with every non identifier character replaced by
   ``_`` (``example.com/pkg/fmt`` becomes ``example_com_pkg_fmt``).

Vendored paths (``.../vendor/github.com/x/y``) are reduced to the part after the
last vendor marker first, so a vendored copy and the upstream module share an
alias.

Example:
    >>> registry = ImportRegistry()
    >>> fmt = registry.new_import('fmt', 'fmt')
    >>> other = registry.new_import('fmt', 'example.com/pkg/fmt')
    >>> fmt(), other()
    ('fmt', 'example_com_pkg_fmt')
    >>> registry.sorted_imports()
    [('example_com_pkg_fmt', 'example.com/pkg/fmt'), ('fmt', 'fmt')]
"""

from __future__ import annotations

import logging

from genprinter.exceptions import ImportConflictError

logger = logging.getLogger(__name__)

DEFAULT_VENDOR_MARKER = '/vendor/'

__all__ = (
    'Import',
    'ImportRegistry',
    'make_alias',
    'make_fullpath',
    'unvendor',
)


def _bad_to_underscore(char: str) -> str:
    if char.isalpha() or char.isdecimal() or char == '_':
        return char
    return '_'


def unvendor(path: str, marker: str = DEFAULT_VENDOR_MARKER) -> str:
    """Strip everything up to and including the last vendor marker."""
    index = path.rfind(marker)
    if index != -1:
        return path[index + len(marker) :]
    return path


def make_fullpath(path: str) -> str:
    """Sanitize a whole import path into an identifier.

    Letters, decimal digits and underscores are kept; every other character
    becomes an underscore.
    """
    return ''.join(_bad_to_underscore(char) for char in path)


def make_alias(path: str) -> str:
    """Derive a short alias from the last non-empty segment of an import path.

    Falls back to the sanitized full path when every segment is empty.
    """
    fullpath = make_fullpath(path)
    segments = [segment for segment in fullpath.split('_') if segment]
    return segments[-1] if segments else fullpath


class Import:
    """A deferred import.

    Nothing is registered until the handle is called. The first call resolves
    the alias and every later call returns the same alias.

    Attributes:
        name: The preferred alias, or None to derive one from the path.
        path: The import path as requested, before vendor stripping.
    """

    def __init__(self, registry: ImportRegistry, name: str | None, path: str):
        self._registry = registry
        self.name = name
        self.path = path
        self._alias: str | None = None

    @property
    def resolved(self) -> bool:
        return self._alias is not None

    def resolve(self) -> str:
        """Register the import on first use and return its alias.

        Raises:
            ImportConflictError: If the alias cannot be made unique.
        """
        if self._alias is None:
            self._alias = self._registry.register(self.name, self.path)
        return self._alias

    def __call__(self) -> str:
        return self.resolve()

    def __repr__(self) -> str:
        return f'Import(name={self.name!r}, path={self.path!r}, alias={self._alias!r})'


class ImportRegistry:
    """Maps aliases to import paths for a single generated file.

    Example:
        >>> registry = ImportRegistry()
        >>> registry.register('errors', 'example.com/app/vendor/github.com/pkg/errors')
        'errors'
        >>> registry.register('pkgerrors', 'github.com/pkg/errors')
        'errors'
    """

    def __init__(self, vendor_marker: str = DEFAULT_VENDOR_MARKER):
        self.vendor_marker = vendor_marker
        self._paths: dict[str, str] = {}
        self._aliases: dict[str, str] = {}

    def new_import(self, name: str | None, path: str) -> Import:
        """Return a deferred import; the registry is not modified yet."""
        return Import(self, name, path)

    def register(self, name: str | None, path: str) -> str:
        """Register ``path`` and return the alias generated code should use.

        Args:
            name: Preferred alias. When None, the last segment of the path is used.
            path: Import path, possibly under a vendor directory.

        Returns:
            The preferred name if it is free or already bound to this path,
            the alias previously given to this path, or the sanitized full path.

        Raises:
            ImportConflictError: If the sanitized full path is already bound to a
                different path.
        """
        path = unvendor(path, self.vendor_marker)
        alias = self._aliases.get(path)
        if alias is not None:
            return alias

        if name is None:
            name = make_alias(path)

        if name not in self._paths:
            return self._bind(name, path)

        fullpath = make_fullpath(path)
        existing = self._paths.get(fullpath)
        if existing is not None and existing != path:
            raise ImportConflictError(path, existing, fullpath)
        logger.debug(
            f"Alias '{name}' is taken by '{self._paths[name]}', "
            f"using '{fullpath}' for '{path}'"
        )
        return self._bind(fullpath, path)

    def _bind(self, alias: str, path: str) -> str:
        logger.debug(f"Registered import '{path}' as '{alias}'")
        self._paths[alias] = path
        self._aliases[path] = alias
        return alias

    def alias_for(self, path: str) -> str | None:
        """Return the alias of an already registered path, if any."""
        return self._aliases.get(unvendor(path, self.vendor_marker))

    def sorted_imports(self) -> list[tuple[str, str]]:
        """Return ``(alias, path)`` pairs ordered by path."""
        return [(self._aliases[path], path) for path in sorted(self._aliases)]

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: str) -> bool:
        return self.alias_for(path) is not None
