"""Custom exceptions for genprinter.

This module defines the exceptions raised while assembling a generated source
file. They fall into two groups:

- Contract violations (``ContractViolationError`` and subclasses) signal a bug in
  the calling generator, such as unbalanced indentation or two import paths that
  cannot be given distinct aliases. They are not meant to be caught and retried.
- Recoverable errors (``OutputError``, ``ConfigurationError``) report problems with
  the environment: a sink that fails to accept bytes or an invalid config file.
"""


class GenPrinterError(Exception):
    """Base exception for all genprinter errors.

    Example:
        try:
            printer.write_to(sink)
        except GenPrinterError as e:
            print(f'genprinter error: {e}')
    """

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ContractViolationError(GenPrinterError):
    """The caller broke an invariant of the printer.

    Raised for programmer errors only. Catching this to carry on generating
    produces broken output.
    """

    pass


class UnbalancedIndentError(ContractViolationError):
    """Dedent was requested with no indentation left."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or 'bug in code generator: unindenting more than has been indented'
        )


class ImportConflictError(ContractViolationError):
    """Two distinct import paths need the same fallback alias.

    Attributes:
        path: The path being registered.
        existing_path: The path already registered under ``key``.
        key: The sanitized full-path alias both paths map to.
    """

    def __init__(self, path: str, existing_path: str, key: str):
        self.path = path
        self.existing_path = existing_path
        self.key = key
        super().__init__(
            f"non unique fullpath '{key}': '{existing_path}' != '{path}'"
        )


class OutputError(GenPrinterError):
    """Error writing generated output to a sink.

    Attributes:
        bytes_written: Number of bytes accepted by the sink before the failure.
        output_path: The path being written, when known.
        cause: The underlying exception that caused the failure.
    """

    def __init__(
        self,
        bytes_written: int = 0,
        output_path: str | None = None,
        cause: Exception | None = None,
    ):
        self.bytes_written = bytes_written
        self.output_path = output_path
        self.cause = cause
        if output_path:
            message = f"Failed to write output to '{output_path}'"
        else:
            message = 'Failed to write output'
        message += f' after {bytes_written} bytes'
        if cause:
            message += f': {cause}'
        super().__init__(message)


class ConfigurationError(GenPrinterError):
    """Error in configuration.

    Attributes:
        config_path: The path to the configuration file, if applicable.
        field: The specific configuration field that is invalid.
    """

    def __init__(
        self, message: str, config_path: str | None = None, field: str | None = None
    ):
        self.config_path = config_path
        self.field = field
        full_message = message
        if config_path:
            full_message = f"{message} in '{config_path}'"
        if field:
            full_message += f' (field: {field})'
        super().__init__(full_message)
