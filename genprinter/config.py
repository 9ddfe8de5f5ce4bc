import os
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from genprinter.exceptions import ConfigurationError

DEFAULT_FILENAMES = ['genprinter.yaml', 'genprinter.yml']


class PrinterConfig(BaseSettings):
    """Settings shared by every printer created in a generation run."""

    model_config = SettingsConfigDict(env_prefix='GENPRINTER_')

    generator: str = Field(
        'genprinter',
        min_length=1,
        description='Generator name written in the "Code generated by" header.',
    )

    indent: str = Field(
        '\t', min_length=1, description='Text inserted once per indentation level.'
    )

    vendor_marker: str = Field(
        '/vendor/',
        min_length=1,
        description='Path segment after which a vendored import path is kept.',
    )


def load_yaml(path: str | Path) -> dict:
    import yaml

    return yaml.load(Path(path).read_text(), Loader=yaml.FullLoader) or {}


def _load(path: str | Path) -> PrinterConfig:
    import yaml

    try:
        data = load_yaml(path)
    except OSError as e:
        raise ConfigurationError(
            f'Cannot read configuration: {e.strerror or e}', config_path=str(path)
        ) from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f'Invalid YAML: {e}', config_path=str(path)) from e
    return _validate(data, str(path))


def _validate(data: object, source: str) -> PrinterConfig:
    if not isinstance(data, dict):
        raise ConfigurationError('Configuration must be a mapping', config_path=source)
    try:
        return PrinterConfig(**data)
    except ValidationError as e:
        error = e.errors()[0]
        field = '.'.join(str(part) for part in error['loc']) or None
        raise ConfigurationError(error['msg'], config_path=source, field=field) from e


def get_config(path: str | None = None) -> PrinterConfig:
    """Load configuration from a file, or fall back to defaults and env vars.

    Raises:
        ConfigurationError: If a configuration file cannot be read or parsed,
            or holds invalid values.
    """
    if path:
        return _load(path)

    cwd = os.getcwd()

    for filename in DEFAULT_FILENAMES:
        candidate = Path(cwd) / filename
        if candidate.exists():
            return _load(candidate)

    candidate = Path(cwd) / 'pyproject.toml'

    if candidate.exists():
        import tomllib

        try:
            pyproject = tomllib.loads(candidate.read_text())
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(
                f'Invalid TOML: {e}', config_path=str(candidate)
            ) from e
        tools = pyproject.get('tool', {})

        if 'genprinter' in tools:
            return _validate(tools['genprinter'], str(candidate))

    return PrinterConfig()
