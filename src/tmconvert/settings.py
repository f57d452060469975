"""
Configuration for tmconvert.

Settings are grouped by concern and loaded with pydantic-settings from the
process environment or a local ``.env`` file. Every variable carries the
``TMCONVERT__`` prefix and nested fields are joined with ``__``, so
``settings.conversion.boundary_marker`` is read from
``TMCONVERT__CONVERSION__BOUNDARY_MARKER``.

Contents:
- LoggingSettings: console and file sinks of the loguru logger.
- ConversionSettings: file naming rules and tape symbol conventions.
- Settings: the root object, able to render itself in ``.env`` format.
- settings: the process wide instance, refreshed by `reload_settings`.

Example:
```python
from tmconvert.settings import settings

settings.conversion.compact_output = True
```

```bash
export TMCONVERT__LOGGING__CONSOLE_LOG_LEVEL=INFO
export TMCONVERT__CONVERSION__DEFAULT_INPUT=machines/busy_beaver.in
```
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tmconvert.symbols import is_writable_symbol

__all__ = [
    "ConversionSettings",
    "LoggingSettings",
    "Settings",
    "print_config",
    "reload_settings",
    "settings",
]


class LoggingSettings(BaseModel):
    """
    Sinks installed by `tmconvert.logging.configure_logger`
    """

    disabled: bool = Field(
        default=False,
        description="True to silence every tmconvert log record.",
    )
    clear_loggers: bool = Field(
        default=True,
        description=(
            "True (default) to remove previously installed loguru handlers, "
            "including the library default one, before adding tmconvert's sinks."
        ),
    )
    console_log_level: str = Field(
        default="WARNING",
        description=(
            "Minimum level written to stderr, one of TRACE, DEBUG, INFO, SUCCESS, "
            "WARNING, ERROR or CRITICAL."
        ),
    )
    log_file: Optional[str] = Field(
        default=None,
        description=(
            "File receiving JSON serialized records in addition to the console. "
            "Unset disables the file sink unless log_file_level is set."
        ),
    )
    log_file_level: Optional[str] = Field(
        default=None,
        description="Minimum level of the file sink, INFO when unset.",
    )


class ConversionSettings(BaseModel):
    """
    File naming rules and tape symbol conventions used when converting machines
    """

    input_suffix: str = Field(
        default=".in",
        description="Required suffix of machine description files.",
    )
    output_suffix: str = Field(
        default=".out",
        description="Suffix swapped in for the input suffix to name the output file.",
    )
    default_input: str = Field(
        default="example.in",
        description="Input file converted when the CLI is given no path.",
    )
    blank: str = Field(
        default="_",
        description="The blank tape symbol of parsed machines.",
    )
    halt_prefix: str = Field(
        default="halt",
        description="States whose name starts with this prefix are halting states.",
    )
    boundary_marker: str = Field(
        default="#",
        description=(
            "Preferred symbol marking the left end of a one-way tape embedded in a "
            "two-way tape. A fresh symbol is allocated if the machine already uses it."
        ),
    )
    extra_symbols: str = Field(
        default="",
        description=(
            "Input symbols that may appear on the tape without being named by the "
            "table. The fold construction generates wildcard and setup rows for "
            "them, and the boundary marker never collides with them."
        ),
    )
    compact_output: bool = Field(
        default=False,
        description=(
            "True to write '*' where a row writes back the read symbol or keeps "
            "its state, False (default) to write every field literally."
        ),
    )
    write_legend: bool = Field(
        default=True,
        description="True (default) to list generated pair symbols as comments.",
    )

    @field_validator("blank", "boundary_marker")
    @classmethod
    def validate_single_char(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError(f"Expected a single character, got {value!r}")

        return value

    @field_validator("extra_symbols")
    @classmethod
    def validate_extra_symbols(cls, value: str) -> str:
        rejected = sorted({char for char in value if not is_writable_symbol(char)})
        if rejected:
            raise ValueError(
                f"Extra symbols cannot contain whitespace, ';' or '*', got {rejected}"
            )

        return value


class Settings(BaseSettings):
    """
    Root of the tmconvert configuration.

    Values come from, in increasing priority, the field defaults, a ``.env``
    file in the working directory, and ``TMCONVERT__`` environment variables
    such as ``TMCONVERT__LOGGING__DISABLED=true``.
    """

    model_config = SettingsConfigDict(
        env_prefix="TMCONVERT__",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
        validate_default=True,
    )

    logging: LoggingSettings = LoggingSettings()
    conversion: ConversionSettings = ConversionSettings()

    def generate_env_file(self) -> str:
        """
        Render the active values as ``.env`` lines, one variable per field.

        :return: The ``.env`` contents, unset and empty values left blank
        """
        lines = self._env_lines(
            self,
            self.model_config["env_prefix"],  # type: ignore[typeddict-item]
            self.model_config["env_nested_delimiter"],  # type: ignore[typeddict-item]
        )

        return "".join(f"{line}\n" for line in lines)

    @staticmethod
    def _env_lines(model: BaseModel, prefix: str, delimiter: str) -> list[str]:
        lines = []
        nested = []
        for name in type(model).model_fields:
            value = getattr(model, name)
            variable = f"{prefix}{name.upper()}"
            if isinstance(value, BaseModel):
                # sections follow the plain fields of their parent
                nested.append((f"{variable}{delimiter}", value))
            elif value is None or value == "":
                lines.append(f"{variable}=")
            else:
                lines.append(f'{variable}="{value}"')

        for section_prefix, section in nested:
            lines.extend(Settings._env_lines(section, section_prefix, delimiter))

        return lines


settings = Settings()


def reload_settings():
    """
    Re-read the environment into the shared `settings` instance in place
    """
    fresh = Settings()
    settings.__dict__.update(fresh.__dict__)


def print_config():
    """
    Print the active settings in ``.env`` format
    """
    print(f"Settings: \n{settings.generate_env_file()}")  # noqa: T201
