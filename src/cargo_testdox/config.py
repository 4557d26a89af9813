from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Optional, List, Literal
import yaml, os, pathlib, re

from .parsing.classifier import DEFAULT_DOCTEST_PATTERN

CONFIG_ENV_VAR = "CARGO_TESTDOX_CONFIG"

class ConfigError(Exception):
    """Raised when the config file cannot be read or does not validate."""

class RunnerConfig(BaseModel):
    command: List[str] = Field(default_factory=lambda: ["cargo", "test"], min_length=1,
                               description="Runner argv; extra CLI args are appended")

class OutputConfig(BaseModel):
    color: Literal["auto", "always", "never"] = Field("auto")
    show_module: bool = Field(False, description="Prefix sentences with the test's module path")
    doctest_pattern: str = Field(DEFAULT_DOCTEST_PATTERN, description="Regex matched against doc-test identifiers")

    @field_validator("doctest_pattern")
    @classmethod
    def _compiles(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"not a regular expression: {e}")
        return v

class AppConfig(BaseModel):
    runner: RunnerConfig = Field(default_factory=RunnerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field("WARNING")

def load_config(path: Optional[str] = None) -> AppConfig:
    if path is None:
        path = os.environ.get(CONFIG_ENV_VAR) or None
    if path is None:
        return AppConfig()
    try:
        data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
        return AppConfig.model_validate(data)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"{path}: {e}") from e
