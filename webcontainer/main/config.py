"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
Settings come from keyword arguments, environment variables, ``.env``
files or a flat mapping keyed by ``ContainerConfigKeys`` names. Every
settings object is immutable once built.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field, ImportString, TypeAdapter, ValidationError
from pydantic import ValidationInfo, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from webcontainer.domain.entities.errors import ConfigurationError
from webcontainer.domain.entities.webapp import Webapp
from webcontainer.domain.ports.realm import Realm
from webcontainer.infrastructure.realms.memory_realm import MemoryRealm
from webcontainer.shared import (
    ContainerConfigKeys,
    EnumEnvironment,
    EnumLogLevel,
    get_logger,
)
from webcontainer.shared.consts import CONF_DIR, WEBAPPS_DIR
from webcontainer.shared.env import resolve_secret_files

logger = get_logger(__name__)

_IMPORT_STRING = TypeAdapter(ImportString)


class _FailFastSettings(BaseSettings):
    """Turns validation failures into ConfigurationError at construction."""

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except ValidationError as exc:
            raise ConfigurationError(
                f"Invalid {type(self).__name__}: {exc.error_count()} error(s)",
                details={"errors": exc.errors(include_url=False)},
            ) from exc


class ContainerSettings(_FailFastSettings):
    """Settings of the embedded container.

    ``catalina_home`` is required; the other paths default to locations
    below it.
    """

    catalina_home: Path = Field(description="Container home directory")
    app_base: Optional[Path] = Field(
        default=None, description="Base directory of deployed webapps"
    )
    address: str = Field(default="localhost", description="Connector bind address")
    port: int = Field(default=8080, ge=0, le=65535, description="Connector bind port")
    secure: bool = Field(default=False, description="Terminate TLS on the connector")
    ssl_certfile: Optional[Path] = Field(
        default=None, description="TLS certificate used when secure"
    )
    ssl_keyfile: Optional[Path] = Field(
        default=None, description="TLS private key used when secure"
    )
    users_file: Optional[Path] = Field(
        default=None, description="User database of the default memory realm"
    )
    realm: Optional[Realm] = Field(
        default=None,
        validate_default=True,
        description="Realm instance, realm class or dotted import path",
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVLET_CONTAINER_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
        arbitrary_types_allowed=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _derive_home_paths(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        home = data.get("catalina_home")
        if home is None or str(home).strip() == "":
            raise ValueError("catalina_home is required")

        home = Path(home)
        derived = dict(data)
        defaults = {
            "app_base": home / WEBAPPS_DIR,
            "ssl_certfile": home / CONF_DIR / "server.crt",
            "ssl_keyfile": home / CONF_DIR / "server.key",
            "users_file": home / CONF_DIR / "users.json",
        }
        for name, default in defaults.items():
            if derived.get(name) in (None, ""):
                derived[name] = default
        return derived

    @field_validator("realm", mode="before")
    @classmethod
    def _resolve_realm(cls, value: Any, info: ValidationInfo) -> Any:
        users_file = info.data.get("users_file")
        if value is None or value == "":
            return MemoryRealm(users_file=users_file)
        if isinstance(value, str):
            value = _IMPORT_STRING.validate_python(value)
        if isinstance(value, type):
            if not issubclass(value, Realm):
                raise ValueError(f"{value!r} is not a Realm")
            if issubclass(value, MemoryRealm):
                return value(users_file=users_file)
            return value()
        return value

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "ContainerSettings":
        """Build settings from a flat mapping keyed by container config keys."""
        values: Dict[str, Any] = {}
        for key, value in properties.items():
            if not key.startswith(ContainerConfigKeys.PREFIX):
                continue
            try:
                values[ContainerConfigKeys.field_name(key)] = value
            except KeyError:
                logger.warning("settings.property.unknown", key=key)
        return cls(**values)


class WebappSettings(BaseModel):
    """A webapp declared through configuration."""

    context: str
    location: str

    def to_webapp(self) -> Webapp:
        return Webapp(context=self.context, location=self.location)


class ServletSettings(_FailFastSettings):
    """Servlet layer settings: the container and statically declared webapps."""

    container: ContainerSettings = Field(default_factory=ContainerSettings)
    webapps: List[WebappSettings] = Field(
        default_factory=list, description="Webapps deployed besides the DI ones"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVLET_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(_FailFastSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    servlet: ServletSettings = Field(default_factory=ServletSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings per environment.
    """
    resolve_secret_files()
    return AppSettings()
