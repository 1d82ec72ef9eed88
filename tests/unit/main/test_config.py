from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from webcontainer.domain.entities.errors import ConfigurationError
from webcontainer.infrastructure.realms import MemoryRealm
from webcontainer.main.config import AppSettings, ContainerSettings, get_settings
from webcontainer.shared import ContainerConfigKeys
from webcontainer.shared.consts import EnumEnvironment


def test_container_defaults_derive_from_home(catalina_home: Path) -> None:
    settings = ContainerSettings(catalina_home=catalina_home)

    assert settings.app_base == catalina_home / "webapps"
    assert settings.address == "localhost"
    assert settings.port == 8080
    assert settings.secure is False
    assert settings.users_file == catalina_home / "conf" / "users.json"
    assert isinstance(settings.realm, MemoryRealm)
    assert settings.realm.users_file == settings.users_file


def test_settings_are_immutable(catalina_home: Path) -> None:
    settings = ContainerSettings(catalina_home=catalina_home)

    with pytest.raises(ValidationError):
        settings.port = 9090


@pytest.mark.parametrize("home", [None, ""])
def test_home_is_required(home) -> None:
    with pytest.raises(ConfigurationError):
        ContainerSettings(catalina_home=home)


def test_invalid_port_is_rejected(catalina_home: Path) -> None:
    with pytest.raises(ConfigurationError) as exc_info:
        ContainerSettings(catalina_home=catalina_home, port=70000)

    assert exc_info.value.details["errors"]


def test_realm_accepts_instance_class_and_import_path(
    catalina_home: Path, static_realm
) -> None:
    realm = static_realm
    assert ContainerSettings(catalina_home=catalina_home, realm=realm).realm is realm

    from_class = ContainerSettings(catalina_home=catalina_home, realm=MemoryRealm)
    assert isinstance(from_class.realm, MemoryRealm)
    assert from_class.realm.users_file == catalina_home / "conf" / "users.json"

    from_path = ContainerSettings(
        catalina_home=catalina_home,
        realm="webcontainer.infrastructure.realms.memory_realm.MemoryRealm",
    )
    assert isinstance(from_path.realm, MemoryRealm)


def test_realm_rejects_non_realm_objects(catalina_home: Path) -> None:
    with pytest.raises(ConfigurationError):
        ContainerSettings(catalina_home=catalina_home, realm="pathlib.Path")
    with pytest.raises(ConfigurationError):
        ContainerSettings(catalina_home=catalina_home, realm=object())


def test_from_properties_reads_prefixed_keys(catalina_home: Path) -> None:
    settings = ContainerSettings.from_properties(
        {
            ContainerConfigKeys.CATALINA_HOME: str(catalina_home),
            ContainerConfigKeys.PORT: "9090",
            ContainerConfigKeys.SECURE: "true",
            ContainerConfigKeys.ADDRESS: "0.0.0.0",
            ContainerConfigKeys.PREFIX + "unknownKey": "ignored",
            "unrelated.key": "ignored",
        }
    )

    assert settings.catalina_home == catalina_home
    assert settings.port == 9090
    assert settings.secure is True
    assert settings.address == "0.0.0.0"


def test_settings_respect_environment_variables(
    monkeypatch: pytest.MonkeyPatch, catalina_home: Path
) -> None:
    monkeypatch.setenv("SERVLET_CONTAINER_CATALINA_HOME", str(catalina_home))
    monkeypatch.setenv("SERVLET_CONTAINER_PORT", "9191")
    monkeypatch.setenv("SERVLET_WEBAPPS", '[{"context": "docs", "location": "/srv/docs"}]')
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")

    settings = get_settings()

    assert settings.environment == EnumEnvironment.DEVELOPMENT
    assert settings.servlet.container.catalina_home == catalina_home
    assert settings.servlet.container.port == 9191
    assert settings.servlet.webapps[0].to_webapp().context == "/docs"
    assert settings.logging.level.value == "DEBUG"


def test_app_settings_without_home_fail_fast() -> None:
    with pytest.raises(ConfigurationError):
        AppSettings()
