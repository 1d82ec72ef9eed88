"""Static constant holder for web container config key names."""

from __future__ import annotations

from typing import Dict, Tuple

SERVLET_PREFIX = "servlet."


class ContainerConfigKeys:
    """Names of the configuration properties understood by the container.

    Every key lives under ``PREFIX``. The class is never instantiated.
    """

    PREFIX = SERVLET_PREFIX + "container."

    CATALINA_HOME = PREFIX + "catalinaHome"
    APP_BASE = PREFIX + "appBase"
    ADDRESS = PREFIX + "address"
    PORT = PREFIX + "port"
    SECURE = PREFIX + "secure"
    REALM = PREFIX + "realm"

    SSL_CERTFILE = PREFIX + "sslCertfile"
    SSL_KEYFILE = PREFIX + "sslKeyfile"
    USERS_FILE = PREFIX + "usersFile"

    _FIELDS: Dict[str, str] = {
        CATALINA_HOME: "catalina_home",
        APP_BASE: "app_base",
        ADDRESS: "address",
        PORT: "port",
        SECURE: "secure",
        REALM: "realm",
        SSL_CERTFILE: "ssl_certfile",
        SSL_KEYFILE: "ssl_keyfile",
        USERS_FILE: "users_file",
    }

    def __new__(cls, *args, **kwargs):
        raise TypeError(f"{cls.__name__} is a constant holder")

    @classmethod
    def all(cls) -> Tuple[str, ...]:
        """Return every recognised key."""
        return tuple(cls._FIELDS)

    @classmethod
    def field_name(cls, key: str) -> str:
        """Map a config key to the matching settings field name.

        Raises:
            KeyError: If the key is not a recognised container key.
        """
        return cls._FIELDS[key]
