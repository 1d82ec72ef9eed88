from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


DEFAULT_HOST_NAME = "localhost"
ROOT_CONTEXT_PATH = ""
ROOT_DOC_BASE = "ROOT"
WEBAPPS_DIR = "webapps"
CONF_DIR = "conf"
