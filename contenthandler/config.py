from enum import Enum
import configparser
import re
from os import environ
from os.path import exists
from typing import Any
import logging

from pydantic import BaseModel, Field, ValidationError, computed_field, field_validator

logger = logging.getLogger(__name__)

_PATH = "app{suffix}.conf"
_CONFIG = None


def _convert_conf_to_sec(value: str) -> int:
    conversion_map = {"s": 1, "m": 60, "h": 3600, "d": 86400}
    match = re.match(r"^(\d+)([smhd])$", value)
    if not match:
        raise ValueError(
            f"Incorrect input, must be digits with {list(conversion_map.keys())}"
        )

    number = int(match.group(1))
    unit = match.group(2)

    return number * conversion_map[unit]


def _to_bool(v: Any, default: bool) -> bool:
    if v in (None, "", " "):
        return default
    if isinstance(v, str):
        return v.lower() in ("yes", "true", "t", "1")
    return bool(v)


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"


class ConfigApp(BaseModel):
    loglevel: LogLevel = Field(default=LogLevel.info)


class ConfigRegistry(BaseModel):
    # When disabled, lookups for unregistered keys return None instead of the default handler
    fallback_to_default: bool = Field(default=True)

    @field_validator("fallback_to_default", mode="before")
    def validate_fallback_to_default(cls, v: Any) -> bool:
        return _to_bool(v, True)


class ConfigPayload(BaseModel):
    timeout: int = Field(default=10, gt=0)
    verify_ca: str | bool = Field(default=True)
    mtls_client_cert_path: str | None = Field(default=None)
    mtls_client_key_path: str | None = Field(default=None)
    authentication: str = Field(
        default="off",
        description="Authentication for remote payloads, can be 'off' or 'oauth2'",
    )

    @field_validator("timeout", mode="before")
    def validate_timeout(cls, v: Any) -> int:
        if v in (None, "", " "):
            return 10
        return int(v)

    @field_validator("verify_ca", mode="before")
    def validate_verify_ca(cls, v: Any) -> str | bool:
        if v in (None, "", " "):
            return True
        if isinstance(v, str) and v.lower() in ("yes", "true", "t", "1", "no", "false", "f", "0"):
            return v.lower() in ("yes", "true", "t", "1")
        return v  # type: ignore

    @field_validator("mtls_client_cert_path", "mtls_client_key_path", mode="before")
    def validate_mtls_paths(cls, v: Any) -> str | None:
        if v in (None, "", " "):
            return None
        return str(v)

    @field_validator("authentication")
    def validate_authentication(cls, value: Any) -> str:
        if value not in {"off", "oauth2"}:
            raise ValueError("authentication must be either 'off' or 'oauth2'")
        return str(value)


class ConfigOAuth2(BaseModel):
    token_url: str
    client_id: str
    client_secret: str
    scope: str | None = Field(default=None)


class ConfigUnstructured(BaseModel):
    concept_base_name: str = Field(default="Unstructured Attachment")
    # Key of the host's complex observation handler that persists Content values
    complex_obs_handler: str = Field(default="ContentObsHandler")
    cache_concepts_by_name: bool = Field(default=False)

    @field_validator("cache_concepts_by_name", mode="before")
    def validate_cache_concepts_by_name(cls, v: Any) -> bool:
        return _to_bool(v, False)


class ConfigConceptCache(BaseModel):
    host: str | None = Field(default=None)
    port: int | None = Field(default=None)
    ssl: bool = Field(default=False)
    key: str | None = Field(default=None)
    cert: str | None = Field(default=None)
    cafile: str | None = Field(default=None)
    check_hostname: bool = Field(default=True)
    object_ttl: str = Field(default="1d")
    namespace: str = Field(default="contenthandler")

    @field_validator("host", "key", "cert", "cafile", mode="before")
    def validate_optional_str(cls, v: Any) -> str | None:
        if v in (None, "", " "):
            return None
        return str(v)

    @field_validator("port", mode="before")
    def validate_port(cls, v: Any) -> int | None:
        if v in (None, "", " "):
            return None
        return int(v)

    @field_validator("ssl", mode="before")
    def validate_ssl(cls, v: Any) -> bool:
        return _to_bool(v, False)

    @field_validator("check_hostname", mode="before")
    def validate_check_hostname(cls, v: Any) -> bool:
        return _to_bool(v, True)

    @computed_field
    def object_ttl_in_sec(self) -> int:
        return _convert_conf_to_sec(self.object_ttl)


class ConfigStats(BaseModel):
    enabled: bool = Field(default=False)
    host: str | None = Field(default=None)
    port: int | None = Field(default=None)
    module_name: str | None = Field(default="contenthandler")

    @field_validator("enabled", mode="before")
    def validate_enabled(cls, v: Any) -> bool:
        return _to_bool(v, False)

    @field_validator("host", mode="before")
    def validate_host(cls, v: Any) -> str | None:
        if v in (None, "", " "):
            return None
        return str(v)

    @field_validator("port", mode="before")
    def validate_port(cls, v: Any) -> int | None:
        if v in (None, "", " "):
            return None
        return int(v)


class Config(BaseModel):
    app: ConfigApp
    registry: ConfigRegistry
    payload: ConfigPayload
    oauth2: ConfigOAuth2 | None
    unstructured: ConfigUnstructured
    concept_cache: ConfigConceptCache
    stats: ConfigStats


def read_ini_file(path: str) -> Any:
    ini_data = configparser.ConfigParser()
    ini_data.read(path)

    ret = {}
    for section in ini_data.sections():
        ret[section] = dict(ini_data[section])

    return ret


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None


def set_config(config: Config) -> None:
    global _CONFIG
    _CONFIG = config


def get_config(path: str | None = None) -> Config:
    global _CONFIG
    global _PATH

    if _CONFIG is not None:
        return _CONFIG

    if path is None:
        suffix = environ.get("APP_ENV", "")
        if suffix:
            suffix = f".{suffix}"
        path = _PATH.replace("{suffix}", suffix)
        logger.info(f"Reading configuration using file: {path}")

    if not exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    # INI files have no notion of optional sections, so fill in the ones pydantic
    # expects before validating.
    ini_data = read_ini_file(path)
    for section in ("app", "registry", "payload", "unstructured", "concept_cache", "stats"):
        ini_data.setdefault(section, {})
    if "oauth2" not in ini_data:
        ini_data["oauth2"] = None

    try:
        _CONFIG = Config(**ini_data)
    except ValidationError as e:
        logger.error(f"Configuration validation error: {e}")
        raise e

    return _CONFIG
