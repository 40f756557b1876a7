import datetime
import os
from configparser import RawConfigParser
from typing import Callable, Dict, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError, field_validator

from .errors import GenCertError
from .generator import DEFAULT_BITS, GeneratorConfig
from .encoders import IdentityEncoder, default_cert_encoder, default_key_encoder
from .log import log
from .util import parse_duration

T = TypeVar("T")

DEFAULT_CONFIG_PATH = "~/.gencert.ini"

ENCODINGS = {"pem", "der"}


class BadConfig(GenCertError):
    pass


class UnknownParameters(BadConfig):
    pass


class CreateSettings(BaseModel):
    common_name: str
    ttl: datetime.timedelta
    bits: int
    encoding: str
    out_dir: Optional[str]
    strict: bool

    @field_validator("bits")
    def check_bits(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"bits must not be negative, got {v}")
        return v

    @field_validator("encoding")
    def check_encoding(cls, v: str) -> str:
        v = v.lower()
        if v not in ENCODINGS:
            raise ValueError(f"{v} was not one of {ENCODINGS}")
        return v

    def create_generator_config(self) -> GeneratorConfig:
        if self.encoding == "der":
            cert_encoder, key_encoder = IdentityEncoder(), IdentityEncoder()
        else:
            cert_encoder, key_encoder = default_cert_encoder(), default_key_encoder()
        return GeneratorConfig(
            bits=self.bits,
            cert_encoder=cert_encoder,
            key_encoder=key_encoder,
            strict=self.strict,
        )


class NoDefault:
    pass


NO_DEFAULT = NoDefault()


def _parse_yn(value: str) -> bool:
    value = value.strip().lower()
    if value not in ("y", "n"):
        raise ValueError(f"expected either y or n but value was: {value}")
    return value == "y"


def get_config_path(config_file: Optional[str]) -> Optional[str]:
    if config_file is not None:
        return os.path.expanduser(config_file)
    default_path = os.path.expanduser(DEFAULT_CONFIG_PATH)
    if os.path.exists(default_path):
        return default_path
    return None


def load_config(
    config_file: Optional[str], overrides: Dict[str, str]
) -> CreateSettings:
    config_dict = {}
    config_file = get_config_path(config_file)
    if config_file is not None:
        if not os.path.exists(config_file):
            raise BadConfig(f"Config file {config_file} does not exist")
        log.info("Using config: %s", config_file)
        config_parser = RawConfigParser()
        config_parser.read(config_file)
        if config_parser.has_section("config"):
            config_dict.update(config_parser.items("config"))

    config_dict.update(overrides)

    config_used = set()

    def consume(
        name: str,
        default: Union[NoDefault, T] = NO_DEFAULT,
        parser: Callable[[str], T] = str,
    ) -> T:
        assert name not in config_used, f"Consumed {name} twice"
        config_used.add(name)

        if name in config_dict:
            try:
                value = parser(config_dict[name])
            except ValueError as ex:
                raise BadConfig(f"Invalid value for {name}: {ex}") from ex
        else:
            if isinstance(default, NoDefault):
                raise BadConfig(f"Missing {name} in config")
            else:
                value = default
        return value

    values = dict(
        common_name=consume("common_name", "localhost"),
        ttl=consume("ttl", datetime.timedelta(hours=24), parse_duration),
        bits=consume("bits", DEFAULT_BITS, int),
        encoding=consume("encoding", "pem"),
        out_dir=consume("out_dir", None),
        strict=consume("strict", False, _parse_yn),
    )

    unknown_params = set(config_dict.keys()).difference(config_used)
    if len(unknown_params) > 0:
        raise UnknownParameters(
            f"The following parameters are not recognized: {', '.join(sorted(unknown_params))}"
        )

    try:
        return CreateSettings(**values)
    except ValidationError as ex:
        raise BadConfig(f"Invalid config: {ex}") from ex
