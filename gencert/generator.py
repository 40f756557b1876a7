import datetime
from typing import Dict, Optional

import attr

from .builder import build_certificate
from .encoders import (
    Encoder,
    as_encoder,
    default_cert_encoder,
    default_key_encoder,
)
from .keygen import generate_key_pair, private_key_der
from .log import log
from .tempfiles import TempFiles, save_cert_and_key

DEFAULT_BITS = 4096


@attr.s
class GeneratorConfig:
    """Options for generating self-signed certificates.

    Zero/None fields are filled in by apply_defaults() the first time the
    config is used. Since that mutates the config, an instance shared between
    threads should either be fully populated up front or guarded by a lock.
    """

    bits = attr.ib(default=0)  # type: int
    cert_encoder = attr.ib(default=None)  # type: Optional[Encoder]
    key_encoder = attr.ib(default=None)  # type: Optional[Encoder]
    # None means a fresh random serial for every certificate
    serial_number = attr.ib(default=None)  # type: Optional[int]
    strict = attr.ib(default=False)  # type: bool

    def apply_defaults(self):
        if not self.bits:
            self.bits = DEFAULT_BITS
        if self.cert_encoder is None:
            self.cert_encoder = default_cert_encoder()
        if self.key_encoder is None:
            self.key_encoder = default_key_encoder()


@attr.s(frozen=True)
class SelfSignedCert:
    """A key/cert pair created by create()"""

    cert = attr.ib(repr=False)  # type: bytes
    key = attr.ib(repr=False)  # type: bytes
    expires = attr.ib()  # type: datetime.datetime
    not_before = attr.ib()  # type: datetime.datetime
    serial_number = attr.ib()  # type: int

    def __str__(self):
        return self.cert.decode("utf8", errors="replace")

    def save_temp_files(self, dir: Optional[str] = None) -> TempFiles:
        """Writes the certificate and key to new temporary files.

        Left to caller to remove the files after use.
        """
        return save_cert_and_key(self.cert, self.key, dir=dir)


def create(
    config: GeneratorConfig, common_name: str, ttl: datetime.timedelta
) -> SelfSignedCert:
    config.apply_defaults()

    log.info("Generating %d bit key for %s", config.bits, common_name)
    k = generate_key_pair(config.bits)

    built = build_certificate(
        k,
        common_name,
        ttl,
        serial_number=config.serial_number,
        strict=config.strict,
    )
    log.info(
        "Created self-signed certificate for %s expiring %s", common_name, built.not_after
    )

    return SelfSignedCert(
        cert=as_encoder(config.cert_encoder)(built.der),
        key=as_encoder(config.key_encoder)(private_key_der(k)),
        expires=built.not_after,
        not_before=built.not_before,
        serial_number=built.serial_number,
    )


class SelfSignedCertGenerator:
    def __init__(self, config: Optional[GeneratorConfig] = None):
        if config is None:
            config = GeneratorConfig()
        self.config = config

    def create(self, common_name: str, ttl: datetime.timedelta) -> SelfSignedCert:
        return create(self.config, common_name, ttl)


def generate(
    common_name: str,
    ttl: datetime.timedelta,
    bits: int = 0,
    cert_encoder=None,
    key_encoder=None,
) -> SelfSignedCert:
    config = GeneratorConfig(
        bits=bits, cert_encoder=cert_encoder, key_encoder=key_encoder
    )
    return create(config, common_name, ttl)


def new_default_certificate(
    common_name: str, ttl: datetime.timedelta
) -> Dict[str, str]:
    """Creates a self-signed certificate and key with default settings and
    saves them to temporary files.

    Returns a dict with the certificate filename under "cert" and the
    private key filename under "key".
    """
    s = SelfSignedCertGenerator().create(common_name, ttl)
    files = s.save_temp_files()
    return {"cert": files.cert, "key": files.key}
