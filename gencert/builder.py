import datetime
from typing import Optional

import attr
from OpenSSL import crypto
from cryptography import x509
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509.oid import ExtendedKeyUsageOID, NameOID

from .errors import CertificateBuildError
from .log import log

# X.509 caps the common name at 64 characters
MAX_COMMON_NAME_LENGTH = 64

# not_before is backdated so verifiers with slightly slow clocks accept the cert
CLOCK_SKEW = datetime.timedelta(hours=1)


@attr.s(frozen=True)
class BuiltCertificate:
    der = attr.ib(repr=False)  # type: bytes
    not_before = attr.ib()  # type: datetime.datetime
    not_after = attr.ib()  # type: datetime.datetime
    serial_number = attr.ib()  # type: int


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def _as_naive_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(datetime.timezone.utc).replace(tzinfo=None)


def _as_aware_utc(value: datetime.datetime) -> datetime.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc)


def _extensions(common_name):
    return [
        x509.Extension(
            x509.oid.ExtensionOID.BASIC_CONSTRAINTS,
            True,
            x509.BasicConstraints(ca=False, path_length=None),
        ),
        x509.Extension(
            x509.oid.ExtensionOID.KEY_USAGE,
            True,
            x509.KeyUsage(
                digital_signature=True,
                content_commitment=False,
                key_encipherment=True,
                data_encipherment=True,
                key_agreement=True,
                key_cert_sign=False,
                crl_sign=False,
                encipher_only=False,
                decipher_only=False,
            ),
        ),
        x509.Extension(
            x509.oid.ExtensionOID.EXTENDED_KEY_USAGE,
            False,
            x509.ExtendedKeyUsage(
                [ExtendedKeyUsageOID.SERVER_AUTH, ExtendedKeyUsageOID.CLIENT_AUTH]
            ),
        ),
        x509.Extension(
            x509.oid.ExtensionOID.SUBJECT_ALTERNATIVE_NAME,
            False,
            x509.SubjectAlternativeName([x509.DNSName(common_name)]),
        ),
    ]


def build_certificate(
    k: crypto.PKey,
    common_name: str,
    ttl: datetime.timedelta,
    serial_number: Optional[int] = None,
    now: Optional[datetime.datetime] = None,
    strict: bool = False,
) -> BuiltCertificate:
    """Build and self-sign a leaf certificate for common_name.

    The certificate is valid from one hour before `now` for `ttl`. A ttl of
    zero or less is accepted and produces a certificate which is already
    expired, unless strict is set in which case it is rejected.
    """
    if strict and ttl <= datetime.timedelta(0):
        raise CertificateBuildError(
            "Refusing to create certificate with non-positive lifetime {}".format(ttl)
        )

    if not isinstance(common_name, str) or not (
        0 < len(common_name) <= MAX_COMMON_NAME_LENGTH
    ):
        raise CertificateBuildError(
            "Common name must be between 1 and {} characters, got {!r}".format(
                MAX_COMMON_NAME_LENGTH, common_name
            )
        )

    if now is None:
        now = _utcnow()
    # certificates only record whole seconds
    not_before = _as_aware_utc(now).replace(microsecond=0) - CLOCK_SKEW
    not_after = not_before + ttl

    if serial_number is None:
        serial_number = x509.random_serial_number()
    elif (
        not isinstance(serial_number, int)
        or serial_number <= 0
        or serial_number.bit_length() >= 160
    ):
        raise CertificateBuildError(
            "Serial number must be positive and fit in 159 bits, got {}".format(
                serial_number
            )
        )

    try:
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        private_key = k.to_cryptography_key()
        # The builder is constructed directly rather than through its setters,
        # which refuse a not_after earlier than not_before.
        builder = x509.CertificateBuilder(
            issuer_name=name,
            subject_name=name,
            public_key=private_key.public_key(),
            serial_number=serial_number,
            not_valid_before=_as_naive_utc(not_before),
            not_valid_after=_as_naive_utc(not_after),
            extensions=_extensions(common_name),
        )
        cert = builder.sign(private_key, hashes.SHA256())
    except (ValueError, TypeError, UnsupportedAlgorithm) as ex:
        raise CertificateBuildError(
            "Could not build certificate for {!r}: {}".format(common_name, ex)
        ) from ex

    log.debug(
        "Signed certificate for %s (serial %x) valid %s to %s",
        common_name,
        serial_number,
        not_before,
        not_after,
    )

    return BuiltCertificate(
        der=cert.public_bytes(serialization.Encoding.DER),
        not_before=not_before,
        not_after=not_after,
        serial_number=serial_number,
    )
