from typing import Any, Dict

from OpenSSL import SSL
from cryptography import x509
from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509.oid import NameOID

from .encoders import is_pem
from .errors import GenCertError, KeyPairMismatch


def load_certificate(cert_bytes: bytes) -> x509.Certificate:
    try:
        if is_pem(cert_bytes):
            return x509.load_pem_x509_certificate(cert_bytes)
        return x509.load_der_x509_certificate(cert_bytes)
    except ValueError as ex:
        raise GenCertError("Could not parse certificate: {}".format(ex)) from ex


def load_private_key(key_bytes: bytes):
    if is_pem(key_bytes):
        return serialization.load_pem_private_key(key_bytes, password=None)
    return serialization.load_der_private_key(key_bytes, password=None)


def check_key_pair(cert_bytes: bytes, key_bytes: bytes) -> None:
    """Confirm that the key is the private half of the certificate's key.

    Both arguments may be PEM or DER. This is the same check a TLS server does
    when it is handed a certificate and key.
    """
    try:
        cert = load_certificate(cert_bytes)
    except GenCertError as ex:
        raise KeyPairMismatch(ex.message) from ex
    try:
        k = load_private_key(key_bytes)
    except (ValueError, TypeError, UnsupportedAlgorithm) as ex:
        raise KeyPairMismatch("Could not parse private key: {}".format(ex)) from ex

    context = SSL.Context(SSL.TLS_METHOD)
    # only the pairing is checked here, so allow keys the default policy deems weak
    context.set_cipher_list(b"DEFAULT:@SECLEVEL=0")
    try:
        context.use_certificate(cert)
        context.use_privatekey(k)
        context.check_privatekey()
    except SSL.Error as ex:
        raise KeyPairMismatch(
            "Private key does not match the certificate: {}".format(ex)
        ) from ex


def _verify_self_signature(cert: x509.Certificate) -> bool:
    public_key = cert.public_key()
    if not isinstance(public_key, rsa.RSAPublicKey):
        return False
    try:
        public_key.verify(
            cert.signature,
            cert.tbs_certificate_bytes,
            padding.PKCS1v15(),
            cert.signature_hash_algorithm,
        )
    except InvalidSignature:
        return False
    return True


def describe_certificate(cert_bytes: bytes) -> Dict[str, Any]:
    cert = load_certificate(cert_bytes)

    common_names = cert.subject.get_attributes_for_oid(NameOID.COMMON_NAME)
    try:
        san = cert.extensions.get_extension_for_class(x509.SubjectAlternativeName)
        dns_names = san.value.get_values_for_type(x509.DNSName)
    except x509.ExtensionNotFound:
        dns_names = []

    public_key = cert.public_key()
    return {
        "common_name": common_names[0].value if common_names else None,
        "dns_names": dns_names,
        "serial_number": cert.serial_number,
        "not_before": cert.not_valid_before_utc,
        "not_after": cert.not_valid_after_utc,
        "self_signed": cert.issuer == cert.subject and _verify_self_signature(cert),
        "key_size": getattr(public_key, "key_size", None),
    }
