from OpenSSL import crypto
from cryptography.hazmat.primitives import serialization

from .errors import KeyGenerationError
from .log import log

# smallest modulus OpenSSL will still generate for us
MIN_BITS = 1024


def generate_key_pair(bits: int) -> crypto.PKey:
    """Generate a fresh RSA key pair of the given strength.

    Randomness comes from OpenSSL's CSPRNG. Raises KeyGenerationError if the
    strength is not usable or OpenSSL fails to produce a key.
    """
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise KeyGenerationError(
            "Key strength must be an integer number of bits, got {!r}".format(bits)
        )
    if bits < MIN_BITS:
        raise KeyGenerationError(
            "Key strength of {} bits is too small (minimum is {})".format(
                bits, MIN_BITS
            )
        )

    log.debug("Generating %d bit RSA key", bits)
    k = crypto.PKey()
    try:
        k.generate_key(crypto.TYPE_RSA, bits)
    except (crypto.Error, ValueError, TypeError) as ex:
        raise KeyGenerationError(
            "Could not generate {} bit RSA key: {}".format(bits, ex)
        ) from ex
    return k


def private_key_der(k: crypto.PKey) -> bytes:
    "PKCS#1 DER encoding of the private key"
    return k.to_cryptography_key().private_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
