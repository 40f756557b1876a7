class GenCertError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class KeyGenerationError(GenCertError):
    """Raised when an RSA key pair could not be generated."""

    pass


class CertificateBuildError(GenCertError):
    """Raised when the certificate template could not be built or signed."""

    pass


class PersistenceError(GenCertError):
    """Raised when writing an artifact to disk failed."""

    pass


class KeyPairMismatch(GenCertError):
    """Raised when a certificate and key do not form a usable pair."""

    pass
