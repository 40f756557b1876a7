__version__ = "0.1.0"

from .encoders import Encoder, IdentityEncoder, PemEncoder
from .errors import (
    CertificateBuildError,
    GenCertError,
    KeyGenerationError,
    KeyPairMismatch,
    PersistenceError,
)
from .generator import (
    DEFAULT_BITS,
    GeneratorConfig,
    SelfSignedCert,
    SelfSignedCertGenerator,
    create,
    generate,
    new_default_certificate,
)
from .verify import check_key_pair, describe_certificate
