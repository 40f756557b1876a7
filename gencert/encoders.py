import base64
import re
from typing import Callable, Optional, Union

CERTIFICATE_LABEL = "CERTIFICATE"
RSA_PRIVATE_KEY_LABEL = "RSA PRIVATE KEY"

PEM_LINE_LENGTH = 64

_PEM_BLOCK_RE = re.compile(
    rb"-----BEGIN (?P<label>[^-\r\n]+)-----\r?\n(?P<body>.*?)-----END (?P=label)-----",
    re.DOTALL,
)


class Encoder:
    """Transforms raw DER bytes into their serialized form.

    Subclasses implement encode(). Instances are callable so they can be used
    anywhere a plain bytes -> bytes function is expected.
    """

    def encode(self, data: bytes) -> bytes:
        raise NotImplementedError()

    def __call__(self, data: bytes) -> bytes:
        return self.encode(data)


class PemEncoder(Encoder):
    def __init__(self, label: str):
        self.label = label

    def encode(self, data: bytes) -> bytes:
        body = base64.b64encode(data)
        lines = [
            body[i : i + PEM_LINE_LENGTH] for i in range(0, len(body), PEM_LINE_LENGTH)
        ]
        label = self.label.encode("ascii")
        out = [b"-----BEGIN " + label + b"-----"]
        out.extend(lines)
        out.append(b"-----END " + label + b"-----")
        return b"\n".join(out) + b"\n"

    def __eq__(self, other):
        return isinstance(other, PemEncoder) and other.label == self.label

    def __hash__(self):
        return hash((PemEncoder, self.label))

    def __repr__(self):
        return "PemEncoder({!r})".format(self.label)


class IdentityEncoder(Encoder):
    def encode(self, data: bytes) -> bytes:
        return data

    def __eq__(self, other):
        return isinstance(other, IdentityEncoder)

    def __hash__(self):
        return hash(IdentityEncoder)

    def __repr__(self):
        return "IdentityEncoder()"


class FunctionEncoder(Encoder):
    def __init__(self, fn: Callable[[bytes], bytes]):
        self.fn = fn

    def encode(self, data: bytes) -> bytes:
        return self.fn(data)

    def __repr__(self):
        return "FunctionEncoder({!r})".format(self.fn)


def as_encoder(value: Union[Encoder, Callable[[bytes], bytes]]) -> Encoder:
    if isinstance(value, Encoder):
        return value
    if callable(value):
        return FunctionEncoder(value)
    raise TypeError("Expected an Encoder or a callable but got {!r}".format(value))


def default_cert_encoder() -> Encoder:
    return PemEncoder(CERTIFICATE_LABEL)


def default_key_encoder() -> Encoder:
    return PemEncoder(RSA_PRIVATE_KEY_LABEL)


def is_pem(data: bytes) -> bool:
    return b"-----BEGIN " in data


def decode_pem(data: bytes, label: Optional[str] = None) -> bytes:
    """Returns the DER body of the first PEM block in data.

    If label is given, blocks with any other label are skipped.
    """
    for m in _PEM_BLOCK_RE.finditer(data):
        if label is not None and m.group("label").decode("ascii") != label:
            continue
        return base64.b64decode(b"".join(m.group("body").split()))
    if label is None:
        raise ValueError("No PEM block found")
    raise ValueError("No PEM block labeled {!r} found".format(label))
