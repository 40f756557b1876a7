import tempfile
from typing import NamedTuple, Optional

from .errors import PersistenceError
from .log import log


class TempFiles(NamedTuple):
    cert: str
    key: str


def save_temp_file(prefix: str, ext: str, data: bytes, dir: Optional[str] = None) -> str:
    """Write data to a newly created temp file named <prefix><random>.<ext>.

    The file is not removed afterwards; deleting it is up to the caller.
    """
    try:
        with tempfile.NamedTemporaryFile(
            mode="wb", prefix=prefix, suffix="." + ext, dir=dir, delete=False
        ) as fd:
            filename = fd.name
            fd.write(data)
    except OSError as ex:
        raise PersistenceError(
            "Could not write {} file: {}".format(prefix, ex)
        ) from ex
    log.debug("Wrote %d bytes to %s", len(data), filename)
    return filename


def save_cert_and_key(cert: bytes, key: bytes, dir: Optional[str] = None) -> TempFiles:
    # no attempt is made to remove the cert file if writing the key fails
    cert_filename = save_temp_file("cert", "tmp", cert, dir=dir)
    key_filename = save_temp_file("key", "tmp", key, dir=dir)
    return TempFiles(cert=cert_filename, key=key_filename)
