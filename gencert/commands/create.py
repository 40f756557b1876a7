import os
from typing import NamedTuple

from ..config import load_config
from ..errors import PersistenceError
from ..generator import create
from ..log import log
from ..txtui import colored, print_field, user_print
from ..util import format_duration


class ArtifactFiles(NamedTuple):
    cert: str
    key: str


def _write_file(filename, data, mode):
    try:
        fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_EXCL, mode)
        with open(fd, "wb") as f:
            f.write(data)
    except OSError as ex:
        raise PersistenceError("Could not write {}: {}".format(filename, ex)) from ex


def save_to_dir(out_dir, cert, key, ext):
    """Write cert.<ext> and key.<ext> into out_dir, refusing to overwrite."""
    os.makedirs(out_dir, exist_ok=True)
    files = ArtifactFiles(
        cert=os.path.join(out_dir, "cert." + ext),
        key=os.path.join(out_dir, "key." + ext),
    )
    for filename in files:
        if os.path.exists(filename):
            raise PersistenceError(
                "Refusing to overwrite existing file {}".format(filename)
            )
    _write_file(files.cert, cert, 0o644)
    _write_file(files.key, key, 0o600)
    return files


def create_cmd(args, overrides):
    if args.common_name is not None:
        overrides["common_name"] = args.common_name
    if args.ttl is not None:
        overrides["ttl"] = args.ttl
    if args.bits is not None:
        overrides["bits"] = str(args.bits)
    if args.der:
        overrides["encoding"] = "der"
    if args.out is not None:
        overrides["out_dir"] = args.out
    if args.strict:
        overrides["strict"] = "y"

    settings = load_config(args.config, overrides)
    log.info("Creating certificate with settings: %s", settings)

    s = create(settings.create_generator_config(), settings.common_name, settings.ttl)

    if settings.out_dir is None:
        files = s.save_temp_files()
    else:
        files = save_to_dir(settings.out_dir, s.cert, s.key, settings.encoding)

    user_print(
        colored(
            "Created certificate for {} valid for {}".format(
                settings.common_name, format_duration(settings.ttl)
            ),
            "green",
        )
    )
    print_field("Expires", s.expires.isoformat(), important=True)
    print_field("cert", files.cert, important=True)
    print_field("key", files.key, important=True)
    return 0


def add_create_cmd(subparser):
    parser = subparser.add_parser(
        "create", help="Generate a self-signed certificate and private key"
    )
    parser.add_argument(
        "common_name",
        nargs="?",
        default=None,
        help="Common name and DNS name of the certificate (default: localhost)",
    )
    parser.add_argument(
        "--ttl", help="How long the certificate is valid for, such as 1h or 30d"
    )
    parser.add_argument("--bits", type=int, help="RSA key size (default: 4096)")
    parser.add_argument(
        "--der",
        action="store_true",
        help="Write raw DER instead of PEM",
    )
    parser.add_argument(
        "--out",
        help="Directory to write cert and key to. If not set, temp files are used",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Refuse to create a certificate with a zero or negative ttl",
    )
    parser.set_defaults(func=create_cmd)
