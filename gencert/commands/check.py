from ..errors import KeyPairMismatch, PersistenceError
from ..log import log
from ..txtui import colored, user_print
from ..verify import check_key_pair


def read_file(filename):
    try:
        with open(filename, "rb") as fd:
            return fd.read()
    except OSError as ex:
        raise PersistenceError("Could not read {}: {}".format(filename, ex)) from ex


def check_cmd(args):
    cert = read_file(args.cert)
    key = read_file(args.key)
    try:
        check_key_pair(cert, key)
    except KeyPairMismatch as ex:
        log.warning("%s and %s are not a pair", args.cert, args.key)
        user_print(colored(ex.message, "red"))
        return 1
    user_print(colored("{} and {} form a valid pair".format(args.cert, args.key), "green"))
    return 0


def add_check_cmd(subparser):
    parser = subparser.add_parser(
        "check", help="Confirm that a private key matches a certificate"
    )
    parser.add_argument("cert", help="certificate file (PEM or DER)")
    parser.add_argument("key", help="private key file (PEM or DER)")
    parser.set_defaults(func=check_cmd)
