from ..txtui import print_field
from .check import read_file
from ..verify import describe_certificate


def show_cmd(args):
    info = describe_certificate(read_file(args.cert))
    print_field("Common name", info["common_name"], important=True)
    print_field("DNS names", ", ".join(info["dns_names"]))
    print_field("Serial number", "{:x}".format(info["serial_number"]))
    print_field("Not before", info["not_before"].isoformat())
    print_field("Not after", info["not_after"].isoformat(), important=True)
    print_field("Key size", info["key_size"])
    print_field("Self-signed", "yes" if info["self_signed"] else "no")
    return 0


def add_show_cmd(subparser):
    parser = subparser.add_parser("show", help="Print the details of a certificate")
    parser.add_argument("cert", help="certificate file (PEM or DER)")
    parser.set_defaults(func=show_cmd)
