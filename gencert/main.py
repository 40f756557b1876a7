import argparse
import inspect
import io
import re
import sys

from . import txtui
from .errors import GenCertError


def get_func_parameters(func):
    return inspect.getfullargspec(func)[0]


def gencert_main():
    # disable stdout/stderr buffering to work better when run non-interactively
    sys.stdout = io.TextIOWrapper(sys.stdout.buffer, line_buffering=True)
    sys.stderr = io.TextIOWrapper(sys.stderr.buffer, line_buffering=True)

    retcode = main()
    if retcode is not None:
        sys.exit(retcode)


def main(argv=None, log_file="gencert.log"):
    from .commands.create import add_create_cmd
    from .commands.check import add_check_cmd
    from .commands.show import add_show_cmd
    from .commands.version import add_version_cmd

    parse = argparse.ArgumentParser(
        description="Generate self-signed TLS certificates for development and testing"
    )

    # add global options
    parse.add_argument("-c", "--config", default=None)
    parse.add_argument(
        "--debug", action="store_true", help="If set, debug messages will be output"
    )
    parse.add_argument(
        "-o",
        "--override",
        action="append",
        dest="overrides",
        help="override a parameter in the config file. Value should be -o 'param=value'",
    )

    # add subcommands
    subparser = parse.add_subparsers()
    add_create_cmd(subparser)
    add_check_cmd(subparser)
    add_show_cmd(subparser)
    add_version_cmd(subparser)

    args = parse.parse_args(argv)

    overrides = {}
    if args.overrides is not None:
        for override in args.overrides:
            m = re.match("([^=]+)=(.*)", override)
            if m is None:
                print(f"Could not parse override: {override}")
                return 1
            overrides[m.group(1)] = m.group(2)

    txtui.config_logging(100 if args.debug else 0, log_file=log_file)

    if not hasattr(args, "func"):
        parse.print_help()
        return 1

    func_params = {"args": args, "overrides": overrides}
    func_params = {
        name: func_params[name] for name in get_func_parameters(args.func)
    }

    try:
        return args.func(**func_params)
    except GenCertError as ex:
        print(ex.message)
        return 1


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
