import logging
import logging.handlers
import sys

from termcolor import colored as termcolor_colored

from .log import log

# if we aren't writing to a terminal, disable color codes in the output
use_color = sys.stdout.isatty()


def colored(text, color, **kwargs):
    if use_color:
        return termcolor_colored(text, color, **kwargs)
    return text


def user_print(msg):
    print(msg)


def print_field(name, value, important=False):
    attrs = []
    if not important:
        attrs = ["dark"]
    print(colored("{}:".format(name), "green"), colored(str(value), "yellow", attrs=attrs))


def config_logging(verbosity, log_file="gencert.log"):
    verbose_fmt = logging.Formatter("%(asctime)s:%(name)s:%(message)s")
    trim_fmt = logging.Formatter("%(asctime)s %(message)s")

    handlers = []
    if log_file is not None:
        to_file = logging.handlers.RotatingFileHandler(
            log_file, mode="a", maxBytes=10 * 1024 * 1024, backupCount=1
        )
        to_file.setFormatter(verbose_fmt)
        to_file.setLevel(logging.INFO)
        handlers.append(to_file)
    to_stderr = logging.StreamHandler()
    to_stderr.setFormatter(trim_fmt)
    to_stderr.setLevel(logging.WARNING)
    handlers.append(to_stderr)
    log.setLevel(logging.INFO)
    if verbosity > 0:
        log.setLevel(logging.DEBUG)
        to_stderr.setLevel(logging.DEBUG)

    logging.root.handlers = handlers  # type: ignore
