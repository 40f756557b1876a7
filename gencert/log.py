import logging

log = logging.getLogger("gencert")
