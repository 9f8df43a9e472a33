import os
import string
import logging
from urllib.parse import urlsplit, urlunsplit

SHA256_HASH_LENGTH = 64

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def validate_sha256_hash(hash):
    """
    Check if :hash: is a 64 character hex string (either case)
    """
    if not isinstance(hash, str):
        return False
    if len(hash) != SHA256_HASH_LENGTH:
        return False
    return all(c in string.hexdigits for c in hash)


def redact_url(url):
    """
    Drops any user:password@ part of :url: so it can be logged
    """
    parts = urlsplit(url)
    if "@" not in parts.netloc:
        return url
    return urlunsplit(parts._replace(netloc=parts.netloc.rsplit("@", 1)[1]))


def configure_logging(config):
    """
    Sets up the root logger from the [logging] section.
    Logs go to <logs_dir>/btc-explorer.log when logs_dir is set,
    otherwise to stderr.
    """
    level = config.get('logging', 'level').upper()
    logs_dir = config.get('logging', 'logs_dir')

    if logs_dir:
        if not os.path.exists(logs_dir):
            os.makedirs(logs_dir)
        logging.basicConfig(
            filename=os.path.join(logs_dir, 'btc-explorer.log'),
            level=level,
            format=LOG_FORMAT
        )
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
