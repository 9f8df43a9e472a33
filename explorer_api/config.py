import os
import configparser

CONFIG_ENV = 'EXPLORER_CONFIG'

# Everything except the rpc credentials has a default
DEFAULTS = {
    'rpc': {
        'timeout': '30',
    },
    'server': {
        'host': '127.0.0.1',
        'port': '8080',
        'cors_origins': '*',
    },
    'explorer': {
        'fetch_workers': '1',
    },
    'logging': {
        'level': 'INFO',
        'logs_dir': '',
    },
}


def load_config(path=None):
    """
    Reads the INI file at :path: (or $EXPLORER_CONFIG) on top of the defaults
    """
    config = configparser.RawConfigParser()
    config.read_dict(DEFAULTS)

    path = path or os.environ.get(CONFIG_ENV)
    if path and not config.read(path):
        raise IOError("Config file %s could not be read" % path)

    return config
