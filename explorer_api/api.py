import logging

import connexion
from connexion.middleware import MiddlewarePosition
from flask import current_app
from starlette.middleware.cors import CORSMiddleware

from explorer_api.gateways import RpcGateway
from explorer_api.interactors import ApiError, BlockResolver, TransactionResolver, \
    LatestBlocksAggregator

LOG = logging.getLogger(__name__)

# Operations declare both content types, so every response names its own
JSON_HEADERS = {"Content-Type": "application/json"}
ERROR_HEADERS = {"Content-Type": "text/plain"}


def _rpc():
    return current_app.config['RPC_GATEWAY']


def _error_response(e):
    LOG.info("[API] Responding %s: %s", e.status, e.message)
    return e.message, e.status, ERROR_HEADERS


############
#  BLOCKS  #
############
def get_block(block_hash):
    try:
        return BlockResolver(_rpc()).resolve(block_hash), 200, JSON_HEADERS
    except ApiError as e:
        return _error_response(e)


def get_latest_blocks():
    aggregator = LatestBlocksAggregator(
        _rpc(),
        workers=current_app.config['FETCH_WORKERS']
    )
    try:
        return aggregator.list(), 200, JSON_HEADERS
    except ApiError as e:
        return _error_response(e)


##################
#  TRANSACTIONS  #
##################
def get_transaction(txid):
    try:
        return TransactionResolver(_rpc()).resolve(txid), 200, JSON_HEADERS
    except ApiError as e:
        return _error_response(e)


def create_app(config, rpc=None):
    """
    Builds the connexion app. :rpc: defaults to a gateway built from :config:
    """
    api = connexion.FlaskApp(__name__)
    api.add_api('explorer_api.yaml')

    origins = [o.strip() for o in config.get('server', 'cors_origins').split(',') if o.strip()]
    api.add_middleware(
        CORSMiddleware,
        position=MiddlewarePosition.BEFORE_EXCEPTION,
        allow_origins=origins,
        allow_methods=["GET"],
    )

    if rpc is None:
        rpc = RpcGateway.from_config(config)

    api.app.config['RPC_GATEWAY'] = rpc
    api.app.config['FETCH_WORKERS'] = config.getint('explorer', 'fetch_workers')

    return api


def create_and_run_app(config, host=None, port=None):
    """
    Runs a new instance of the API under uvicorn
    """
    api = create_app(config)
    api.run(
        host=host or config.get('server', 'host'),
        port=port or config.getint('server', 'port')
    )
