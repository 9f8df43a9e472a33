import itertools
import logging

import requests

LOG = logging.getLogger(__name__)


class RpcError(Exception):
    """Base class for everything that can go wrong talking to the node"""
    pass


class TransportError(RpcError):
    """
    Node couldn't be reached or answered with a non-2xx status
    """
    def __init__(self, message, status_code=None):
        super(TransportError, self).__init__(message)
        self.status_code = status_code


class DecodeError(RpcError):
    """Node answered with something that isn't a JSON-RPC response"""
    pass


class NodeRejectedError(RpcError):
    """
    Node understood the request and returned a JSON-RPC error object,
    e.g. {"code": -5, "message": "Block not found"}
    """
    def __init__(self, code, message):
        super(NodeRejectedError, self).__init__("RPC error %s: %s" % (code, message))
        self.code = code
        self.message = message


class RpcGateway(object):
    """
    JSON-RPC 2.0 client for a Bitcoin node.

    Every call is a separate POST with basic auth, so one instance can be
    shared by all request handlers.
    """
    def __init__(self, url, user, password, timeout=30):
        self.url = url
        self.auth = (user, password)
        self.timeout = timeout

        # Global counter for request ids
        self._ids = itertools.count(1)

    @classmethod
    def from_config(cls, config):
        return cls(
            url=config.get('rpc', 'url'),
            user=config.get('rpc', 'user'),
            password=config.get('rpc', 'password'),
            timeout=config.getfloat('rpc', 'timeout')
        )

    def call(self, method, params=None):
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": list(params or [])
        }
        LOG.debug("[RPC] Calling %s with params %s", method, payload["params"])

        try:
            res = requests.post(self.url, json=payload, auth=self.auth, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            LOG.error("[RPC] Failed to connect to the node: %s", e)
            raise TransportError("RPC connection error: %s" % e)

        if not 200 <= res.status_code < 300:
            LOG.error("[RPC] %s returned HTTP %s: %s", method, res.status_code, res.text)
            raise TransportError("RPC server error. Status: %s" % res.status_code,
                                 status_code=res.status_code)

        try:
            body = res.json()
        except ValueError as e:
            LOG.error("[RPC] Failed to parse %s response: %s. Raw response: %s", method, e, res.text)
            raise DecodeError("Failed to parse RPC response: %s" % e)

        if not isinstance(body, dict) or ("result" not in body and "error" not in body):
            LOG.error("[RPC] %s returned a malformed response: %s", method, body)
            raise DecodeError("Malformed RPC response")

        error = body.get("error")
        if error is not None:
            if isinstance(error, dict):
                code, message = error.get("code"), error.get("message")
            else:
                code, message = None, str(error)
            LOG.error("[RPC] %s failed: code=%s message=%s", method, code, message)
            raise NodeRejectedError(code, message)

        if "result" not in body:
            raise DecodeError("RPC response has no result")

        LOG.debug("[RPC] %s successful", method)
        return body["result"]

    ############
    #  BLOCKS  #
    ############
    def get_block(self, block_hash):
        return self.call("getblock", [block_hash, 1])

    def get_block_header(self, block_hash):
        return self.call("getblockheader", [block_hash, True])

    def get_block_count(self):
        return self.call("getblockcount")

    def get_block_hash(self, height):
        return self.call("getblockhash", [height])

    ##################
    #  TRANSACTIONS  #
    ##################
    def get_raw_transaction(self, txid):
        # Verbosity 2 adds fee and prevout on nodes that support it,
        # older nodes read any non-zero number as verbose
        return self.call("getrawtransaction", [txid, 2])
