import logging
from concurrent.futures import ThreadPoolExecutor

from explorer_api.gateways import RpcError, NodeRejectedError, DecodeError
from explorer_api.helpers import validate_sha256_hash
from explorer_api.serializers import BlockSerializer, TransactionSerializer

LOG = logging.getLogger(__name__)

LATEST_BLOCKS_COUNT = 10


class ApiError(Exception):
    """
    Error that is safe to show to an API client. The underlying
    node failure, if any, is kept in :cause: and never sent out.
    """
    status = 500

    def __init__(self, message, cause=None):
        super(ApiError, self).__init__(message)
        self.message = message
        self.cause = cause


class InvalidInputError(ApiError):
    status = 400


class UpstreamError(ApiError):
    status = 500


class NotFoundOrUpstreamError(UpstreamError):
    """Node rejected the lookup, most likely an unknown hash"""
    pass


class BlockResolver(object):
    ERROR_MESSAGE = "Failed to retrieve block information"

    def __init__(self, rpc):
        self.rpc = rpc

    def fetch(self, block_hash):
        """
        Fetches :block_hash: from the node and maps it, RpcErrors propagate
        """
        rpc_block = self.rpc.get_block(block_hash)

        try:
            return BlockSerializer.to_web(rpc_block)
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError("Unexpected block format from node: %r" % (e,))

    def resolve(self, raw_hash):
        if not validate_sha256_hash(raw_hash):
            raise InvalidInputError("Invalid block hash")

        try:
            return self.fetch(raw_hash.lower())
        except NodeRejectedError as e:
            LOG.warning("[BLOCK] Node rejected block %s: %s", raw_hash, e)
            raise NotFoundOrUpstreamError(self.ERROR_MESSAGE, cause=e)
        except RpcError as e:
            LOG.error("[BLOCK] Failed to retrieve block %s: %s", raw_hash, e)
            raise UpstreamError(self.ERROR_MESSAGE, cause=e)


class TransactionResolver(object):
    ERROR_MESSAGE = "Failed to retrieve transaction information"

    def __init__(self, rpc):
        self.rpc = rpc

    def fetch(self, txid):
        rpc_tr = self.rpc.get_raw_transaction(txid)

        try:
            block_height = None
            if "blockhash" in rpc_tr:
                block_height = self.rpc.get_block_header(rpc_tr["blockhash"])["height"]

            return TransactionSerializer.to_web(rpc_tr, block_height)
        except (KeyError, TypeError, AttributeError) as e:
            raise DecodeError("Unexpected transaction format from node: %r" % (e,))

    def resolve(self, raw_txid):
        if not validate_sha256_hash(raw_txid):
            raise InvalidInputError("Invalid transaction id")

        try:
            return self.fetch(raw_txid.lower())
        except NodeRejectedError as e:
            LOG.warning("[TX] Node rejected transaction %s: %s", raw_txid, e)
            raise NotFoundOrUpstreamError(self.ERROR_MESSAGE, cause=e)
        except RpcError as e:
            LOG.error("[TX] Failed to retrieve transaction %s: %s", raw_txid, e)
            raise UpstreamError(self.ERROR_MESSAGE, cause=e)


class LatestBlocksAggregator(object):
    """
    Collects the most recent blocks, newest first.

    The tip is read once and the window is walked down from it, so a block
    mined halfway through doesn't shift the result. Any failed node call
    fails the whole list.
    """
    ERROR_MESSAGE = "Failed to retrieve latest blocks"

    def __init__(self, rpc, count=LATEST_BLOCKS_COUNT, workers=1):
        self.rpc = rpc
        self.count = count
        self.workers = workers
        self.resolver = BlockResolver(rpc)

    def get_tip_height(self):
        height = self.rpc.get_block_count()

        if isinstance(height, bool) or not isinstance(height, int) or height < 0:
            raise DecodeError("getblockcount returned %r" % (height,))

        return height

    def window(self, tip_height):
        """
        Heights to fetch, tip first. Near genesis there are fewer than :count:
        """
        return list(range(tip_height, max(tip_height - self.count, -1), -1))

    def fetch_at(self, height):
        block = self.resolver.fetch(self.rpc.get_block_hash(height))

        # The chain got shorter under us (reorg)
        if block["height"] != height:
            raise DecodeError("Asked for height %s, node returned block at height %s"
                              % (height, block["height"]))

        return block

    def list(self):
        try:
            heights = self.window(self.get_tip_height())

            if self.workers > 1 and len(heights) > 1:
                # map() yields in submission order and re-raises the first failure
                with ThreadPoolExecutor(max_workers=self.workers) as executor:
                    return list(executor.map(self.fetch_at, heights))

            return [self.fetch_at(height) for height in heights]
        except RpcError as e:
            LOG.error("[LATEST] Failed to assemble latest blocks: %s", e)
            raise UpstreamError(self.ERROR_MESSAGE, cause=e)
