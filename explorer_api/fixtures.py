import copy
import hashlib

from explorer_api.gateways import NodeRejectedError, TransportError

EXAMPLE_RPC_BLOCK = {
    "hash": "00000000839a8e6886ab5951d76f411475428afc90947ee320161bbf18eb6048",
    "confirmations": 870001,
    "height": 1,
    "version": 1,
    "versionHex": "00000001",
    "merkleroot": "0e3e2357e806b6cdb1f70b54c3a3a17b6714ee1f0e68bebb44a74b1efd512098",
    "time": 1231469665,
    "mediantime": 1231469665,
    "nonce": 2573394689,
    "bits": "1d00ffff",
    "difficulty": 1,
    "chainwork": "0000000000000000000000000000000000000000000000000000000200020002",
    "nTx": 1,
    "previousblockhash": "000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f",
    "nextblockhash": "000000006a625f06636b8bb6ac7b960a8d03705d1ace08b1a19da3fdcc99ddbd",
    "strippedsize": 215,
    "size": 215,
    "weight": 860,
    "tx": [
        "0e3e2357e806b6cdb1f70b54c3a3a17b6714ee1f0e68bebb44a74b1efd512098"
    ]
}

EXAMPLE_RPC_GENESIS_BLOCK = {
    "hash": "000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f",
    "confirmations": 870002,
    "height": 0,
    "version": 1,
    "merkleroot": "4a5e1e4baab89f3a32518a88c31bc87f618f76673e2cc77ab2127b7afdeda33b",
    "time": 1231006505,
    "mediantime": 1231006505,
    "nonce": 2083236893,
    "bits": "1d00ffff",
    "difficulty": 1,
    "chainwork": "0000000000000000000000000000000000000000000000000000000100010001",
    "nTx": 1,
    "nextblockhash": "00000000839a8e6886ab5951d76f411475428afc90947ee320161bbf18eb6048",
    "strippedsize": 285,
    "size": 285,
    "weight": 1140,
    "tx": [
        "4a5e1e4baab89f3a32518a88c31bc87f618f76673e2cc77ab2127b7afdeda33b"
    ]
}

# getrawtransaction <txid> 2 for a confirmed segwit spend
EXAMPLE_RPC_TRANSACTION = {
    "txid": "c8a1fc1c2b5e5e3c5dbd2b1f2e4b0c7a43b9e4a7d9f6f6b7c11d0c5f4b2e1a90",
    "hash": "3f1d8e0b8c4e7a5c2b6d9f0e1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d",
    "version": 2,
    "size": 222,
    "vsize": 141,
    "weight": 561,
    "locktime": 0,
    "vin": [
        {
            "txid": "5e0ab8d1c3a2f4e6b7c8d9e0f1a2b3c4d5e6f7081920a1b2c3d4e5f60718293a",
            "vout": 1,
            "scriptSig": {"asm": "", "hex": ""},
            "txinwitness": [
                "3044022055c1a4f4d1b2f8e2e1c3a07c6f1e9f6c4b0b7b7a1a8f7c2d3e4f5a6b7c8d9e0f02201f0e1d2c3b4a5968778695a4b3c2d1e0f1a2b3c4d5e6f708192a3b4c5d6e7f01",
                "02c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
            ],
            "prevout": {
                "generated": False,
                "height": 840000,
                "value": 0.0105,
                "scriptPubKey": {
                    "asm": "0 751e76e8199196d454941c45d1b3a323f1433bd6",
                    "hex": "0014751e76e8199196d454941c45d1b3a323f1433bd6",
                    "address": "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4",
                    "type": "witness_v0_keyhash"
                }
            },
            "sequence": 4294967293
        }
    ],
    "vout": [
        {
            "value": 0.01,
            "n": 0,
            "scriptPubKey": {
                "asm": "OP_DUP OP_HASH160 62e907b15cbf27d5425399ebf6f0fb50ebb88f18 OP_EQUALVERIFY OP_CHECKSIG",
                "hex": "76a91462e907b15cbf27d5425399ebf6f0fb50ebb88f1888ac",
                "address": "1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa",
                "type": "pubkeyhash"
            }
        },
        {
            "value": 0.00048,
            "n": 1,
            "scriptPubKey": {
                "asm": "0 751e76e8199196d454941c45d1b3a323f1433bd6",
                "hex": "0014751e76e8199196d454941c45d1b3a323f1433bd6",
                "address": "bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4",
                "type": "witness_v0_keyhash"
            }
        }
    ],
    "fee": 0.00002,
    "hex": "02000000000101...",
    "blockhash": "00000000000000000001b2c3d4e5f60718293a4b5c6d7e8f90a1b2c3d4e5f607",
    "confirmations": 12,
    "time": 1713571767,
    "blocktime": 1713571767
}

# Pre-segwit node, verbose=1: no fee, no prevout, "addresses" list
EXAMPLE_RPC_COINBASE_TRANSACTION = {
    "hex": "01000000010000000000000000000000000000000000000000000000000000000000000000ffffffff0704ffff001d0104ffffffff0100f2052a0100000043410496b538e853519c726a2c91e61ec11600ae1390813a627c66fb8be7947be63c52da7589379515d4e0a604f8141781e62294721166bf621e73a82cbf2342c858eeac00000000",
    "txid": "0e3e2357e806b6cdb1f70b54c3a3a17b6714ee1f0e68bebb44a74b1efd512098",
    "version": 1,
    "size": 134,
    "locktime": 0,
    "vin": [
        {
            "coinbase": "04ffff001d0104",
            "sequence": 4294967295
        }
    ],
    "vout": [
        {
            "value": 50.00000000,
            "n": 0,
            "scriptPubKey": {
                "asm": "0496b538e853519c726a2c91e61ec11600ae1390813a627c66fb8be7947be63c52da7589379515d4e0a604f8141781e62294721166bf621e73a82cbf2342c858ee OP_CHECKSIG",
                "hex": "410496b538e853519c726a2c91e61ec11600ae1390813a627c66fb8be7947be63c52da7589379515d4e0a604f8141781e62294721166bf621e73a82cbf2342c858eeac",
                "reqSigs": 1,
                "type": "pubkey",
                "addresses": [
                    "12c6DSiU4Rq3P4ZxziKxzrGNRXCNbPhr4N"
                ]
            }
        }
    ],
    "blockhash": "00000000839a8e6886ab5951d76f411475428afc90947ee320161bbf18eb6048",
    "confirmations": 870001,
    "time": 1231469665,
    "blocktime": 1231469665
}


def fake_block_hash(height):
    return hashlib.sha256(("block-%s" % height).encode()).hexdigest()


def fake_rpc_block(height, tip_height):
    block = copy.deepcopy(EXAMPLE_RPC_BLOCK)
    block.update({
        "hash": fake_block_hash(height),
        "height": height,
        "confirmations": tip_height - height + 1,
    })

    if height > 0:
        block["previousblockhash"] = fake_block_hash(height - 1)
    else:
        del block["previousblockhash"]

    if height < tip_height:
        block["nextblockhash"] = fake_block_hash(height + 1)
    else:
        del block["nextblockhash"]

    return block


class FakeNode(object):
    """
    In-memory stand-in for RpcGateway serving a linear chain of
    :tip_height: + 1 blocks.
    """
    def __init__(self, tip_height):
        self.tip_height = tip_height
        self.calls = []

        # height -> exception raised by get_block_hash
        self.broken_heights = {}

        # height -> exception raised by get_block
        self.broken_blocks = {}

        # Called after every get_block_hash, lets tests move the tip mid-walk
        self.on_block_hash = None

    def mine(self, num_blocks=1):
        self.tip_height += num_blocks

    def get_block_count(self):
        self.calls.append(("getblockcount",))
        return self.tip_height

    def get_block_hash(self, height):
        self.calls.append(("getblockhash", height))

        if height in self.broken_heights:
            raise self.broken_heights[height]
        if height < 0 or height > self.tip_height:
            raise NodeRejectedError(-8, "Block height out of range")

        if self.on_block_hash:
            self.on_block_hash(self, height)

        return fake_block_hash(height)

    def get_block(self, block_hash):
        self.calls.append(("getblock", block_hash))

        for height in range(self.tip_height + 1):
            if fake_block_hash(height) == block_hash:
                if height in self.broken_blocks:
                    raise self.broken_blocks[height]
                return fake_rpc_block(height, self.tip_height)

        raise NodeRejectedError(-5, "Block not found")

    def get_block_header(self, block_hash):
        self.calls.append(("getblockheader", block_hash))
        block = self.get_block(block_hash)
        del block["tx"]
        return block

    def get_raw_transaction(self, txid):
        self.calls.append(("getrawtransaction", txid))
        raise NodeRejectedError(-5, "No such mempool or blockchain transaction")

    def go_offline(self, from_height):
        """Every height at or below :from_height: fails with a transport error"""
        for height in range(from_height + 1):
            self.broken_heights[height] = TransportError("RPC connection error: refused")
