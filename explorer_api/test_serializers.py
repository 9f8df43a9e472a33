import copy
import unittest

from explorer_api.fixtures import EXAMPLE_RPC_BLOCK, EXAMPLE_RPC_GENESIS_BLOCK, \
    EXAMPLE_RPC_TRANSACTION, EXAMPLE_RPC_COINBASE_TRANSACTION
from explorer_api.serializers import BlockSerializer, TransactionSerializer


class BlockSerializerTestCase(unittest.TestCase):
    def test_fields_are_copied_verbatim(self):
        block = BlockSerializer.to_web(EXAMPLE_RPC_BLOCK)

        for field in ["hash", "height", "previousblockhash", "nextblockhash", "time",
                      "mediantime", "nTx", "tx", "size", "strippedsize", "weight",
                      "difficulty", "nonce", "merkleroot", "version", "bits",
                      "chainwork", "confirmations"]:
            self.assertEqual(block[field], EXAMPLE_RPC_BLOCK[field], field)

    def test_genesis_has_no_previousblockhash(self):
        block = BlockSerializer.to_web(EXAMPLE_RPC_GENESIS_BLOCK)

        self.assertEqual(block["height"], 0)
        self.assertNotIn("previousblockhash", block)

    def test_old_node_without_ntx_and_weight(self):
        rpc_block = copy.deepcopy(EXAMPLE_RPC_BLOCK)
        del rpc_block["nTx"]
        del rpc_block["weight"]
        del rpc_block["strippedsize"]

        block = BlockSerializer.to_web(rpc_block)

        self.assertNotIn("nTx", block)
        self.assertEqual(block["tx"], EXAMPLE_RPC_BLOCK["tx"])
        self.assertNotIn("weight", block)
        self.assertNotIn("strippedsize", block)

    def test_unknown_node_fields_are_dropped(self):
        block = BlockSerializer.to_web(EXAMPLE_RPC_BLOCK)
        self.assertNotIn("versionHex", block)

    def test_missing_required_field_raises(self):
        rpc_block = copy.deepcopy(EXAMPLE_RPC_BLOCK)
        del rpc_block["height"]

        with self.assertRaises(KeyError):
            BlockSerializer.to_web(rpc_block)


class TransactionSerializerTestCase(unittest.TestCase):
    def test_txid_and_hex_pass_through(self):
        tr = TransactionSerializer.to_web(EXAMPLE_RPC_TRANSACTION, block_height=840012)

        self.assertEqual(tr["txid"], EXAMPLE_RPC_TRANSACTION["txid"])
        self.assertEqual(tr["hash"], EXAMPLE_RPC_TRANSACTION["hash"])
        self.assertEqual(tr["hex"], EXAMPLE_RPC_TRANSACTION["hex"])

    def test_sizes_and_fee(self):
        tr = TransactionSerializer.to_web(EXAMPLE_RPC_TRANSACTION, block_height=840012)

        self.assertEqual(tr["size"], 222)
        self.assertEqual(tr["vsize"], 141)
        self.assertEqual(tr["weight"], 561)
        self.assertEqual(tr["fee"], 0.00002)

    def test_confirmed_status(self):
        tr = TransactionSerializer.to_web(EXAMPLE_RPC_TRANSACTION, block_height=840012)

        self.assertEqual(tr["status"], {
            "confirmed": True,
            "blockhash": EXAMPLE_RPC_TRANSACTION["blockhash"],
            "blockheight": 840012,
            "blocktime": EXAMPLE_RPC_TRANSACTION["blocktime"],
            "confirmations": 12
        })

    def test_unconfirmed_status(self):
        rpc_tr = copy.deepcopy(EXAMPLE_RPC_TRANSACTION)
        for field in ["blockhash", "confirmations", "blocktime", "time"]:
            del rpc_tr[field]

        tr = TransactionSerializer.to_web(rpc_tr)

        self.assertFalse(tr["status"]["confirmed"])
        self.assertIsNone(tr["status"]["blockhash"])
        self.assertIsNone(tr["status"]["blockheight"])
        self.assertEqual(tr["status"]["confirmations"], 0)

    def test_spending_input_references_prior_output(self):
        tr = TransactionSerializer.to_web(EXAMPLE_RPC_TRANSACTION, block_height=840012)
        vin = tr["vin"][0]

        self.assertEqual(vin["txid"], EXAMPLE_RPC_TRANSACTION["vin"][0]["txid"])
        self.assertEqual(vin["vout"], 1)
        self.assertEqual(vin["sequence"], 4294967293)
        self.assertEqual(len(vin["txinwitness"]), 2)
        self.assertEqual(vin["prevout"]["value"], 0.0105)
        self.assertEqual(vin["prevout"]["addresses"], ["bc1qw508d6qejxtdg4y5r3zarvary0c5xw7kv8f3t4"])
        self.assertNotIn("n", vin["prevout"])

    def test_outputs_use_single_address_field(self):
        tr = TransactionSerializer.to_web(EXAMPLE_RPC_TRANSACTION, block_height=840012)

        self.assertEqual([vout["n"] for vout in tr["vout"]], [0, 1])
        self.assertEqual(tr["vout"][0]["value"], 0.01)
        self.assertEqual(tr["vout"][0]["type"], "pubkeyhash")
        self.assertEqual(tr["vout"][0]["addresses"], ["1A1zP1eP5QGefi2DMPTfTL5SLmv7DivfNa"])

    def test_coinbase_from_old_node(self):
        tr = TransactionSerializer.to_web(EXAMPLE_RPC_COINBASE_TRANSACTION, block_height=1)

        self.assertEqual(tr["vin"], [{"coinbase": "04ffff001d0104", "sequence": 4294967295}])
        self.assertEqual(tr["vout"][0]["addresses"], ["12c6DSiU4Rq3P4ZxziKxzrGNRXCNbPhr4N"])
        self.assertEqual(tr["vout"][0]["value"], 50)
        self.assertIsNone(tr["fee"])
        self.assertEqual(tr["hash"], tr["txid"])
        self.assertEqual(tr["vsize"], 134)
        self.assertIsNone(tr["weight"])

    def test_output_without_address(self):
        rpc_tr = copy.deepcopy(EXAMPLE_RPC_TRANSACTION)
        rpc_tr["vout"][1]["scriptPubKey"] = {
            "asm": "OP_RETURN 68656c6c6f",
            "hex": "6a0568656c6c6f",
            "type": "nulldata"
        }

        tr = TransactionSerializer.to_web(rpc_tr, block_height=840012)

        self.assertEqual(tr["vout"][1]["addresses"], [])
        self.assertEqual(tr["vout"][1]["type"], "nulldata")
