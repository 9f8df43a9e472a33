BLOCK_OPTIONAL_FIELDS = [
    "previousblockhash",
    "nextblockhash",
    "nTx",
    "confirmations",
    "version",
    "bits",
    "chainwork",
    "mediantime",
    "strippedsize",
    "weight",
]


class BlockSerializer(object):
    @staticmethod
    def to_web(rpc_block):
        block = {
            "hash": rpc_block["hash"],
            "height": rpc_block["height"],
            "size": rpc_block["size"],
            "merkleroot": rpc_block["merkleroot"],
            "tx": rpc_block["tx"],
            "time": rpc_block["time"],
            "nonce": rpc_block["nonce"],
            "difficulty": rpc_block["difficulty"],
        }

        # Genesis has no previousblockhash, the tip has no nextblockhash
        # and older nodes don't report nTx, weight or mediantime
        for field in BLOCK_OPTIONAL_FIELDS:
            if field in rpc_block:
                block[field] = rpc_block[field]

        return block


class TransactionSerializer(object):
    @staticmethod
    def to_web(rpc_tr, block_height=None):
        return {
            "txid": rpc_tr["txid"],
            "hash": rpc_tr.get("hash", rpc_tr["txid"]),
            "version": rpc_tr["version"],
            "size": rpc_tr["size"],
            "vsize": rpc_tr.get("vsize", rpc_tr["size"]),
            "weight": rpc_tr.get("weight"),
            "locktime": rpc_tr["locktime"],
            "hex": rpc_tr.get("hex"),
            "fee": rpc_tr.get("fee"),
            "vin": [VinSerializer.to_web(vin) for vin in rpc_tr["vin"]],
            "vout": [VoutSerializer.to_web(vout) for vout in rpc_tr["vout"]],
            "status": TransactionStatusSerializer.to_web(rpc_tr, block_height)
        }


class TransactionStatusSerializer(object):
    @staticmethod
    def to_web(rpc_tr, block_height=None):
        if "blockhash" not in rpc_tr:
            return {
                "confirmed": False,
                "blockhash": None,
                "blockheight": None,
                "blocktime": None,
                "confirmations": 0
            }

        return {
            "confirmed": True,
            "blockhash": rpc_tr["blockhash"],
            "blockheight": block_height,
            "blocktime": rpc_tr.get("blocktime"),
            "confirmations": rpc_tr.get("confirmations", 0)
        }


class VinSerializer(object):
    @staticmethod
    def to_web(rpc_vin):
        if "coinbase" in rpc_vin:
            return {
                "coinbase": rpc_vin["coinbase"],
                "sequence": rpc_vin["sequence"]
            }

        vin = {
            "txid": rpc_vin["txid"],
            "vout": rpc_vin["vout"],
            "sequence": rpc_vin["sequence"]
        }

        if "scriptSig" in rpc_vin:
            vin["scriptSig"] = rpc_vin["scriptSig"]

        if "txinwitness" in rpc_vin:
            vin["txinwitness"] = rpc_vin["txinwitness"]

        # Only reported with getrawtransaction verbosity 2
        if "prevout" in rpc_vin:
            vin["prevout"] = VoutSerializer.to_web(rpc_vin["prevout"])

        return vin


class VoutSerializer(object):
    @staticmethod
    def to_web(rpc_vout):
        script = rpc_vout.get("scriptPubKey", {})

        # Newer nodes report a single address, older ones a list
        if "address" in script:
            addresses = [script["address"]]
        else:
            addresses = script.get("addresses", [])[:]

        vout = {
            "value": rpc_vout["value"],
            "type": script.get("type"),
            "addresses": addresses,
            "asm": script.get("asm"),
            "hex": script.get("hex")
        }

        # prevout entries carry no index
        if "n" in rpc_vout:
            vout["n"] = rpc_vout["n"]

        return vout
