from sgas4py.config import BlockChainError, TransactionNotFound, ContractNotFound
from sgas4py.chain.tx import TX
from sgas4py.chain.utils import hash160, hash2str
from sgas4py.chain import msgpack
from logging import getLogger
import os

log = getLogger('sgas4py')


class Ledger(object):
    """chain state lookup, blocking calls"""

    def get_contract_state(self, script_hash) -> bytes:
        """return deployed contract script"""
        raise NotImplementedError

    def get_transaction(self, txhash) -> TX:
        raise NotImplementedError


class MemoryLedger(Ledger):
    def __init__(self):
        self.txs = dict()  # {txhash: TX}
        self.contracts = dict()  # {script_hash: script}

    def __repr__(self):
        return "<MemoryLedger tx={} contract={}>".format(len(self.txs), len(self.contracts))

    def add_tx(self, tx: TX):
        self.txs[tx.hash] = tx
        return tx

    def add_contract(self, script, script_hash=None):
        if script_hash is None:
            script_hash = hash160(script)
        self.contracts[script_hash] = script
        return script_hash

    def get_contract_state(self, script_hash):
        script = self.contracts.get(script_hash)
        if script is None:
            raise ContractNotFound('Not found contract {}'.format(hash2str(script_hash)))
        return script

    def get_transaction(self, txhash):
        tx = self.txs.get(txhash)
        if tx is None:
            raise TransactionNotFound('Not found tx {}'.format(hash2str(txhash)))
        return tx

    def save(self, path):
        with open(path, mode='bw') as fp:
            msgpack.dump({'txs': list(self.txs.values()), 'contracts': self.contracts}, fp)
        log.debug("save ledger {} to {}".format(self, path))

    @classmethod
    def load(cls, path):
        if not os.path.exists(path):
            raise BlockChainError('Not found ledger file {}'.format(path))
        self = cls()
        with open(path, mode='br') as fp:
            data = msgpack.load(fp)
        for tx in data['txs']:
            self.add_tx(tx)
        self.contracts.update(data['contracts'])
        log.debug("load ledger {} from {}".format(self, path))
        return self


def get_output_from_input(ledger: Ledger, input_hash, input_index):
    """return (asset_id, script_hash, value) referenced by input"""
    tx = ledger.get_transaction(input_hash)
    if input_index < len(tx.outputs):
        return tx.outputs[input_index]
    return None


__all__ = [
    "Ledger",
    "MemoryLedger",
    "get_output_from_input",
]
