from sgas4py.config import V, BlockChainError, TransactionNotFound, ContractNotFound
from sgas4py.chain.tx import TX
from sgas4py.chain.utils import hash2str
from sgas4py.database.ledger import Ledger
from logging import getLogger
import requests

log = getLogger('sgas4py')

# "Unknown transaction" and "Unknown contract" of neo-cli
ERROR_UNKNOWN = -100


class RpcLedger(Ledger):
    """JSON-RPC 2.0 client of a NEO node"""

    def __init__(self, url=None, session=None, timeout=None):
        self.url = url or V.RPC_URL
        if self.url is None:
            raise BlockChainError('RPC url is not set')
        self.session = session or requests.Session()
        self.timeout = timeout or V.RPC_TIMEOUT
        self.request_id = 0

    def __repr__(self):
        return "<RpcLedger {}>".format(self.url)

    def call(self, method, params):
        self.request_id += 1
        payload = {'jsonrpc': '2.0', 'method': method, 'params': params, 'id': self.request_id}
        try:
            r = self.session.post(self.url, json=payload, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise BlockChainError('RPC {} failed: {}'.format(method, e))
        if data.get('error'):
            error = data['error']
            log.debug("RPC error {} {}".format(method, error))
            if error.get('code') == ERROR_UNKNOWN:
                return None
            raise BlockChainError('RPC {} error: {}'.format(method, error.get('message')))
        return data.get('result')

    def get_contract_state(self, script_hash):
        result = self.call('getcontractstate', [hash2str(script_hash)])
        if result is None:
            raise ContractNotFound('Not found contract {}'.format(hash2str(script_hash)))
        return bytes.fromhex(result['script'])

    def get_transaction(self, txhash):
        result = self.call('getrawtransaction', [hash2str(txhash), 0])
        if result is None:
            raise TransactionNotFound('Not found tx {}'.format(hash2str(txhash)))
        return TX.from_binary(bytes.fromhex(result))


__all__ = [
    "RpcLedger",
]
