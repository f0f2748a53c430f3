from sgas4py.config import C, BlockChainError
from sgas4py.chain.checking.utils import *
from logging import getLogger

log = getLogger('sgas4py')


def check_tx(tx, ledger, mempool=None):
    # check tx validity
    if mempool is None:
        mempool = [tx]

    if tx.type == C.TX_INVOCATION:
        if len(tx.script) == 0:
            raise BlockChainError('invocation script is empty')
        if tx.gas % C.FIXED8_FACTOR != 0:
            raise BlockChainError('gas must be integer amount {}'.format(tx.gas))
    elif tx.type == C.TX_CONTRACT:
        raise BlockChainError('contract tx require contract state to verify')
    else:
        raise BlockChainError('Unknown tx type "{}"'.format(tx.type))

    if len(tx.inputs) == 0:
        raise BlockChainError('No inputs')
    if len(tx.attributes) > C.MAX_TX_ATTRIBUTES:
        raise BlockChainError('Too many attributes {}'.format(len(tx.attributes)))

    # inputs origin
    inputs_origin_check(tx=tx, mempool=mempool)

    # balance movement
    amount_check(tx=tx, ledger=ledger)

    # witnesses
    witness_check(tx=tx, ledger=ledger)

    # size
    if tx.total_size > C.SIZE_TX_LIMIT:
        raise BlockChainError('TX size is too large. [{}>{}]'.format(tx.total_size, C.SIZE_TX_LIMIT))
    log.debug("check success {}".format(tx))


__all__ = [
    "check_tx",
]
