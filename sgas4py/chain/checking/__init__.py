from sgas4py.config import C, BlockChainError, MalformedTransaction
from sgas4py.chain.checking.checktx import check_tx
from sgas4py.chain.tx import TX
from sgas4py.chain.utils import hash2str
from collections import namedtuple
from logging import getLogger

log = getLogger('sgas4py')

VerifyResult = namedtuple('VerifyResult', ['hash', 'status', 'reason'])


def round_trip(tx: TX) -> TX:
    """encode and decode tx, both must match on all fields"""
    binary = tx.to_array()
    new_tx = TX.from_binary(binary)
    if new_tx != tx or new_tx.to_array() != binary:
        raise MalformedTransaction('Decoded tx differ from original {}'.format(tx))
    return new_tx


def dump_values(tx: TX, ledger) -> VerifyResult:
    """
    check the signed tx before broadcast
    raise MalformedTransaction when the format is broken,
    contract tx is skipped because its witness runs deployed contract code.
    """
    try:
        tx = round_trip(tx)
    except MalformedTransaction:
        log.error("Invalid transaction format {}".format(tx))
        raise
    txhash = hash2str(tx.hash)
    if tx.type == C.TX_CONTRACT:
        result = VerifyResult(txhash, C.VERIFY_SKIPPED, 'require contract state')
    else:
        try:
            check_tx(tx=tx, ledger=ledger, mempool=[tx])
            result = VerifyResult(txhash, C.VERIFY_PASSED, None)
        except BlockChainError as e:
            result = VerifyResult(txhash, C.VERIFY_FAILED, str(e))
    log.info("hash={} verify={}{}".format(
        result.hash, result.status, '' if result.reason is None else ' reason="{}"'.format(result.reason)))
    return result


__all__ = [
    "VerifyResult",
    "round_trip",
    "dump_values",
    "check_tx",
]
