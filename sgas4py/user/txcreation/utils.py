from sgas4py.config import C, OutputNotFound
from sgas4py.chain.tx import TX
from sgas4py.chain.utils import hash2str
from logging import getLogger

log = getLogger('sgas4py')


def select_output_index(tx: TX, script_hash):
    """index of the first output paying to script_hash"""
    for index, (asset_id, output_hash, value) in enumerate(tx.outputs):
        if index >= C.MAX_TX_OUTPUTS:
            break
        if output_hash == script_hash:
            log.debug("select output {}:{} for {}".format(hash2str(tx.hash), index, hash2str(script_hash)))
            return index
    raise OutputNotFound('Not found output to {} in {}'.format(hash2str(script_hash), tx))


__all__ = [
    "select_output_index",
]
