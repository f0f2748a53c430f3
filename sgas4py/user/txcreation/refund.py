from sgas4py.config import C, InvalidRefundSource
from sgas4py.chain.tx import TX
from sgas4py.contract.scriptbuilder import create_refund_script
from sgas4py.user.txcreation.utils import select_output_index
from logging import getLogger

log = getLogger('sgas4py')


def create_refund_tx(contract_hash, asset_id, source_tx, requester):
    """spend contract's mint output back to contract, requester is the claimant"""
    if len(source_tx.outputs) != 1 or len(source_tx.inputs) != 1:
        raise InvalidRefundSource('refund source require 1 input and 1 output but {} and {}'
                                  .format(len(source_tx.inputs), len(source_tx.outputs)))
    index = select_output_index(source_tx, contract_hash)
    _asset_id, _script_hash, value = source_tx.outputs[index]
    tx = TX.from_dict(
        tx={
            'type': C.TX_INVOCATION,
            'version': 0,
            'script': create_refund_script(contract_hash, requester),
            'attributes': [(C.ATTR_SCRIPT, requester)],
            'inputs': [(source_tx.hash, index)],
            'outputs': [(asset_id, contract_hash, value)],
        })
    log.debug("create refund {} value={}".format(tx, value))
    return tx


__all__ = [
    "create_refund_tx",
]
