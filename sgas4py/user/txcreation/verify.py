from sgas4py.config import C
from sgas4py.chain.tx import TX, Witness
from sgas4py.contract.scriptbuilder import ScriptBuilder
from logging import getLogger

log = getLogger('sgas4py')


def create_verify_tx(contract_hash, contract_script, asset_id, mint_tx, value, index=0):
    """
    contract tx spending mint output, witness executes deployed contract
    contract must be deployed because local script cannot read storage
    """
    sb = ScriptBuilder()
    sb.emit_push(2)
    sb.emit_push('1')
    tx = TX.from_dict(
        tx={
            'type': C.TX_CONTRACT,
            'version': 0,
            'inputs': [(mint_tx.hash, index)],
            'outputs': [(asset_id, contract_hash, value)],
            'witnesses': [Witness(invocation=sb.to_array(), verification=contract_script)],
        })
    log.debug("create verify {} value={}".format(tx, value))
    return tx


__all__ = [
    "create_verify_tx",
]
