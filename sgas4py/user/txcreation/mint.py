from sgas4py.config import C, BlockChainError, InsufficientFunds
from sgas4py.chain.tx import TX
from sgas4py.chain.utils import hash2str
from sgas4py.contract.scriptbuilder import create_mint_script
from sgas4py.user.txcreation.utils import select_output_index
from logging import getLogger

log = getLogger('sgas4py')


def create_mint_tx(contract_hash, asset_id, funding_tx, holder, amount, nonce=None):
    """
    deposit amount of asset to contract and return the rest to holder
    :param contract_hash: token contract script hash
    :param asset_id: asset to deposit
    :param funding_tx: confirmed tx which has holder's output
    :param holder: holder's script hash
    :param amount: Fixed8 int, 0 < amount <= funding value
    :param nonce: 8 bytes, random if None
    :return: unsigned TX
    """
    if not isinstance(amount, int) or amount <= 0:
        raise BlockChainError('mint amount must be positive int, {}'.format(amount))
    index = select_output_index(funding_tx, holder)
    output_asset, output_hash, output_value = funding_tx.outputs[index]
    if output_asset != asset_id:
        raise BlockChainError('funding output asset is {} not {}'
                              .format(hash2str(output_asset), hash2str(asset_id)))
    if output_value < amount:
        raise InsufficientFunds('funding output is {} but try to mint {}'.format(output_value, amount))
    outputs = [(asset_id, contract_hash, amount)]
    if amount < output_value:
        # change
        outputs.append((asset_id, output_hash, output_value - amount))
    tx = TX.from_dict(
        tx={
            'type': C.TX_INVOCATION,
            'version': 1,
            'script': create_mint_script(contract_hash, nonce=nonce),
            'gas': 0,
            'inputs': [(funding_tx.hash, index)],
            'outputs': outputs,
        })
    log.debug("create mint {} amount={} change={}".format(tx, amount, output_value - amount))
    return tx


__all__ = [
    "create_mint_tx",
]
