from sgas4py.config import C, BlockChainError, ContractNotFound
from sgas4py.chain.utils import hash_sort_key, hash2str
from sgas4py.contract.scriptbuilder import is_signature_contract, read_push_items
from sgas4py.database.ledger import get_output_from_input
from sgas4py.wallet.account import verify_signature
from collections import defaultdict


def get_script_hashes_for_verifying(tx, ledger):
    """script hashes required to sign, sorted ascending"""
    hashes = set()
    for txhash, txindex in tx.inputs:
        pair = get_output_from_input(ledger, txhash, txindex)
        if pair is None:
            raise BlockChainError('Not found input output {}:{}'.format(hash2str(txhash), txindex))
        asset_id, script_hash, value = pair
        hashes.add(script_hash)
    for usage, data in tx.attributes:
        if usage == C.ATTR_SCRIPT:
            hashes.add(data)
    return sorted(hashes, key=hash_sort_key)


def inputs_origin_check(tx, mempool):
    """check the TX inputs for inconsistencies"""
    # check if the same input is used in same tx
    if len(tx.inputs) != len(set(tx.inputs)):
        raise BlockChainError('input has same origin {}!={}'.format(len(tx.inputs), len(set(tx.inputs))))
    # check if the same input is used by another tx in pool
    for pool_tx in mempool:
        if pool_tx.hash == tx.hash:
            continue
        for pair in pool_tx.inputs:
            if pair in tx.inputs:
                raise BlockChainError('Input of {} is already used by {}'.format(tx, pool_tx))


def amount_check(tx, ledger):
    """outputs of each asset must be covered by inputs"""
    input_coins = defaultdict(int)
    for txhash, txindex in tx.inputs:
        pair = get_output_from_input(ledger, txhash, txindex)
        if pair is None:
            raise BlockChainError('Not found input tx {}:{}'.format(hash2str(txhash), txindex))
        asset_id, script_hash, value = pair
        input_coins[asset_id] += value
    output_coins = defaultdict(int)
    for asset_id, script_hash, value in tx.outputs:
        if value <= 0:
            raise BlockChainError('Output value is more than 0')
        output_coins[asset_id] += value
    for asset_id, value in output_coins.items():
        if asset_id not in input_coins:
            raise BlockChainError('Output asset {} is not in inputs'.format(hash2str(asset_id)))
        if input_coins[asset_id] < value:
            raise BlockChainError('Output is over input of {} [{}<{}]'.format(
                hash2str(asset_id), input_coins[asset_id], value))


def witness_check(tx, ledger):
    hashes = get_script_hashes_for_verifying(tx, ledger)
    if len(hashes) != len(tx.witnesses):
        raise BlockChainError('witness number is {} but {}'.format(len(hashes), len(tx.witnesses)))
    for script_hash, witness in zip(hashes, tx.witnesses):
        if len(witness.verification) == 0:
            # delegated to deployed contract, VM is not emulated
            try:
                ledger.get_contract_state(script_hash)
            except ContractNotFound:
                raise BlockChainError('empty verification witness at {} which is not contract'
                                      .format(hash2str(script_hash)))
            continue
        if witness.script_hash != script_hash:
            raise BlockChainError('witness order mismatch, require {} but {}'
                                  .format(hash2str(script_hash), hash2str(witness.script_hash)))
        if is_signature_contract(witness.verification):
            try:
                items = read_push_items(witness.invocation)
            except ValueError as e:
                raise BlockChainError('invocation is not push only, {}'.format(e))
            if len(items) != 1 or not isinstance(items[0], bytes):
                raise BlockChainError('signature invocation push one item but {}'.format(len(items)))
            pk = witness.verification[1:34]
            if not verify_signature(tx.get_hash_data(), items[0], pk):
                raise BlockChainError('Failed verify signature of {}'.format(hash2str(script_hash)))


__all__ = [
    "get_script_hashes_for_verifying",
    "inputs_origin_check",
    "amount_check",
    "witness_check",
]
