from sgas4py.config import C, SigningIncomplete
from sgas4py.chain.tx import TX, Witness
from sgas4py.chain.utils import hash_sort_key
from sgas4py.user.signing import *
from sgas4py.user.txcreation import create_mint_tx, create_refund_tx
from sgas4py.wallet import KeyWallet, verify_signature
from sgas4py.contract.scriptbuilder import read_push_items
from conftest import ASSET_ID, COIN, CONTRACT_SCRIPT, LOW_CONTRACT_HASH, new_account
import pytest


def setup_refund(ledger, funding_tx, holder, wallet):
    ledger.add_contract(CONTRACT_SCRIPT, LOW_CONTRACT_HASH)
    source = create_mint_tx(LOW_CONTRACT_HASH, ASSET_ID, funding_tx, holder.script_hash, 10 * COIN)
    sign_tx(wallet, source, ledger)
    ledger.add_tx(source)
    return source


def test_sign_tx_by_wallet(ledger, funding_tx, holder, wallet):
    tx = create_mint_tx(LOW_CONTRACT_HASH, ASSET_ID, funding_tx, holder.script_hash, COIN)
    sign_tx(wallet, tx, ledger)
    assert len(tx.witnesses) == 1
    witness = tx.witnesses[0]
    assert witness.verification == holder.verification_script
    signature = read_push_items(witness.invocation)[0]
    assert verify_signature(tx.get_hash_data(), signature, holder.keypair.get_public_key())


def test_sign_incomplete(ledger, funding_tx, holder, other):
    """wallet without holder key leaves tx unsigned"""
    tx = create_mint_tx(LOW_CONTRACT_HASH, ASSET_ID, funding_tx, holder.script_hash, COIN)
    with pytest.raises(SigningIncomplete) as e:
        sign_tx(KeyWallet([other]), tx, ledger)
    assert e.value.tx is tx
    assert e.value.context.script_hashes == [holder.script_hash]
    assert tx.witnesses == []


class ReversedWallet(KeyWallet):
    """returns witnesses in reverse of required order"""

    def sign(self, context):
        result = super(ReversedWallet, self).sign(context)
        return result._replace(witnesses=list(reversed(result.witnesses)))


def test_sign_tx_reorders_wallet_witnesses(ledger, funding_tx, holder, other):
    tx = TX.from_dict(
        tx={
            'type': C.TX_INVOCATION,
            'version': 0,
            'script': b'\x51',
            'attributes': [(C.ATTR_SCRIPT, other.script_hash)],
            'inputs': [(funding_tx.hash, 0)],
            'outputs': [(ASSET_ID, holder.script_hash, 10 * COIN)],
        })
    sign_tx(ReversedWallet([holder, other]), tx, ledger)
    assert len(tx.witnesses) == 2
    keys = [hash_sort_key(w.script_hash) for w in tx.witnesses]
    assert keys == sorted(keys)
    assert {w.verification for w in tx.witnesses} == {holder.verification_script, other.verification_script}


def test_context_keeps_signatures(ledger, funding_tx, holder, other):
    """partial signatures are kept in the context"""
    tx = TX.from_dict(
        tx={
            'type': C.TX_INVOCATION,
            'version': 0,
            'script': b'\x51',
            'attributes': [(C.ATTR_SCRIPT, other.script_hash)],
            'inputs': [(funding_tx.hash, 0)],
            'outputs': [(ASSET_ID, holder.script_hash, COIN)],
        })
    with pytest.raises(SigningIncomplete) as e:
        sign_tx(KeyWallet([holder]), tx, ledger)
    context = e.value.context
    assert not context.completed
    assert list(context.witnesses) == [holder.script_hash]
    # other signer completes it
    result = KeyWallet([other]).sign(context)
    assert result.completed
    assert [w.script_hash for w in result.witnesses] == context.script_hashes


def test_refund_witness_order(ledger, funding_tx, holder, wallet):
    """contract witness has empty verification and sorts lowest"""
    source = setup_refund(ledger, funding_tx, holder, wallet)
    tx = create_refund_tx(LOW_CONTRACT_HASH, ASSET_ID, source, holder.script_hash)
    assemble_contract_witnesses(wallet, tx, ledger, [holder])
    assert len(tx.witnesses) == 2
    assert tx.witnesses[0].verification == b''
    assert tx.witnesses[0].invocation == tx.script
    assert tx.witnesses[1].verification == holder.verification_script
    keys = [hash_sort_key(w.script_hash) for w in tx.witnesses]
    assert keys == sorted(keys)


def test_signer_permutation(ledger, funding_tx, holder, other, wallet):
    """order of signers does not change witness order"""
    source = setup_refund(ledger, funding_tx, holder, wallet)
    third = new_account(0x4242424242424242424242424242424242424242424242424242424242424242)
    wallet = KeyWallet([holder, other, third])
    orders = list()
    for signers in ([holder, other, third], [third, other, holder], [other, third, holder]):
        tx = TX.from_dict(
            tx={
                'type': C.TX_INVOCATION,
                'version': 0,
                'script': b'\x51',
                'attributes': [(C.ATTR_SCRIPT, a.script_hash) for a in (holder, other, third)],
                'inputs': [(source.hash, 0)],
                'outputs': [(ASSET_ID, LOW_CONTRACT_HASH, 10 * COIN)],
            })
        assemble_contract_witnesses(wallet, tx, ledger, signers)
        assert len(tx.witnesses) == 4
        orders.append([w.verification for w in tx.witnesses])
        keys = [hash_sort_key(w.script_hash) for w in tx.witnesses]
        assert keys == sorted(keys)
    assert orders[0] == orders[1] == orders[2]


def test_refund_without_signer(ledger, funding_tx, holder, other, wallet):
    source = setup_refund(ledger, funding_tx, holder, wallet)
    tx = create_refund_tx(LOW_CONTRACT_HASH, ASSET_ID, source, holder.script_hash)
    with pytest.raises(SigningIncomplete):
        assemble_contract_witnesses(KeyWallet([other]), tx, ledger, [holder, other])
    assert tx.witnesses == []


def test_sort_witnesses():
    witnesses = [Witness(b'\x51', b'\x52'), Witness(b'\x51', b''), Witness(b'\x51', b'\x53')]
    ordered = sort_witnesses(witnesses)
    assert ordered[0].verification == b''
    assert [hash_sort_key(w.script_hash) for w in ordered] == \
        sorted(hash_sort_key(w.script_hash) for w in witnesses)
