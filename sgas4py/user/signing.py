from sgas4py.config import SigningIncomplete
from sgas4py.chain.checking.utils import get_script_hashes_for_verifying
from sgas4py.chain.tx import TX, Witness
from sgas4py.chain.utils import hash2str, hash_sort_key
from sgas4py.contract.scriptbuilder import create_signature_invocation
from logging import getLogger

log = getLogger('sgas4py')


class SigningContext(object):
    __slots__ = ("tx", "script_hashes", "witnesses")

    def __init__(self, tx: TX, script_hashes):
        self.tx = tx
        self.script_hashes = list(script_hashes)
        self.witnesses = dict()  # {script_hash: Witness}
        # keep witnesses already attached
        for witness in tx.witnesses:
            if witness.verification and witness.script_hash in self.script_hashes:
                self.witnesses[witness.script_hash] = witness

    def __repr__(self):
        return "<SigningContext {} {}/{}>".format(self.tx, len(self.witnesses), len(self.script_hashes))

    @classmethod
    def from_ledger(cls, tx, ledger):
        return cls(tx, get_script_hashes_for_verifying(tx, ledger))

    @property
    def completed(self):
        return all(h in self.witnesses for h in self.script_hashes)

    def add_signature(self, verification_script, signature):
        witness = Witness(invocation=create_signature_invocation(signature), verification=verification_script)
        if witness.script_hash not in self.script_hashes:
            return False
        self.witnesses[witness.script_hash] = witness
        return True

    def get_witnesses(self):
        """witnesses in required order"""
        return [self.witnesses[h] for h in self.script_hashes if h in self.witnesses]


def sort_witnesses(witnesses):
    return sorted(witnesses, key=lambda w: hash_sort_key(w.script_hash))


def sign_tx(wallet, tx: TX, ledger):
    """wallet decides which accounts sign, all required signatures or nothing"""
    context = SigningContext.from_ledger(tx, ledger)
    result = wallet.sign(context)
    if not result.completed:
        log.warning("sign fail {} signed={}/{}".format(
            hash2str(tx.hash), len(context.witnesses), len(context.script_hashes)))
        raise SigningIncomplete('Cannot sign all of {} required'.format(len(context.script_hashes)),
                                tx=tx, context=context)
    # wallet may return witnesses in any order
    tx.witnesses = sort_witnesses(result.witnesses)
    log.info("sign successful {} by {}witnesses".format(hash2str(tx.hash), len(tx.witnesses)))
    return tx


def assemble_contract_witnesses(wallet, tx: TX, ledger, signers):
    """
    contract authorization witness plus a signature witness of each signer
    witness order follows the resolved script hash, not signers order
    """
    context = SigningContext.from_ledger(tx, ledger)
    signable = tx.get_hash_data()
    witnesses = [Witness(invocation=tx.script, verification=b'')]
    signed = set()
    for signer in signers:
        if signer.script_hash in signed:
            continue
        if signer.script_hash not in context.script_hashes:
            continue
        account = wallet.get_account(signer.script_hash)
        if account is None:
            continue
        signature = wallet.sign_raw(account, signable)
        witnesses.append(Witness(
            invocation=create_signature_invocation(signature),
            verification=account.verification_script))
        signed.add(signer.script_hash)
    if len(signed) == 0:
        log.warning("sign fail {} no signer in {}".format(hash2str(tx.hash), len(signers)))
        raise SigningIncomplete('No signer controlled by wallet', tx=tx, context=context)
    tx.witnesses = sort_witnesses(witnesses)
    log.info("sign successful {} by {}signers".format(hash2str(tx.hash), len(signed)))
    return tx


__all__ = [
    "SigningContext",
    "sort_witnesses",
    "sign_tx",
    "assemble_contract_witnesses",
]
