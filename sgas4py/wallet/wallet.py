from sgas4py.config import BlockChainError
from sgas4py.chain.utils import hash2str
from sgas4py.wallet.account import Account, KeyPair
from collections import namedtuple
from logging import getLogger

log = getLogger('sgas4py')

SigningResult = namedtuple('SigningResult', ['completed', 'witnesses'])


class Wallet(object):
    """
    signing capability injected into the transaction builder
    subclass it to plug a hardware wallet or a remote signer
    """

    def list_accounts(self):
        raise NotImplementedError

    def get_account(self, script_hash):
        for account in self.list_accounts():
            if account.script_hash == script_hash:
                return account
        return None

    def sign_raw(self, account, data):
        """sign signable bytes by account's key"""
        raise NotImplementedError

    def sign(self, context):
        """
        add signatures of own accounts to context
        :param context: SigningContext, has `script_hashes` and `add_signature`
        :return: SigningResult
        """
        for script_hash in context.script_hashes:
            account = self.get_account(script_hash)
            if account is None or not account.has_key:
                continue
            signature = self.sign_raw(account, context.tx.get_hash_data())
            context.add_signature(account.verification_script, signature)
        if context.completed:
            return SigningResult(True, context.get_witnesses())
        else:
            return SigningResult(False, [])


class KeyWallet(Wallet):
    def __init__(self, accounts=None):
        self.accounts = list(accounts or ())

    def __repr__(self):
        return "<KeyWallet {}accounts>".format(len(self.accounts))

    @classmethod
    def from_wif_list(cls, wif_list):
        return cls([Account.from_wif(wif) for wif in wif_list])

    def list_accounts(self):
        return list(self.accounts)

    def add_account(self, account):
        if self.get_account(account.script_hash) is not None:
            raise BlockChainError('Already registered account {}'.format(account.address))
        self.accounts.append(account)
        return account

    def create_account(self, label=None):
        return self.add_account(Account.from_keypair(KeyPair.generate(), label=label))

    def sign_raw(self, account, data):
        if account.keypair is None:
            raise BlockChainError('Not found key of {}'.format(hash2str(account.script_hash)))
        signature = account.keypair.sign(data)
        log.debug("sign {}bytes by {}".format(len(data), account.address))
        return signature


__all__ = [
    "SigningResult",
    "Wallet",
    "KeyWallet",
]
