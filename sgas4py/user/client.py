from sgas4py.config import BlockChainError
from sgas4py.chain.checking import dump_values
from sgas4py.chain.utils import hash2str
from sgas4py.user.signing import sign_tx, assemble_contract_witnesses
from sgas4py.user.txcreation import create_mint_tx, create_refund_tx, create_verify_tx
from logging import getLogger

log = getLogger('sgas4py')


class TokenClient(object):
    """build, sign and check SGAS token transactions"""
    __slots__ = ("ledger", "contract_hash", "contract_script", "asset_id")

    def __init__(self, ledger, contract_hash, asset_id):
        self.ledger = ledger
        self.contract_hash = contract_hash
        self.asset_id = asset_id
        self.contract_script = ledger.get_contract_state(contract_hash)

    def __repr__(self):
        return "<TokenClient {}>".format(hash2str(self.contract_hash))

    @staticmethod
    def default_account(wallet):
        accounts = wallet.list_accounts()
        if len(accounts) == 0:
            raise BlockChainError('Wallet has no account')
        return accounts[0]

    def mint_tokens(self, wallet, amount, funding_hash, account=None, nonce=None):
        account = account or self.default_account(wallet)
        funding_tx = self.ledger.get_transaction(funding_hash)
        tx = create_mint_tx(
            contract_hash=self.contract_hash,
            asset_id=self.asset_id,
            funding_tx=funding_tx,
            holder=account.script_hash,
            amount=amount,
            nonce=nonce)
        sign_tx(wallet, tx, self.ledger)
        return tx, dump_values(tx, self.ledger)

    def refund(self, wallet, source_tx, requester=None, signers=None):
        """requester receives the refund, signers only sign and their order is free"""
        requester = requester or self.default_account(wallet)
        signers = signers or [requester]
        tx = create_refund_tx(
            contract_hash=self.contract_hash,
            asset_id=self.asset_id,
            source_tx=source_tx,
            requester=requester.script_hash)
        assemble_contract_witnesses(wallet, tx, self.ledger, signers)
        return tx, dump_values(tx, self.ledger)

    def verify(self, wallet, value, mint_tx):
        tx = create_verify_tx(
            contract_hash=self.contract_hash,
            contract_script=self.contract_script,
            asset_id=self.asset_id,
            mint_tx=mint_tx,
            value=value)
        sign_tx(wallet, tx, self.ledger)
        return tx, dump_values(tx, self.ledger)


__all__ = [
    "TokenClient",
]
