from sgas4py.config import C
from sgas4py.chain.tx import TX
from sgas4py.database.ledger import MemoryLedger
from sgas4py.wallet import Account, KeyPair, KeyWallet
import pytest

ASSET_ID = bytes.fromhex('602c79718b16e442de58778e148d0b1084e3b2dffd5de6b7b16cee7969282de7')[::-1]
CONTRACT_SCRIPT = bytes.fromhex('5ec56b6a00527ac46a51527ac4616c7566')
LOW_CONTRACT_HASH = b'\x01' + b'\x00' * 19  # sorts before any account
HIGH_CONTRACT_HASH = b'\xff' * 20  # sorts after any account
COIN = C.FIXED8_FACTOR


def new_account(secret, label=None):
    return Account.from_keypair(KeyPair(secret), label=label)


def create_funding_tx(outputs, prev_hash=b'\x11' * 32):
    return TX.from_dict(
        tx={
            'type': C.TX_CONTRACT,
            'version': 0,
            'inputs': [(prev_hash, 0)],
            'outputs': outputs,
        })


@pytest.fixture
def holder():
    return new_account(0x1f2e3d4c5b6a79881f2e3d4c5b6a79881f2e3d4c5b6a79881f2e3d4c5b6a7988, 'holder')


@pytest.fixture
def other():
    return new_account(0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef, 'other')


@pytest.fixture
def wallet(holder):
    return KeyWallet([holder])


@pytest.fixture
def ledger():
    return MemoryLedger()


@pytest.fixture
def funding_tx(ledger, holder, other):
    tx = create_funding_tx([
        (ASSET_ID, holder.script_hash, 10 * COIN),
        (ASSET_ID, other.script_hash, 5 * COIN),
        (ASSET_ID, holder.script_hash, 3 * COIN),
    ])
    return ledger.add_tx(tx)
