from sgas4py.user.txcreation.utils import *
from sgas4py.user.txcreation.mint import *
from sgas4py.user.txcreation.refund import *
from sgas4py.user.txcreation.verify import *
__all__ = [
    "select_output_index",
    "create_mint_tx",
    "create_refund_tx",
    "create_verify_tx",
]
