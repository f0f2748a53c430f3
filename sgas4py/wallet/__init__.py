from sgas4py.wallet.base58 import *
from sgas4py.wallet.account import *
from sgas4py.wallet.wallet import *

__all__ = [
    "check_encode",
    "check_decode",
    "KeyPair",
    "Account",
    "encode_point",
    "decode_point",
    "verify_signature",
    "script_hash2address",
    "address2script_hash",
    "SigningResult",
    "Wallet",
    "KeyWallet",
]
