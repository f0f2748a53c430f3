from sgas4py.config import C, V, BlockChainError
from sgas4py.chain.utils import hash160, hash2str
from sgas4py.contract.scriptbuilder import create_signature_redeem_script
from sgas4py.wallet.base58 import check_encode, check_decode
from fastecdsa.curve import P256
from fastecdsa.util import mod_sqrt
from fastecdsa.point import Point
from fastecdsa.keys import get_public_key, gen_private_key
from fastecdsa import ecdsa
from typing import Optional
import hashlib

CURVE_ORDER = P256.q  # int
FIELD_ORDER = P256.p  # int


class KeyPair(object):
    __slots__ = ("secret", "public")

    def __init__(self, secret):
        if not (0 < secret < CURVE_ORDER):
            raise ValueError("secret is out of curve order")
        self.secret: int = secret
        self.public: Point = get_public_key(secret, P256)

    def __repr__(self):
        return "<KeyPair {}>".format(self.get_public_key().hex())

    @classmethod
    def generate(cls):
        return cls(gen_private_key(P256))

    @classmethod
    def from_private_key(cls, sk):
        if len(sk) != 32:
            raise ValueError("private key is 32 bytes but {}".format(len(sk)))
        return cls(int.from_bytes(sk, 'big'))

    @classmethod
    def from_wif(cls, wif):
        raw = check_decode(wif)
        if len(raw) != 34 or raw[0] != V.WIF_VERSION or raw[33] != 0x01:
            raise ValueError("wrong WIF format")
        return cls.from_private_key(raw[1:33])

    def get_private_key(self):
        return self.secret.to_bytes(32, 'big')

    def get_public_key(self):
        return encode_point(self.public)

    def wallet_import_format(self):
        """Returns private key encoded for wallet import"""
        raw = bytes([V.WIF_VERSION]) + self.get_private_key() + b'\x01'  # Always compressed
        return check_encode(raw)

    def sign(self, msg):
        """ECDSA sha256, 64 bytes r||s"""
        r, s = ecdsa.sign(msg, self.secret, curve=P256, hashfunc=hashlib.sha256)
        return r.to_bytes(32, 'big') + s.to_bytes(32, 'big')


def encode_point(point):
    x = point.x.to_bytes(32, 'big')
    if point.y & 1:
        return b'\3' + x
    else:
        return b'\2' + x


def decode_point(pk):
    """Recover public curve point from compressed key"""
    if len(pk) != 33 or pk[0] not in (2, 3):
        raise ValueError("compressed public key is 33 bytes starts with 2 or 3")
    lsb = pk[0] & 1
    x = int.from_bytes(pk[1:], 'big')
    ys = (x**3 + P256.a * x + P256.b) % FIELD_ORDER  # y^2 = x^3 + ax + b mod p
    y, _ = mod_sqrt(ys, FIELD_ORDER)
    if y * y % FIELD_ORDER != ys:
        raise ValueError("x is not on the curve")
    if y & 1 != lsb:
        y = FIELD_ORDER - y
    return Point(x, y, curve=P256)


def verify_signature(msg, signature, pk):
    """check 64 bytes r||s signature by compressed public key"""
    if len(signature) != 64:
        return False
    try:
        point = decode_point(pk)
        r = int.from_bytes(signature[:32], 'big')
        s = int.from_bytes(signature[32:], 'big')
        return ecdsa.verify((r, s), msg, point, curve=P256, hashfunc=hashlib.sha256)
    except (ValueError, ecdsa.EcdsaError):
        return False


def script_hash2address(script_hash):
    return check_encode(bytes([V.ADDRESS_VERSION]) + script_hash)


def address2script_hash(address):
    raw = check_decode(address)
    if len(raw) != 1 + C.HASH160_SIZE or raw[0] != V.ADDRESS_VERSION:
        raise BlockChainError('Not correct address {}'.format(address))
    return raw[1:]


class Account(object):
    __slots__ = ("script_hash", "verification_script", "label", "keypair")

    def __init__(self, verification_script, keypair=None, label=None):
        self.script_hash: bytes = hash160(verification_script)
        self.verification_script: bytes = verification_script
        self.label: Optional[str] = label
        self.keypair: Optional[KeyPair] = keypair

    def __repr__(self):
        return "<Account {} {}>".format(self.label or '', self.address)

    @classmethod
    def from_keypair(cls, keypair, label=None):
        script = create_signature_redeem_script(keypair.get_public_key())
        return cls(verification_script=script, keypair=keypair, label=label)

    @classmethod
    def from_wif(cls, wif, label=None):
        return cls.from_keypair(KeyPair.from_wif(wif), label=label)

    @property
    def address(self):
        return script_hash2address(self.script_hash)

    @property
    def has_key(self):
        return self.keypair is not None

    def getinfo(self):
        return {
            'label': self.label,
            'address': self.address,
            'script_hash': hash2str(self.script_hash),
            'verification_script': self.verification_script.hex(),
            'has_key': self.has_key,
        }


__all__ = [
    "KeyPair",
    "Account",
    "encode_point",
    "decode_point",
    "verify_signature",
    "script_hash2address",
    "address2script_hash",
]
