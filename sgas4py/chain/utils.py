from sgas4py.config import C, MalformedTransaction
from Cryptodome.Hash import RIPEMD160, SHA256
from struct import Struct, error as StructError

struct_u8 = Struct('<B')
struct_u16 = Struct('<H')
struct_u32 = Struct('<I')
struct_u64 = Struct('<Q')
struct_i64 = Struct('<q')
ZERO_HASH160 = b'\x00' * C.HASH160_SIZE


def sha256(b):
    return SHA256.new(b).digest()


def sha256d_hash(b):
    """txhash, double sha256"""
    return sha256(sha256(b))


def hash160(b):
    """script hash, ripemd160(sha256(b))"""
    return RIPEMD160.new(sha256(b)).digest()


def hash2str(h):
    """UInt160/UInt256 are shown big-endian"""
    return '0x' + h[::-1].hex()


def str2hash(s, size=None):
    if s.startswith('0x'):
        s = s[2:]
    h = bytes.fromhex(s)[::-1]
    if size is not None and len(h) != size:
        raise ValueError('hash length is not {} but {}'.format(size, len(h)))
    return h


def hash_sort_key(h):
    """UInt160 ordering, compare as little-endian unsigned int"""
    return int.from_bytes(h, 'little')


def write_var_int(i):
    if i < 0:
        raise ValueError('var int is positive, {}'.format(i))
    elif i < 0xfd:
        return struct_u8.pack(i)
    elif i <= 0xffff:
        return b'\xfd' + struct_u16.pack(i)
    elif i <= 0xffffffff:
        return b'\xfe' + struct_u32.pack(i)
    else:
        return b'\xff' + struct_u64.pack(i)


def write_var_bytes(b):
    return write_var_int(len(b)) + b


class BinaryReader(object):
    __slots__ = ("b", "pos")

    def __init__(self, b, pos=0):
        self.b = b
        self.pos = pos

    def read(self, size):
        if self.pos + size > len(self.b):
            raise MalformedTransaction('read over the end [{}+{}>{}]'.format(self.pos, size, len(self.b)))
        r = self.b[self.pos:self.pos + size]
        self.pos += size
        return r

    def unpack(self, st: Struct):
        try:
            r = st.unpack_from(self.b, self.pos)
        except StructError as e:
            raise MalformedTransaction('cannot unpack at {}: {}'.format(self.pos, e))
        self.pos += st.size
        return r

    def read_u8(self):
        return self.unpack(struct_u8)[0]

    def read_var_int(self, limit=0xffffffffffffffff):
        fb = self.read_u8()
        if fb == 0xfd:
            i = self.unpack(struct_u16)[0]
        elif fb == 0xfe:
            i = self.unpack(struct_u32)[0]
        elif fb == 0xff:
            i = self.unpack(struct_u64)[0]
        else:
            i = fb
        if i > limit:
            raise MalformedTransaction('var int over limit [{}>{}]'.format(i, limit))
        return i

    def read_var_bytes(self, limit=C.MAX_SCRIPT_SIZE):
        return self.read(self.read_var_int(limit))

    def is_end(self):
        return self.pos == len(self.b)


__all__ = [
    "ZERO_HASH160",
    "sha256",
    "sha256d_hash",
    "hash160",
    "hash2str",
    "str2hash",
    "hash_sort_key",
    "write_var_int",
    "write_var_bytes",
    "BinaryReader",
    "struct_u8",
    "struct_u16",
    "struct_i64",
]
