from sgas4py.config import C, BlockChainError, MalformedTransaction
from sgas4py.chain.utils import *
from typing import Optional, List, Tuple
from logging import getLogger
from struct import Struct

log = getLogger('sgas4py')
struct_tx_header = Struct('<BB')
struct_inputs = Struct('<32sH')
struct_outputs = Struct('<32sq20s')


class Witness(object):
    __slots__ = ("invocation", "verification")

    def __init__(self, invocation=b'', verification=b''):
        self.invocation: bytes = invocation
        self.verification: bytes = verification

    def __eq__(self, other):
        if isinstance(other, Witness):
            return self.invocation == other.invocation and self.verification == other.verification
        return False

    def __hash__(self):
        return hash((self.invocation, self.verification))

    def __repr__(self):
        return "<Witness {} inv={}b ver={}b>".format(
            hash2str(self.script_hash), len(self.invocation), len(self.verification))

    @property
    def script_hash(self):
        """resolved script hash, empty verification is lowest"""
        if len(self.verification) == 0:
            return ZERO_HASH160
        return hash160(self.verification)

    def serialize(self):
        for script in (self.invocation, self.verification):
            if len(script) > C.MAX_WITNESS_SCRIPT_SIZE:
                raise BlockChainError('witness script is too large {}>{}'.format(
                    len(script), C.MAX_WITNESS_SCRIPT_SIZE))
        return write_var_bytes(self.invocation) + write_var_bytes(self.verification)

    @classmethod
    def deserialize(cls, reader: BinaryReader):
        invocation = reader.read_var_bytes(limit=C.MAX_WITNESS_SCRIPT_SIZE)
        verification = reader.read_var_bytes(limit=C.MAX_WITNESS_SCRIPT_SIZE)
        return cls(invocation=invocation, verification=verification)

    def getinfo(self):
        return {
            'invocation': self.invocation.hex(),
            'verification': self.verification.hex(),
        }


def attribute_serialize(usage, data):
    b = struct_u8.pack(usage)
    if usage in (C.ATTR_CONTRACT_HASH, C.ATTR_VOTE) or C.ATTR_HASH1 <= usage <= C.ATTR_HASH15:
        if len(data) != 32:
            raise BlockChainError('attribute {} require 32 bytes but {}'.format(usage, len(data)))
        return b + data
    elif usage in (C.ATTR_ECDH02, C.ATTR_ECDH03):
        # compressed key, the prefix is the usage byte itself
        if len(data) != 33 or data[0] != usage:
            raise BlockChainError('ECDH attribute require 33 bytes key with prefix {}'.format(usage))
        return b + data[1:]
    elif usage == C.ATTR_SCRIPT:
        if len(data) != C.HASH160_SIZE:
            raise BlockChainError('Script attribute require 20 bytes but {}'.format(len(data)))
        return b + data
    elif usage == C.ATTR_DESCRIPTION_URL:
        if len(data) > 0xff:
            raise BlockChainError('DescriptionUrl is too long {}'.format(len(data)))
        return b + struct_u8.pack(len(data)) + data
    elif usage == C.ATTR_DESCRIPTION or C.ATTR_REMARK <= usage <= C.ATTR_REMARK15:
        if len(data) > 0xffff:
            raise BlockChainError('attribute data is too long {}'.format(len(data)))
        return b + write_var_bytes(data)
    else:
        raise BlockChainError('Unknown attribute usage {}'.format(usage))


def attribute_deserialize(reader: BinaryReader):
    usage = reader.read_u8()
    if usage in (C.ATTR_CONTRACT_HASH, C.ATTR_VOTE) or C.ATTR_HASH1 <= usage <= C.ATTR_HASH15:
        data = reader.read(32)
    elif usage in (C.ATTR_ECDH02, C.ATTR_ECDH03):
        data = bytes([usage]) + reader.read(32)
    elif usage == C.ATTR_SCRIPT:
        data = reader.read(C.HASH160_SIZE)
    elif usage == C.ATTR_DESCRIPTION_URL:
        data = reader.read(reader.read_u8())
    elif usage == C.ATTR_DESCRIPTION or C.ATTR_REMARK <= usage <= C.ATTR_REMARK15:
        data = reader.read_var_bytes(limit=0xffff)
    else:
        raise MalformedTransaction('Unknown attribute usage {}'.format(usage))
    return usage, data


class TX(object):
    __slots__ = (
        # transaction data
        "b",  # unsigned binary, hashed
        "hash",
        # transaction body
        "type",  # 1byte int
        "version",  # 1byte int
        "script",  # invocation only, var bytes
        "gas",  # invocation version>=1 only, Fixed8 int
        "attributes",  # [(usage: 1byte int, data: bin),..]
        "inputs",  # [(txhash: 32bytes bin, txindex: 2bytes int),..]
        "outputs",  # [(asset_id: 32bytes bin, script_hash: 20bytes bin, value: 8bytes int),..]
        # for verify
        "witnesses",  # [Witness,..]
        "__weakref__",
    )

    def __eq__(self, other):
        if isinstance(other, TX):
            return self.fields() == other.fields()
        log.warning("compare with {} by {}".format(self, other))
        return False

    def __hash__(self):
        return hash(self.hash)

    def __repr__(self):
        return "<TX {} ver={} {}>".format(
            C.txtype2name.get(self.type, 'UNKNOWN'), self.version, hash2str(self.hash) if self.hash else None)

    def __init__(self):
        # data
        self.b = None
        self.hash = None
        # body
        self.type: Optional[int] = None
        self.version: Optional[int] = None
        self.script: bytes = b''
        self.gas: int = 0
        self.attributes: List[Tuple[int, bytes]] = list()
        self.inputs: List[Tuple[bytes, int]] = list()
        self.outputs: List[Tuple[bytes, bytes, int]] = list()
        # verify
        self.witnesses: List[Witness] = list()

    @classmethod
    def from_binary(cls, binary):
        self = cls()
        reader = BinaryReader(binary)
        self.deserialize(reader)
        if not reader.is_end():
            raise MalformedTransaction('Do not match len [{}!={}]'.format(len(binary), reader.pos))
        return self

    @classmethod
    def from_dict(cls, tx):
        self = cls()
        self.type = tx['type']
        self.version = tx.get('version', 0)
        self.script = tx.get('script', b'')
        self.gas = tx.get('gas', 0)
        self.attributes = [tuple(a) for a in tx.get('attributes', list())]
        self.inputs = [tuple(i) for i in tx.get('inputs', list())]
        self.outputs = [tuple(o) for o in tx.get('outputs', list())]
        self.witnesses = list(tx.get('witnesses', list()))
        self.serialize()
        return self

    def fields(self):
        return (self.type, self.version, self.script, self.gas, list(self.attributes),
                list(self.inputs), list(self.outputs), list(self.witnesses))

    def serialize_exclusive(self):
        if self.type == C.TX_INVOCATION:
            b = write_var_bytes(self.script)
            if self.version >= 1:
                b += struct_i64.pack(self.gas)
            return b
        elif self.type == C.TX_CONTRACT:
            return b''
        else:
            raise BlockChainError('Unknown tx type {}'.format(self.type))

    def deserialize_exclusive(self, reader: BinaryReader):
        if self.type == C.TX_INVOCATION:
            if self.version > 1:
                raise MalformedTransaction('invocation version is 0 or 1 but {}'.format(self.version))
            self.script = reader.read_var_bytes(limit=65536)
            if len(self.script) == 0:
                raise MalformedTransaction('invocation script is empty')
            if self.version >= 1:
                self.gas = reader.unpack(struct_i64)[0]
                if self.gas < 0:
                    raise MalformedTransaction('gas is negative {}'.format(self.gas))
            else:
                self.gas = 0
        elif self.type == C.TX_CONTRACT:
            if self.version != 0:
                raise MalformedTransaction('contract tx version is 0 but {}'.format(self.version))
        else:
            raise MalformedTransaction('Unknown tx type {}'.format(self.type))

    def serialize(self):
        # [type B]-[version B]-[exclusive]-[attributes]-[inputs]-[outputs]
        if len(self.attributes) > C.MAX_TX_ATTRIBUTES:
            raise BlockChainError('too many attributes {}'.format(len(self.attributes)))
        b = struct_tx_header.pack(self.type, self.version)
        b += self.serialize_exclusive()
        # attributes
        b += write_var_int(len(self.attributes))
        for usage, data in self.attributes:
            b += attribute_serialize(usage, data)
        # inputs
        b += write_var_int(len(self.inputs))
        for txhash, txindex in self.inputs:
            b += struct_inputs.pack(txhash, txindex)
        # outputs
        b += write_var_int(len(self.outputs))
        for asset_id, script_hash, value in self.outputs:
            b += struct_outputs.pack(asset_id, value, script_hash)
        self.b = b
        # txhash
        self.hash = sha256d_hash(self.b)

    def deserialize(self, reader: BinaryReader):
        start = reader.pos
        self.type, self.version = reader.unpack(struct_tx_header)
        self.deserialize_exclusive(reader)
        # attributes
        self.attributes = list()
        for _ in range(reader.read_var_int(C.MAX_TX_ATTRIBUTES)):
            self.attributes.append(attribute_deserialize(reader))
        # inputs
        self.inputs = list()
        for _ in range(reader.read_var_int(C.MAX_TX_INPUTS)):
            self.inputs.append(reader.unpack(struct_inputs))
        # outputs
        self.outputs = list()
        for _ in range(reader.read_var_int(C.MAX_TX_OUTPUTS)):
            asset_id, value, script_hash = reader.unpack(struct_outputs)
            if value <= 0:
                raise MalformedTransaction('output value must be positive {}'.format(value))
            self.outputs.append((asset_id, script_hash, value))
        self.b = reader.b[start:reader.pos]
        self.hash = sha256d_hash(self.b)
        # witnesses
        self.witnesses = list()
        for _ in range(reader.read_var_int(C.MAX_TX_WITNESSES)):
            self.witnesses.append(Witness.deserialize(reader))

    def to_array(self):
        """signed binary, unsigned part followed by witnesses"""
        b = self.b + write_var_int(len(self.witnesses))
        for witness in self.witnesses:
            b += witness.serialize()
        return b

    def get_hash_data(self):
        """signable content"""
        return self.b

    def getinfo(self):
        r = dict()
        r['hash'] = hash2str(self.hash)
        r['type'] = C.txtype2name.get(self.type, None)
        r['version'] = self.version
        r['script'] = self.script.hex()
        r['gas'] = self.gas
        r['attributes'] = [(C.attr_usage2name.get(usage, usage), data.hex()) for usage, data in self.attributes]
        r['inputs'] = [(hash2str(txhash), txindex) for txhash, txindex in self.inputs]
        r['outputs'] = [(hash2str(asset_id), hash2str(script_hash), value)
                        for asset_id, script_hash, value in self.outputs]
        r['witnesses'] = [w.getinfo() for w in self.witnesses]
        r['size'] = self.size
        r['total_size'] = self.total_size
        return r

    @property
    def size(self):
        # Do not include witness size
        return len(self.b)

    @property
    def total_size(self):
        return len(self.to_array())


__all__ = [
    "TX",
    "Witness",
]
