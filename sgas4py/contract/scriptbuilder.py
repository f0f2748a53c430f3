from sgas4py.config import C, InvalidScriptInput
from sgas4py.chain.utils import struct_u8, struct_u16, struct_u32
from random import getrandbits


class OpCode:
    PUSH0 = 0x00  # also PUSHF
    PUSHBYTES1 = 0x01
    PUSHBYTES33 = 0x21
    PUSHBYTES64 = 0x40
    PUSHBYTES75 = 0x4b
    PUSHDATA1 = 0x4c
    PUSHDATA2 = 0x4d
    PUSHDATA4 = 0x4e
    PUSHM1 = 0x4f
    PUSH1 = 0x51  # also PUSHT
    PUSH16 = 0x60
    RET = 0x66
    APPCALL = 0x67
    CHECKSIG = 0xac
    PACK = 0xc1
    THROWIFNOT = 0xf1


class ScriptBuilder(object):
    __slots__ = ("b",)

    def __init__(self):
        self.b = bytearray()

    def __repr__(self):
        return "<ScriptBuilder {}bytes>".format(len(self.b))

    def emit(self, op, arg=b''):
        self.b.append(op)
        self.b.extend(arg)
        return self

    def emit_push(self, data):
        if isinstance(data, bool):
            return self.emit(OpCode.PUSH1 if data else OpCode.PUSH0)
        elif isinstance(data, int):
            if data == -1:
                return self.emit(OpCode.PUSHM1)
            elif data == 0:
                return self.emit(OpCode.PUSH0)
            elif 0 < data <= 16:
                return self.emit(OpCode.PUSH1 - 1 + data)
            else:
                return self.emit_push(int2bytes(data))
        elif isinstance(data, str):
            return self.emit_push(data.encode())
        elif isinstance(data, (bytes, bytearray)):
            size = len(data)
            if size > C.MAX_SCRIPT_SIZE:
                raise InvalidScriptInput('push data is too large {}>{}'.format(size, C.MAX_SCRIPT_SIZE))
            elif size <= OpCode.PUSHBYTES75:
                return self.emit(OpCode.PUSHBYTES1 - 1 + size if size else OpCode.PUSH0, data)
            elif size < 0x100:
                return self.emit(OpCode.PUSHDATA1, struct_u8.pack(size) + data)
            elif size < 0x10000:
                return self.emit(OpCode.PUSHDATA2, struct_u16.pack(size) + data)
            else:
                return self.emit(OpCode.PUSHDATA4, struct_u32.pack(size) + data)
        else:
            raise InvalidScriptInput('cannot push type {}'.format(type(data)))

    def emit_app_call(self, script_hash, operation, *args):
        """call contract method, args are packed to array"""
        check_script_hash(script_hash)
        if not isinstance(operation, str) or len(operation) == 0:
            raise InvalidScriptInput('operation is empty or not str, {}'.format(operation))
        if len(args) == 0:
            self.emit_push(False)
        else:
            for arg in reversed(args):
                self.emit_push(arg)
            self.emit_push(len(args))
            self.emit(OpCode.PACK)
        self.emit_push(operation)
        return self.emit(OpCode.APPCALL, script_hash)

    def to_array(self):
        return bytes(self.b)


def int2bytes(i):
    """minimal little-endian two's complement, BigInteger style"""
    size = (i + (i < 0)).bit_length() // 8 + 1
    return i.to_bytes(size, 'little', signed=True)


def check_script_hash(script_hash):
    if not isinstance(script_hash, bytes) or len(script_hash) != C.HASH160_SIZE:
        raise InvalidScriptInput('contract hash must be {} bytes, {}'.format(C.HASH160_SIZE, script_hash))


def create_invocation_script(script_hash, operation, args=(), nonce=None):
    """call with THROWIFNOT guard, optional nonce after RET"""
    sb = ScriptBuilder()
    sb.emit_app_call(script_hash, operation, *args)
    sb.emit(OpCode.THROWIFNOT)
    if nonce is not None:
        if len(nonce) != C.NONCE_SIZE:
            raise InvalidScriptInput('nonce is {} bytes but {}'.format(C.NONCE_SIZE, len(nonce)))
        sb.emit(OpCode.RET, nonce)
    return sb.to_array()


def create_mint_script(contract_hash, nonce=None):
    if nonce is None:
        nonce = getrandbits(C.NONCE_SIZE * 8).to_bytes(C.NONCE_SIZE, 'little')
    return create_invocation_script(contract_hash, C.M_MINT_TOKENS, nonce=nonce)


def create_refund_script(contract_hash, script_hash):
    check_script_hash(script_hash)
    return create_invocation_script(contract_hash, C.M_REFUND, args=(script_hash,))


def create_signature_redeem_script(pk):
    """standard account verification script"""
    if len(pk) != 33:
        raise InvalidScriptInput('compressed public key is 33 bytes but {}'.format(len(pk)))
    return bytes([OpCode.PUSHBYTES33]) + pk + bytes([OpCode.CHECKSIG])


def create_signature_invocation(signature):
    return ScriptBuilder().emit_push(signature).to_array()


def is_signature_contract(script):
    return len(script) == 35 and script[0] == OpCode.PUSHBYTES33 and script[34] == OpCode.CHECKSIG


def read_push_items(script):
    """parse push-only script, raise ValueError on other opcodes"""
    items = list()
    pos = 0
    while pos < len(script):
        op = script[pos]
        pos += 1
        if op == OpCode.PUSH0:
            items.append(b'')
            continue
        elif op <= OpCode.PUSHBYTES75:
            size = op
        elif op == OpCode.PUSHDATA1:
            if pos + 1 > len(script):
                raise ValueError('PUSHDATA1 header over script end at {}'.format(pos - 1))
            size = script[pos]
            pos += 1
        elif op == OpCode.PUSHDATA2:
            if pos + 2 > len(script):
                raise ValueError('PUSHDATA2 header over script end at {}'.format(pos - 1))
            size = struct_u16.unpack_from(script, pos)[0]
            pos += 2
        elif op == OpCode.PUSHDATA4:
            if pos + 4 > len(script):
                raise ValueError('PUSHDATA4 header over script end at {}'.format(pos - 1))
            size = struct_u32.unpack_from(script, pos)[0]
            pos += 4
        elif op == OpCode.PUSHM1 or OpCode.PUSH1 <= op <= OpCode.PUSH16:
            items.append(op - OpCode.PUSH1 + 1)
            continue
        else:
            raise ValueError('not a push opcode 0x{:02x} at {}'.format(op, pos - 1))
        if pos + size > len(script):
            raise ValueError('push over script end [{}+{}>{}]'.format(pos, size, len(script)))
        items.append(script[pos:pos + size])
        pos += size
    return items


__all__ = [
    "OpCode",
    "ScriptBuilder",
    "int2bytes",
    "create_invocation_script",
    "create_mint_script",
    "create_refund_script",
    "create_signature_redeem_script",
    "create_signature_invocation",
    "is_signature_contract",
    "read_push_items",
]
