from sgas4py.config import C, InvalidScriptInput
from sgas4py.contract.scriptbuilder import *
import pytest

CONTRACT_HASH = bytes(range(20))
REQUESTER = bytes(range(100, 120))


def test_push_integer():
    """small integers use single opcodes, others minimal bytes"""
    assert ScriptBuilder().emit_push(0).to_array() == b'\x00'
    assert ScriptBuilder().emit_push(1).to_array() == b'\x51'
    assert ScriptBuilder().emit_push(16).to_array() == b'\x60'
    assert ScriptBuilder().emit_push(-1).to_array() == b'\x4f'
    assert ScriptBuilder().emit_push(17).to_array() == b'\x01\x11'
    assert ScriptBuilder().emit_push(255).to_array() == b'\x02\xff\x00'
    assert ScriptBuilder().emit_push(-129).to_array() == b'\x02\x7f\xff'


def test_push_bool_and_str():
    assert ScriptBuilder().emit_push(True).to_array() == b'\x51'
    assert ScriptBuilder().emit_push(False).to_array() == b'\x00'
    assert ScriptBuilder().emit_push('1').to_array() == b'\x01\x31'


def test_push_bytes_prefix():
    """PUSHBYTES up to 75, then PUSHDATA1/2"""
    assert ScriptBuilder().emit_push(b'\xaa' * 75).to_array()[:1] == b'\x4b'
    assert ScriptBuilder().emit_push(b'\xaa' * 76).to_array()[:2] == b'\x4c\x4c'
    assert ScriptBuilder().emit_push(b'\xaa' * 256).to_array()[:3] == b'\x4d\x00\x01'
    assert ScriptBuilder().emit_push(b'').to_array() == b'\x00'


def test_mint_script_layout():
    """no args -> PUSHF, method, APPCALL, THROWIFNOT, RET nonce"""
    nonce = b'\x01\x02\x03\x04\x05\x06\x07\x08'
    script = create_mint_script(CONTRACT_HASH, nonce=nonce)
    expect = b'\x00' + b'\x0a' + b'mintTokens' + b'\x67' + CONTRACT_HASH + b'\xf1' + b'\x66' + nonce
    assert script == expect


def test_refund_script_layout():
    """args are pushed reversed then packed"""
    script = create_refund_script(CONTRACT_HASH, REQUESTER)
    expect = b'\x14' + REQUESTER + b'\x51\xc1' + b'\x06' + b'refund' + b'\x67' + CONTRACT_HASH + b'\xf1'
    assert script == expect


def test_invocation_args_reversed():
    script = create_invocation_script(CONTRACT_HASH, 'transfer', args=(b'\xaa', b'\xbb', 5))
    assert script.startswith(b'\x55' + b'\x01\xbb' + b'\x01\xaa' + b'\x53\xc1')


def test_mint_nonce_differ():
    """same parameter, different script"""
    assert create_mint_script(CONTRACT_HASH) != create_mint_script(CONTRACT_HASH)
    assert len(create_mint_script(CONTRACT_HASH)) == 1 + 11 + 21 + 1 + 1 + C.NONCE_SIZE


def test_invalid_input():
    with pytest.raises(InvalidScriptInput):
        create_mint_script(b'')
    with pytest.raises(InvalidScriptInput):
        create_mint_script(CONTRACT_HASH[:19])
    with pytest.raises(InvalidScriptInput):
        create_invocation_script(CONTRACT_HASH, '')
    with pytest.raises(InvalidScriptInput):
        create_invocation_script(CONTRACT_HASH, 'big', args=(b'\x00' * (C.MAX_SCRIPT_SIZE + 1),))
    with pytest.raises(InvalidScriptInput):
        create_invocation_script(CONTRACT_HASH, 'float', args=(1.5,))
    with pytest.raises(InvalidScriptInput):
        create_mint_script(CONTRACT_HASH, nonce=b'\x00' * 7)
    with pytest.raises(InvalidScriptInput):
        create_refund_script(CONTRACT_HASH, b'\x00' * 21)


def test_signature_scripts():
    pk = b'\x02' + b'\x33' * 32
    script = create_signature_redeem_script(pk)
    assert is_signature_contract(script)
    assert script[1:34] == pk
    assert not is_signature_contract(b'')
    invocation = create_signature_invocation(b'\x11' * 64)
    assert invocation[0] == OpCode.PUSHBYTES64
    assert read_push_items(invocation) == [b'\x11' * 64]


def test_read_push_items():
    sb = ScriptBuilder()
    sb.emit_push(2).emit_push('1').emit_push(b'\xcc' * 80).emit_push(-1)
    assert read_push_items(sb.to_array()) == [2, b'1', b'\xcc' * 80, -1]
    with pytest.raises(ValueError):
        read_push_items(b'\x67' + CONTRACT_HASH)
    with pytest.raises(ValueError):
        read_push_items(b'\x05\x00')


def test_read_push_items_truncated_header():
    for script in (b'\x4c', b'\x4d\x01', b'\x4e\x01\x00\x00', b'\x51\x4d'):
        with pytest.raises(ValueError):
            read_push_items(script)
