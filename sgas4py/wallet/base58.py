from sgas4py.chain.utils import sha256d_hash

__base58_alphabet = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'
__base58_radix = len(__base58_alphabet)


def __string_to_int(data):
    """Convert string of bytes Python integer, MSB"""
    return int.from_bytes(data, 'big')


def encode(data):
    """Encode bytes into Bitcoin base58 string"""
    enc = ''
    val = __string_to_int(data)
    while val >= __base58_radix:
        val, mod = divmod(val, __base58_radix)
        enc = __base58_alphabet[mod] + enc
    if val:
        enc = __base58_alphabet[val] + enc

    # Pad for leading zeroes
    n = len(data) - len(data.lstrip(b'\0'))
    return __base58_alphabet[0] * n + enc


def check_encode(raw):
    """Encode raw bytes into Bitcoin base58 string with checksum"""
    chk = sha256d_hash(raw)[:4]
    return encode(raw + chk)


def decode(data):
    """Decode Bitcoin base58 format string to bytes"""
    val = 0
    for (i, c) in enumerate(data[::-1]):
        if c not in __base58_alphabet:
            raise ValueError('invalid base58 character "{}"'.format(c))
        val += __base58_alphabet.find(c) * (__base58_radix**i)

    dec = b''
    if val:
        dec = val.to_bytes((val.bit_length() + 7) // 8, 'big')

    # Pad for leading zeroes
    n = len(data) - len(data.lstrip(__base58_alphabet[0]))
    return b'\0' * n + dec


def check_decode(enc):
    """Decode bytes from Bitcoin base58 string and test checksum"""
    dec = decode(enc)
    raw, chk = dec[:-4], dec[-4:]
    if chk != sha256d_hash(raw)[:4]:
        raise ValueError("base58 decoding checksum error")
    else:
        return raw


__all__ = [
    "check_encode",
    "check_decode",
]
