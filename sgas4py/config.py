from typing import Optional


class C:  # Constant
    # tx type
    TX_CONTRACT = 0x80  # plain transfer, witness runs contract code
    TX_INVOCATION = 0xd1  # transfer with invocation script
    txtype2name = {
        TX_CONTRACT: 'CONTRACT',
        TX_INVOCATION: 'INVOCATION',
    }

    # attribute usage
    ATTR_CONTRACT_HASH = 0x00
    ATTR_ECDH02 = 0x02
    ATTR_ECDH03 = 0x03
    ATTR_SCRIPT = 0x20  # additional signer's script hash
    ATTR_VOTE = 0x30
    ATTR_DESCRIPTION_URL = 0x81
    ATTR_DESCRIPTION = 0x90
    ATTR_HASH1 = 0xa1
    ATTR_HASH15 = 0xaf
    ATTR_REMARK = 0xf0
    ATTR_REMARK15 = 0xff
    attr_usage2name = {
        ATTR_CONTRACT_HASH: 'ContractHash',
        ATTR_ECDH02: 'ECDH02',
        ATTR_ECDH03: 'ECDH03',
        ATTR_SCRIPT: 'Script',
        ATTR_VOTE: 'Vote',
        ATTR_DESCRIPTION_URL: 'DescriptionUrl',
        ATTR_DESCRIPTION: 'Description',
    }

    # sizes
    HASH160_SIZE = 20
    HASH256_SIZE = 32
    NONCE_SIZE = 8  # anti-collision nonce appended to mint script
    FIXED8_FACTOR = 100000000  # 1 token = 10**8

    # limits
    MAX_TX_ATTRIBUTES = 16
    MAX_TX_INPUTS = 0xffff  # prev_index is uint16
    MAX_TX_OUTPUTS = 0xffff
    MAX_TX_WITNESSES = 0xffff
    MAX_SCRIPT_SIZE = 1024 * 1024  # max push item size
    MAX_WITNESS_SCRIPT_SIZE = 65536  # each of invocation and verification
    SIZE_TX_LIMIT = 100 * 1000  # 100kb tx

    # contract methods
    M_MINT_TOKENS = 'mintTokens'
    M_REFUND = 'refund'

    # verify result
    VERIFY_PASSED = 'passed'
    VERIFY_FAILED = 'failed'
    VERIFY_SKIPPED = 'skipped'


class V:
    # address
    ADDRESS_VERSION = 0x17  # base58 addresses start with "A"
    WIF_VERSION = 0x80

    # JSON-RPC endpoint
    RPC_URL: Optional[str] = None
    RPC_TIMEOUT = 30.0  # sec


class BlockChainError(Exception):
    pass


class InvalidScriptInput(BlockChainError):
    """contract hash, method or argument cannot be emitted"""


class OutputNotFound(BlockChainError):
    """no output pays to the required script hash"""


class TransactionNotFound(BlockChainError):
    """ledger does not know the transaction"""


class ContractNotFound(BlockChainError):
    """ledger does not know the contract"""


class InsufficientFunds(BlockChainError):
    """funding output is smaller than requested amount"""


class InvalidRefundSource(BlockChainError):
    """refund source must have exactly one input and one output"""


class MalformedTransaction(BlockChainError):
    """transaction does not survive encode/decode"""


class SigningIncomplete(BlockChainError):
    """wallet cannot provide every required signature"""

    def __init__(self, msg, tx=None, context=None):
        super().__init__(msg)
        self.tx = tx
        self.context = context


__all__ = [
    'C',
    'V',
    'BlockChainError',
    'InvalidScriptInput',
    'OutputNotFound',
    'TransactionNotFound',
    'ContractNotFound',
    'InsufficientFunds',
    'InvalidRefundSource',
    'MalformedTransaction',
    'SigningIncomplete',
]
