#
# a wrapper module for pycryptodome.
#
from Crypto.Cipher import AES
from lorawan_errors import KeyLengthError
from lorawan_errors import MalformedLengthError

AES_BLOCK_SIZE = AES.block_size
AES_KEY_SIZE = 16

def check_blocks(data):
    """
    data must be a positive multiple of the block size.
    """
    if len(data) == 0 or len(data) % AES_BLOCK_SIZE != 0:
        raise MalformedLengthError(
                "length must be a positive multiple of {}, but {}."
                .format(AES_BLOCK_SIZE, len(data)))

class AES_ECB():
    def __init__(self, key):
        """
        key: 16 bytes of bytes or bytearray.
        """
        if len(key) != AES_KEY_SIZE:
            raise KeyLengthError("length of key must be {} bytes, but {}."
                                 .format(AES_KEY_SIZE, len(key)))
        self.aes_ecb = AES.new(bytes(key), AES.MODE_ECB)

    def encrypt(self, data):
        """
        data: multiple of 16 bytes. no padding is applied.
        """
        check_blocks(data)
        return self.aes_ecb.encrypt(bytes(data))

    def decrypt(self, enc_data):
        """
        enc_data: multiple of 16 bytes.
        """
        check_blocks(enc_data)
        return self.aes_ecb.decrypt(bytes(enc_data))

def aes128_encrypt(key, plain_data):
    """
    one time encrypter.
    it's used for the key generation, and for the Join-Accept decryption.
        key: in bytes.
        plain_data: in bytes.
    """
    return AES_ECB(key).encrypt(plain_data)

def aes128_decrypt(key, enc_data):
    """
    one time decrypter.
    the join server uses it to "encrypt" the Join-Accept.
    """
    return AES_ECB(key).decrypt(enc_data)
