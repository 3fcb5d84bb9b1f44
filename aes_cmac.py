#
# a wrapper module for pycryptodome.
#
from Crypto.Hash import CMAC
from Crypto.Cipher import AES

class AES_CMAC():
    """
    incremental AES-CMAC (RFC 4493).
    """
    def __init__(self, key):
        self.cmac = CMAC.new(bytes(key), ciphermod=AES)

    def update(self, data):
        self.cmac.update(bytes(data))
        return self

    def digest(self, size=None):
        """
        size: truncate the tag to the first size bytes, e.g. 4 for the MIC.
        """
        tag = self.cmac.digest()
        return tag if size is None else tag[:size]

    def hex(self):
        return self.cmac.hexdigest()

def aes128_cmac(key, msg, size=None):
    """
    one time AES-CMAC.
    """
    return AES_CMAC(key).update(msg).digest(size)
