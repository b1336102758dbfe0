"""
Bitcoin address derivation from public keys.
"""

from typing import Dict, Union

from msgverify.crypto.ecc import PublicKey
from msgverify.crypto.hashing import hash160
from msgverify.crypto.encoding import b58check_encode, segwit_encode
from msgverify.crypto.signatures import P2PKH, P2SH_P2WPKH, P2WPKH
from msgverify.bitcoin.config import NetworkParams, MAINNET
from msgverify.errors import UnsupportedAddressClass


def compress_pubkey(pubkey: bytes) -> bytes:
    """Compress 65-byte uncompressed public key to 33-byte compressed"""
    if len(pubkey) != 65 or pubkey[0] != 0x04:
        raise ValueError("Invalid uncompressed public key")
    x = pubkey[1:33]
    y = pubkey[33:65]
    prefix = b'\x02' if y[-1] % 2 == 0 else b'\x03'
    return prefix + x


def p2wpkh_script(pubkey_hash: bytes) -> bytes:
    """Witness v0 keyhash program: OP_0 PUSH20 <hash160>"""
    return b'\x00\x14' + pubkey_hash


def _as_public_key(public_key: Union[PublicKey, bytes]) -> PublicKey:
    if isinstance(public_key, PublicKey):
        return public_key
    return PublicKey.from_bytes(bytes(public_key))


def derive_address(public_key: Union[PublicKey, bytes], address_class: str,
                   compressed: bool, network: NetworkParams = MAINNET) -> str:
    """Encode a public key as the address type named by a signature header"""
    key = _as_public_key(public_key)

    if address_class == P2PKH:
        pubkey_hash = hash160(key.serialize(compressed=compressed))
        return b58check_encode(network.p2pkh_version(), pubkey_hash)

    # SegWit outputs always commit to the compressed key
    if address_class == P2SH_P2WPKH:
        redeem_script = p2wpkh_script(hash160(key.serialize(compressed=True)))
        return b58check_encode(network.p2sh_version(), hash160(redeem_script))

    if address_class == P2WPKH:
        return segwit_encode(network.bech32_hrp, 0, hash160(key.serialize(compressed=True)))

    raise UnsupportedAddressClass(f"cannot derive an address for class {address_class!r}")


def derive_addresses(public_key: Union[PublicKey, bytes], network: NetworkParams = MAINNET) -> Dict[str, str]:
    """Derive every supported address for a public key"""
    key = _as_public_key(public_key)
    return {
        'legacy': derive_address(key, P2PKH, True, network),
        'legacy_uncompressed': derive_address(key, P2PKH, False, network),
        'nested_segwit': derive_address(key, P2SH_P2WPKH, True, network),
        'segwit': derive_address(key, P2WPKH, True, network),
        'pubkey_hash': hash160(key.serialize(compressed=True)).hex(),
    }
