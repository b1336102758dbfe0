"""msgverify cryptographic primitives"""

from msgverify.crypto.hashing import sha256, sha256d, ripemd160, hash160

from msgverify.crypto.encoding import (
    B58_ALPHABET,
    BECH32_CHARSET,
    b64decode_strict,
    b58encode,
    b58decode,
    b58check_encode,
    b58check_decode,
    bech32_encode,
    bech32_decode,
    segwit_encode,
    convertbits,
)

from msgverify.crypto.ecc import (
    SECP256K1_P,
    SECP256K1_N,
    SECP256K1_Gx,
    SECP256K1_Gy,
    PublicKey,
    is_on_curve,
    lift_x,
)

from msgverify.crypto.signatures import (
    P2PKH,
    P2SH_P2WPKH,
    P2WPKH,
    UNKNOWN,
    DecodedSignature,
    classify_signature,
    describe_address_class,
    compact_size,
    format_message,
    message_hash,
    recover_public_key,
    verify_ecdsa,
)
