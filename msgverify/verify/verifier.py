"""
BIP-0137 signed message verification.

Two entry points share one pipeline: decode the signature, hash the message,
recover the signing key, then either derive the address named by the header
(address claim) or compare keys directly (public key claim).
"""

import time
from typing import Optional, Union

from msgverify.bitcoin.addresses import derive_address
from msgverify.bitcoin.config import NetworkParams, MAINNET
from msgverify.crypto.ecc import PublicKey
from msgverify.crypto.encoding import b64decode_strict
from msgverify.crypto.signatures import (
    P2PKH, UNKNOWN, DecodedSignature,
    classify_signature, message_hash, recover_public_key,
)
from msgverify.errors import (
    AddressMismatch, EmptyAddress, EmptyMessage, EmptyPublicKey, EmptySignature,
    InvalidEncoding, InvalidPublicKey, VerifyError,
)
from msgverify.log import TRACE, SafeLogger, dump_hex
from msgverify.verify.cancel import CancelToken, Deadline, checkpoint, run_with_deadline


class SignedMessage:
    """A message, its base64 signature and the claimed signer"""

    def __init__(self, message: str = "", signature: str = "", address: Optional[str] = None,
                 public_key: Union[bytes, str, None] = None):
        self.message = message
        self.signature = signature
        self.address = address
        self.public_key = public_key

    def to_dict(self) -> dict:
        public_key = self.public_key
        if isinstance(public_key, (bytes, bytearray)):
            public_key = public_key.hex()
        return {
            "address": self.address,
            "public_key": public_key,
            "message": self.message,
            "signature": self.signature,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SignedMessage":
        return cls(
            message=data.get("message", ""),
            signature=data.get("signature", ""),
            address=data.get("address"),
            public_key=data.get("public_key"),
        )

    def __repr__(self):
        claim = f"address={self.address!r}" if self.public_key is None else "public_key=..."
        return f"SignedMessage({claim}, message={self.message[:20]!r})"


class Verifier:
    """Verifies signed messages against one network's address rules"""

    def __init__(self, network: Optional[NetworkParams] = None, logger=None):
        self.network = network or MAINNET
        self.log = SafeLogger(logger)

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def verify_by_address(self, address: str, message: str, signature: str,
                          token: Optional[CancelToken] = None) -> bool:
        """True if ``signature`` over ``message`` was made by the key behind ``address``"""
        self.log.info("Starting BIP-0137 signature verification")
        self.log.debug("Address: %s", address)
        self.log.debug("Message: %s", message)
        self.log.debug("Signature (Base64): %s", signature)
        started = time.monotonic()

        try:
            if not address:
                raise EmptyAddress()
            self._check_inputs(message, signature)

            decoded = self._decode(signature, token)
            checkpoint(token)
            msg_hash = message_hash(message)
            self.log.trace("Message hash: %s", msg_hash.hex())

            checkpoint(token)
            pubkey = recover_public_key(msg_hash, decoded.recovery_id, decoded.r, decoded.s,
                                        decoded.compressed)
            self.log.debug("Recovered public key: %s", pubkey.hex())

            checkpoint(token)
            derived = derive_address(pubkey, decoded.address_class, decoded.compressed, self.network)
            self.log.debug("Derived address: %s", derived)
        except VerifyError as e:
            self.log.error("Signature verification failed: %s", e)
            raise
        finally:
            self.log.debug("Verification completed in %.3fs", time.monotonic() - started)

        try:
            self._compare_address(derived, address)
        except AddressMismatch as e:
            self.log.info("Signature verification failed (invalid signature): %s", e)
            return False

        self.log.info("Signature verification successful")
        return True

    def verify_by_public_key(self, public_key: Union[bytes, str, PublicKey], message: str,
                             signature: str, token: Optional[CancelToken] = None) -> bool:
        """
        True if ``signature`` over ``message`` was made by ``public_key``.

        Compares the recovered key directly. When the header does not name an
        address type, or the recovered key matches but in the other
        serialization form, falls back once to address verification.
        """
        self.log.info("Starting BIP-0137 signature verification with public key")
        self.log.debug("Message: %s", message)
        self.log.debug("Signature (Base64): %s", signature)

        try:
            supplied = self._parse_public_key(public_key)
            self.log.debug("Public Key: %s", supplied.hex())
            self._check_inputs(message, signature)

            decoded = self._decode(signature, token)
            if decoded.address_class == UNKNOWN:
                self.log.warning("Header does not name an address type; falling back to address verification")
                return self._fallback(supplied, decoded, message, signature, token)

            checkpoint(token)
            msg_hash = message_hash(message)
            checkpoint(token)
            recovered = recover_public_key(msg_hash, decoded.recovery_id, decoded.r, decoded.s,
                                           decoded.compressed)
        except VerifyError as e:
            self.log.error("Signature verification failed: %s", e)
            raise

        expected = recovered.serialize()
        self.log.debug("Recovered public key: %s", expected.hex())

        if expected == supplied.serialize():
            self.log.info("Signature verification successful (direct public key match)")
            return True

        if recovered.point == supplied.point:
            self.log.info("Recovered key matches in the other serialization form; falling back to address verification")
            return self._fallback(supplied, decoded, message, signature, token)

        self.log.info("Signature verification failed (public key mismatch)")
        return False

    def verify(self, signed: SignedMessage, token: Optional[CancelToken] = None) -> bool:
        """Verify a SignedMessage against whichever claim it carries"""
        if signed.public_key is not None and signed.address:
            raise ValueError("Provide either an address or a public key, not both")
        if signed.public_key is not None:
            return self.verify_by_public_key(signed.public_key, signed.message, signed.signature, token)
        return self.verify_by_address(signed.address or "", signed.message, signed.signature, token)

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _check_inputs(self, message: str, signature: str):
        if not message:
            raise EmptyMessage()
        if not signature:
            raise EmptySignature()

    def _decode(self, signature: str, token: Optional[CancelToken]) -> DecodedSignature:
        checkpoint(token)
        try:
            sig_bytes = b64decode_strict(signature)
        except ValueError as e:
            raise InvalidEncoding(f"invalid base64 signature: {e}") from e
        if self.log.enabled_for(TRACE):
            self.log.trace("Network: %s", self.network.name)
            self.log.trace("P2PKH Prefix: %02x", self.network.p2pkh_prefix)
            self.log.trace("P2SH Prefix: %02x", self.network.p2sh_prefix)
            self.log.trace("Decoded signature (hex): %s", dump_hex(sig_bytes))
        return classify_signature(sig_bytes, logger=self.log)

    def _parse_public_key(self, public_key) -> PublicKey:
        if isinstance(public_key, PublicKey):
            return public_key
        if public_key is None or len(public_key) == 0:
            raise EmptyPublicKey()
        if isinstance(public_key, str):
            try:
                public_key = bytes.fromhex(public_key.strip())
            except ValueError as e:
                raise InvalidPublicKey(f"public key is not valid hex: {e}") from e
        try:
            return PublicKey.from_bytes(bytes(public_key))
        except ValueError as e:
            raise InvalidPublicKey(str(e)) from e

    def _compare_address(self, derived: str, claimed: str):
        # Exact comparison: no case folding, no trimming
        if derived != claimed:
            raise AddressMismatch(f"derived {derived}, expected {claimed}")

    def _fallback(self, supplied: PublicKey, decoded: DecodedSignature, message: str,
                  signature: str, token: Optional[CancelToken]) -> bool:
        if decoded.address_class == UNKNOWN:
            # Always fails: verify_by_address rejects the same header with UnsupportedAddressClass
            address_class, compressed = P2PKH, supplied.compressed
        else:
            address_class, compressed = decoded.address_class, decoded.compressed

        checkpoint(token)
        address = derive_address(supplied, address_class, compressed, self.network)
        self.log.info("Derived address from public key: %s", address)
        return self.verify_by_address(address, message, signature, token)


# ----------------------------------------------------------------------
# Module-level helpers (mainnet unless told otherwise)
# ----------------------------------------------------------------------

def verify_message(address: str, message: str, signature: str,
                   network: Optional[NetworkParams] = None, logger=None) -> bool:
    """Verify a BIP-0137 signature against a Bitcoin address"""
    return Verifier(network, logger).verify_by_address(address, message, signature)


def verify_message_with_pubkey(public_key: Union[bytes, str, PublicKey], message: str, signature: str,
                               network: Optional[NetworkParams] = None, logger=None) -> bool:
    """Verify a BIP-0137 signature against a public key"""
    return Verifier(network, logger).verify_by_public_key(public_key, message, signature)


def verify_with_deadline(signed: SignedMessage, timeout: Deadline, network: Optional[NetworkParams] = None,
                         token: Optional[CancelToken] = None, logger=None) -> bool:
    """Verify a SignedMessage, giving up with Timeout/Cancelled if it takes too long"""
    verifier = Verifier(network, logger)
    return run_with_deadline(lambda work_token: verifier.verify(signed, work_token),
                             timeout=timeout, token=token, logger=logger)
