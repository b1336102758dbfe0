"""
CLI command implementations for msgverify.

Each cmd_* function corresponds to a subcommand and returns the process
exit code: 0 valid, 1 invalid, 2 verification error, 3 timeout/cancelled.
"""

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 3


def _banner(title: str):
    print("")
    print("=" * 60)
    print(title)
    print("=" * 60)


def _run(args, signed):
    """Verify with the configured deadline and map the outcome to an exit code"""
    from msgverify.bitcoin.config import Config
    from msgverify.errors import VerifyError, VerificationInterrupted
    from msgverify.verify.verifier import verify_with_deadline

    timeout = args.timeout if args.timeout is not None else Config.DEFAULT_TIMEOUT
    if timeout is not None and timeout <= 0:
        timeout = None

    try:
        valid = verify_with_deadline(signed, timeout, network=Config.network_params())
    except VerificationInterrupted as e:
        print(f"[FAIL] {e}")
        return EXIT_INTERRUPTED
    except VerifyError as e:
        print(f"[FAIL] Verification error ({e.code}): {e}")
        return EXIT_ERROR

    if valid:
        print("[OK] Signature is VALID")
        return EXIT_VALID
    print("[FAIL] Signature is INVALID")
    return EXIT_INVALID


def cmd_address(args):
    """Verify a signed message against a Bitcoin address"""
    from msgverify.bitcoin.config import Config
    from msgverify.verify.verifier import SignedMessage

    _banner("VERIFYING BITCOIN SIGNED MESSAGE")
    print(f"Network:   {Config.NETWORK}")
    print(f"Address:   {args.address}")
    print(f"Message:   {args.message[:50]}{'...' if len(args.message) > 50 else ''}")
    print(f"Signature: {args.signature}")
    print("")

    signed = SignedMessage(message=args.message, signature=args.signature, address=args.address)
    return _run(args, signed)


def cmd_pubkey(args):
    """Verify a signed message against a hex public key"""
    from msgverify.bitcoin.config import Config
    from msgverify.verify.verifier import SignedMessage

    _banner("VERIFYING BITCOIN SIGNED MESSAGE WITH PUBLIC KEY")
    print(f"Network:    {Config.NETWORK}")
    print(f"Public Key: {args.pubkey}")
    print(f"Message:    {args.message[:50]}{'...' if len(args.message) > 50 else ''}")
    print(f"Signature:  {args.signature}")
    print("")

    signed = SignedMessage(message=args.message, signature=args.signature, public_key=args.pubkey)
    return _run(args, signed)


def cmd_inspect(args):
    """Show what a signature's header byte claims"""
    from msgverify.crypto.encoding import b64decode_strict
    from msgverify.crypto.signatures import classify_signature, describe_address_class
    from msgverify.errors import VerifyError
    from msgverify.log import dump_hex

    _banner("SIGNATURE HEADER")
    try:
        sig_bytes = b64decode_strict(args.signature)
        decoded = classify_signature(sig_bytes)
    except ValueError as e:
        print(f"[FAIL] {e}")
        return EXIT_ERROR
    except VerifyError as e:
        print(f"[FAIL] Verification error ({e.code}): {e}")
        return EXIT_ERROR

    print(f"Header byte:     0x{decoded.header:02x} ({decoded.header})")
    print(f"Address type:    {describe_address_class(decoded.address_class, decoded.compressed)}")
    print(f"Compressed key:  {decoded.compressed}")
    print(f"Recovery ID:     {decoded.recovery_id}")
    print(f"R:               {decoded.r.hex()}")
    print(f"S:               {decoded.s.hex()}")
    if args.hex:
        print(f"Raw:             {dump_hex(sig_bytes)}")
    return EXIT_VALID


def cmd_derive(args):
    """Show every address a public key maps to"""
    from msgverify.bitcoin.addresses import derive_addresses
    from msgverify.bitcoin.config import Config
    from msgverify.crypto.ecc import PublicKey

    try:
        key = PublicKey.from_bytes(bytes.fromhex(args.pubkey.strip()))
    except ValueError as e:
        print(f"[FAIL] Invalid public key: {e}")
        return EXIT_ERROR

    addresses = derive_addresses(key, Config.network_params())

    _banner(f"ADDRESSES ({Config.NETWORK})")
    print(f"Legacy (P2PKH):              {addresses['legacy']}")
    print(f"Legacy uncompressed (P2PKH): {addresses['legacy_uncompressed']}")
    print(f"Nested SegWit (P2SH-P2WPKH): {addresses['nested_segwit']}")
    print(f"Native SegWit (P2WPKH):      {addresses['segwit']}")
    print(f"HASH160:                     {addresses['pubkey_hash']}")
    return EXIT_VALID
