"""
ecies_crypto — Live Demo
========================
Run:  python examples/demo_ecies.py

Walks through each layer of the scheme with a real message, printing key
sizes, envelope sizes and timing, then shows tampering being caught.
"""

import sys, os, time, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecies_crypto          import (ECKey, ECIESCipher, EnvelopeCipher,
                                   IntegrityError, MissingKeyError,
                                   MalformedCiphertextError, compute_mac,
                                   derive_secret, self_test_round_trip)

LINE = "═" * 70
MSG  = b"Meet me at the usual place. Bring the ledger."

def header(step, name):
    print(f"\n{LINE}")
    print(f"  Layer {step} — {name}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

logging.basicConfig(level=logging.WARNING, format=' %(message)s')

# ─────────────────────────────────────────────────────────────────────────────
print(f"\n{LINE}")
print("  ecies_crypto — ECDH + SHA-256 + HMAC-then-AES-256-CBC")
print(LINE)
print(f"  Message: {MSG.decode()}\n")

sender    = ECKey.generate()
recipient = ECKey.generate()
sender_pub, recipient_pub = sender.public_only(), recipient.public_only()

# ── LAYER 1 ──────────────────────────────────────────────────────────────────
header(1, "SECRET — ECDH + SHA-256 KDF")
t0 = time.perf_counter()
with derive_secret(sender, recipient_pub) as s1, \
     derive_secret(recipient, sender_pub) as s2:
    elapsed = time.perf_counter() - t0
    ok("Curve",          sender.curve.name)
    ok("Public point",   f"{len(sender.public_point())} bytes (X9.62 uncompressed)")
    ok("Secret size",    f"{len(s1)} bytes")
    ok("Both sides agree", str(s1 == s2))
    ok("Derivation",     f"{elapsed*1000:.2f} ms (x2)")

    # ── LAYER 2 ──────────────────────────────────────────────────────────────
    header(2, "MAC — HMAC-SHA256")
    tag = compute_mac(s1, MSG)
    ok("Tag size",       f"{len(tag)} bytes")
    ok("Deterministic",  str(tag == compute_mac(s1, MSG)))

    # ── LAYER 3 ──────────────────────────────────────────────────────────────
    header(3, "ENVELOPE — AES-256-CBC over MAC || plaintext")
    env = EnvelopeCipher()
    ct  = env.encrypt(s1, MSG)
    pt  = env.decrypt(s2, ct)
    ok("Envelope",       f"{len(ct)} bytes (IV=16 + MAC=32 + data + padding)")
    ok("Empty message",  f"{EnvelopeCipher.envelope_size(0)} bytes")
    ok("3000B message",  f"{EnvelopeCipher.envelope_size(3000)} bytes")
    ok("Decrypted",      pt.decode())
ok("Secrets wiped",  str(s1.wiped and s2.wiped))

# ── LAYER 4 ──────────────────────────────────────────────────────────────────
header(4, "SCHEME — encrypt_for / decrypt_from")
t0     = time.perf_counter()
alice  = ECIESCipher(sender)
bob    = ECIESCipher(recipient)
bundle = alice.encrypt_for(recipient_pub, MSG)
pt     = bob.decrypt_from(sender_pub, bundle)
elapsed = time.perf_counter() - t0
ok("Round-trip",     f"{elapsed*1000:.2f} ms")
ok("Decrypted",      pt.decode())
ok("Sender can read own envelope",
   str(alice.decrypt_from(recipient_pub, bundle) == MSG))

# ── Rejections ───────────────────────────────────────────────────────────────
header("×", "REJECTIONS")
tampered = bytearray(bundle)
tampered[-1] ^= 0x01
try:
    bob.decrypt_from(sender_pub, bytes(tampered))
except IntegrityError as e:
    ok("Tampered envelope", f"{type(e).__name__}: {e}")
try:
    bob.decrypt_from(sender_pub, bundle[:40])
except MalformedCiphertextError as e:
    ok("Truncated envelope", f"{type(e).__name__}: {e}")
try:
    ECIESCipher(sender_pub).encrypt_for(recipient_pub, MSG)
except MissingKeyError as e:
    ok("Two public keys",   f"{type(e).__name__}: {e}")

# ── Self-test ────────────────────────────────────────────────────────────────
header("✓", "SELF-TEST — random lengths 0..2999")
t0     = time.perf_counter()
passed = self_test_round_trip(range(0, 3000, 30))
elapsed = time.perf_counter() - t0
ok("100 rounds", f"{'PASSED' if passed else 'FAILED'} in {elapsed*1000:.0f} ms")

print(f"\n{LINE}")
print("  DONE")
print(LINE + "\n")
