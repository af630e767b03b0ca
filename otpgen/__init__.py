"""
otpgen package
==============

One-time passcode generation per RFC 4226 (HOTP) and RFC 6238 (TOTP).

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-SHA1(key=secret, msg=counter)) mod 10^digits
  → the counter is owned by the caller and passed in verbatim.

- TOTP (Time-based One-Time Password):
  HOTP with counter = unix_time // period, HMAC-SHA256 by default
  (SHA1 and SHA512 selectable).

- Dynamic Truncation:
  4 bytes taken from the HMAC at offset (last byte & 0x0F), top bit cleared.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from otpgen import generate_hotp, generate_totp
>>> generate_hotp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", counter=1)
'287082'
>>> generate_totp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", unix_time=59, digits=8, algorithm="SHA1")
'94287082'

Secrets are Base32 text; errors are raised as subclasses of OTPError.
"""
from .errors import (
    BadSecretEncoding,
    HashComputeFailure,
    InvalidParameter,
    MissingSecret,
    OTPError,
    UnsupportedAlgorithm,
)
from .otp_core import (
    DEFAULT_DIGITS,
    DEFAULT_TIME_STEP,
    DEFAULT_TOTP_ALGORITHM,
    HOTP,
    HOTP_ALGORITHM,
    TOTP,
    HashAlgorithm,
    decode_secret,
    generate_hotp,
    generate_otp,
    generate_totp,
)

__all__ = [
    "BadSecretEncoding",
    "DEFAULT_DIGITS",
    "DEFAULT_TIME_STEP",
    "DEFAULT_TOTP_ALGORITHM",
    "HOTP",
    "HOTP_ALGORITHM",
    "HashAlgorithm",
    "HashComputeFailure",
    "InvalidParameter",
    "MissingSecret",
    "OTPError",
    "TOTP",
    "UnsupportedAlgorithm",
    "decode_secret",
    "generate_hotp",
    "generate_otp",
    "generate_totp",
]
