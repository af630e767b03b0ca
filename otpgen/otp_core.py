"""
otp_core.py - Core library for HOTP (RFC 4226) and TOTP (RFC 6238).

Goals:
- Pure functions / small value objects, usable directly by the CLI and the
  web API. No argparse, no Flask, no file I/O in here.
- The only non-deterministic input is the clock, and it is always passed in
  as an argument (``clock=``) so callers and tests can pin it.

Security notes:
- Secrets and generated codes are never logged.
- Replay protection (remembering used counters / codes) is the caller's job.
"""

import base64
import hashlib
import hmac
import logging
import struct
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from .errors import (
    BadSecretEncoding,
    HashComputeFailure,
    InvalidParameter,
    MissingSecret,
    UnsupportedAlgorithm,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class HashAlgorithm(Enum):
    """Keyed-hash primitive used inside HMAC."""

    SHA1 = "SHA1"
    SHA256 = "SHA256"
    SHA512 = "SHA512"

    @property
    def digest(self):
        return _DIGESTS[self]

    @classmethod
    def parse(cls, value: Union["HashAlgorithm", str]) -> "HashAlgorithm":
        """
        Turn external input ("sha256", "SHA512", HashAlgorithm.SHA1) into a member.

        Raises:
            UnsupportedAlgorithm: for anything that is not SHA1/SHA256/SHA512
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise UnsupportedAlgorithm(value)


_DIGESTS = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}


# --- Config / constants ----------------------------------------------------
DEFAULT_DIGITS = 6          # RFC 4226 recommends 6 digits
DEFAULT_TIME_STEP = 30      # TOTP step (seconds)
MAX_DIGITS = 10             # the truncated value is below 2**31
HOTP_ALGORITHM = HashAlgorithm.SHA1
DEFAULT_TOTP_ALGORITHM = HashAlgorithm.SHA256

COUNTER_MIN = -(1 << 63)
COUNTER_MAX = (1 << 64) - 1


# --- Validation helpers ----------------------------------------------------
def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; True is not a digit count
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter("%s must be an integer, got %r" % (name, value))
    return value


def _require_positive(name: str, value: object) -> int:
    value = _require_int(name, value)
    if value <= 0:
        raise InvalidParameter("%s must be a positive integer, got %d" % (name, value))
    return value


# --- Secret decoding -------------------------------------------------------
def decode_secret(secret_b32: str) -> bytes:
    """
    Decode a Base32 secret (RFC 4648 standard alphabet, '=' padded) to raw key bytes.

    Decoding is strict: lower-case letters, characters outside A-Z/2-7 and a
    length that is not a multiple of 8 are all rejected.

    Raises:
        BadSecretEncoding: if the text is not valid padded Base32
    """
    try:
        return base64.b32decode(secret_b32)
    except (TypeError, ValueError) as e:
        # binascii.Error is a ValueError; non-ASCII str also raises ValueError
        raise BadSecretEncoding() from e


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(counter: int) -> bytes:
    """
    Serialize the counter as the 8-byte big-endian message RFC 4226 hashes.

    Negative counters are written in two's complement, so -1 becomes
    b'\\xff' * 8.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    counter = _require_int("counter", counter)
    if not COUNTER_MIN <= counter <= COUNTER_MAX:
        raise InvalidParameter("counter %d does not fit in 64 bits" % counter)
    return struct.pack(">Q", counter & 0xFFFFFFFFFFFFFFFF)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation: 31-bit integer taken at offset (last byte & 0x0F).

    The shortest supported digest (SHA-1, 20 bytes) still leaves room for
    the 4-byte window at the largest offset, 15.
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


def generate_otp(
    key: bytes,
    counter: int,
    digits: int,
    algorithm: Union[HashAlgorithm, str],
) -> str:
    """
    Compute one code from raw key bytes and a counter.

    Steps:
    1. Message = 8-byte big-endian counter
    2. HMAC-<algorithm>(key, message)
    3. Dynamic truncate -> 31-bit dbc
    4. otp = dbc % 10**digits (exact integer power)
    5. Zero-pad on the left to exactly ``digits`` characters

    Arguments:
        key: decoded secret
        counter: HOTP counter or TOTP time step
        digits: code length, 1..MAX_DIGITS
        algorithm: HashAlgorithm member or its name

    Raises:
        UnsupportedAlgorithm: unknown algorithm name (checked before hashing)
        InvalidParameter: digits/counter out of range
        HashComputeFailure: the HMAC primitive rejected the input
    """
    algorithm = HashAlgorithm.parse(algorithm)
    digits = _require_positive("digits", digits)
    if digits > MAX_DIGITS:
        raise InvalidParameter("digits must be at most %d, got %d" % (MAX_DIGITS, digits))
    msg = int_to_bytes(counter)

    try:
        digest = hmac.new(key, msg, algorithm.digest).digest()
    except (TypeError, ValueError) as e:
        raise HashComputeFailure() from e

    otp_val = dynamic_truncate(digest) % (10 ** digits)
    return str(otp_val).zfill(digits)


# --- Time helpers ----------------------------------------------------------
def timecode(unix_time: int, period: int) -> int:
    """TOTP counter: unix_time / period, truncated toward zero."""
    unix_time = _require_int("unix_time", unix_time)
    period = _require_positive("period", period)
    if unix_time >= 0:
        return unix_time // period
    return -((-unix_time) // period)


def seconds_remaining(unix_time: int, period: int) -> int:
    """
    Seconds until the code for ``unix_time`` rolls over.

    Follows the truncating rule of :func:`timecode`: counter 0 spans
    -(period - 1)..(period - 1), every other counter spans ``period`` seconds.
    """
    counter = timecode(unix_time, period)
    if counter >= 0:
        return (counter + 1) * period - unix_time
    return counter * period + 1 - unix_time


# --- Generators ------------------------------------------------------------
@dataclass(frozen=True)
class HOTP:
    """
    HOTP parameter set (RFC 4226).

    ``digits`` left at 0/None falls back to DEFAULT_DIGITS. The counter is
    used verbatim; advancing it after a successful login is the caller's job.
    """

    secret: str
    counter: int = 0
    digits: Optional[int] = DEFAULT_DIGITS

    def generate(self) -> str:
        if not self.secret:
            raise MissingSecret()
        digits = self.digits or DEFAULT_DIGITS

        key = decode_secret(self.secret)
        logger.debug("HOTP: HMAC-%s(key=secret, msg=counter=%s)", HOTP_ALGORITHM.value, self.counter)
        return generate_otp(key, self.counter, digits, HOTP_ALGORITHM)


@dataclass(frozen=True)
class TOTP:
    """
    TOTP parameter set (RFC 6238).

    Unset fields (0/None/"") take the module defaults: 6 digits, a 30 second
    period and HMAC-SHA256. ``unix_time`` left unset means "now", read from
    the clock passed to :meth:`generate`.
    """

    secret: str
    unix_time: Optional[int] = None
    digits: Optional[int] = DEFAULT_DIGITS
    period: Optional[int] = DEFAULT_TIME_STEP
    algorithm: Union[HashAlgorithm, str, None] = DEFAULT_TOTP_ALGORITHM

    def resolve_time(self, clock: Clock = time.time) -> int:
        if self.unix_time:
            return _require_int("unix_time", self.unix_time)
        return int(clock())

    def timecode(self, clock: Clock = time.time) -> int:
        return timecode(self.resolve_time(clock), self.period or DEFAULT_TIME_STEP)

    def generate(self, clock: Clock = time.time) -> str:
        if not self.secret:
            raise MissingSecret()
        digits = self.digits or DEFAULT_DIGITS
        period = self.period or DEFAULT_TIME_STEP
        algorithm = self.algorithm or DEFAULT_TOTP_ALGORITHM

        key = decode_secret(self.secret)
        now = self.resolve_time(clock)
        counter = timecode(now, period)
        logger.debug("TOTP: time=%d, period=%d, counter=%d, algorithm=%s", now, period, counter, algorithm)
        return generate_otp(key, counter, digits, algorithm)


def generate_hotp(secret: str, counter: int, digits: int = DEFAULT_DIGITS) -> str:
    """
    HOTP code for ``counter``.

    >>> generate_hotp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", 0)
    '755224'
    """
    return HOTP(secret=secret, counter=counter, digits=digits).generate()


def generate_totp(
    secret: str,
    unix_time: Optional[int] = None,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_TIME_STEP,
    algorithm: Union[HashAlgorithm, str] = DEFAULT_TOTP_ALGORITHM,
    clock: Clock = time.time,
) -> str:
    """
    TOTP code at ``unix_time`` (or at ``clock()`` when no time is given).

    >>> generate_totp("GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", 59, digits=8, algorithm="SHA1")
    '94287082'
    """
    params = TOTP(secret=secret, unix_time=unix_time, digits=digits, period=period, algorithm=algorithm)
    return params.generate(clock=clock)
