"""
errors.py - Exception hierarchy for otpgen.

Every failure during OTP generation raises a subclass of OTPError, so the
CLI and the web layer can catch one type and report the message.
"""


class OTPError(Exception):
    """Base class for every otpgen failure."""


class MissingSecret(OTPError, ValueError):
    def __init__(self, message: str = "no secret key provided") -> None:
        super().__init__(message)


class BadSecretEncoding(OTPError, ValueError):
    def __init__(self, message: str = "bad secret key") -> None:
        super().__init__(message)


class UnsupportedAlgorithm(OTPError, ValueError):
    def __init__(self, algorithm: object = None) -> None:
        self.algorithm = algorithm
        super().__init__(
            "invalid algorithm %r. Please use any one of SHA1/SHA256/SHA512" % (algorithm,)
        )


class HashComputeFailure(OTPError):
    def __init__(self, message: str = "unable to compute HMAC") -> None:
        super().__init__(message)


class InvalidParameter(OTPError, ValueError):
    """Numeric parameter (digits, period, counter) out of range or of the wrong type."""
