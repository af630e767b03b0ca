"""
OTPGEN API ROUTES - FLASK BLUEPRINT

JSON endpoints wrapping otpgen.generate_hotp / TOTP.generate.
The secret travels in the request body and is never stored server-side.

eg..:
curl -X POST http://localhost:5000/api/hotp -H "Content-Type: application/json" \
     -d '{"secret": "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "counter": 1}'
curl -X POST http://localhost:5000/api/totp -H "Content-Type: application/json" \
     -d '{"secret": "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ", "algorithm": "SHA1", "digits": 8}'
"""

from flask import Blueprint, current_app, jsonify, request

from otpgen import otp_core
from otpgen.errors import OTPError
from otpgen.otp_core import TOTP, HashAlgorithm

otp_bp = Blueprint('otp', __name__, url_prefix='/api')


@otp_bp.errorhandler(OTPError)
def handle_otp_error(e: OTPError):
    current_app.logger.info("Rejected %s %s: %s", request.method, request.path, type(e).__name__)
    return jsonify({"error": str(e)}), 400


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


@otp_bp.route('/hotp', methods=['POST'])
def hotp_route():
    """
    HOTP CODE FOR A COUNTER

    Input (JSON body):
      {
        "secret": "GEZD...",   # REQUIRED - Base32 secret
        "counter": 1,          # REQUIRED - HOTP counter
        "digits": 6            # optional, default 6
      }

    Output:
      {"code": "287082"}
    """
    data = _json_body()
    if data is None or "secret" not in data or "counter" not in data:
        return jsonify({"error": "Secret and counter are required"}), 400

    code = otp_core.generate_hotp(data["secret"], data["counter"], data.get("digits"))
    return jsonify({"code": code})


@otp_bp.route('/totp', methods=['POST'])
def totp_route():
    """
    TOTP CODE FOR NOW (OR FOR unix_time)

    Input (JSON body):
      {
        "secret": "GEZD...",     # REQUIRED - Base32 secret
        "digits": 6,             # optional, default 6
        "period": 30,            # optional, default 30
        "algorithm": "SHA256",   # optional, SHA1/SHA256/SHA512
        "unix_time": 59          # optional, default: server time
      }

    Output:
      {"code": "...", "counter": 1, "period": 30, "algorithm": "SHA256", "remaining": 1}
    """
    data = _json_body()
    if data is None or "secret" not in data:
        return jsonify({"error": "Secret is required"}), 400

    params = TOTP(
        secret=data["secret"],
        unix_time=data.get("unix_time"),
        digits=data.get("digits"),
        period=data.get("period"),
        algorithm=data.get("algorithm"),
    )
    server_time = int(current_app.config["CLOCK"]())
    code = params.generate(clock=lambda: server_time)

    # generate() has validated every field by now
    now = params.resolve_time(clock=lambda: server_time)
    period = params.period or otp_core.DEFAULT_TIME_STEP
    algorithm = HashAlgorithm.parse(params.algorithm or otp_core.DEFAULT_TOTP_ALGORITHM)
    return jsonify({
        "code": code,
        "counter": otp_core.timecode(now, period),
        "period": period,
        "algorithm": algorithm.value,
        "remaining": otp_core.seconds_remaining(now, period),
    })
