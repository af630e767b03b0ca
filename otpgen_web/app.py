"""
FLASK APP ENTRY POINT - OTPGEN API SERVER
=========================================

Builds the Flask app, enables CORS and registers the OTP blueprint.

Configuration:
- defaults below
- OTPGEN_* environment variables (e.g. OTPGEN_CORS_ORIGINS)
- the mapping passed to create_app(), applied last
- CLOCK: callable returning Unix time, read when a request has no unix_time
"""
import time

from flask import Flask, jsonify
from flask_cors import CORS

from .routes import otp_bp

DEFAULT_CONFIG = {
    "CORS_ORIGINS": "*",
}


def create_app(config=None, clock=time.time) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG, CLOCK=clock)
    app.config.from_prefixed_env("OTPGEN")
    if config:
        app.config.update(config)

    # Frontends served from another origin call the API directly
    CORS(app, origins=app.config["CORS_ORIGINS"])

    app.register_blueprint(otp_bp)

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            "service": "otpgen",
            "endpoints": ["POST /api/hotp", "POST /api/totp"],
        })

    return app


app = create_app()


if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
