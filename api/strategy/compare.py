"""
Vercel Python Function for strategy comparison.

This endpoint handles POST requests to /api/strategy/compare and returns the
recommended strategy plus recovery estimates for every main strategy.
"""

from http.server import BaseHTTPRequestHandler
import json
import logging
import os
import sys
from pathlib import Path

# Add the _python directory to the Python path for importing jetshift module
sys.path.insert(0, str(Path(__file__).parent.parent / "_python"))

from jetshift.payloads import strategy_report, validate_compare_request

MAX_BODY_SIZE = 16 * 1024  # 16KB max request body

logging.basicConfig(level=os.environ.get("JETSHIFT_LOG_LEVEL", "WARNING").upper())
logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """HTTP handler for Vercel Python Functions."""

    def do_POST(self):
        """Handle POST requests for strategy comparison."""
        try:
            content_length = int(self.headers.get("Content-Length", 0))
            if content_length > MAX_BODY_SIZE:
                self._send_json_response(413, {"error": "Request body too large"})
                return

            body = self.rfile.read(content_length)
            data = json.loads(body)

            validation_error = validate_compare_request(data)
            if validation_error:
                self._send_json_response(400, {"error": validation_error})
                return

            result = strategy_report(
                data["days_at_destination"],
                data["timezone_offset_hours"],
                data.get("traveler_ages", []),
            )

            self._send_json_response(200, result)

        except json.JSONDecodeError:
            self._send_json_response(400, {"error": "Invalid JSON in request body"})
        except Exception as e:
            logger.exception("Strategy comparison failed")
            self._send_json_response(
                500, {"error": f"Strategy comparison failed: {str(e)}"}
            )

    def _send_json_response(self, status_code: int, data: dict):
        """Send a JSON response with the given status code."""
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(json.dumps(data).encode())

    def do_OPTIONS(self):
        """Handle CORS preflight requests."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()
