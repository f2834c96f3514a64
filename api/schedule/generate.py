"""
Vercel Python Function for schedule generation.

This endpoint handles POST requests to /api/schedule/generate and returns
one sleep schedule per traveler for the provided trip.
"""

from http.server import BaseHTTPRequestHandler
import json
import logging
import os
import sys
from pathlib import Path
from uuid import uuid4

# Add the _python directory to the Python path for importing jetshift module
sys.path.insert(0, str(Path(__file__).parent.parent / "_python"))

from jetshift.payloads import (
    PayloadError,
    traveler_from_dict,
    traveler_schedule_to_dict,
    trip_from_dict,
    validate_schedule_request,
)
from jetshift.scheduler import ScheduleAssembler

MAX_BODY_SIZE = 64 * 1024  # 64KB max request body

logging.basicConfig(level=os.environ.get("JETSHIFT_LOG_LEVEL", "WARNING").upper())
logger = logging.getLogger(__name__)


class handler(BaseHTTPRequestHandler):
    """HTTP handler for Vercel Python Functions."""

    def do_POST(self):
        """Handle POST requests for schedule generation."""
        try:
            content_length = int(self.headers.get("Content-Length", 0))
            if content_length > MAX_BODY_SIZE:
                self._send_json_response(413, {"error": "Request body too large"})
                return

            # Read request body
            body = self.rfile.read(content_length)
            data = json.loads(body)

            # Validate input
            validation_error = validate_schedule_request(data)
            if validation_error:
                self._send_json_response(400, {"error": validation_error})
                return

            trip = trip_from_dict(data["trip"])
            travelers = [traveler_from_dict(t) for t in data["travelers"]]

            # Generate schedules
            assembler = ScheduleAssembler()
            schedules = assembler.compute_family_schedules(travelers, trip)

            result = {
                "id": str(uuid4()),
                "schedules": [traveler_schedule_to_dict(s) for s in schedules],
            }

            self._send_json_response(200, result)

        except json.JSONDecodeError:
            self._send_json_response(400, {"error": "Invalid JSON in request body"})
        except PayloadError as e:
            self._send_json_response(400, {"error": str(e)})
        except Exception as e:
            logger.exception("Schedule generation failed")
            self._send_json_response(
                500, {"error": f"Schedule generation failed: {str(e)}"}
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
