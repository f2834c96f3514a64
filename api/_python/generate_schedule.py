#!/usr/bin/env python3
"""
Generate sleep schedules from a JSON request file.

Usage: python3 generate_schedule.py <request_file.json>

The request file has the same shape as the /api/schedule/generate body:
{"trip": {...}, "travelers": [...]}. The schedules are written as JSON to
stdout; log output goes to stderr.
"""

import json
import logging
import os
import sys

# Import jetshift modules (assumes api/_python is in path or script is run from there)
from jetshift.payloads import (
    PayloadError,
    traveler_from_dict,
    traveler_schedule_to_dict,
    trip_from_dict,
    validate_schedule_request,
)
from jetshift.scheduler import compute_family_schedules

logger = logging.getLogger("generate_schedule")


def main() -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("JETSHIFT_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if len(sys.argv) != 2:
        print(json.dumps({"error": "Usage: generate_schedule.py <request_file.json>"}))
        sys.exit(1)

    request_file = sys.argv[1]

    try:
        with open(request_file) as f:
            data = json.load(f)

        validation_error = validate_schedule_request(data)
        if validation_error:
            print(json.dumps({"error": validation_error}))
            sys.exit(1)

        trip = trip_from_dict(data["trip"])
        travelers = [traveler_from_dict(t) for t in data["travelers"]]
        schedules = compute_family_schedules(travelers, trip)

        print(json.dumps({"schedules": [traveler_schedule_to_dict(s) for s in schedules]}))

    except FileNotFoundError:
        print(json.dumps({"error": f"Request file not found: {request_file}"}))
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON in request file: {e}"}))
        sys.exit(1)
    except KeyError as e:
        print(json.dumps({"error": f"Missing required field: {e}"}))
        sys.exit(1)
    except PayloadError as e:
        print(json.dumps({"error": str(e)}))
        sys.exit(1)
    except Exception as e:
        logger.exception("Schedule generation failed")
        print(json.dumps({"error": f"Schedule generation failed: {e}"}))
        sys.exit(1)


if __name__ == "__main__":
    main()
