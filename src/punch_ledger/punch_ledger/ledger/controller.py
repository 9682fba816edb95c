from __future__ import annotations

import logging
from typing import Any, Mapping

from flask import Flask, jsonify, request

from ..common.datetime_utils import normalize_date
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import DayType
from ..core.exceptions import ValidationError
from ..punches.ingest import ingest_rows
from ..punches.memory_repository import InMemoryPunchRepository
from .model import LedgerRequest
from .serializers import batch_to_dict, shift_to_dict

logger = logging.getLogger(__name__)


def _parse_date(value: Any, field: str):
    if value in (None, ""):
        return None
    try:
        return normalize_date(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}")


def parse_ledger_request(payload: Mapping[str, Any]) -> LedgerRequest:
    """Build a LedgerRequest from the posted JSON body."""

    try:
        employee_ids = [int(e) for e in payload.get("employeeIds") or ()]
        end_minute = int(payload.get("endMinute", MINUTES_PER_DAY))
        holidays = frozenset(_parse_date(d, "holiday") for d in payload.get("holidays") or ())
        overrides = {
            int(emp): {_parse_date(d, "calendar date"): DayType.from_flag(t) for d, t in days.items()}
            for emp, days in (payload.get("calendar") or {}).items()
        }
    except (AttributeError, TypeError, ValueError):
        raise ValidationError("Malformed request body")

    return LedgerRequest(
        employee_ids=employee_ids,
        start=_parse_date(payload.get("start"), "start"),
        end=_parse_date(payload.get("end"), "end"),
        end_minute=end_minute,
        holidays=holidays,
        overrides=overrides,
    )


def register(app: Flask, container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="api_health")
    def api_health():
        return jsonify({"success": True, "status": "ok"})

    @app.route("/api/shifts", methods=["GET"], endpoint="api_shifts")
    def api_shifts():
        return jsonify({"success": True, "shifts": [shift_to_dict(w) for w in container.shift_table]})

    @app.route("/api/ledgers", methods=["POST"], endpoint="api_ledgers")
    def api_ledgers():
        payload = request.get_json(silent=True)
        try:
            if not isinstance(payload, dict):
                raise ValidationError("JSON body is required")
            ledger_request = parse_ledger_request(payload)
            rows = payload.get("punches") or []
            if not isinstance(rows, list):
                raise ValidationError("punches must be a list")
            records, issues = ingest_rows(rows)
            service = container.ledger_service_for(InMemoryPunchRepository(records))
            batch = service.compute(ledger_request, issues=issues)
        except ValidationError as e:
            logger.info("Rejected ledger request: %s", e)
            return jsonify({"success": False, "message": str(e)}), 400
        return jsonify(batch_to_dict(batch))
