from __future__ import annotations

import csv
import io
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_utc, parse_instant
from ..common.validators import parse_year_month
from ..common.web import current_display_name, current_user_id, error_response, login_required
from ..container import Container
from ..core.enums import PunchKind, PunchSource
from ..core.exceptions import InvalidArgumentError
from ..ledger.formatting import format_minutes
from ..reports.service import REPORT_FIELDS
from .model import ClassifiedPunch

# legacy clients send the chat bot's name as the source
_SOURCE_ALIASES = {"discord": PunchSource.EXTERNAL.value}


def _parse_kind(value: Optional[str]) -> Optional[PunchKind]:
    if not value:
        return None
    try:
        return PunchKind(value)
    except ValueError:
        raise InvalidArgumentError(f"Invalid recordType: {value!r}")


def _parse_source(value: Optional[str]) -> PunchSource:
    v = (value or PunchSource.WEB.value).strip().lower()
    try:
        return PunchSource(_SOURCE_ALIASES.get(v, v))
    except ValueError:
        raise InvalidArgumentError(f"Invalid source: {value!r}")


def record_payload(c: ClassifiedPunch) -> dict:
    p = c.punch
    return {
        "id": p.punch_id,
        "userId": p.user_id,
        "timestamp": p.timestamp.isoformat().replace("+00:00", "Z"),
        "recordType": p.kind.value,
        "source": p.source.value,
        "isEdited": p.is_edited,
        "comment": p.comment,
        "type": c.type.value,
    }


def register(app: Flask, container: Container) -> None:
    calendar = container.aggregator.calendar

    def _year_month() -> tuple[int, int]:
        today = calendar.business_date(now_utc())
        return parse_year_month(
            request.args.get("year"),
            request.args.get("month"),
            default_year=today.year,
            default_month=today.month,
        )

    @app.route("/api/clock", methods=["POST"], endpoint="clock")
    @login_required
    def clock():
        data = request.get_json(silent=True) or {}
        try:
            timestamp = parse_instant(data["timestamp"]) if data.get("timestamp") else None
            record = container.punch_service.clock(
                current_user_id(),
                kind=_parse_kind(data.get("recordType")) or PunchKind.WORK,
                source=_parse_source(data.get("source")),
                timestamp=timestamp,
                display_name=current_display_name(),
            )
        except Exception as e:
            return error_response(e, action="clock in/out")

        return jsonify({"success": True, "record": record_payload(record), "type": record.type.value})

    @app.route("/api/status", methods=["GET"], endpoint="status")
    @login_required
    def status():
        try:
            st = container.punch_service.current_status(current_user_id())
        except Exception as e:
            return error_response(e, action="get status")

        return jsonify(
            {
                "status": st.work_state.value,
                "breakStatus": st.break_state.value,
                "lastRecord": record_payload(st.last_event) if st.last_event else None,
            }
        )

    @app.route("/api/records", methods=["GET"], endpoint="records")
    @login_required
    def records():
        try:
            year, month = _year_month()
            data = container.punch_service.monthly_records(current_user_id(), year=year, month=month)
        except Exception as e:
            return error_response(e, action="get records")

        return jsonify(
            {
                "records": [record_payload(r) for r in data.records],
                "stats": {
                    "totalWorkingHours": format_minutes(data.stats.total_working_minutes),
                    "workingDays": data.stats.working_days,
                    "missingClockOuts": data.stats.incomplete_days,
                },
            }
        )

    @app.route("/api/records/<int:punch_id>", methods=["PUT"], endpoint="update_record")
    @login_required
    def update_record(punch_id: int):
        data = request.get_json(silent=True) or {}
        try:
            timestamp = parse_instant(data["timestamp"]) if data.get("timestamp") else None
            record = container.punch_service.update_punch(
                current_user_id(),
                punch_id,
                timestamp=timestamp,
                comment=data.get("comment"),
                kind=_parse_kind(data.get("recordType")),
            )
        except Exception as e:
            return error_response(e, action="update record")

        return jsonify({"success": True, "record": record_payload(record)})

    @app.route("/api/records/<int:punch_id>", methods=["DELETE"], endpoint="delete_record")
    @login_required
    def delete_record(punch_id: int):
        try:
            container.punch_service.delete_punch(current_user_id(), punch_id)
        except Exception as e:
            return error_response(e, action="delete record")
        return jsonify({"success": True})

    @app.route("/api/records/report.csv", methods=["GET"], endpoint="records_report_csv")
    @login_required
    def records_report_csv():
        try:
            year, month = _year_month()
            data = container.report_service.build_monthly_report(user_id=current_user_id(), year=year, month=month)
        except Exception as e:
            return error_response(e, action="generate report")

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=REPORT_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)
        out.write("\n")
        out.write(f"Working days,{data.summary['working_days']}\n")
        out.write(f"Total working hours,{data.summary['total_working_hours']}\n")

        filename = f"attendance_{data.year}_{data.month:02d}.csv"
        return app.response_class(
            out.getvalue().encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
