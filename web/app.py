"""Flask web application for fleet maintenance planning."""

import os
from datetime import date
from pathlib import Path

from flask import Flask, abort, flash, jsonify, redirect, render_template, request, url_for

from gestifiltres import (
    CYCLE,
    InvalidArgumentError,
    MaintenanceRange,
    MaintenanceRecord,
    Status,
    load_fleet,
    normalize_date,
    parse_hours,
    save_maintenance_record,
    save_service_hours,
)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Fleet file (relative to project root unless absolute)
app.config["FLEET_FILE"] = Path(
    os.environ.get(
        "GESTIFILTRES_FLEET", Path(__file__).parent.parent / "fleets" / "fleet.yaml"
    )
)


def get_fleet():
    return load_fleet(app.config["FLEET_FILE"])


def format_hours(hours):
    """Format hours with comma separator."""
    if hours is None:
        return "—"
    return f"{hours:,.0f}h"


def status_color(status: Status) -> str:
    """Get Tailwind color classes for status."""
    colors = {
        Status.OVERDUE: "bg-red-100 text-red-800 border-red-200",
        Status.URGENT: "bg-orange-100 text-orange-800 border-orange-200",
        Status.UPCOMING: "bg-yellow-100 text-yellow-800 border-yellow-200",
        Status.OK: "bg-green-100 text-green-800 border-green-200",
    }
    return colors.get(status, "bg-gray-100 text-gray-800")


def range_color(maintenance_range: MaintenanceRange) -> str:
    """Get Tailwind color classes for a maintenance range badge."""
    colors = {
        MaintenanceRange.C: "bg-cyan-100 text-cyan-800 border-cyan-300",
        MaintenanceRange.D: "bg-orange-100 text-orange-800 border-orange-300",
        MaintenanceRange.E: "bg-emerald-100 text-emerald-800 border-emerald-300",
        MaintenanceRange.F: "bg-rose-100 text-rose-800 border-rose-300",
    }
    return colors.get(maintenance_range, "bg-gray-100 text-gray-800")


# Register template filters
app.jinja_env.filters["format_hours"] = format_hours
app.jinja_env.filters["status_color"] = status_color
app.jinja_env.filters["range_color"] = range_color


def count_by_status(statuses):
    return {
        "overdue": sum(1 for s in statuses if s.status == Status.OVERDUE),
        "urgent": sum(1 for s in statuses if s.status == Status.URGENT),
        "upcoming": sum(1 for s in statuses if s.status == Status.UPCOMING),
        "ok": sum(1 for s in statuses if s.status == Status.OK),
    }


@app.route("/")
def index():
    """Dashboard with status counts, upcoming maintenance and alerts."""
    fleet = get_fleet()
    all_status = fleet.get_all_machine_status()

    return render_template(
        "index.html",
        fleet=fleet,
        status_counts=count_by_status(all_status),
        upcoming=fleet.get_upcoming(),
        alerts=fleet.get_maintenance_alerts(),
        Status=Status,
    )


@app.route("/machine/<machine_id>")
def machine_detail(machine_id: str):
    """Machine detail page with next maintenance and history."""
    fleet = get_fleet()
    machine = fleet.get_machine(machine_id)
    if machine is None:
        flash(f"Machine '{machine_id}' not found", "error")
        return redirect(url_for("index"))

    history = fleet.get_history(machine_id, reverse=True)
    rows = [(record, fleet.next_range_for_record(record)) for record in history]

    return render_template(
        "machine.html",
        machine=machine,
        machine_status=fleet.calculate_machine_status(machine),
        rows=rows,
        ranges=list(MaintenanceRange),
        today=date.today().isoformat(),
        Status=Status,
    )


@app.route("/maintenance")
def maintenance_history():
    """All maintenance records, newest first, with the range due after each."""
    fleet = get_fleet()
    records = fleet.get_history_sorted(sort_by="date", reverse=True)

    machine_filter = request.args.get("machine") or None
    range_filter = request.args.get("range") or None

    if machine_filter:
        records = [r for r in records if r.machine_id == machine_filter]
    if range_filter:
        try:
            wanted = MaintenanceRange.parse(range_filter)
        except InvalidArgumentError as e:
            flash(str(e), "error")
            return redirect(url_for("maintenance_history"))
        records = [r for r in records if r.range == wanted]

    rows = [
        (record, fleet.get_machine(record.machine_id), fleet.next_range_for_record(record))
        for record in records
    ]

    return render_template(
        "maintenance.html",
        rows=rows,
        machines=fleet.machines,
        ranges=list(MaintenanceRange),
        machine_filter=machine_filter,
        range_filter=range_filter,
    )


@app.route("/machine/<machine_id>/log", methods=["POST"])
def log_maintenance(machine_id: str):
    """Handle log maintenance form submission."""
    path = app.config["FLEET_FILE"]
    fleet = load_fleet(path)
    machine = fleet.get_machine(machine_id)
    if machine is None:
        flash(f"Machine '{machine_id}' not found", "error")
        return redirect(url_for("index"))

    # Validate
    try:
        record = MaintenanceRecord(
            machine_id=machine.id,
            range=MaintenanceRange.parse(request.form.get("range") or ""),
            service_hours=parse_hours(request.form.get("hours")),
            date=normalize_date(request.form.get("date") or date.today().isoformat()),
        )
    except InvalidArgumentError as e:
        flash(str(e), "error")
        return redirect(url_for("machine_detail", machine_id=machine_id))

    save_maintenance_record(path, record)
    flash(f"Logged range {record.range.value} at {format_hours(record.service_hours)}", "success")

    return redirect(url_for("machine_detail", machine_id=machine_id))


@app.route("/machine/<machine_id>/hours", methods=["POST"])
def update_hours(machine_id: str):
    """Handle update service hours form submission."""
    path = app.config["FLEET_FILE"]
    fleet = load_fleet(path)
    if fleet.get_machine(machine_id) is None:
        flash(f"Machine '{machine_id}' not found", "error")
        return redirect(url_for("index"))

    try:
        hours = parse_hours(request.form.get("hours"))
    except InvalidArgumentError as e:
        flash(str(e), "error")
        return redirect(url_for("machine_detail", machine_id=machine_id))

    save_service_hours(path, machine_id, hours)
    flash(f"Updated service hours to {format_hours(hours)}", "success")

    return redirect(url_for("machine_detail", machine_id=machine_id))


@app.route("/api/machine/<machine_id>/next-maintenance")
def api_next_maintenance(machine_id: str):
    """JSON projection of the next maintenance of a machine."""
    fleet = get_fleet()
    machine = fleet.get_machine(machine_id)
    if machine is None:
        abort(404)

    machine_status = fleet.calculate_machine_status(machine)
    projection = machine_status.projection
    return jsonify(
        {
            "machineId": machine.id,
            "range": projection.range.value,
            "dueAtHours": projection.due_at_hours,
            "hoursRemaining": projection.hours_remaining,
            "missedIntervals": projection.missed_intervals,
            "status": machine_status.status.name,
        }
    )


@app.context_processor
def inject_cycle():
    return {"cycle": CYCLE}


if __name__ == "__main__":
    # Run with debug mode for development
    app.run(debug=True, host="0.0.0.0", port=5001)
