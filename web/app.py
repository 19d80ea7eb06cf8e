"""Flask web application for the ready-to-do maintenance planner."""

import os
from pathlib import Path

from flask import Flask, Response, render_template, request, redirect, url_for, flash

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import (
    FIELD_LABELS,
    FIELDS,
    CsvParseError,
    IncompleteMappingError,
    Priority,
    detect_mapping,
    field_value,
    load_dataset,
    load_mapping,
    load_priority_config,
    new_dataset,
    parse_csv_text,
    require_complete,
    save_dataset,
    save_mapping,
    save_priority_config,
)

app = Flask(__name__)
app.secret_key = os.environ.get("SECRET_KEY", "dev-secret-key-change-in-prod")

# Store file (relative to project root unless PLANNER_STORE is set)
app.config["PLANNER_STORE"] = Path(
    os.environ.get("PLANNER_STORE", Path(__file__).parent.parent / "planner.yaml")
)


def get_store_path() -> Path:
    return Path(app.config["PLANNER_STORE"])


def priority_badge_color(priority: Priority) -> str:
    """Get Tailwind color classes for a priority badge."""
    colors = {
        Priority.P1: "bg-red-500 text-white",
        Priority.P2: "bg-yellow-500 text-white",
        Priority.P3: "bg-green-500 text-white",
    }
    return colors.get(priority, "bg-gray-500 text-white")


def format_cell(value):
    """Format a cell value for display."""
    return value if value else "—"


# Register template filters
app.jinja_env.filters["priority_badge_color"] = priority_badge_color
app.jinja_env.filters["format_cell"] = format_cell
app.jinja_env.globals["field_value"] = field_value


@app.route("/")
def index():
    """Dashboard: import status, mapping, priorities, ready list and plan."""
    store = get_store_path()
    dataset = load_dataset(store)
    config = load_priority_config(store)

    items = []
    counts = {}
    plan = "Importez un CSV pour générer le plan."
    missing = []
    if dataset is not None:
        missing = dataset.mapping.missing_fields()
        if missing:
            plan = "Complétez le mapping des colonnes pour générer le plan."
        else:
            items = dataset.build_ready_list(config)
            counts = dataset.priority_counts(config)
            plan = dataset.build_plan_text(config)

    return render_template(
        "index.html",
        dataset=dataset,
        config=config,
        items=items,
        counts=counts,
        plan_text=plan,
        missing=missing,
        fields=FIELDS,
        field_labels=FIELD_LABELS,
        Priority=Priority,
    )


@app.route("/import", methods=["POST"])
def import_csv():
    """Handle CSV upload."""
    upload = request.files.get("file")
    if upload is None or not upload.filename:
        flash("Choisissez un fichier CSV.", "error")
        return redirect(url_for("index"))

    try:
        text = upload.read().decode("utf-8-sig")
        headers, rows = parse_csv_text(text, request.form.get("delimiter") or None)
    except (CsvParseError, UnicodeDecodeError) as e:
        flash(f"Erreur d'import CSV: {e}", "error")
        return redirect(url_for("index"))

    store = get_store_path()
    mapping = detect_mapping(headers, load_mapping(store))
    save_dataset(store, new_dataset(headers, rows, mapping))
    flash(f"{upload.filename} importé. Veuillez confirmer le mapping.", "success")
    return redirect(url_for("index"))


@app.route("/mapping", methods=["POST"])
def update_mapping():
    """Handle mapping form submission."""
    store = get_store_path()
    dataset = load_dataset(store)
    if dataset is None:
        flash("Aucun fichier importé.", "error")
        return redirect(url_for("index"))

    mapping = dataset.mapping.with_updates(
        **{field: request.form.get(field, "") for field in FIELDS}
    )
    try:
        require_complete(mapping, dataset.headers)
    except IncompleteMappingError as e:
        flash(f"Complétez le mapping des colonnes obligatoires. {e}", "error")
        return redirect(url_for("index"))

    dataset.mapping = mapping
    save_dataset(store, dataset)
    save_mapping(store, mapping)
    flash("Mapping et données sauvegardés.", "success")
    return redirect(url_for("index"))


@app.route("/priorities", methods=["POST"])
def update_priorities():
    """Handle priority keyword form submission."""
    store = get_store_path()
    config = load_priority_config(store)
    for priority in Priority:
        text = request.form.get(priority.name)
        if text is not None:
            config = config.with_tier(priority, text)
    save_priority_config(store, config)
    flash("Priorités sauvegardées.", "success")
    return redirect(url_for("index"))


@app.route("/plan.txt")
def plan_text():
    """Plain-text plan, ready to copy or download."""
    store = get_store_path()
    dataset = load_dataset(store)
    if dataset is None:
        return Response("Aucun fichier importé.", status=404, mimetype="text/plain")
    try:
        require_complete(dataset.mapping, dataset.headers)
    except IncompleteMappingError as e:
        return Response(str(e), status=409, mimetype="text/plain")
    text = dataset.build_plan_text(load_priority_config(store))
    return Response(text, mimetype="text/plain")


if __name__ == "__main__":
    # Run with debug mode for development
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=5001)
