#!/usr/bin/env python3
"""Tests for the Flask web application."""
import io

import pytest

from models import Priority, load_dataset, load_mapping, load_priority_config
from web.app import app, priority_badge_color, format_cell

LOG_CSV = (
    "UNITÉ,PIÈCE REQUISE,PIÈCE REÇUE,PIÈCES INSTALLÉES,COMMENTAIRES\n"
    "12,freins avant,2024-01-01,FAUX,\n"
    "14,phare,2024-01-03,VRAI,\n"
)

FORM_MAPPING = {
    "unit": "UNITÉ",
    "partRequired": "PIÈCE REQUISE",
    "partReceived": "PIÈCE REÇUE",
    "partsInstalled": "PIÈCES INSTALLÉES",
    "comments": "COMMENTAIRES",
}


@pytest.fixture
def store(tmp_path):
    return tmp_path / "planner.yaml"


@pytest.fixture
def client(store):
    app.config["TESTING"] = True
    app.config["PLANNER_STORE"] = store
    with app.test_client() as client:
        yield client


def upload(client, text=LOG_CSV, name="journal.csv"):
    return client.post(
        "/import",
        data={"file": (io.BytesIO(text.encode("utf-8")), name)},
        content_type="multipart/form-data",
        follow_redirects=True,
    )


class TestFilters:
    """Tests for template filters."""

    def test_priority_badge_color(self):
        assert "red" in priority_badge_color(Priority.P1)
        assert "green" in priority_badge_color(Priority.P3)

    def test_format_cell(self):
        assert format_cell("12") == "12"
        assert format_cell("") == "—"


class TestIndex:
    """Tests for the dashboard."""

    def test_empty_store(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert "Aucun fichier importé." in response.get_data(as_text=True)

    def test_shows_plan_after_import(self, client):
        upload(client)
        page = client.get("/").get_data(as_text=True)
        assert "1 tâche(s) prête(s) à faire." in page
        assert "Unité 12 - freins avant" in page
        assert "P1: 1, P2: 0, P3: 0" in page

    def test_incomplete_mapping_asks_for_mapping(self, client):
        upload(client, text="UNITÉ,DESCRIPTION\n12,frein\n")
        page = client.get("/").get_data(as_text=True)
        assert "Complétez le mapping des colonnes pour générer le plan." in page
        assert "Importez un CSV" not in page


class TestImport:
    """Tests for CSV upload."""

    def test_upload_saves_dataset(self, client, store):
        response = upload(client)
        assert response.status_code == 200
        assert "journal.csv importé" in response.get_data(as_text=True)
        dataset = load_dataset(store)
        assert len(dataset.rows) == 2
        assert dataset.mapping.is_complete

    def test_missing_file(self, client, store):
        response = client.post("/import", data={}, follow_redirects=True)
        assert "Choisissez un fichier CSV." in response.get_data(as_text=True)
        assert load_dataset(store) is None

    def test_parse_failure(self, client, store):
        response = upload(client, text="")
        assert "Erreur d&#39;import CSV" in response.get_data(as_text=True)
        assert load_dataset(store) is None


class TestMapping:
    """Tests for the mapping form."""

    def test_no_dataset(self, client):
        response = client.post("/mapping", data=FORM_MAPPING, follow_redirects=True)
        assert "Aucun fichier importé." in response.get_data(as_text=True)

    def test_saves_complete_mapping(self, client, store):
        upload(client)
        form = dict(FORM_MAPPING, comments="PIÈCE REQUISE")
        client.post("/mapping", data=form)
        assert load_mapping(store).comments == "PIÈCE REQUISE"
        assert load_dataset(store).mapping.comments == "PIÈCE REQUISE"

    def test_rejects_incomplete_mapping(self, client, store):
        upload(client)
        form = dict(FORM_MAPPING, comments="")
        response = client.post("/mapping", data=form, follow_redirects=True)
        assert "Complétez le mapping" in response.get_data(as_text=True)
        assert load_dataset(store).mapping.comments == "COMMENTAIRES"
        assert load_mapping(store) is None


class TestPriorities:
    """Tests for the priorities form."""

    def test_saves_tiers(self, client, store):
        client.post("/priorities", data={"P1": "phare, ", "P2": "", "P3": "confort"})
        config = load_priority_config(store)
        assert config.for_tier(Priority.P1) == ["phare"]
        assert config.for_tier(Priority.P2) == []
        assert config.for_tier(Priority.P3) == ["confort"]


class TestPlanText:
    """Tests for the plain-text plan."""

    def test_no_dataset(self, client):
        assert client.get("/plan.txt").status_code == 404

    def test_incomplete_mapping(self, client):
        upload(client, text="UNITÉ,DESCRIPTION\n12,frein\n")
        response = client.get("/plan.txt")
        assert response.status_code == 409
        assert "Unmapped columns" in response.get_data(as_text=True)

    def test_plain_text_plan(self, client):
        upload(client)
        response = client.get("/plan.txt")
        assert response.status_code == 200
        assert response.mimetype == "text/plain"
        assert response.get_data(as_text=True) == (
            "Plan PRÊT À FAIRE\n"
            "1. [P1] Unité 12 - freins avant | Freins/Pneumatique/Camion (Sebastien)"
        )
