# tests/test_app.py
"""
Tests for the Dash callbacks and the JSON endpoint in app.py.
"""

import dataclasses
import json
import math
import sys
import os

import plotly.graph_objects as go
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import app as thrust_app
from sail_thrust import DEFAULT_SCENARIO, DEFAULT_SCENARIO_NAME, Q_, compute_thrust_comparison


@pytest.fixture
def client():
    return thrust_app.server.test_client()


# =============================================================================
# CALLBACKS
# =============================================================================

def test_update_results_reference():
    table, errors, figure, description = thrust_app.update_results(1, 100, DEFAULT_SCENARIO_NAME)
    assert errors == []
    assert isinstance(figure, go.Figure)
    # Ratio line over the whole slider domain plus the current-value marker
    assert len(figure.data) == 2
    assert len(figure.data[0].x) == 100
    assert figure.data[1].x[0] == 1
    assert "1 AU" in description


def test_update_results_unknown_scenario_uses_default():
    *_, description = thrust_app.update_results(1, 100, "nope")
    assert description == "Average solar wind at 1 AU, 780 nm fiber laser"


def test_update_results_cleared_slider():
    table, errors, figure, _ = thrust_app.update_results(None, 100, DEFAULT_SCENARIO_NAME)
    assert len(errors) == 1
    assert "Sail area" in errors[0].children
    # No current-value marker without a ratio
    assert len(figure.data) == 1


def test_input_errors_for_both_sliders():
    result = compute_thrust_comparison(0, 0)
    alerts = thrust_app.build_input_errors(result)
    assert len(alerts) == 2


def test_results_table_rows():
    table = thrust_app.build_results_table(compute_thrust_comparison(10, 500))
    body = table.children[1]
    assert len(body.children) == 7


def test_results_table_headings_and_formulas():
    table = thrust_app.build_results_table(compute_thrust_comparison(1, 100))
    header = [th.children for th in table.children[0].children.children]
    assert header == ["Output", "Formula", "Value", "Source"]
    rows = {row.children[0].children: row.children for row in table.children[1].children}

    energy = rows["Energy per photon at 780 nm"]
    assert energy[1].children.children == r"$E = \frac{hc}{\lambda}$"
    assert energy[1].children.mathjax is True

    pressure = rows["Solar wind pressure (1 AU average)"]
    assert "m_p" in pressure[1].children.children
    assert pressure[2].children == "2.371 nPa"
    assert pressure[3].children.href == "https://en.wikipedia.org/wiki/Solar_wind#Pressure"

    assert "Thrust from a 100 W laser" in rows
    assert "Thrust from the solar wind on a 1 m² sail" in rows
    ratio = rows["Laser thrust multiplier vs. 1 m² sail"]
    # No source for the ratio
    assert ratio[3].children == ""


def test_results_table_headings_follow_sliders():
    table = thrust_app.build_results_table(compute_thrust_comparison(25, 640))
    headings = [row.children[0].children for row in table.children[1].children]
    assert "Thrust from a 640 W laser" in headings
    assert "Laser thrust multiplier vs. 25 m² sail" in headings


def test_slider_marks_include_ends():
    marks = thrust_app.slider_marks(100, 1000)
    assert marks[100] == "100" and marks[1000] == "1000"
    assert len(marks) == 10


# =============================================================================
# JSON ENDPOINT
# =============================================================================

def test_api_thrust_reference(client):
    resp = client.get("/api/thrust?sail_area=1&laser_power=100")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["errors"] == {}
    assert data["force_ratio"] == pytest.approx(140.7, rel=1e-3)
    assert data["sail_force_N"] == pytest.approx(2.371e-9, rel=1e-3)


def test_api_thrust_defaults(client):
    data = client.get("/api/thrust").get_json()
    assert data["scenario"] == DEFAULT_SCENARIO_NAME
    assert data["force_ratio"] == pytest.approx(140.7, rel=1e-3)


def test_api_thrust_scenario(client):
    data = client.get("/api/thrust", query_string={"scenario": "Fast wind 1 AU"}).get_json()
    assert data["scenario"] == "Fast wind 1 AU"
    assert data["errors"] == {}


def test_api_thrust_out_of_range(client):
    resp = client.get("/api/thrust?sail_area=500&laser_power=100")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["sail_force_N"] is None
    assert data["force_ratio"] is None
    assert data["laser_force_N"] == pytest.approx(3.336e-7, rel=1e-3)
    assert "sail_area" in data["errors"]


def test_api_thrust_bad_parameter(client):
    resp = client.get("/api/thrust?sail_area=big")
    assert resp.status_code == 400
    assert "sail_area" in resp.get_json()["error"]


def _reject_constant(token):
    raise ValueError(f"non-standard JSON constant {token}")


@pytest.mark.parametrize("field_name,bad", [
    ("solar_wind_velocity", Q_(math.inf, "km/s")),
    ("solar_wind_density", Q_(math.nan, "cm**-3")),
])
def test_api_thrust_non_finite_scenario_is_strict_json(client, monkeypatch, field_name, bad):
    broken = dataclasses.replace(DEFAULT_SCENARIO, name="Broken wind", **{field_name: bad})
    monkeypatch.setitem(thrust_app.SCENARIOS, "Broken wind", broken)

    resp = client.get("/api/thrust", query_string={"scenario": "Broken wind"})
    assert resp.status_code == 200
    data = json.loads(resp.get_data(as_text=True), parse_constant=_reject_constant)
    assert data["scenario"] == "Broken wind"
    assert data["solar_wind_pressure_nPa"] is None
    assert data["force_ratio"] is None
    assert "finite" in data["errors"]["solar_wind_pressure"]
    assert data["laser_force_N"] == pytest.approx(3.336e-7, rel=1e-3)


@pytest.mark.parametrize("query", ["sail_area=nan", "laser_power=inf"])
def test_api_thrust_non_finite_query(client, query):
    resp = client.get(f"/api/thrust?{query}")
    assert resp.status_code == 200
    data = json.loads(resp.get_data(as_text=True), parse_constant=_reject_constant)
    assert data["force_ratio"] is None
