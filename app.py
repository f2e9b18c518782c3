import os

import dash
from dash import dcc, html, Input, Output
import dash_bootstrap_components as dbc
import numpy as np
import plotly.graph_objects as go
from flask import jsonify, request

from sail_thrust import (
    COLORS,
    DEFAULT_LASER_POWER,
    DEFAULT_SAIL_AREA,
    DEFAULT_SCENARIO_NAME,
    LASER_POWER_MAX,
    LASER_POWER_MIN,
    LASER_POWER_STEP,
    SAIL_AREA_MAX,
    SAIL_AREA_MIN,
    SAIL_AREA_STEP,
    SCENARIOS,
    SCENARIO_OPTIONS,
    UNDEFINED_TEXT,
    compute_thrust_comparison,
    dprint,
    get_scenario,
    ratio_sweep,
    result_to_json,
    detail_rows,
)

# Input steps whose failures are shown above the results table
INPUT_STEPS = {"sail_area": "Sail area", "laser_power": "Laser power"}

# ✅ Initialize Dash app
app = dash.Dash(__name__, external_stylesheets=[dbc.themes.BOOTSTRAP], suppress_callback_exceptions=True)
server = app.server

app.index_string = """
<!DOCTYPE html>
<html>
    <head>
        {%metas%}
        <title>Laser Sail Thrust Calculator</title>
        <meta name="description" content="Compare solar wind thrust on a sail with photon thrust from an onboard laser.">
        {%favicon%}
        {%css%}
    </head>
    <body>
        {%app_entry%}
        <footer>
            {%config%}
            {%scripts%}
            {%renderer%}
        </footer>
    </body>
</html>
"""


def slider_marks(minimum, maximum, tick_count=10):
    """Evenly spaced integer marks including both ends."""
    step = (maximum - minimum) / (tick_count - 1)
    marks = {int(round(minimum + i * step)): str(int(round(minimum + i * step))) for i in range(tick_count)}
    marks[minimum] = str(minimum)
    marks[maximum] = str(maximum)
    return marks


def thrust_layout():
    return html.Div([
        # Header
        html.Div("Laser Sail Thrust Calculator", style={
            "fontWeight": "600",
            "fontSize": "22px",
            "margin": "10px 0",
            "color": "#1b1e23",
            "textAlign": "center"
        }),

        html.Div(
            "Solar wind thrust on a sail vs. photon thrust from an onboard laser. "
            "Closed-form estimates for educational use only.",
            style={
                "backgroundColor": "#fff3cd",
                "border": "1px solid #ffeeba",
                "padding": "10px 20px",
                "fontSize": "13px",
                "color": "#856404",
                "marginBottom": "10px",
                "textAlign": "center",
                "fontWeight": "500"
            }
        ),

        dbc.Row([
            # Sidebar Left
            dbc.Col([
                dbc.Card([
                    dbc.CardHeader("Reference Scenario"),
                    dbc.CardBody([
                        dcc.Dropdown(
                            id="scenario-select",
                            options=SCENARIO_OPTIONS,
                            value=DEFAULT_SCENARIO_NAME,
                            clearable=False,
                            className="dropdown"
                        ),
                        html.Div(id="scenario-description", className="mt-2", style={"fontSize": "13px", "color": "#555"}),
                    ])
                ], className="mb-3"),

                dbc.Card([
                    dbc.CardHeader("Solar Sail"),
                    dbc.CardBody([
                        html.Label("Sail area (m²)", className="input-label"),
                        dcc.Slider(
                            id="sail-area-slider",
                            min=SAIL_AREA_MIN,
                            max=SAIL_AREA_MAX,
                            step=SAIL_AREA_STEP,
                            value=DEFAULT_SAIL_AREA,
                            marks=slider_marks(SAIL_AREA_MIN, SAIL_AREA_MAX),
                            tooltip={"always_visible": True}
                        ),
                    ])
                ], className="mb-3"),

                dbc.Card([
                    dbc.CardHeader("Laser"),
                    dbc.CardBody([
                        html.Label("Laser power (W)", className="input-label"),
                        dcc.Slider(
                            id="laser-power-slider",
                            min=LASER_POWER_MIN,
                            max=LASER_POWER_MAX,
                            step=LASER_POWER_STEP,
                            value=DEFAULT_LASER_POWER,
                            marks=slider_marks(LASER_POWER_MIN, LASER_POWER_MAX),
                            tooltip={"always_visible": True}
                        ),
                    ])
                ], className="mb-3"),
            ], width=4),

            # Results Right
            dbc.Col([
                html.Div(id="input-errors"),
                dbc.Card([
                    dbc.CardHeader("Results"),
                    dbc.CardBody(html.Div(id="results-table"))
                ], className="mb-3"),
                dcc.Graph(id="ratio-graph", config={"displaylogo": False}),
            ], width=8),
        ], className="g-3"),
    ], style={"padding": "0 20px"})


app.layout = thrust_layout()


def build_results_table(result):
    """Outputs with the formula and source behind each one; undefined rows carry their reason as a tooltip."""
    body = []
    for row in detail_rows(result):
        cell_style = {"color": COLORS["undefined_text"]} if row["value"] == UNDEFINED_TEXT else {}
        source = html.A("ref", href=row["reference"], target="_blank") if row["reference"] else ""
        body.append(html.Tr([
            html.Td(row["heading"]),
            html.Td(dcc.Markdown(f"${row['formula']}$", mathjax=True)),
            html.Td(row["value"], title=row["reason"] or "", style=cell_style),
            html.Td(source),
        ]))
    return dbc.Table(
        [html.Thead(html.Tr([html.Th("Output"), html.Th("Formula"), html.Th("Value"), html.Th("Source")])),
         html.Tbody(body)],
        bordered=False,
        hover=True,
        size="sm"
    )


def build_input_errors(result):
    """Alerts for slider values rejected by the calculation layer."""
    alerts = [
        dbc.Alert(f"{label}: {result.errors[name]}", color="danger", className="py-2")
        for name, label in INPUT_STEPS.items()
        if name in result.errors
    ]
    return alerts


def build_ratio_figure(result, laser_power):
    """Force ratio across the sail-area domain, with the current setting highlighted."""
    areas, ratios = ratio_sweep(laser_power, result.scenario)
    fig = go.Figure()

    fig.add_trace(go.Scatter(
        x=areas,
        y=ratios,
        mode="lines",
        name="Laser / sail",
        line=dict(color=COLORS["ratio_line"], width=2),
        hovertemplate="Area %{x} m²<br>Ratio %{y:.4g}<extra></extra>"
    ))

    if result.force_ratio is not None:
        fig.add_trace(go.Scatter(
            x=[result.sail_area.magnitude],
            y=[result.force_ratio],
            mode="markers",
            name="Current",
            marker=dict(color=COLORS["current_marker"], size=10)
        ))

    fig.add_hline(y=1.0, line_dash="dash", line_color=COLORS["parity_line"],
                  annotation_text="parity", annotation_position="bottom right")

    if np.all(np.isnan(ratios)):
        fig.add_annotation(text=f"Force ratio {UNDEFINED_TEXT}", showarrow=False,
                           xref="paper", yref="paper", x=0.5, y=0.5,
                           font=dict(size=16, color=COLORS["undefined_text"]))

    fig.update_layout(
        title=f"Laser thrust multiplier vs. sail area ({result.scenario.name})",
        xaxis_title="Sail area (m²)",
        yaxis_title="Laser force / sail force",
        yaxis_type="log",
        margin=dict(l=60, r=20, t=60, b=50),
        template="plotly_white",
        showlegend=False
    )
    return fig


@app.callback(
    Output("results-table", "children"),
    Output("input-errors", "children"),
    Output("ratio-graph", "figure"),
    Output("scenario-description", "children"),
    Input("sail-area-slider", "value"),
    Input("laser-power-slider", "value"),
    Input("scenario-select", "value"),
)
def update_results(sail_area, laser_power, scenario_name):
    scenario = get_scenario(SCENARIOS, scenario_name)
    result = compute_thrust_comparison(sail_area, laser_power, scenario)
    dprint(f"[CALLBACK] area={sail_area} power={laser_power} scenario={scenario.name}")

    return (
        build_results_table(result),
        build_input_errors(result),
        build_ratio_figure(result, laser_power),
        scenario.description,
    )


# =============================================================================
# JSON ENDPOINT
# =============================================================================

def _query_number(name, default):
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"Query parameter '{name}' must be a number, got '{raw}'") from None
    return int(value) if value.is_integer() else value


@app.server.route("/api/thrust")
def api_thrust():
    try:
        sail_area = _query_number("sail_area", DEFAULT_SAIL_AREA)
        laser_power = _query_number("laser_power", DEFAULT_LASER_POWER)
    except ValueError as e:
        dprint(f"[API] Bad request: {e}")
        return jsonify({"error": str(e)}), 400

    scenario = get_scenario(SCENARIOS, request.args.get("scenario"))
    result = compute_thrust_comparison(sail_area, laser_power, scenario)
    dprint(f"[API] area={sail_area} power={laser_power} ratio={result.force_ratio}")
    return jsonify(result_to_json(result))


if __name__ == "__main__":
    # Use env vars to control debug (1 = on, 0 = off) and binding
    debug_mode = os.environ.get("SAIL_THRUST_DEBUG", "1") == "1"
    host = os.environ.get("SAIL_THRUST_HOST", "127.0.0.1")
    port = int(os.environ.get("SAIL_THRUST_PORT", "8050"))

    app.run(debug=debug_mode, host=host, port=port)
