"""Streamlit entry point for the circular-economy strategy dashboard.

This script sets up logging and the session state, exposes the model
parameters in the sidebar and displays a landing page.  The strategy
maps are implemented in separate files under the `pages/` directory.
"""

import json
import logging

import streamlit as st
from pydantic import ValidationError

from cemodel.params import Scenario
from cemodel.utils import scenario_hash

st.set_page_config(page_title="Circular Economy Simulator", layout="wide")
logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def get_scenario() -> Scenario:
    """Return the active Scenario from session state or a default instance."""
    scn = st.session_state.get("scenario")
    if scn is None:
        scn = Scenario()
        st.session_state["scenario"] = scn
    return scn


def sidebar_inputs() -> None:
    scn = get_scenario()
    st.sidebar.header("Model parameters")
    d1 = st.sidebar.slider("δ1 (strong)", 0.05, 0.99, float(scn.d1), 0.01)
    d2 = st.sidebar.slider("δ2 (weak)", 0.01, max(0.01, min(0.98, d1 - 0.01)), min(float(scn.d2), max(0.01, d1 - 0.01)), 0.01)
    gamma = st.sidebar.slider("γ (leasing spillover)", 0.5, 1.5, float(scn.gamma), 0.01)
    c = st.sidebar.slider("c (unit cost)", 0.01, 0.35, float(scn.c), 0.005)
    k = st.sidebar.slider("k (integration cost)", 0.0, 0.05, float(scn.k), 0.001)
    resolution = st.sidebar.slider("Grid resolution", 20, 100, int(scn.resolution), 5)
    try:
        st.session_state["scenario"] = Scenario(d1=d1, d2=d2, gamma=gamma, c=c, k=k, resolution=resolution)
    except ValidationError as e:
        st.sidebar.error(f"Invalid parameters: {e}")
    st.sidebar.caption(f"Scenario id: `{scenario_hash(get_scenario())[:12]}`")


def main() -> None:
    sidebar_inputs()

    st.title("Circular Economy: Interactive Strategy Simulator")
    st.markdown(
        """
        Compare four business strategies for a durable product made of a
        **strong** component (durability δ1) and a **weak** component (δ2 < δ1):

        - **SI** sell an integral product
        - **LI** lease an integral product
        - **SM** sell a modular product (components sold separately)
        - **LM** lease a modular product

        Leasing changes the effective durability by the spillover factor γ.
        Where no closed form exists the firm's choice is approximated by a
        deterministic grid search, so every map is reproducible.

        Use the pages in the menu to explore architecture choice, business
        model choice, joint strategy maps and endogenous durability.
        The infeasible region (δ2 ≥ δ1) is left blank in every map.
        """
    )

    st.subheader("Scenario JSON")
    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "Save JSON",
            get_scenario().model_dump_json(),
            file_name="scenario.json",
            mime="application/json",
        )
    with col2:
        uploaded = st.file_uploader("Upload Scenario JSON", type=["json"])
        if uploaded is not None:
            try:
                data = json.load(uploaded)
                st.session_state["scenario"] = Scenario.model_validate_json(json.dumps(data))
                st.info("Scenario imported successfully.")
            except (ValueError, ValidationError) as e:
                st.error(f"Failed to load scenario: {e}")


if __name__ == "__main__":
    main()
