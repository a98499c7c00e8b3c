# =============================================================================
# app.py
# Streamlit front end: stock list and formula editor
# =============================================================================
"""
Thin presentation layer over rubber_core.services.

Every rerun reloads from the API, the same way each screen focus reloaded
in the mobile app. Run with:

    streamlit run app.py
"""
from __future__ import annotations
from typing import Optional

import streamlit as st
import pandas as pd

from rubber_core.config import load_settings
from rubber_core.errors import ConfigurationError, handle_error
from rubber_core.logging import setup_logging
from rubber_core.models import Formula, Ingredient, Unit
from rubber_core.services import ColorService, FormulaService, ServiceResult, create_services

st.set_page_config(
    page_title="Rubber Stock",
    page_icon="🧪",
    layout="wide",
)


# =============================================================================
# SERVICES
# =============================================================================

@st.cache_resource
def get_settings():
    settings = load_settings()
    setup_logging(level=settings.log_level_value)
    return settings


def get_services():
    """One service pair per browser session, each holding its own loaded lists."""
    if "services" not in st.session_state:
        st.session_state.services = create_services(get_settings())
    return st.session_state.services


def report(result: ServiceResult, success_message: Optional[str], failure_message: str) -> None:
    if result:
        if success_message:
            st.success(success_message)
    elif result.not_found:
        st.warning(f"{failure_message}: not found")
    else:
        st.error(f"{failure_message}: {result.error}")


def rerun_or_report(result: ServiceResult, failure_message: str) -> None:
    """Redraw after a successful change; otherwise say why it failed."""
    if result:
        st.rerun()
    report(result, None, failure_message)


# =============================================================================
# STOCK TAB
# =============================================================================

def render_stock(colors: ColorService) -> None:
    result = colors.load_colors()
    if not result:
        st.error("Could not load the stock. Check the connection and try again.")
        return

    if not result.data:
        st.info("No colors yet. Add one below.")

    for color in result.data:
        name_col, qty_col, minus_col, plus_col, up_col, down_col, del_col = st.columns(
            [4, 2, 1, 1, 1, 1, 1]
        )
        name_col.markdown(f"**{color.name}**")
        qty_col.write(color.quantity)
        if minus_col.button("−", key=f"minus_{color.id}"):
            rerun_or_report(colors.adjust_quantity(color.id, -1), "Could not update quantity")
        if plus_col.button("+", key=f"plus_{color.id}"):
            rerun_or_report(colors.adjust_quantity(color.id, 1), "Could not update quantity")
        if up_col.button("↑", key=f"up_{color.id}"):
            rerun_or_report(colors.move_color(color.id, -1), "Could not move color")
        if down_col.button("↓", key=f"down_{color.id}"):
            rerun_or_report(colors.move_color(color.id, 1), "Could not move color")
        if del_col.button("🗑", key=f"delete_{color.id}"):
            report(colors.delete_color(color.name), f"Color {color.name} deleted", "Delete failed")

    with st.form("add_color", clear_on_submit=True):
        st.subheader("Add color")
        name = st.text_input("Name")
        quantity = st.number_input("Quantity", min_value=0, step=1, value=0)
        if st.form_submit_button("Add"):
            added = colors.add_color(name, int(quantity))
            report(added, f"Color {name} added", "Could not add color")
            if added:
                st.rerun()


# =============================================================================
# FORMULAS TAB
# =============================================================================

def ingredients_frame(formula: Formula) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"#": i, "Ingredient": item.name, "Quantity": item.quantity, "Unit": item.unit}
            for i, item in enumerate(formula.ingredients)
        ],
        columns=["#", "Ingredient", "Quantity", "Unit"],
    )


def render_formulas(formulas: FormulaService) -> None:
    listed = formulas.list_formulas()
    if not listed:
        st.error("Could not load the formulas.")
        return
    if not listed.data:
        st.info("No formulas yet.")

    with st.expander("New formula"):
        with st.form("add_formula", clear_on_submit=True):
            new_name = st.text_input("Color name")
            if st.form_submit_button("Create"):
                report(
                    formulas.add_formula(Formula.from_name(new_name.strip())),
                    f"Formula {new_name} created",
                    "Could not create formula",
                )

    if not listed.data:
        return

    by_id = {f.id: f for f in listed.data}
    selected_id = st.selectbox("Formula", list(by_id), format_func=lambda fid: by_id[fid].name)
    fetched = formulas.get_formula_by_id(selected_id)
    if not fetched:
        report(fetched, "", "Could not load formula")
        return

    formula: Formula = fetched.data
    st.dataframe(ingredients_frame(formula), hide_index=True, use_container_width=True)

    units = [unit.value for unit in Unit]
    with st.form("ingredient", clear_on_submit=True):
        st.subheader("Ingredient")
        index = st.number_input(
            "Row to update (-1 to add a new one)", min_value=-1, step=1, value=-1
        )
        name = st.text_input("Name")
        quantity = st.number_input("Quantity", min_value=0.0, step=1.0)
        unit = st.selectbox("Unit", units)
        if st.form_submit_button("Save"):
            ingredient = Ingredient(name.strip(), quantity, unit)
            if index < 0:
                saved = formulas.add_ingredient(formula.name, ingredient, formula.version)
            else:
                saved = formulas.update_ingredient(formula.name, int(index), ingredient, formula.version)
            report(saved, "Ingredient saved", "Could not save ingredient")
            if saved:
                st.rerun()

    if formula.ingredients:
        to_delete = st.selectbox(
            "Delete ingredient",
            list(range(len(formula.ingredients))),
            format_func=lambda i: formula.ingredients[i].name,
        )
        if st.button("Delete ingredient"):
            removed = formulas.delete_ingredient(formula.name, to_delete, formula.version)
            report(removed, "Ingredient deleted", "Could not delete ingredient")
            if removed:
                st.rerun()

    if st.button(f"Delete formula {formula.name}"):
        report(formulas.delete_formula(formula.name), f"Formula {formula.name} deleted", "Delete failed")


# =============================================================================
# PAGE
# =============================================================================

st.title("Rubber Stock")

try:
    color_service, formula_service = get_services()
except ConfigurationError as e:
    handle_error(e)
    st.stop()

stock_tab, formulas_tab = st.tabs(["Stock", "Formulas"])
with stock_tab:
    render_stock(color_service)
with formulas_tab:
    render_formulas(formula_service)
