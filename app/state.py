"""
Streamlit session state and plan service initialization helpers.
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from core.logging import configure_logging
from core.plan_service import PlanService
from core.schemas import Plan
from core.storage import get_store


@st.cache_resource
def get_plan_service() -> PlanService:
    """
    Build and load the plan service (cached per Streamlit server).
    """
    configure_logging()
    service = PlanService(get_store())
    service.load()
    return service


def ensure_session_state() -> None:
    """
    Populate Streamlit session_state with defaults.
    """
    if "plan_id" not in st.session_state:
        plans = get_plan_service().list_plans()
        st.session_state.plan_id = plans[0].id if plans else None
    if "review_session" not in st.session_state:
        st.session_state.review_session = None
    if "review_label" not in st.session_state:
        st.session_state.review_label = None
    if "show_answer" not in st.session_state:
        st.session_state.show_answer = False
    if "last_results" not in st.session_state:
        st.session_state.last_results = None


def current_plan() -> Optional[Plan]:
    """The selected plan, or None when the user has no plan yet."""
    if st.session_state.plan_id is None:
        return None
    return get_plan_service().get_plan(st.session_state.plan_id)
