"""
Simple page router for Streamlit tabs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from app.pages.flashcards import render_flashcards_page
from app.pages.plan import render_plan_page
from app.pages.revisions import render_revisions_page
from app.pages.statistics import render_statistics_page
from core.schemas import Plan


@dataclass(frozen=True)
class AppPage:
    title: str
    render: Callable[[Plan], None]


PAGES = [
    AppPage(title="Revisions", render=render_revisions_page),
    AppPage(title="Flashcards", render=render_flashcards_page),
    AppPage(title="Statistics", render=render_statistics_page),
    AppPage(title="Plan", render=render_plan_page),
]
