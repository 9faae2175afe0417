# -*- coding: utf-8 -*-
"""Shared fixtures: the shipped site assets and a small in-memory site."""

from pathlib import Path

import pytest

from web.services import SiteContext, load_site_context

PROJECT_ROOT = Path(__file__).resolve().parent.parent


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def site_context() -> SiteContext:
    """Context loaded from the real templates/ and dev-data/ directories."""
    return load_site_context(PROJECT_ROOT / "templates", PROJECT_ROOT / "dev-data" / "data.json")


@pytest.fixture
def small_context() -> SiteContext:
    raw_json = '[{"id": 0, "name": "Apple", "price": 1.5}, {"id": 1, "name": "Pear", "price": 2}]'
    return SiteContext.build(
        overview_template="<main>{%PRODUCT_CARDS%}</main>",
        card_template="<li>{%NAME%}:{%PRICE%}</li>",
        product_template="<h1>{%NAME%}</h1><p>{%PRICE%}</p><span>{%MISSING%}</span>",
        raw_json=raw_json,
    )
