from __future__ import annotations

import pytest
from django.core.cache import cache
from django.test import Client


@pytest.fixture
def api_client() -> Client:
    return Client()


@pytest.fixture(autouse=True)
def _maps_settings(settings) -> None:
    settings.GOOGLE_MAPS_API_KEY = "test-key"
    settings.GOOGLE_MAPS_RETRY_COUNT = 1
    settings.STATION_SEARCH_RADIUS_KM = 5.0
    settings.STATION_FILTER_RADIUS_KM = 10.0
    cache.clear()
