import json
import pathlib
from typing import Any

import pytest
from fastapi.testclient import TestClient

from campaign_creation.app.core.environment import settings
from campaign_creation.app.domain.draft import CampaignDraft, MediaAsset, TimeSlot
from campaign_creation.app.main import app

from . import TEST_DATA_DIR


@pytest.fixture
def valid_draft_file() -> pathlib.Path:
    """
    Draft satisfying the contract and every business rule.
    """
    return pathlib.Path(TEST_DATA_DIR, 'drafts', 'valid-draft.json')


@pytest.fixture
def malformed_draft_file() -> pathlib.Path:
    """
    Draft violating the contract on seven different fields.
    """
    return pathlib.Path(TEST_DATA_DIR, 'drafts', 'malformed-draft.json')


@pytest.fixture
def rule_violating_draft_file() -> pathlib.Path:
    """
    Draft with reversed dates; otherwise well formed, with touching time slots and a 50 MB video.
    """
    return pathlib.Path(TEST_DATA_DIR, 'drafts', 'rule-violating-draft.json')


@pytest.fixture
def valid_draft_payload(valid_draft_file) -> dict[str, Any]:
    with valid_draft_file.open() as f:
        return json.load(f)


@pytest.fixture
def valid_draft() -> CampaignDraft:
    return CampaignDraft(
        name='Summer Sale',
        start_date='2026-06-01T00:00:00Z',
        end_date='2026-06-30T23:59:59Z',
        screen_ids=('screen-1',),
        time_slots=(
            TimeSlot(start_time='08:00', end_time='12:00'),
            TimeSlot(start_time='13:00', end_time='17:00'),
        ),
        media_asset=MediaAsset(url='https://example.com/asset.jpg', type='image', size_in_mb=10),
    )


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def valid_api_key():
    """Valid API key for testing."""
    return settings.API_KEY


@pytest.fixture
def invalid_api_key():
    """Invalid API key for testing."""
    return 'invalid_key'
