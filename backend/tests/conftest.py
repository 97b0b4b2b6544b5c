"""
PitchSite - Test Configuration and Fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['MONGODB_URI'] = 'mongodb://localhost:27017'
os.environ['DB_NAME'] = 'pitchsite_test'
os.environ['APP_PASSWORD'] = 'test-app-password'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['ANTHROPIC_API_KEY'] = ''
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['CLIENT_URL'] = 'http://pitch.test'

from app.main import app
from app.core.config import settings
from app.core.database import get_pitch_deck_collection
from app.core.security import create_access_token
from app.api.v1.endpoints.generate import get_content_generator
from app.schemas.pitch import PitchFormData
from app.services.content_generator import ContentGenerator
from app.services.fallback_content import FallbackContentGenerator
from tests.mocks.mock_claude import MockClaudeClient
from tests.mocks.mock_mongo import MockCollection

fake = Faker()

AS_OF = date(2024, 6, 1)


@pytest.fixture
def mock_collection() -> MockCollection:
    return MockCollection()


@pytest.fixture
def mock_claude() -> MockClaudeClient:
    return MockClaudeClient()


@pytest.fixture
def ai_enabled(monkeypatch):
    """Pretend an Anthropic key is configured"""
    monkeypatch.setattr(settings, 'ANTHROPIC_API_KEY', 'test-api-key')
    monkeypatch.setattr(settings, 'USE_FALLBACK_CONTENT', False)


@pytest.fixture
async def client(mock_collection, mock_claude) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with the collection and Claude client swapped out"""
    async def override_collection():
        return mock_collection

    app.dependency_overrides[get_pitch_deck_collection] = override_collection
    app.dependency_overrides[get_content_generator] = lambda: ContentGenerator(client=mock_claude, as_of=AS_OF)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict:
    """Bearer headers for an authenticated session"""
    return {'Authorization': f'Bearer {create_access_token()}'}


@pytest.fixture
def form_data() -> dict:
    """Investment form as the web client sends it"""
    return {
        'projectName': f'{fake.last_name()} Commons',
        'address': f'{fake.street_address()}, {fake.city()}',
        'investmentType': 'Value-add renovation (flip)',
        'purchasePrice': 1_200_000,
        'totalRaise': 400_000,
        'targetIrr': '18%',
        'holdPeriod': '3 years',
        'description': fake.paragraph(nb_sentences=3),
        'sponsorBio': fake.paragraph(nb_sentences=2),
        'tone': 'Professional',
    }


@pytest.fixture
def pitch_form(form_data) -> PitchFormData:
    return PitchFormData.model_validate(form_data)


@pytest.fixture
def generated_content(pitch_form):
    return FallbackContentGenerator(pitch_form, as_of=AS_OF).generate()


@pytest.fixture
def save_payload(pitch_form, generated_content) -> dict:
    """Body for POST /pitch-decks"""
    return {
        'formData': pitch_form.model_dump(by_alias=True),
        'generatedContent': generated_content.model_dump(by_alias=True, exclude_none=True),
    }
