"""
Unit Tests for pitch and pitch deck schemas
"""
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.schemas.pitch import PitchFormData, GeneratedContent
from app.schemas.pitch_deck import SavePitchDeckOptions, PitchDeckOut


BASE_FORM = {
    "projectName": "Elm Court",
    "address": "9 Elm Ct, Denver",
    "investmentType": "Rental",
    "purchasePrice": 500000,
    "totalRaise": 150000,
}


class TestPitchFormData:

    def test_camel_case_input(self):
        form = PitchFormData.model_validate(BASE_FORM)

        assert form.project_name == "Elm Court"
        assert form.total_raise == 150000
        assert form.tone == "Professional"
        assert form.location == "Denver"

    def test_equity_raise_alias(self):
        data = {k: v for k, v in BASE_FORM.items() if k != "totalRaise"}
        data["equityRaise"] = 90000

        assert PitchFormData.model_validate(data).total_raise == 90000

    def test_serializes_camel_case(self):
        dumped = PitchFormData.model_validate(BASE_FORM).model_dump(by_alias=True)

        assert dumped["projectName"] == "Elm Court"
        assert dumped["totalRaise"] == 150000
        assert "total_raise" not in dumped

    def test_empty_tone_defaults(self):
        form = PitchFormData.model_validate({**BASE_FORM, "tone": ""})

        assert form.tone == "Professional"

    @pytest.mark.parametrize("field", ["projectName", "address", "investmentType", "purchasePrice"])
    def test_required_fields(self, field):
        data = {k: v for k, v in BASE_FORM.items() if k != field}

        with pytest.raises(ValidationError):
            PitchFormData.model_validate(data)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            PitchFormData.model_validate({**BASE_FORM, "purchasePrice": -1})

    def test_seed_is_stable_and_case_insensitive(self):
        first = PitchFormData.model_validate(BASE_FORM)
        second = PitchFormData.model_validate({**BASE_FORM, "projectName": "ELM COURT "})
        other = PitchFormData.model_validate({**BASE_FORM, "purchasePrice": 500001})

        assert first.seed() == second.seed()
        assert first.seed() != other.seed()

    def test_seed_ignores_presentation_fields(self):
        first = PitchFormData.model_validate(BASE_FORM)
        second = PitchFormData.model_validate({**BASE_FORM, "tone": "Persuasive", "description": "New"})

        assert first.seed() == second.seed()


class TestGeneratedContent:

    def test_round_trip_from_client_payload(self):
        content = GeneratedContent.model_validate({
            "executiveSummary": "a",
            "investmentThesis": "b",
            "riskFactors": ["c"],
            "locationOverview": "d",
            "locationSnapshot": "e",
            "sponsorBio": "f",
            "comparableProperties": [{"address": "1 A St", "price": "$1", "distance": "1 mile", "note": "n"}],
            "marketTrends": {"priceTrends": [{"year": "2024", "medianPrice": 1, "rentGrowth": 2.0, "capRate": 5.0}],
                             "summary": "s"},
        })

        assert content.deal_metrics is None
        assert content.market_trends.price_trends[0].cap_rate == 5.0


class TestSaveOptions:

    def test_defaults(self):
        options = SavePitchDeckOptions()

        assert options.is_public is True
        assert options.password is None
        assert options.expires_in is None

    def test_camel_case(self):
        options = SavePitchDeckOptions.model_validate({"expiresIn": 7, "isPublic": False})

        assert options.expires_in == 7
        assert options.is_public is False

    def test_non_positive_expires_in_is_accepted(self):
        assert SavePitchDeckOptions.model_validate({"expiresIn": 0}).expires_in == 0
        assert SavePitchDeckOptions.model_validate({"expiresIn": -3}).expires_in == -3


def test_pitch_deck_out_serializes_id():
    deck = PitchDeckOut.model_validate({
        "_id": "65f0c0ffee",
        "shareId": "Abc123",
        "createdAt": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "isPublic": True,
        "formData": {},
        "generatedContent": {},
        "metadata": {"viewCount": 3, "creatorIp": "10.0.0.1"},
    })

    dumped = deck.model_dump(by_alias=True)
    assert dumped["_id"] == "65f0c0ffee"
    assert dumped["metadata"] == {"viewCount": 3, "lastViewed": None}
