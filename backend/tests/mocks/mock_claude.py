"""
Mock Claude Client for Testing
Provides mock responses without calling the actual API
"""
from typing import Optional, Dict, Any
import json

from app.core.exceptions import AIServiceError


class MockClaudeClient:
    """Mock Claude client that returns a predefined response"""

    def __init__(self, response: Optional[str] = None, error: Optional[Exception] = None):
        self.call_count = 0
        self.last_prompt = None
        self.last_system = None
        self.response = response if response is not None else self.default_response()
        self.error = error

    def set_response(self, response: Any):
        """Set the response text; dicts are serialized to JSON"""
        self.response = response if isinstance(response, str) else json.dumps(response)

    def fail_with(self, error: Exception):
        self.error = error

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None
    ) -> Dict[str, Any]:
        """Mock generate method"""
        self.call_count += 1
        self.last_prompt = prompt
        self.last_system = system_prompt

        if self.error is not None:
            raise self.error

        return {
            "content": self.response,
            "model": "mock-claude",
            "input_tokens": len(prompt.split()),
            "output_tokens": len(self.response.split()),
            "total_tokens": len(prompt.split()) + len(self.response.split()),
            "stop_reason": "end_turn",
            "id": f"msg_mock_{self.call_count}",
        }

    @staticmethod
    def default_response() -> str:
        """A complete, well-formed deck response"""
        return json.dumps({
            "executiveSummary": "**Mock Tower** is a *compelling* value-add opportunity.",
            "investmentThesis": "- **Strong demand** in a supply-constrained market",
            "locationOverview": "The area has **excellent** transit access.",
            "locationSnapshot": "- **Population growth:** 3.1% annually",
            "enhancedSponsorBio": "**20 years** of multifamily experience.",
            "riskFactors": [
                "Construction delays",
                "Interest rate increases",
                "Lease-up slower than projected",
                "Local regulatory changes",
                "New competing supply",
            ],
            "comparableProperties": [
                {"address": "12 Elm Street", "price": "$1,100,000", "distance": "0.4 miles", "note": "Renovated 2021"},
                {"address": "88 Birch Lane", "price": "$950,000", "distance": "0.9 miles", "note": "Similar unit mix"},
                {"address": "5 Cedar Court", "price": "$1,250,000", "distance": "1.2 miles", "note": "Newer build"},
            ],
        })


class FailingClaudeClient(MockClaudeClient):
    """Claude client whose every call fails"""

    def __init__(self, message: str = "Claude request failed: APIConnectionError"):
        super().__init__(error=AIServiceError(message))
