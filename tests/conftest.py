from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from landing_page_builder.generator import ContentGenerator
from landing_page_builder.models.page import LandingPage
from landing_page_builder.models.profile import BusinessProfile

FIXTURES = Path(__file__).resolve().parent.parent / "data" / "profiles"


def load_fixture(name: str) -> dict[str, Any]:
    return json.loads((FIXTURES / f"{name}.json").read_text(encoding="utf-8"))


def load_profile(name: str) -> BusinessProfile:
    return BusinessProfile.model_validate(load_fixture(name))


@pytest.fixture
def acme() -> BusinessProfile:
    return load_profile("acme")


@pytest.fixture
def bakery() -> BusinessProfile:
    return load_profile("harbor-bakery")


@pytest.fixture
def page(acme: BusinessProfile) -> LandingPage:
    return ContentGenerator().generate_document(acme).page


class FakeCollaborator:
    """Returns canned payloads, or raises the canned error, and records prompts."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.prompts: list[str] = []

    def generate_json(self, prompt: str) -> Any:
        self.prompts.append(prompt)
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
