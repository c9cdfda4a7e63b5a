import json

import pytest

from conftest import FakeCollaborator
from landing_page_builder.ai_strategy import AIStrategy
from landing_page_builder.errors import UpstreamParseError
from landing_page_builder.models.section import SectionVariant


def test_page_prompt_describes_profile_and_shape(bakery):
    prompt = AIStrategy(FakeCollaborator()).page_prompt(bakery)

    assert 'called "Harbor Bakery"' in prompt
    assert "The tone should be friendly." in prompt
    assert "Fresh bread, Local flour" in prompt
    assert '"ctaText"' in prompt
    for index, variant in enumerate(["hero", "about", "features", "testimonials", "cta"], start=1):
        assert f"{index}. " in prompt
        assert f'"variant": "{variant}"' in prompt


def test_page_prompt_defaults_missing_audience(acme):
    prompt = AIStrategy(FakeCollaborator()).page_prompt(acme)

    assert "general customers" in prompt
    assert "Business vision: Not specified." in prompt


def test_section_prompt_carries_hint(acme):
    strategy = AIStrategy(FakeCollaborator())

    with_hint = strategy.section_prompt(SectionVariant.pricing, acme, "Mention the free trial")
    without_hint = strategy.section_prompt(SectionVariant.pricing, acme)

    assert "Additional instructions: Mention the free trial" in with_hint
    assert "Additional instructions" not in without_hint
    assert "Create a pricing section" in with_hint


def test_build_section_accepts_type_key_and_content_title(acme):
    collaborator = FakeCollaborator(
        {
            "type": "about",
            "content": {"title": "Our Story", "content": "Founded by engineers."},
        }
    )

    section = AIStrategy(collaborator).build_section(SectionVariant.about, acme)

    assert section.variant == "about"
    assert section.title == "Our Story"
    assert section.content.content == "Founded by engineers."
    assert section.id


def test_build_section_parses_nested_camel_case(acme):
    payload = {
        "variant": "pricing",
        "content": {
            "title": "Plans",
            "tiers": [
                {
                    "name": "Team",
                    "price": "$10",
                    "description": "For teams",
                    "features": ["SSO"],
                    "ctaText": "Buy",
                    "popular": True,
                }
            ],
        },
    }

    section = AIStrategy(FakeCollaborator(payload)).build_section(SectionVariant.pricing, acme)

    tier = section.content.tiers[0]
    assert (tier.name, tier.cta_text, tier.popular) == ("Team", "Buy", True)


def test_build_section_rejects_other_variant(acme):
    collaborator = FakeCollaborator(
        {"variant": "about", "content": {"title": "About", "content": "text"}}
    )

    with pytest.raises(UpstreamParseError):
        AIStrategy(collaborator).build_section(SectionVariant.hero, acme)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        "hero",
        {"variant": "hero"},
        {"content": {"headline": "x"}},
        {"variant": "banner", "content": {"title": "x"}},
        {"variant": "hero", "content": {"headline": "x"}},
    ],
)
def test_build_section_rejects_malformed_payload(acme, payload):
    with pytest.raises(UpstreamParseError):
        AIStrategy(FakeCollaborator(payload)).build_section(SectionVariant.hero, acme)


@pytest.mark.parametrize("payload", [[], {"sections": []}, {"sections": "hero"}, None])
def test_build_sections_requires_sections_list(acme, payload):
    with pytest.raises(UpstreamParseError):
        AIStrategy(FakeCollaborator(payload)).build_sections(acme)


def test_prompt_shape_is_valid_json(acme):
    prompt = AIStrategy(FakeCollaborator()).section_prompt(SectionVariant.custom, acme)
    shape = json.loads(prompt[prompt.index("{"):])

    assert shape["variant"] == "custom"
    assert shape["content"]["layout"] == "text-only"
