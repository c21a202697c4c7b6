"""Tests for gateway prompt templates."""

from trip_planner.gateway.prompts import (
    BANNER_PROMPT,
    TEXT_TRANSLATION_PROMPT,
    render_template,
)


def test_render_template():
    prompt = render_template(BANNER_PROMPT, destination="Hokkaido")
    assert "Hokkaido" in prompt
    assert "{destination}" not in prompt


def test_render_template_leaves_unknown_vars():
    prompt = render_template(TEXT_TRANSLATION_PROMPT, text="Hola", target="English")
    assert '"Hola"' in prompt
    assert "{source}" in prompt
