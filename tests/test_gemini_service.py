"""Tests for the Gemini REST service."""

import json

import httpx
import pytest

from recipe_creator.services.gemini_service import GeminiService
from recipe_creator.utils.exceptions import ConfigurationError, GeminiError, RecipeParseError

pytestmark = pytest.mark.anyio

FENCED_RECIPE = '```json\n{"title":"T","ingredients":["a"],"instructions":["b"]}\n```'


async def test_request_matches_generate_content_contract(make_gemini_service, gemini_reply, gemini_calls):
    service = make_gemini_service(gemini_reply(FENCED_RECIPE))

    await service.generate_recipe(["chicken", "rice", "garlic"])

    assert len(gemini_calls) == 1
    request = gemini_calls[0]
    assert request.method == "POST"
    assert request.url.host == "generativelanguage.googleapis.com"
    assert request.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert request.url.params["key"] == "test-gemini-key"

    body = json.loads(request.content)
    assert set(body) == {"contents", "generationConfig", "safetySettings"}
    assert len(body["contents"]) == 1
    assert len(body["contents"][0]["parts"]) == 1
    assert body["generationConfig"] == {
        "temperature": 0.7,
        "topK": 40,
        "topP": 0.95,
        "maxOutputTokens": 500,
    }
    assert body["safetySettings"] == [
        {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
        {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    ]

    prompt = body["contents"][0]["parts"][0]["text"]
    assert "chicken, rice, garlic" in prompt
    for key in ("title", "description", "prep_time", "cook_time", "servings", "ingredients", "instructions"):
        assert f'"{key}"' in prompt
    assert "ONLY a valid JSON object" in prompt
    assert "no markdown" in prompt


async def test_fenced_json_is_parsed(make_gemini_service, gemini_reply):
    service = make_gemini_service(gemini_reply(FENCED_RECIPE))

    recipe = await service.generate_recipe(["a"])

    assert recipe.model_dump(exclude_none=True) == {"title": "T", "ingredients": ["a"], "instructions": ["b"]}


async def test_optional_and_extra_fields_pass_through(make_gemini_service, gemini_reply):
    text = json.dumps(
        {
            "title": "Fried Rice",
            "description": "Quick and tasty.",
            "prep_time": "5 minutes",
            "cook_time": "10 minutes",
            "servings": 2,
            "ingredients": ["1 cup rice"],
            "instructions": ["Fry the rice."],
            "cuisine": "Chinese",
        }
    )
    service = make_gemini_service(gemini_reply(text))

    recipe = await service.generate_recipe(["rice"])

    assert recipe.servings == 2
    assert recipe.prep_time == "5 minutes"
    assert recipe.model_dump()["cuisine"] == "Chinese"


async def test_missing_api_key_makes_no_request(make_gemini_service, gemini_reply, gemini_calls, unconfigured_settings):
    service = make_gemini_service(gemini_reply(FENCED_RECIPE), settings=unconfigured_settings)

    with pytest.raises(ConfigurationError, match="API key is missing"):
        await service.generate_recipe(["a"])

    assert gemini_calls == []


@pytest.mark.parametrize(
    "status_code,message",
    [
        (400, "Invalid API key or request."),
        (403, "API key access denied."),
        (429, "Rate limit exceeded."),
    ],
)
async def test_known_status_codes(make_gemini_service, status_code, message):
    response = httpx.Response(status_code, json={"error": {"code": status_code, "message": "provider text"}})
    service = make_gemini_service(response)

    with pytest.raises(GeminiError) as exc_info:
        await service.generate_recipe(["a"])

    assert str(exc_info.value) == message
    assert exc_info.value.status_code == status_code


async def test_other_status_includes_provider_message(make_gemini_service):
    response = httpx.Response(503, json={"error": {"code": 503, "message": "The model is overloaded."}})
    service = make_gemini_service(response)

    with pytest.raises(GeminiError, match=r"^API Error: 503 - The model is overloaded\.$"):
        await service.generate_recipe(["a"])


async def test_other_status_without_body(make_gemini_service):
    service = make_gemini_service(httpx.Response(500, text="<html>oops</html>"))

    with pytest.raises(GeminiError, match=r"^API Error: 500 - Unknown error$"):
        await service.generate_recipe(["a"])


async def test_transport_failure(make_gemini_service):
    service = make_gemini_service(exc=httpx.ConnectError("connection refused"))

    with pytest.raises(GeminiError, match="Failed to reach the Gemini API"):
        await service.generate_recipe(["a"])


@pytest.mark.parametrize(
    "text",
    [
        '{"title": "T", "ingredients": ["a"]}',
        '{"title": "", "ingredients": ["a"], "instructions": ["b"]}',
        '{"title": "T", "ingredients": ["a"], "instructions": false}',
        '{"title": 0, "ingredients": ["a"], "instructions": ["b"]}',
        '{"title": "T", "ingredients": ["a"], "instructions": null}',
        '["not", "an", "object"]',
        '{"title": "T", "ingredients": ["a"], "instructions": ["b"]',
        "Here is your recipe!",
    ],
)
async def test_incomplete_or_malformed_recipe(make_gemini_service, gemini_reply, text):
    service = make_gemini_service(gemini_reply(text))

    with pytest.raises(RecipeParseError, match="Failed to parse recipe from AI response."):
        await service.generate_recipe(["a"])


async def test_response_without_candidates(make_gemini_service):
    service = make_gemini_service(httpx.Response(200, json={"promptFeedback": {"blockReason": "SAFETY"}}))

    with pytest.raises(RecipeParseError):
        await service.generate_recipe(["a"])


async def test_build_prompt_lists_ingredients_in_order():
    prompt = GeminiService.build_prompt(["eggs", "tomatoes", "feta cheese"])
    assert "these ingredients: eggs, tomatoes, feta cheese." in prompt


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "T", "ingredients": [{"item": "egg", "amount": "2"}], "instructions": ["b"]},
        {"title": "T", "ingredients": [], "instructions": []},
        {"title": "T", "description": ["line one", "line two"], "ingredients": ["a"], "instructions": ["b"]},
        {"title": "T", "prep_time": {"min": 5}, "ingredients": ["a"], "instructions": ["b"]},
    ],
)
async def test_loosely_typed_recipe_passes_through_unmodified(make_gemini_service, gemini_reply, payload):
    service = make_gemini_service(gemini_reply(json.dumps(payload)))

    recipe = await service.generate_recipe(["a"])

    assert recipe.model_dump(exclude_none=True) == payload
