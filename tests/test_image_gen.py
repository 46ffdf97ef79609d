"""Test first and remaining slide image generation."""

import httpx
import pytest
from google.genai import errors as genai_errors
from google.genai import types

from carousel_test_agent.image_generation_agent.image_gen import (
    IMAGE_GEN_CONFIG,
    generate_first_image,
    generate_remaining_images,
)
from carousel_test_agent.shared.constants import IMAGE_MODEL
from carousel_test_agent.shared.errors import EmptyPromptError, ResponseShapeError, ValidationError
from carousel_test_agent.shared.models import SlideContent, TokenUsage
from conftest import FakeClient, image_response, text_response, usage

SLIDES = [
    SlideContent(slide_number=2, heading="Dogs", explanation="Loyal."),
    SlideContent(slide_number=3, heading="Birds", explanation="Free."),
    SlideContent(slide_number=4, heading="Fish", explanation="Quiet."),
]


@pytest.fixture
def reference_url(store):
    return store.save_image(1, b"reference-png", timestamp_ms=1)


def test_image_config_requests_square_2k_images_only():
    assert IMAGE_GEN_CONFIG.response_modalities == ["IMAGE"]
    assert IMAGE_GEN_CONFIG.image_config.aspect_ratio == "1:1"
    assert IMAGE_GEN_CONFIG.image_config.image_size == "2K"


def test_first_image_saved_and_returned(store):
    client = FakeClient(image_response(data=b"first-png", usage_metadata=usage(10, 1290, 1300)))

    result = generate_first_image(client, store, "Illustrate {heading}: {explanation}", "Cats", "Independent.", 1, 5)

    assert result.slide_number == 1
    assert result.image_url.startswith("/uploads/carousel/test-slide-1-")
    assert store.read_image(result.image_url) == b"first-png"
    assert result.token_usage == TokenUsage(input=10, output=1290, total=1300)

    call = client.calls[0]
    assert call["model"] == IMAGE_MODEL
    assert call["contents"] == "Generate an image: Illustrate Cats: Independent."
    assert call["config"] is IMAGE_GEN_CONFIG


def test_first_image_keeps_prompt_that_asks_for_an_image(store):
    client = FakeClient(image_response())

    generate_first_image(client, store, "Create a poster for {heading}", "Cats", "Independent.", 1, 1)

    assert client.calls[0]["contents"] == "Create a poster for Cats"


def test_first_image_dump_uses_camel_case(store):
    client = FakeClient(image_response())

    payload = generate_first_image(client, store, "image of {heading}", "Cats", "x", 1, 1).model_dump(by_alias=True)

    assert set(payload) == {"imageUrl", "slideNumber", "tokenUsage"}
    assert payload["tokenUsage"] == {"input": 0, "output": 0, "total": 0}


@pytest.mark.parametrize("heading,explanation", [("", "x"), ("Cats", ""), ("  ", "x")])
def test_first_image_requires_heading_and_explanation(store, heading, explanation):
    client = FakeClient()
    with pytest.raises(ValidationError, match="Heading and explanation are required"):
        generate_first_image(client, store, "image", heading, explanation, 1, 1)
    assert client.calls == []


def test_first_image_requires_prompt(store):
    client = FakeClient()
    with pytest.raises(EmptyPromptError):
        generate_first_image(client, store, " ", "Cats", "x", 1, 1)
    assert client.calls == []


def test_first_image_without_image_part_fails(store):
    client = FakeClient(text_response("I only speak text"))
    with pytest.raises(ResponseShapeError, match="No image data found"):
        generate_first_image(client, store, "image of {heading}", "Cats", "x", 1, 1)
    assert list(store.carousel_dir.iterdir()) == []


def test_remaining_images_use_reference_image(store, reference_url):
    client = FakeClient(image_response(data=b"two"), image_response(data=b"three"), image_response(data=b"four"))

    result = generate_remaining_images(client, store, "Same style, {heading}: {explanation}", SLIDES, reference_url)

    assert [r.status for r in result.results] == ["completed"] * 3
    assert [r.slide_number for r in result.results] == [2, 3, 4]
    assert [store.read_image(r.image_url) for r in result.results] == [b"two", b"three", b"four"]

    contents = client.calls[0]["contents"]
    assert contents[0].text == "Generate an image: Same style, Dogs: Loyal."
    assert contents[1].inline_data.data == b"reference-png"
    assert contents[1].inline_data.mime_type == "image/png"
    # the same reference part is reused for every slide
    assert all(call["contents"][1] is contents[1] for call in client.calls)


def test_one_failing_slide_does_not_stop_the_rest(store, reference_url):
    client = FakeClient(
        image_response(data=b"two"),
        types.GenerateContentResponse(candidates=[]),
        image_response(data=b"four"),
    )

    result = generate_remaining_images(client, store, "image of {heading}", SLIDES, reference_url)

    assert len(result.results) == 3
    assert [r.status for r in result.results] == ["completed", "failed", "completed"]
    failed = result.failed[0]
    assert failed.slide_number == 3
    assert failed.image_url is None
    assert failed.error == "No candidates in response"
    urls = [r.image_url for r in result.completed]
    assert len(set(urls)) == 2


def test_api_error_is_recorded_per_slide(store, reference_url):
    api_error = genai_errors.APIError(429, {"error": {"message": "Resource exhausted", "status": "RESOURCE_EXHAUSTED"}})
    client = FakeClient(api_error, image_response(), image_response())

    result = generate_remaining_images(client, store, "image of {heading}", SLIDES, reference_url)

    assert [r.status for r in result.results] == ["failed", "completed", "completed"]
    assert "Resource exhausted" in result.results[0].error


def test_blank_prompt_fails_every_slide_without_calling_api(store, reference_url):
    client = FakeClient()

    result = generate_remaining_images(client, store, "   ", SLIDES, reference_url)

    assert [r.status for r in result.results] == ["failed"] * 3
    assert all("Prompt is required" in r.error for r in result.results)
    assert client.calls == []


def test_remaining_images_accept_slide_dicts(store, reference_url):
    client = FakeClient(image_response())
    slides = [{"slideNumber": 7, "heading": "Owls", "explanation": "Wise."}]

    result = generate_remaining_images(client, store, "image of {heading}", slides, reference_url)

    assert result.results[0].slide_number == 7
    assert result.results[0].status == "completed"


def test_remaining_images_require_slides(store, reference_url):
    with pytest.raises(ValidationError, match="Slides are required"):
        generate_remaining_images(FakeClient(), store, "image", [], reference_url)


def test_remaining_images_require_reference_url(store):
    with pytest.raises(ValidationError, match="First image URL is required"):
        generate_remaining_images(FakeClient(), store, "image", SLIDES, "")


def test_remaining_images_require_existing_reference(store):
    client = FakeClient()
    with pytest.raises(ValidationError, match="Reference image not found"):
        generate_remaining_images(client, store, "image", SLIDES, "/uploads/carousel/missing.png")
    assert client.calls == []


def test_network_error_on_one_slide_does_not_stop_the_rest(store, reference_url):
    client = FakeClient(image_response(data=b"two"), httpx.ConnectError("connection reset"), image_response(data=b"four"))

    result = generate_remaining_images(client, store, "image of {heading}", SLIDES, reference_url)

    assert [r.status for r in result.results] == ["completed", "failed", "completed"]
    assert result.results[1].error == "connection reset"
    assert store.read_image(result.results[2].image_url) == b"four"


def test_unexpected_error_is_recorded_with_its_type_name(store, reference_url):
    client = FakeClient(image_response(), RuntimeError(), image_response())

    result = generate_remaining_images(client, store, "image of {heading}", SLIDES, reference_url)

    assert [r.status for r in result.results] == ["completed", "failed", "completed"]
    assert result.results[1].error == "RuntimeError"
