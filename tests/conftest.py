import sys
from pathlib import Path

import pytest
from google.genai import types

# Ensure project root is on sys.path so `import carousel_test_agent` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from carousel_test_agent.shared.storage import ImageStore


def usage(prompt=0, candidates=0, total=0):
    return types.GenerateContentResponseUsageMetadata(
        prompt_token_count=prompt,
        candidates_token_count=candidates,
        total_token_count=total,
    )


def text_response(text, usage_metadata=None):
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=[types.Part(text=text)]))],
        usage_metadata=usage_metadata,
    )


def image_response(data=b"\x89PNG fake image", mime_type="image/png", usage_metadata=None, parts_before=()):
    parts = list(parts_before) + [types.Part(inline_data=types.Blob(mime_type=mime_type, data=data))]
    return types.GenerateContentResponse(
        candidates=[types.Candidate(content=types.Content(role="model", parts=parts))],
        usage_metadata=usage_metadata,
    )


class FakeModels:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeClient:
    """Stands in for genai.Client; returns queued responses in order."""

    def __init__(self, *responses):
        self.models = FakeModels(responses)

    @property
    def calls(self):
        return self.models.calls


class FakeState(dict):
    def to_dict(self):
        return dict(self)


class FakeToolContext:
    def __init__(self, **state):
        self.state = FakeState(state)


@pytest.fixture
def store(tmp_path):
    return ImageStore(tmp_path / "uploads")
