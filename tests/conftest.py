"""
Pytest configuration and fixtures

Fake SDK clients mimic the shapes the gateways read from the openai SDK:
`client.chat.completions.create(...).choices[0].message.content` and
`client.images.generate(...).data[i].b64_json`.
"""
import json
import os
from types import SimpleNamespace

import pytest

# Never reach a real endpoint from tests
os.environ.setdefault("LLM_API_KEY", "test-key")
os.environ.setdefault("LLM_HUB_URL", "http://127.0.0.1:9/v1")

from acuatlas.models import Point


class FakeChat:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []
        self.completions = self

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        msg = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=msg)])


class FakeImages:
    def __init__(self, data=None, error=None):
        self.data = data or []
        self.error = error
        self.calls = []

    def generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(data=self.data)


def fake_client(content=None, image_data=None, error=None):
    return SimpleNamespace(
        chat=FakeChat(content=content, error=error),
        images=FakeImages(data=image_data, error=error),
    )


@pytest.fixture
def make_client():
    return fake_client


@pytest.fixture
def cough_reply():
    """A well-formed reply for the query 'tos'."""
    return json.dumps({
        "explanation": "La tos refleja un fallo del descenso del Qi del pulmón.",
        "suggestedPoints": [
            {"id": "LU7", "name": "Lieque", "location": "1.5 cun sobre la muñeca",
             "benefits": "Libera el exterior", "techniques": "Oblicua 0.3 cun",
             "indications": ["Tos", "Cefalea"]},
            {"id": "LU5", "name": "Chize", "location": "Pliegue del codo",
             "benefits": "Transforma la flema", "techniques": "Perpendicular 1 cun"},
            {"id": "CV17", "name": "Danzhong", "location": "Centro del esternón",
             "benefits": "Abre el tórax", "techniques": "Subcutánea"},
        ],
    }, ensure_ascii=False)


@pytest.fixture
def ai_point():
    return Point(
        id="ST36", name="Zusanli", meridian="ST", meridian_name="Sugerido por IA",
        location="3 cun bajo ST35", applications="a", benefits="b",
        techniques="c", observations="d", category="Recomendado",
    )
