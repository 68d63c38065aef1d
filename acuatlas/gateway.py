# acuatlas/gateway.py
"""
AI Gateways
===========
Two pass-through calls to the remote generative service:

  * query_by_symptom()  - free-text symptom → explanation + 3-5 points
                          (chat completion with a JSON-schema reply)
  * generate_diagram()  - one point → anatomical illustration as data URI
                          (images endpoint, first inline b64 payload wins)

Both are single-shot: no retries, no model fallback chain. Every failure is
surfaced as RemoteQueryError / DiagramUnavailableError so the controller has
exactly one thing to catch per call.

The reply normalization (normalize_suggestion) is kept apart from the
transport call so the default-filling policy can be tested on its own.
"""
import json
import logging
import os
import re

from dotenv import load_dotenv
from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from acuatlas.models import Point, SearchOutcome, SuggestedPoint, SuggestionReply

load_dotenv()

logger = logging.getLogger(__name__)

# The credential is not validated here; a missing key fails at the remote end.
client = OpenAI(
    base_url=os.getenv("LLM_HUB_URL") or None,
    api_key=os.getenv("LLM_API_KEY") or "",
    timeout=float(os.getenv("LLM_TIMEOUT", "60")),
)

TEXT_MODEL  = os.getenv("LLM_MODEL", "gpt-4o-mini")
IMAGE_MODEL = os.getenv("IMAGE_MODEL", "gpt-image-1")
IMAGE_SIZE  = os.getenv("IMAGE_SIZE", "1024x1024")


class RemoteQueryError(Exception):
    """Text service unreachable, errored, or replied with a non-conforming shape."""


class DiagramUnavailableError(Exception):
    """Image service unreachable, errored, or returned no inline image."""


# ════════════════════════════════════════════════════════════════════════════
#  Defaults for fields the model leaves out
# ════════════════════════════════════════════════════════════════════════════
DEFAULT_ID            = "N/A"
DEFAULT_NAME          = "Desconocido"
UNKNOWN_MERIDIAN      = "UNK"
AI_MERIDIAN_NAME      = "Sugerido por IA"
DEFAULT_LOCATION      = "Consultar manual"
DEFAULT_APPLICATIONS  = "Tratamiento sintomático."
DEFAULT_BENEFITS      = "Punto relevante para la consulta."
DEFAULT_TECHNIQUES    = "Inserción según técnica estándar."
DEFAULT_OBSERVATIONS  = "Sin observaciones adicionales."
AI_CATEGORY           = "Recomendado"


def meridian_from_id(point_id: str | None) -> str:
    """'LI4' → 'LI'. Absent id (or an all-digit one) → 'UNK'."""
    if not point_id:
        return UNKNOWN_MERIDIAN
    return re.sub(r"[0-9]", "", point_id) or UNKNOWN_MERIDIAN


def normalize_suggestion(raw: SuggestedPoint) -> Point:
    return Point(
        id=raw.id or DEFAULT_ID,
        name=raw.name or DEFAULT_NAME,
        pinyin=raw.pinyin or "",
        meridian=meridian_from_id(raw.id),
        meridian_name=AI_MERIDIAN_NAME,
        location=raw.location or DEFAULT_LOCATION,
        indications=tuple(raw.indications or ()),
        contraindications=tuple(raw.contraindications or ()),
        applications=raw.applications or DEFAULT_APPLICATIONS,
        benefits=raw.benefits or DEFAULT_BENEFITS,
        techniques=raw.techniques or DEFAULT_TECHNIQUES,
        observations=raw.observations or DEFAULT_OBSERVATIONS,
        category=AI_CATEGORY,
    )


# ════════════════════════════════════════════════════════════════════════════
#  QUERY - symptom → suggested points
# ════════════════════════════════════════════════════════════════════════════
QUERY_SYSTEM = "Actúa como un experto Maestro en Medicina Tradicional China."

_STR = {"type": "string"}
_STR_LIST = {"type": "array", "items": {"type": "string"}}

SUGGESTION_SCHEMA = {
    "type": "object",
    "properties": {
        "explanation": {
            "type": "string",
            "description": "Breve diagnóstico y razonamiento según la MTC.",
        },
        "suggestedPoints": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Código del punto (ej. LI4, ST36)"},
                    "name": _STR,
                    "pinyin": _STR,
                    "location": _STR,
                    "indications": _STR_LIST,
                    "contraindications": _STR_LIST,
                    "applications": _STR,
                    "benefits": _STR,
                    "techniques": _STR,
                    "observations": _STR,
                },
                "required": ["id", "name", "location", "benefits", "techniques"],
            },
        },
    },
    "required": ["explanation", "suggestedPoints"],
}


def build_query_prompt(query: str) -> str:
    return (
        f'El usuario consulta: "{query}".\n'
        "Identifica los 3-5 puntos de acupuntura más efectivos para este caso.\n"
        "Devuelve la respuesta en formato JSON con una explicación terapéutica breve "
        'y una lista de puntos con sus nombres (ID como "LI4"), nombre común, '
        "localización, indicaciones (lista), contraindicaciones (lista), aplicaciones, "
        "beneficios energéticos, técnicas y observaciones."
    )


def parse_reply(text: str | None) -> SuggestionReply:
    """Raw reply text → validated reply. Raises RemoteQueryError."""
    if not text or not text.strip():
        raise RemoteQueryError("empty reply from text model")
    text = text.strip()
    if text.startswith("```"):
        m = re.search(r'```(?:json)?\s*([\s\S]*?)\s*```', text)
        if m:
            text = m.group(1).strip()
    try:
        return SuggestionReply.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise RemoteQueryError(f"reply is not JSON: {e}") from e
    except ValidationError as e:
        raise RemoteQueryError(f"reply does not match schema: {e.error_count()} error(s)") from e


def query_by_symptom(query: str, llm: OpenAI | None = None) -> SearchOutcome:
    """
    One chat completion with a JSON-schema response format, then default
    filling. All-or-nothing: any failure raises RemoteQueryError.
    """
    llm = llm or client
    messages = [
        {"role": "system", "content": QUERY_SYSTEM},
        {"role": "user", "content": build_query_prompt(query)},
    ]
    try:
        resp = llm.chat.completions.create(
            model=TEXT_MODEL,
            messages=messages,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "acupoint_suggestions", "schema": SUGGESTION_SCHEMA},
            },
            temperature=0.2,
        )
    except OpenAIError as e:
        logger.warning("text model %s failed: %s", TEXT_MODEL, e)
        raise RemoteQueryError(str(e)) from e

    choices = getattr(resp, "choices", None) or []
    if not choices:
        raise RemoteQueryError("text model returned no choices")
    reply = parse_reply(choices[0].message.content)

    points = [normalize_suggestion(p) for p in reply.suggested_points]
    logger.info("query %r → %d point(s) via %s", query, len(points), TEXT_MODEL)
    return SearchOutcome(explanation=reply.explanation, points=points)


# ════════════════════════════════════════════════════════════════════════════
#  DIAGRAM - point → illustration
# ════════════════════════════════════════════════════════════════════════════
def build_diagram_prompt(point: Point) -> str:
    return (
        "A professional medical anatomical illustration showing the exact location "
        f"of the acupuncture point {point.id} ({point.name}) on the human body.\n"
        f"Location details: {point.location}.\n"
        f"Context: The point belongs to the {point.meridian_name} meridian.\n"
        "Style: Professional medical atlas illustration (like Netter or Gray's), clean white "
        "background, detailed anatomy including muscles, tendons, and bones for landmark reference.\n"
        f"A clear large red dot marks the point {point.id}. Precise and educational."
    )


def generate_diagram(point: Point, llm: OpenAI | None = None) -> str:
    """
    Returns the point's fixed image reference untouched when it has one,
    otherwise a `data:image/png;base64,...` URI from the image model.
    """
    if point.static_image:
        return point.static_image

    llm = llm or client
    try:
        resp = llm.images.generate(
            model=IMAGE_MODEL,
            prompt=build_diagram_prompt(point),
            size=IMAGE_SIZE,
            n=1,
        )
    except OpenAIError as e:
        logger.warning("image model %s failed for %s: %s", IMAGE_MODEL, point.id, e)
        raise DiagramUnavailableError(str(e)) from e

    for item in getattr(resp, "data", None) or []:
        payload = getattr(item, "b64_json", None)
        if payload:
            return f"data:image/png;base64,{payload}"

    logger.warning("image model %s returned no inline image for %s", IMAGE_MODEL, point.id)
    raise DiagramUnavailableError(f"no image data received for {point.id}")
