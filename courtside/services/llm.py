import logging

from openai import AsyncOpenAI

from courtside.config import settings
from courtside.models import ModelResponse

logger = logging.getLogger(__name__)

_client: AsyncOpenAI | None = None


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        _client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY)
    return _client


def _grounding_chunks(resp) -> list[dict]:
    """Flatten the message annotations of a response into citation chunks.

    URL citations become ``{"web": {"title", "uri"}}``; any other annotation
    kind is kept as an empty chunk so callers can tell it carried no web
    reference.
    """
    chunks: list[dict] = []
    for item in getattr(resp, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for ann in getattr(part, "annotations", None) or []:
                if getattr(ann, "type", None) == "url_citation":
                    chunks.append({"web": {"title": ann.title, "uri": ann.url}})
                else:
                    chunks.append({})
    return chunks


async def grounded_completion(
    prompt: str,
    instructions: str | None = None,
    model: str | None = None,
) -> ModelResponse:
    """Run one web-search-grounded model call and return its text and citations."""
    client = _get_client()
    resp = await client.responses.create(
        model=model or settings.ANALYSIS_MODEL,
        input=prompt,
        instructions=instructions,
        tools=[{"type": settings.WEB_SEARCH_TOOL}],
    )
    chunks = _grounding_chunks(resp)
    logger.debug("Model %s returned %d grounding chunks", model, len(chunks))
    return {"text": resp.output_text or "", "grounding_chunks": chunks}
