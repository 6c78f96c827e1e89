"""REPLYDESK — Response Export."""

from pathlib import Path

from app.core.errors import PersistenceError
from app.core.logging import get_logger
from app.storage.base import ResponseStore

logger = get_logger("services.exports")

EXPORT_DIR = "exports"


def export_response(responses: ResponseStore, response_id: int, data_dir: Path) -> str:
    """Write a stored response's text to `exports/response_<id>.txt`.

    Returns the file name. Raises NotFoundError for an unknown id.
    """
    response = responses.get(response_id)
    filename = f"response_{response.id}.txt"
    target = Path(data_dir) / EXPORT_DIR / filename
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(response.ai_response, encoding="utf-8")
    except OSError as e:
        logger.error(f"Export of response {response.id} failed: {e}")
        raise PersistenceError(f"Could not export response: {e}") from e
    logger.info("Response exported", extra={"response_id": response.id})
    return filename
