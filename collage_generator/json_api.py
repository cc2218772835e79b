from typing import Optional

from .config import load_config
from .errors import ValidationError, classify_error
from .image_io import image_bytes_to_data_url
from .log import log
from .models import CollageRequest, CollageResult
from .services.orchestrator import CollageOrchestrator


def result_to_dict(result: CollageResult, include_image: bool = True) -> dict:
    data = {
        "processedImages": result.processed_count,
        "failedImages": result.failed_count,
        "failedImageErrors": [{"index": f.index, "error": f.error} for f in result.failures],
    }
    if include_image:
        data["imageUrl"] = image_bytes_to_data_url(result.image_bytes, result.mime_type)
    return {"success": True, "data": data}


def handle_json_request(req: dict, orchestrator: Optional[CollageOrchestrator] = None) -> dict:
    """Generate a collage from the caller's JSON payload.

    Returns {"success": True, "data": {...}} or {"success": False, "message": ...}.
    """
    if not isinstance(req, dict):
        return {"success": False, "message": "request body must be an object"}
    if orchestrator is None:
        orchestrator = CollageOrchestrator(settings=load_config(), quiet=True)
    settings = orchestrator.settings

    try:
        request = CollageRequest.from_dict(req, settings.default_width, settings.default_height)
        result = orchestrator.generate(request)
    except ValidationError as e:
        return {"success": False, "message": str(e)}
    except Exception as e:
        log(f"Collage generation error: {e}", orchestrator.quiet)
        return {"success": False, "message": classify_error(e)}
    return result_to_dict(result)
