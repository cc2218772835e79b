from .orchestrator import CollageOrchestrator, validate_request

__all__ = ["CollageOrchestrator", "validate_request"]
