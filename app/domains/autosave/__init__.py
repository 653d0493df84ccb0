from app.domains.autosave.entities import DraftSnapshot, SeoMeta, Identity
from app.domains.autosave.transport import DraftTransport, DraftSaveError
from app.domains.autosave.coordinator import AutosaveCoordinator, SaveStatus

__all__ = [
    "DraftSnapshot", "SeoMeta", "Identity",
    "DraftTransport", "DraftSaveError",
    "AutosaveCoordinator", "SaveStatus"
]
