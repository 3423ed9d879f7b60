from .audit_service import AuditService
from .data_export_service import DataExportService
from .library_seed_service import LibrarySeedService

__all__ = [
    "AuditService",
    "DataExportService",
    "LibrarySeedService",
]
