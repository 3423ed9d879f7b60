"""Backup export and import as a ZIP archive.

Layout: ``manifest.json`` plus one ``<namespace>.json`` file per namespace,
each holding the same JSON documents the store keeps. Import merges through
the repositories' version-aware ``import_entities`` (newer versions win,
frozen projects are never overwritten); audit entries are appended only when
their id is not in the ledger yet.
"""

import io
import json
import logging
import zipfile
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from boatrecords.application.interfaces import PersistenceAdapter
from boatrecords.application.namespaces import ALL_NAMESPACES, AUDIT, BY_NAME, PROJECTS
from boatrecords.application.repositories.audit_repository import AuditRepository
from boatrecords.application.repositories.base import BaseRepository
from boatrecords.application.serialization import from_document, to_documents
from boatrecords.domain.entities import AuditContext, Entity, utc_now
from boatrecords.domain.exceptions import InvalidArchiveError

logger = logging.getLogger(__name__)

EXPORT_FORMAT_VERSION = "1.0.0"
MANIFEST_FILE = "manifest.json"


class ExportManifest(BaseModel):
    version: str
    app_version: str
    exported_at: datetime
    exported_by: str
    counts: dict[str, int] = Field(default_factory=dict)


@dataclass
class ExportBundle:
    manifest: ExportManifest
    records: dict[str, list[Entity]]


@dataclass
class NamespacePreview:
    new: int = 0
    newer: int = 0
    unchanged: int = 0


@dataclass
class ImportPreview:
    manifest: ExportManifest
    is_compatible: bool
    namespaces: dict[str, NamespacePreview] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)


@dataclass
class ImportResult:
    imported: dict[str, int] = field(default_factory=dict)

    @property
    def total(self) -> int:
        return sum(self.imported.values())


def _file_name(namespace_name: str) -> str:
    return f"{namespace_name}.json"


def _major(version: str) -> str:
    return version.split(".", 1)[0]


class DataExportService:
    def __init__(
        self,
        adapter: PersistenceAdapter,
        repositories: Mapping[str, BaseRepository],
        audit_repository: AuditRepository,
        *,
        app_version: str,
    ):
        self._adapter = adapter
        self._repositories = repositories
        self._audit_repository = audit_repository
        self._app_version = app_version

    # ── Export ───────────────────────────────────────────────────────

    async def export_archive(self, context: AuditContext) -> bytes:
        """Snapshot every namespace into a ZIP archive."""
        snapshots: dict[str, list[dict[str, Any]]] = {}
        for namespace in ALL_NAMESPACES:
            snapshots[namespace.name] = to_documents(await self._adapter.get_all(namespace))

        manifest = ExportManifest(
            version=EXPORT_FORMAT_VERSION,
            app_version=self._app_version,
            exported_at=utc_now(),
            exported_by=context.user_id,
            counts={name: len(docs) for name, docs in snapshots.items()},
        )

        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            archive.writestr(MANIFEST_FILE, manifest.model_dump_json(indent=2))
            for name, docs in snapshots.items():
                archive.writestr(_file_name(name), json.dumps(docs, indent=2))

        logger.info("Exported %d record(s)", sum(manifest.counts.values()))
        return buffer.getvalue()

    # ── Import ───────────────────────────────────────────────────────

    def parse_archive(self, data: bytes) -> ExportBundle:
        """Read and validate an archive produced by ``export_archive``.

        Raises:
            InvalidArchiveError: If the archive or its manifest is unreadable.
        """
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as archive:
                names = set(archive.namelist())
                if MANIFEST_FILE not in names:
                    raise InvalidArchiveError("Archive has no manifest.json")
                manifest = ExportManifest.model_validate_json(archive.read(MANIFEST_FILE))
                records: dict[str, list[Entity]] = {}
                for name, namespace in BY_NAME.items():
                    file_name = _file_name(name)
                    if file_name not in names:
                        continue
                    docs = json.loads(archive.read(file_name))
                    if not isinstance(docs, list):
                        raise InvalidArchiveError(
                            f"{file_name} does not hold a list of records"
                        )
                    records[name] = [
                        from_document(namespace.entity_type, doc) for doc in docs
                    ]
        except zipfile.BadZipFile as exc:
            raise InvalidArchiveError(f"Not a ZIP archive: {exc}") from exc
        except (ValidationError, json.JSONDecodeError) as exc:
            raise InvalidArchiveError(f"Malformed archive content: {exc}") from exc
        return ExportBundle(manifest=manifest, records=records)

    async def preview_import(self, bundle: ExportBundle) -> ImportPreview:
        """Classify incoming records against the store without writing."""
        compatible = _major(bundle.manifest.version) == _major(EXPORT_FORMAT_VERSION)
        preview = ImportPreview(manifest=bundle.manifest, is_compatible=compatible)
        if not compatible:
            preview.warnings.append(
                f"Export version {bundle.manifest.version} may not be compatible "
                f"with {EXPORT_FORMAT_VERSION}"
            )

        for name, incoming in bundle.records.items():
            stored = {e.id: e for e in await self._adapter.get_all(BY_NAME[name])}
            counts = NamespacePreview()
            protected = 0
            for entity in incoming:
                existing = stored.get(entity.id)
                if existing is None:
                    counts.new += 1
                elif entity.version <= existing.version:
                    counts.unchanged += 1
                    continue
                elif name == PROJECTS.name and existing.configuration.is_frozen:
                    counts.unchanged += 1
                    protected += 1
                    continue
                else:
                    counts.newer += 1
                stored[entity.id] = entity
            if protected:
                preview.warnings.append(
                    f"{protected} newer project record(s) target frozen projects "
                    "and will be skipped"
                )
            preview.namespaces[name] = counts
        return preview

    async def import_archive(self, data: bytes, context: AuditContext) -> ImportResult:
        bundle = self.parse_archive(data)
        if _major(bundle.manifest.version) != _major(EXPORT_FORMAT_VERSION):
            raise InvalidArchiveError(
                f"Unsupported export version {bundle.manifest.version}"
            )
        return await self.import_bundle(bundle, context)

    async def import_bundle(self, bundle: ExportBundle, context: AuditContext) -> ImportResult:
        result = ImportResult()
        for name, incoming in bundle.records.items():
            if name == AUDIT.name:
                result.imported[name] = await self._audit_repository.import_entries(incoming)
                continue
            repository = self._repositories.get(name)
            if repository is None:
                logger.warning("No repository for namespace '%s'; skipped", name)
                continue
            result.imported[name] = await repository.import_entities(incoming, context)

        logger.info("Imported %d record(s) from archive", result.total)
        return result
