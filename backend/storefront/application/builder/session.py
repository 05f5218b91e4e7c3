import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Optional

from storefront.domain import transforms
from storefront.domain.deletion import DeletionGate
from storefront.domain.document import Document
from storefront.domain.exceptions import ConflictError, NotFoundError, ValidationError
from storefront.domain.history import EditHistory
from storefront.domain.sections import TEMPLATES, is_known_section_type
from storefront.domain.theme import matching_preset, patch_theme, preset_theme
from storefront.gateways.base import PersistenceGateway, SessionContext

logger = logging.getLogger(__name__)


class BuilderSession:
    """
    One tenant user's storefront editing session.

    Structural edits commit a history step immediately. Field edits only
    change the live document and are committed together by
    `commit_pending()`, which also runs before undo, redo and any save.
    """

    def __init__(self, context: SessionContext, gateway: PersistenceGateway):
        self.context = context
        self.gateway = gateway

        self.document = Document()
        self.history = EditHistory(self.document)
        self.deletion = DeletionGate()

        self.selected_section_id: Optional[str] = None
        self.selected_theme_id: Optional[str] = None
        self.store_exists = False
        self.dirty = False

        self._saving = threading.Lock()

    # ------------------------
    # Loading
    # ------------------------
    def load(self) -> Document:
        """Replace the session state with the stored document; not undoable."""
        try:
            document = self.gateway.load_document()
            self.store_exists = True
        except NotFoundError:
            logger.info("No storefront yet for tenant %s", self.context.tenant_id)
            document = Document()
            self.store_exists = False

        self.document = document
        self.history.reset(document)
        self.deletion.cancel()
        self.selected_section_id = None
        self.selected_theme_id = matching_preset(document.theme)
        self.dirty = False
        return document

    # ------------------------
    # History
    # ------------------------
    def _apply(self, document: Document) -> bool:
        if document is self.document and not self.dirty:
            return False

        self.document = document
        self.history.commit(document)
        self.dirty = False
        return True

    def commit_pending(self) -> bool:
        if not self.dirty:
            return False

        self.history.commit(self.document)
        self.dirty = False
        return True

    def undo(self) -> Document:
        self.commit_pending()
        self.document = self.history.undo()
        self._sync_selection()
        return self.document

    def redo(self) -> Document:
        self.commit_pending()
        self.document = self.history.redo()
        self._sync_selection()
        return self.document

    def _sync_selection(self) -> None:
        self.selected_theme_id = matching_preset(self.document.theme)
        if self.selected_section_id and self.document.index_of(self.selected_section_id) is None:
            self.selected_section_id = None

    # ------------------------
    # Sections
    # ------------------------
    def _require_section(self, section_id: str) -> None:
        if self.document.index_of(section_id) is None:
            raise NotFoundError(f"Section {section_id} not found", field="section_id")

    def select(self, section_id: Optional[str]) -> None:
        if section_id is not None:
            self._require_section(section_id)
        self.selected_section_id = section_id

    def add_section(self, section_type: str) -> str:
        if not is_known_section_type(section_type):
            raise ValidationError(f"Invalid section type: {section_type}", field="type")

        document, section_id = transforms.add_section(self.document, section_type)
        self._apply(document)
        self.selected_section_id = section_id
        return section_id

    def request_removal(self, section_id: str) -> None:
        self._require_section(section_id)
        self.deletion.request(section_id)

    def confirm_removal(self) -> str:
        section_id = self.deletion.confirm()
        self._apply(transforms.remove_section(self.document, section_id))

        if self.selected_section_id == section_id:
            self.selected_section_id = None
        return section_id

    def cancel_removal(self) -> None:
        self.deletion.cancel()

    def duplicate_section(self, section_id: str) -> str:
        self._require_section(section_id)
        document, new_id = transforms.duplicate_section(self.document, section_id)
        self._apply(document)
        self.selected_section_id = new_id
        return new_id

    def toggle_visibility(self, section_id: str) -> bool:
        self._require_section(section_id)
        self._apply(transforms.toggle_visibility(self.document, section_id))
        return self.document.get(section_id).visible

    def update_field(self, section_id: str, field: str, key: str, value: Any) -> None:
        self._require_section(section_id)
        if field not in transforms.EDITABLE_FIELDS:
            raise ValidationError(f"Field must be one of {', '.join(transforms.EDITABLE_FIELDS)}", field="field")

        self.document = transforms.update_field(self.document, section_id, field, key, value)
        self.dirty = True

    def move_section(self, section_id: str, to_index: int) -> None:
        self._require_section(section_id)
        self._apply(transforms.move_section(self.document, section_id, to_index))

    def apply_template(self, template_key: str) -> None:
        if template_key not in TEMPLATES:
            raise ValidationError(f"Unknown template: {template_key}", field="template")

        self._apply(transforms.apply_template(self.document, template_key))
        self.selected_section_id = None

    # ------------------------
    # Theme
    # ------------------------
    def apply_theme_preset(self, preset_id: str) -> None:
        theme = preset_theme(preset_id)
        self._apply(self.document.with_theme(theme))
        self.selected_theme_id = preset_id

    def patch_theme(self, group: str, key: str, value: Any) -> None:
        theme = patch_theme(self.document.theme, group, key, value)
        self._apply(self.document.with_theme(theme))
        self.selected_theme_id = matching_preset(theme)

    # ------------------------
    # Persistence
    # ------------------------
    @property
    def is_saving(self) -> bool:
        return self._saving.locked()

    @contextmanager
    def saving(self):
        """Allow one gateway write at a time; released on success or failure."""
        if not self._saving.acquire(blocking=False):
            raise ConflictError("A save is already in progress")
        try:
            yield
        finally:
            self._saving.release()

    def save_draft(self) -> None:
        with self.saving():
            self.commit_pending()
            self.gateway.save_draft(self.document)

    def publish(self) -> int:
        with self.saving():
            self.commit_pending()
            return self.gateway.publish(self.document)

    def unpublish(self) -> None:
        with self.saving():
            self.gateway.unpublish()

    def create_store(self, name: str, slug: str) -> str:
        with self.saving():
            store_id = self.gateway.create_store(name, slug)
        self.load()
        return store_id

    def restore_version(self, version: int) -> Document:
        """Load a published version as one undoable step."""
        document = self.gateway.get_version(version)
        self.commit_pending()
        self._apply(document)
        self.deletion.cancel()
        self._sync_selection()
        return self.document

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document": self.document.to_dict(),
            "store_exists": self.store_exists,
            "selected_section_id": self.selected_section_id,
            "selected_theme_id": self.selected_theme_id,
            "pending_removal": self.deletion.pending_id,
            "dirty": self.dirty,
            "saving": self.is_saving,
            "history": {
                "cursor": self.history.cursor,
                "size": len(self.history),
                "can_undo": self.history.can_undo or self.dirty,
                "can_redo": self.history.can_redo and not self.dirty,
            },
        }
