from typing import List, Optional
from storefront.domain.document import Document


class EditHistory:
    """
    Linear undo/redo history over whole-document snapshots.

    Snapshots include the theme, so theme edits undo together with
    section edits. Committing after an undo discards the redo tail.
    """

    def __init__(self, initial: Optional[Document] = None):
        self._snapshots: List[Document] = []
        self._cursor = -1
        if initial is not None:
            self.reset(initial)

    def reset(self, state: Document) -> None:
        self._snapshots = [state]
        self._cursor = 0

    def commit(self, state: Document) -> None:
        del self._snapshots[self._cursor + 1:]
        self._snapshots.append(state)
        self._cursor = len(self._snapshots) - 1

    def undo(self) -> Optional[Document]:
        if self.can_undo:
            self._cursor -= 1
        return self.current

    def redo(self) -> Optional[Document]:
        if self.can_redo:
            self._cursor += 1
        return self.current

    @property
    def current(self) -> Optional[Document]:
        if not self._snapshots:
            return None
        return self._snapshots[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._snapshots) - 1

    def __len__(self) -> int:
        return len(self._snapshots)
