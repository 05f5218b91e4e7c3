from dataclasses import dataclass
from typing import Optional, Union
from storefront.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class PendingConfirmation:
    section_id: str


DeletionState = Union[Idle, PendingConfirmation]


class DeletionGate:
    """
    Two-step section removal: request, then confirm or cancel.

    At most one removal is pending; a new request replaces the old one.
    """

    def __init__(self):
        self.state: DeletionState = Idle()

    @property
    def pending_id(self) -> Optional[str]:
        if isinstance(self.state, PendingConfirmation):
            return self.state.section_id
        return None

    @property
    def is_pending(self) -> bool:
        return isinstance(self.state, PendingConfirmation)

    def request(self, section_id: str) -> None:
        self.state = PendingConfirmation(section_id)

    def confirm(self) -> str:
        if not isinstance(self.state, PendingConfirmation):
            raise ValidationError("No section removal is pending")

        section_id = self.state.section_id
        self.state = Idle()
        return section_id

    def cancel(self) -> None:
        self.state = Idle()
