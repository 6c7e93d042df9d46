"""
Notification report records.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple

KIND_MASTER = "master"
KIND_SLOT = "slot"


@dataclass(frozen=True)
class ReportItem:
    """One thing needing attention: a master account or a client slot."""

    kind: str
    ref_id: str
    title: str
    date: date
    urgent: bool
    account_id: str
    subtitle: str = ""
    client_id: Optional[str] = None
    login: str = ""


@dataclass(frozen=True)
class Report:
    items: Tuple[ReportItem, ...]
    message: str

    @property
    def is_healthy(self) -> bool:
        return not self.items

    @property
    def master_items(self) -> Tuple[ReportItem, ...]:
        return tuple(i for i in self.items if i.kind == KIND_MASTER)

    @property
    def slot_items(self) -> Tuple[ReportItem, ...]:
        return tuple(i for i in self.items if i.kind == KIND_SLOT)
