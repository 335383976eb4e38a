"""
Operation result domain objects for registrymirror.

Records what add/remove did to each registry so commands can report it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List


class OperationStatus(Enum):
    """What happened to one registry's config directory."""
    WRITTEN = "written"
    REMOVED = "removed"
    ABSENT = "absent"


@dataclass
class RegistryOperation:
    """Outcome of an add or remove for a single registry."""
    registry: str
    host: str
    path: str
    status: OperationStatus

    def to_dict(self) -> Dict[str, Any]:
        return {
            'registry': self.registry,
            'host': self.host,
            'path': self.path,
            'status': self.status.value,
        }


@dataclass
class MirrorOperationResult:
    """Result of a batch add or remove."""
    action: str
    operations: List[RegistryOperation] = field(default_factory=list)

    @property
    def written(self) -> int:
        return self._count(OperationStatus.WRITTEN)

    @property
    def removed(self) -> int:
        return self._count(OperationStatus.REMOVED)

    @property
    def absent(self) -> int:
        return self._count(OperationStatus.ABSENT)

    def _count(self, status: OperationStatus) -> int:
        return sum(1 for op in self.operations if op.status == status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'action': self.action,
            'written': self.written,
            'removed': self.removed,
            'absent': self.absent,
            'operations': [op.to_dict() for op in self.operations],
        }
