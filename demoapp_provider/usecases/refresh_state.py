"""Use case reconciling persisted records with the service (drift detection)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from demoapp_provider.domain.context import OperationContext
from demoapp_provider.domain.ports import Resource, StatePort, UseCaseError


@dataclass(frozen=True)
class RefreshReport:
    refreshed: List[str] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)


@dataclass
class RefreshState:
    """Read every stored record and rewrite the state file with remote truth.

    Records whose ``read`` returns ``None`` are dropped, not recreated. Any
    read failure aborts the refresh before the state file is written.
    """

    resources: Iterable[Resource]
    store: StatePort

    def __post_init__(self) -> None:
        self._by_type: Dict[str, Resource] = {r.type_name: r for r in self.resources}
        self._log = logging.getLogger(__name__)

    def __call__(self, ctx: Optional[OperationContext] = None) -> RefreshReport:
        records = self.store.load()
        updated: Dict[str, Dict] = {}
        report = RefreshReport()
        for address, record in records.items():
            type_name = str(record.get("type") or "")
            resource = self._by_type.get(type_name)
            if resource is None:
                raise UseCaseError(
                    "UNKNOWN_RESOURCE_TYPE",
                    f"State entry '{address}' has unsupported type '{type_name}'.",
                    summary="Error Refreshing State",
                )
            refreshed = resource.read(dict(record.get("attributes") or {}), ctx)
            if refreshed is None:
                self._log.info("%s was deleted outside of management; dropping it.", address)
                report.dropped.append(address)
                continue
            updated[address] = {"type": type_name, "attributes": refreshed}
            report.refreshed.append(address)
        self.store.save(updated)
        return report


__all__ = ["RefreshReport", "RefreshState"]
