"""Interfaces to a Storm cluster running on YARN.

The client commands talk to two remote parties: the YARN resource manager,
which launches the Storm application master, and the Storm master itself,
which manages nimbus, the UI and the supervisors. Both are reached through a
``ClusterBackend``. The transport behind a backend is not part of this package;
``UnavailableBackend`` is the default and reports that none is configured.

Usage:
    from storm_yarn.cluster import ClusterBackend, LaunchRequest

    class MyBackend:
        def launch(self, request: LaunchRequest) -> str:
            ...

        def connect(self, app_id: str) -> MasterClient:
            ...
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from storm_yarn.exceptions import BackendUnavailableError


@dataclass
class LaunchRequest:
    """Everything needed to submit a Storm application master to YARN."""

    appname: str
    queue: str
    storm_home: str | None = None
    storm_zip: str | None = None
    master_conf: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class MasterClient(Protocol):
    """Operations offered by a running Storm application master."""

    def get_storm_conf(self) -> dict[str, Any]: ...

    def set_storm_conf(self, conf: dict[str, Any]) -> None: ...

    def add_supervisors(self, count: int) -> None: ...

    def start_nimbus(self) -> None: ...

    def stop_nimbus(self) -> None: ...

    def start_ui(self) -> None: ...

    def stop_ui(self) -> None: ...

    def start_supervisors(self) -> None: ...

    def stop_supervisors(self) -> None: ...

    def shutdown(self) -> None: ...

    def close(self) -> None: ...


@runtime_checkable
class ClusterBackend(Protocol):
    """Transport to the YARN resource manager and the Storm master."""

    def launch(self, request: LaunchRequest) -> str:
        """Submit the application master and return its YARN application id."""
        ...

    def connect(self, app_id: str) -> MasterClient:
        """Open a client to the Storm master of application ``app_id``."""
        ...


class UnavailableBackend:
    """Backend used when no transport has been configured."""

    _suggestions = [
        "Build the command registry with a ClusterBackend implementation",
        "See storm_yarn.cluster for the interface a backend must provide",
    ]

    def launch(self, request: LaunchRequest) -> str:
        raise BackendUnavailableError(
            "Cannot launch: no YARN transport is available",
            context={"appname": request.appname, "queue": request.queue},
            suggestions=self._suggestions,
        )

    def connect(self, app_id: str) -> MasterClient:
        raise BackendUnavailableError(
            "Cannot connect to the storm master: no transport is available",
            context={"app_id": app_id},
            suggestions=self._suggestions,
        )
