"""Client roster manager — period-scoped mirror of 'clientes' kept in sync by the change feed."""

import asyncio
import logging
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any

from dashboard.application.interfaces import ChangeFeed, ChangeSubscription, ClientRepository
from dashboard.application.services.roster_mirror import RosterMirror
from dashboard.domain.entities import (
    TERMINAL_STATUSES,
    ChangeEvent,
    ChangeKind,
    ClientRecord,
    ClientStats,
    MutationResult,
    Period,
)
from dashboard.domain.exceptions import (
    EntityNotFoundError,
    ProtectedFieldError,
    RecordStoreError,
)
from dashboard.infrastructure.logging.colored_logger import SyncLogger, SyncStage

logger = logging.getLogger(__name__)
slog = SyncLogger("ClientRosterManager")

TABLE = "clientes"

# Period fields are fixed at creation; fecha_final belongs to update_status;
# extra is the bag unknown columns are stored in.
PROTECTED_FIELDS = frozenset({"id", "mes_registro", "anio_registro", "fecha_final", "extra"})


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


class ClientRosterManager:
    """Owns the client mirror for one period and ownership scope.

    Administrators see every client of the period; anyone else only sees the
    clients whose ``ejecutivo`` equals ``ejecutivo_nombre``.

    Successful writes patch the mirror straight away. The change feed delivers
    the same writes again (plus everyone else's), and applying them is
    idempotent, so the two paths converge on the server state.

    Usage:
        async with ClientRosterManager(repo, feed, Period(3, 2025)) as manager:
            await manager.add({"nombre": "Ana", "producto": "Crédito de nómina"})
            print(manager.stats.total_clientes)
    """

    def __init__(
        self,
        repository: ClientRepository,
        feed: ChangeFeed | None,
        period: Period,
        *,
        ejecutivo_nombre: str | None = None,
        is_admin: bool = True,
        clock: Callable[[], date] = _utc_today,
    ) -> None:
        self._repository = repository
        self._feed = feed
        self._period = period
        self._ejecutivo_nombre = ejecutivo_nombre
        self._is_admin = is_admin
        self._clock = clock

        self._mirror: RosterMirror[ClientRecord] = RosterMirror()
        self.loading = True
        self.error: str | None = None

        # Bumped on every scope change; fetches started under an older value are dropped.
        self._generation = 0
        self._active = False
        self._subscription: ChangeSubscription | None = None
        self._drain_task: asyncio.Task | None = None

    # ── State ────────────────────────────────────────────────────────

    @property
    def clients(self) -> list[ClientRecord]:
        return self._mirror.records

    @property
    def period(self) -> Period:
        return self._period

    @property
    def owner_filter(self) -> str | None:
        if self._is_admin or not self._ejecutivo_nombre:
            return None
        return self._ejecutivo_nombre

    @property
    def stats(self) -> ClientStats:
        return ClientStats.from_clients(self._mirror)

    @property
    def subscribed(self) -> bool:
        return self._subscription is not None

    # ── Lifecycle ────────────────────────────────────────────────────

    async def start(self) -> None:
        """Subscribe to the change feed and load the active scope. No-op when started."""
        if self._active:
            return
        self._active = True
        self._subscribe()
        await self.fetch()

    async def close(self) -> None:
        """Tear down the change-feed subscription."""
        self._active = False
        await self._unsubscribe()

    async def __aenter__(self) -> "ClientRosterManager":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def set_scope(
        self,
        period: Period,
        *,
        ejecutivo_nombre: str | None = None,
        is_admin: bool | None = None,
    ) -> None:
        """Switch to another period and/or owner, then reload.

        Any fetch still in flight for the previous scope is invalidated, and
        the subscription is replaced when the period changes.
        """
        period_changed = period != self._period
        self._period = period
        if ejecutivo_nombre is not None:
            self._ejecutivo_nombre = ejecutivo_nombre
        if is_admin is not None:
            self._is_admin = is_admin
        self._generation += 1

        if period_changed and self._active:
            await self._unsubscribe()
            self._subscribe()
        await self.fetch()

    # ── Queries ──────────────────────────────────────────────────────

    async def fetch(self) -> None:
        """Replace the mirror with a full read of the active scope.

        A failed read keeps the previous mirror and records the error.
        """
        generation = self._generation
        period = self._period
        owner = self.owner_filter
        self.loading = True

        try:
            with slog.timed_step(
                SyncStage.FETCH, "Loading clientes",
                periodo=str(period), ejecutivo=owner or "*",
            ):
                records = await self._repository.get_by_period(period, ejecutivo=owner)
        except RecordStoreError as e:
            if generation == self._generation:
                self.error = str(e)
                self.loading = False
            return

        if generation != self._generation:
            slog.detail("Discarding stale fetch", periodo=str(period))
            return

        self._mirror.replace_all(records)
        self.error = None
        self.loading = False

    # ── Mutations ────────────────────────────────────────────────────

    async def add(self, data: dict[str, Any]) -> MutationResult:
        """Create a client in the active period.

        The period fields are always the active period's; ``fecha_inicio``
        defaults to today when not given.
        """
        values = dict(data)
        values.pop("id", None)
        values.pop("extra", None)
        values["mes_registro"] = self._period.mes
        values["anio_registro"] = self._period.anio
        if not values.get("fecha_inicio"):
            values["fecha_inicio"] = self._today()

        try:
            created = await self._repository.create(ClientRecord.from_row(values))
        except RecordStoreError as e:
            return self._write_failed("add", e)

        if self._in_scope(created.to_row()):
            self._mirror.upsert_front(created)
        slog.step_complete(SyncStage.MUTATION, "Client created", id=created.id)
        return MutationResult.ok(created)

    async def update_field(self, client_id: int, field: str, value: Any) -> MutationResult:
        """Write a single field. Period fields, ``fecha_final`` and ``extra`` are refused."""
        if field in PROTECTED_FIELDS:
            return self._write_failed("update_field", ProtectedFieldError("ClientRecord", field))
        return await self._write_through("update_field", client_id, {field: value})

    async def update_status(
        self, client_id: int, estatus: str, actualizacion: str = ""
    ) -> MutationResult:
        """Move a client to ``estatus`` with an accompanying note.

        Reaching a terminal status stamps ``fecha_final`` with today's date;
        any other status leaves it as it was.
        """
        values: dict[str, Any] = {"estatus": estatus, "actualizacion": actualizacion}
        if estatus in TERMINAL_STATUSES:
            values["fecha_final"] = self._today()
        return await self._write_through("update_status", client_id, values)

    async def delete(self, client_id: int) -> MutationResult:
        try:
            await self._repository.delete(client_id)
        except RecordStoreError as e:
            return self._write_failed("delete", e)

        # The feed will announce the same delete; removing twice is a no-op.
        self._mirror.remove(client_id)
        slog.step_complete(SyncStage.MUTATION, "Client deleted", id=client_id)
        return MutationResult.ok()

    # ── Change feed ──────────────────────────────────────────────────

    def apply_change(self, event: ChangeEvent) -> bool:
        """Reconcile one change event with the mirror. Returns True if it changed."""
        if event.kind is ChangeKind.INSERT:
            row = event.new or {}
            if not self._in_scope(row):
                return False
            self._mirror.upsert_front(ClientRecord.from_row(row))
            return True

        if event.kind is ChangeKind.UPDATE:
            if not event.new:
                return False
            return self._mirror.replace(ClientRecord.from_row(event.new))

        if event.kind is ChangeKind.DELETE:
            return self._mirror.remove((event.old or {}).get("id"))

        return False

    def _subscribe(self, *, resync: bool = False) -> None:
        if self._feed is None:
            return
        # Month cannot be filtered upstream; _in_scope checks it per event.
        subscription = self._feed.subscribe(
            TABLE, column="anio_registro", value=self._period.anio
        )
        self._subscription = subscription
        self._drain_task = asyncio.create_task(self._drain(subscription, resync=resync))
        slog.step_start(SyncStage.FEED, "Subscribed to clientes", anio=self._period.anio)

    async def _unsubscribe(self) -> None:
        subscription, task = self._subscription, self._drain_task
        self._subscription = None
        self._drain_task = None

        if subscription is not None:
            await subscription.close()
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _drain(self, subscription: ChangeSubscription, *, resync: bool = False) -> None:
        """Apply events of ``subscription`` in order until it ends.

        With ``resync`` the mirror is reloaded first; events arriving meanwhile
        wait in the inbox. An event that cannot be applied triggers a reload
        instead of ending the task.
        """
        if resync:
            await self.fetch()

        async for event in subscription:
            try:
                changed = self.apply_change(event)
            except Exception:
                logger.exception(
                    "Could not apply %s event on %s %s, resynchronising",
                    event.kind.value, TABLE, self._period,
                )
                await self.fetch()
                continue
            if changed:
                slog.detail(
                    f"Applied {event.kind.value}",
                    id=event.row.get("id"), periodo=str(self._period),
                )

        if subscription.overflowed and subscription is self._subscription and self._active:
            logger.warning(
                "Change feed overflowed for %s %s, resynchronising", TABLE, self._period
            )
            # The replacement task owns the reload, so close() can still cancel it.
            self._subscribe(resync=True)

    # ── Helpers ──────────────────────────────────────────────────────

    def _in_scope(self, row: dict[str, Any]) -> bool:
        if row.get("mes_registro") != self._period.mes:
            return False
        if row.get("anio_registro") != self._period.anio:
            return False
        owner = self.owner_filter
        return owner is None or row.get("ejecutivo") == owner

    async def _write_through(
        self, operation: str, client_id: int, values: dict[str, Any]
    ) -> MutationResult:
        try:
            updated = await self._repository.update_fields(client_id, values)
        except (RecordStoreError, EntityNotFoundError) as e:
            return self._write_failed(operation, e)

        self._mirror.replace(updated)
        slog.step_complete(SyncStage.MUTATION, f"{operation} applied", id=client_id)
        return MutationResult.ok(updated)

    def _write_failed(self, operation: str, error: Exception) -> MutationResult:
        self.error = str(error)
        slog.step_error(SyncStage.MUTATION, f"{operation} failed", error=error)
        return MutationResult.fail(error)

    def _today(self) -> str:
        return self._clock().isoformat()
