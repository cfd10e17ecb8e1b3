"""Unit tests for KitchenProjector.

Covers:
- Flattening orders into preparation items with prep-start instants.
- Skipping items with a bad delivery time or category.
- ``show_completed`` filtering in both views.
- Station grouping and timeline ordering.
- The status cycle, optimistic updates and failure handling.
- Listeners and store change notifications.
"""

from __future__ import annotations

from datetime import datetime
from uuid import uuid4

import pytest

from modules.kitchen.exceptions import (
    PreparationItemNotFound,
    StatusTransitionConflict,
    StoreUnavailable,
)

pytestmark = pytest.mark.unit

NOW = datetime(2025, 12, 24, 15, 46)


class TestRefresh:
    def test_flattens_every_item_with_prep_start(self, store, projector):
        order = store.add_order(
            "18:00",
            [
                {"category": "entradas", "name": "Romeritos"},
                {"category": "platos_fuertes", "name": "Pierna adobada", "quantity": 2},
            ],
        )
        projector.refresh(NOW)

        items = {item.menu_item_name: item for item in projector.items}
        assert items["Romeritos"].prep_start == datetime(2025, 12, 24, 16, 0)
        assert items["Pierna adobada"].prep_start == datetime(2025, 12, 24, 15, 0)
        assert items["Pierna adobada"].quantity == 2
        assert items["Romeritos"].order_number == order.order_number
        assert items["Romeritos"].customer_name == "María López"

    def test_skips_items_that_cannot_be_timed(self, store, projector):
        store.add_order("18:00", [{"category": "entradas"}])
        bad_time = store.add_order("6 pm", [{"category": "entradas"}])
        bad_category = store.add_order("19:00", [{"category": "sopas"}])

        projector.refresh(NOW)

        assert len(projector.items) == 1
        skipped_ids = {s.item_id for s in projector.skipped}
        assert skipped_ids == {bad_time.items[0].id, bad_category.items[0].id}
        assert all(s.reason for s in projector.skipped)

    def test_refresh_replaces_state_wholesale(self, store, projector):
        order = store.add_order("18:00", [{"category": "entradas"}, {"category": "entradas"}])
        projector.refresh(NOW)
        store.remove_item(order.items[0].id)

        projector.refresh(NOW)

        assert [item.item_id for item in projector.items] == [order.items[1].id]

    def test_store_failure_keeps_last_good_state(self, store, projector):
        store.add_order("18:00", [{"category": "entradas"}])
        projector.refresh(NOW)
        store.fail_reads = True

        with pytest.raises(StoreUnavailable):
            projector.refresh(NOW)

        assert len(projector.items) == 1
        assert projector.refreshed_at == NOW


class TestViews:
    def test_by_category_keeps_station_order_and_empty_groups(self, store, projector):
        store.add_order("20:00", [{"category": "entradas"}])
        projector.refresh(NOW)

        groups = projector.by_category()

        assert list(groups) == [
            "platos_fuertes",
            "entradas",
            "complementos",
            "postres_bebidas",
        ]
        assert len(groups["entradas"]) == 1
        assert groups["platos_fuertes"] == []

    def test_by_category_sorts_by_prep_start(self, store, projector):
        store.add_order("21:00", [{"category": "entradas", "name": "late"}])
        store.add_order("17:00", [{"category": "entradas", "name": "early"}])
        projector.refresh(NOW)

        names = [item.menu_item_name for item in projector.by_category()["entradas"]]
        assert names == ["early", "late"]

    def test_completed_items_hidden_unless_requested(self, store, projector):
        store.add_order(
            "18:00",
            [
                {"category": "entradas", "status": "listo"},
                {"category": "entradas", "status": "preparando"},
            ],
        )
        projector.refresh(NOW)

        assert len(projector.by_category()["entradas"]) == 1
        assert len(projector.timeline(NOW)) == 1
        assert len(projector.by_category(show_completed=True)["entradas"]) == 2
        assert len(projector.timeline(NOW, show_completed=True)) == 2

    def test_timeline_orders_by_urgency_weight_then_prep_start(self, store, projector):
        # prep starts: futuro 20:00, proximamente 16:30, late 15:00,
        # preparar_ahora 15:50 and 16:00
        store.add_order("23:00", [{"category": "platos_fuertes", "name": "futuro"}])
        store.add_order("18:30", [{"category": "entradas", "name": "proximamente"}])
        store.add_order("17:00", [{"category": "entradas", "name": "atrasado"}])
        store.add_order("18:00", [{"category": "entradas", "name": "ahora-2"}])
        store.add_order("17:50", [{"category": "entradas", "name": "ahora-1"}])
        projector.refresh(NOW)

        names = [item.menu_item_name for item in projector.timeline(NOW)]

        assert names == ["ahora-1", "ahora-2", "atrasado", "proximamente", "futuro"]

    def test_project_dispatches_on_view_mode(self, store, projector):
        store.add_order("18:00", [{"category": "entradas"}])
        projector.refresh(NOW)

        assert isinstance(projector.project("by_category", NOW), dict)
        assert isinstance(projector.project("timeline", NOW), list)
        with pytest.raises(ValueError):
            projector.project("kanban", NOW)


class TestAdvanceStatus:
    def test_three_advances_return_to_pendiente(self, store, projector):
        order = store.add_order("18:00", [{"category": "entradas"}])
        item_id = order.items[0].id
        projector.refresh(NOW)

        assert projector.advance_status(item_id) == "preparando"
        assert projector.advance_status(item_id) == "listo"
        assert projector.advance_status(item_id) == "pendiente"
        assert [status for _, status in store.writes] == ["preparando", "listo", "pendiente"]

    def test_local_copy_updated_optimistically(self, store, projector):
        order = store.add_order("18:00", [{"category": "entradas"}])
        projector.refresh(NOW)

        projector.advance_status(str(order.items[0].id))

        assert projector.items[0].status == "preparando"

    def test_store_failure_leaves_local_state_unchanged(self, store, projector):
        order = store.add_order("18:00", [{"category": "entradas"}])
        projector.refresh(NOW)
        store.fail_writes = True

        with pytest.raises(StoreUnavailable):
            projector.advance_status(order.items[0].id)

        assert projector.items[0].status == "pendiente"

    def test_conflict_forces_refresh_and_propagates(self, store, projector):
        order = store.add_order("18:00", [{"category": "entradas"}])
        projector.refresh(NOW)
        store.remove_item(order.items[0].id)
        store.reject_writes = True

        with pytest.raises(StatusTransitionConflict):
            projector.advance_status(order.items[0].id)

        assert projector.items == []

    def test_unknown_item(self, projector):
        projector.refresh(NOW)
        with pytest.raises(PreparationItemNotFound):
            projector.advance_status(uuid4())


class TestListenersAndCadence:
    def test_listeners_notified_after_refresh_and_advance(self, store, projector):
        order = store.add_order("18:00", [{"category": "entradas"}])
        calls = []
        projector.add_listener(lambda p: calls.append(len(p.items)))

        projector.refresh(NOW)
        projector.advance_status(order.items[0].id)

        assert calls == [1, 1]

    def test_removed_listener_not_called(self, store, projector):
        calls = []
        listener = lambda p: calls.append(p)  # noqa: E731
        projector.add_listener(listener)
        projector.remove_listener(listener)

        projector.refresh(NOW)

        assert calls == []

    def test_store_notification_triggers_refresh(self, store, projector):
        projector.start(interval=3600)
        try:
            store.add_order("18:00", [{"category": "entradas"}])
            store.notify()
            assert len(projector.items) == 1
        finally:
            projector.stop()

    def test_stop_unsubscribes_from_store(self, store, projector):
        projector.start(interval=3600)
        projector.stop()

        assert store.callbacks == []

    def test_start_survives_store_outage(self, store, projector):
        store.fail_reads = True
        projector.start(interval=3600)
        try:
            assert projector.items == []
        finally:
            projector.stop()
