"""Tests for OccupancySynchronizer"""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from core.enums import RoomStatus
from core.exceptions import (
    ConcurrentUpdateError,
    RoomFullError,
    RoomNotFoundError,
    StoreUnavailableError,
)
from models.resident import Resident
from repositories.room_repo import RoomRepository
from services.occupancy_service import OccupancySynchronizer, Placement


async def add_resident(db, name: str, room_number: str, status: str = "active") -> Resident:
    resident = Resident(
        name=name,
        room_number=room_number,
        phone="555-0100",
        status=status,
        check_in=date(2026, 10, 1),
    )
    db.add(resident)
    await db.flush()
    return resident


async def occupant_ids(db, room) -> list[str]:
    occupants = await RoomRepository(db).get_occupants([room.id])
    return [row.resident_id for row in occupants[room.id]]


async def room_status(db, room) -> str:
    return (await RoomRepository(db).get_current(room.id)).status


@pytest.fixture
def synchronizer(db_session):
    return OccupancySynchronizer(db_session)


class TestResidentAdded:
    @pytest.mark.asyncio
    async def test_places_active_resident_and_marks_room_occupied(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")

        await synchronizer.on_resident_added(alice)

        assert await occupant_ids(db_session, room) == [alice.id]
        assert await room_status(db_session, room) == RoomStatus.OCCUPIED.value

    @pytest.mark.asyncio
    async def test_adding_twice_keeps_a_single_entry(self, db_session, synchronizer, make_room):
        room = await make_room("102", type="double")
        alice = await add_resident(db_session, "Alice", "102")

        await synchronizer.on_resident_added(alice)
        await synchronizer.on_resident_added(alice)

        assert await occupant_ids(db_session, room) == [alice.id]

    @pytest.mark.asyncio
    async def test_full_room_raises_and_is_left_unchanged(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        bob = await add_resident(db_session, "Bob", "101")
        await synchronizer.on_resident_added(alice)
        version = (await RoomRepository(db_session).get_current(room.id)).version

        with pytest.raises(RoomFullError) as exc_info:
            await synchronizer.on_resident_added(bob)

        assert exc_info.value.details == {"room_number": "101", "capacity": 1}
        assert await occupant_ids(db_session, room) == [alice.id]
        current = await RoomRepository(db_session).get_current(room.id)
        assert current.status == RoomStatus.OCCUPIED.value
        assert current.version == version

    @pytest.mark.asyncio
    async def test_missing_room_raises_room_not_found(self, db_session, synchronizer):
        ghost = await add_resident(db_session, "Ghost", "999")

        with pytest.raises(RoomNotFoundError) as exc_info:
            await synchronizer.on_resident_added(ghost)

        assert exc_info.value.error_code == "ROOM_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_inactive_or_roomless_residents_are_not_placed(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("101")
        inactive = await add_resident(db_session, "Ivy", "101", status="inactive")
        roomless = await add_resident(db_session, "Rae", "")

        await synchronizer.on_resident_added(inactive)
        await synchronizer.on_resident_added(roomless)

        assert await occupant_ids(db_session, room) == []
        assert await room_status(db_session, room) == RoomStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_maintenance_room_keeps_its_status(self, db_session, synchronizer, make_room):
        room = await make_room("103", type="double", status=RoomStatus.MAINTENANCE.value)
        alice = await add_resident(db_session, "Alice", "103")

        await synchronizer.on_resident_added(alice)

        assert await occupant_ids(db_session, room) == [alice.id]
        assert await room_status(db_session, room) == RoomStatus.MAINTENANCE.value

    @pytest.mark.asyncio
    async def test_stale_entry_in_another_room_is_moved(
        self, db_session, synchronizer, make_room
    ):
        old_room = await make_room("101")
        new_room = await make_room("102", type="double")
        alice = await add_resident(db_session, "Alice", "101")
        await synchronizer.on_resident_added(alice)

        # Resident record changed behind the synchronizer's back
        alice.room_number = "102"
        await db_session.flush()
        await synchronizer.on_resident_added(alice)

        assert await occupant_ids(db_session, old_room) == []
        assert await room_status(db_session, old_room) == RoomStatus.AVAILABLE.value
        assert await occupant_ids(db_session, new_room) == [alice.id]

    @pytest.mark.asyncio
    async def test_lost_update_raises_concurrent_update_error(self, db_session, make_room):
        class LosingRoomRepository(RoomRepository):
            async def update_if_version(self, room, expected_version, **values):
                return False

        await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        synchronizer = OccupancySynchronizer(
            db_session, room_repo=LosingRoomRepository(db_session)
        )

        with pytest.raises(ConcurrentUpdateError):
            await synchronizer.on_resident_added(alice)

    @pytest.mark.asyncio
    async def test_store_failure_surfaces_as_store_unavailable(self, db_session, make_room):
        class BrokenRoomRepository(RoomRepository):
            async def count_occupants(self, room_id):
                raise OperationalError("SELECT count(*)", {}, Exception("connection lost"))

        await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        synchronizer = OccupancySynchronizer(
            db_session, room_repo=BrokenRoomRepository(db_session)
        )

        with pytest.raises(StoreUnavailableError) as exc_info:
            await synchronizer.on_resident_added(alice)

        assert exc_info.value.status_code == 503


class TestResidentRemoved:
    @pytest.mark.asyncio
    async def test_removing_last_occupant_makes_room_available(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        await synchronizer.on_resident_added(alice)

        await synchronizer.on_resident_removed("101", alice.id)

        assert await occupant_ids(db_session, room) == []
        assert await room_status(db_session, room) == RoomStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_room_stays_occupied_while_others_remain(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("102", type="double")
        alice = await add_resident(db_session, "Alice", "102")
        bob = await add_resident(db_session, "Bob", "102")
        await synchronizer.on_resident_added(alice)
        await synchronizer.on_resident_added(bob)

        await synchronizer.on_resident_removed("102", alice.id)

        assert await occupant_ids(db_session, room) == [bob.id]
        assert await room_status(db_session, room) == RoomStatus.OCCUPIED.value

    @pytest.mark.asyncio
    async def test_maintenance_survives_emptying(self, db_session, synchronizer, make_room):
        room = await make_room("103", type="double", status=RoomStatus.MAINTENANCE.value)
        alice = await add_resident(db_session, "Alice", "103")
        await synchronizer.on_resident_added(alice)

        await synchronizer.on_resident_removed("103", alice.id)

        assert await occupant_ids(db_session, room) == []
        assert await room_status(db_session, room) == RoomStatus.MAINTENANCE.value

    @pytest.mark.asyncio
    async def test_missing_room_or_blank_number_is_a_no_op(self, synchronizer):
        await synchronizer.on_resident_removed("999", "resident-1")
        await synchronizer.on_resident_removed("", "resident-1")

    @pytest.mark.asyncio
    async def test_store_errors_are_logged_and_swallowed(
        self, db_session, synchronizer, make_room, monkeypatch, caplog
    ):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        await synchronizer.on_resident_added(alice)

        async def failing_remove(self, room_id, resident_id):
            raise OperationalError("DELETE FROM room_occupant", {}, Exception("disk I/O error"))

        monkeypatch.setattr(RoomRepository, "remove_occupant", failing_remove)

        await synchronizer.on_resident_removed("101", alice.id)

        assert "Could not remove resident" in caplog.text
        monkeypatch.undo()
        assert await occupant_ids(db_session, room) == [alice.id]

    @pytest.mark.asyncio
    async def test_order_is_insertion_order_without_resorting(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("201", type="triple")
        alice = await add_resident(db_session, "Alice", "201")
        bob = await add_resident(db_session, "Bob", "201")
        carol = await add_resident(db_session, "Carol", "201")
        await synchronizer.on_resident_added(alice)
        await synchronizer.on_resident_added(bob)

        await synchronizer.on_resident_removed("201", alice.id)
        await synchronizer.on_resident_added(carol)

        assert await occupant_ids(db_session, room) == [bob.id, carol.id]


class TestResidentUpdated:
    @pytest.mark.asyncio
    async def test_moving_rooms_frees_old_and_fills_new(
        self, db_session, synchronizer, make_room
    ):
        room_101 = await make_room("101")
        room_102 = await make_room("102", type="double")
        alice = await add_resident(db_session, "Alice", "101")
        await synchronizer.on_resident_added(alice)

        previous = Placement.of(alice)
        alice.room_number = "102"
        await db_session.flush()
        await synchronizer.on_resident_updated(previous, alice)

        assert await occupant_ids(db_session, room_101) == []
        assert await room_status(db_session, room_101) == RoomStatus.AVAILABLE.value
        assert await occupant_ids(db_session, room_102) == [alice.id]
        assert await room_status(db_session, room_102) == RoomStatus.OCCUPIED.value

    @pytest.mark.asyncio
    async def test_deactivating_removes_from_room(self, db_session, synchronizer, make_room):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        await synchronizer.on_resident_added(alice)

        previous = Placement.of(alice)
        alice.status = "inactive"
        await db_session.flush()
        await synchronizer.on_resident_updated(previous, alice)

        assert await occupant_ids(db_session, room) == []
        assert await room_status(db_session, room) == RoomStatus.AVAILABLE.value

    @pytest.mark.asyncio
    async def test_reactivating_places_again(self, db_session, synchronizer, make_room):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101", status="inactive")

        previous = Placement.of(alice)
        alice.status = "active"
        await db_session.flush()
        await synchronizer.on_resident_updated(previous, alice)

        assert await occupant_ids(db_session, room) == [alice.id]

    @pytest.mark.asyncio
    async def test_unchanged_placement_does_not_touch_room(
        self, db_session, synchronizer, make_room
    ):
        room = await make_room("101")
        alice = await add_resident(db_session, "Alice", "101")
        await synchronizer.on_resident_added(alice)
        version = (await RoomRepository(db_session).get_current(room.id)).version

        previous = Placement.of(alice)
        alice.phone = "555-0199"
        await db_session.flush()
        await synchronizer.on_resident_updated(previous, alice)

        assert (await RoomRepository(db_session).get_current(room.id)).version == version

    @pytest.mark.asyncio
    async def test_moving_into_full_room_fails(self, db_session, synchronizer, make_room):
        await make_room("101")
        await make_room("104")
        alice = await add_resident(db_session, "Alice", "101")
        bob = await add_resident(db_session, "Bob", "104")
        await synchronizer.on_resident_added(alice)
        await synchronizer.on_resident_added(bob)

        previous = Placement.of(alice)
        alice.room_number = "104"
        await db_session.flush()

        with pytest.raises(RoomFullError):
            await synchronizer.on_resident_updated(previous, alice)
