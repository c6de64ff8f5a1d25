"""Tests for ResidentService check-in, moves and check-out"""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from core.enums import ResidentStatus, RoomStatus
from core.exceptions import ResourceNotFoundError, RoomFullError, RoomNotFoundError
from repositories.resident_repo import ResidentRepository
from repositories.room_repo import RoomRepository
from schemas.resident import ResidentCreate, ResidentUpdate
from services.resident_service import ResidentService


def check_in(name: str, room_number: str, **fields) -> ResidentCreate:
    return ResidentCreate(name=name, room_number=room_number, phone="555-0100", **fields)


async def occupant_names(db, room) -> list[str]:
    occupants = await RoomRepository(db).get_occupants([room.id])
    return [row.name for row in occupants[room.id]]


@pytest.fixture
def service(db_session):
    return ResidentService(db_session)


class TestCreateResident:
    @pytest.mark.asyncio
    async def test_fills_single_room_then_rejects_second_resident(
        self, db_session, service, make_room
    ):
        room = await make_room("101")

        alice = await service.create_resident(check_in("Alice", "101"))
        with pytest.raises(RoomFullError):
            await service.create_resident(check_in("Bob", "101"))

        current = await RoomRepository(db_session).get_current(room.id)
        assert current.status == RoomStatus.OCCUPIED.value
        assert await occupant_names(db_session, room) == ["Alice"]
        residents = await ResidentRepository(db_session).list_residents()
        assert [r.id for r in residents] == [alice.id]

    @pytest.mark.asyncio
    async def test_unknown_room_leaves_no_resident_behind(self, db_session, service):
        with pytest.raises(RoomNotFoundError):
            await service.create_resident(check_in("Ghost", "999"))

        assert await ResidentRepository(db_session).list_residents() == []

    @pytest.mark.asyncio
    async def test_inactive_resident_is_stored_but_not_placed(
        self, db_session, service, make_room
    ):
        room = await make_room("101")

        resident = await service.create_resident(
            check_in("Ivy", "101", status=ResidentStatus.INACTIVE)
        )

        assert resident.status == ResidentStatus.INACTIVE.value
        assert await occupant_names(db_session, room) == []

    @pytest.mark.asyncio
    async def test_check_in_defaults_to_today(self, service, make_room):
        await make_room("101")

        resident = await service.create_resident(check_in("Alice", "101"))

        assert resident.check_in == date.today()


class TestUpdateResident:
    @pytest.mark.asyncio
    async def test_move_between_rooms(self, db_session, service, make_room):
        room_101 = await make_room("101")
        room_102 = await make_room("102", type="double")
        alice = await service.create_resident(check_in("Alice", "101"))

        updated = await service.update_resident(alice.id, ResidentUpdate(room_number="102"))

        assert updated.room_number == "102"
        repo = RoomRepository(db_session)
        assert (await repo.get_current(room_101.id)).status == RoomStatus.AVAILABLE.value
        assert await occupant_names(db_session, room_101) == []
        assert (await repo.get_current(room_102.id)).status == RoomStatus.OCCUPIED.value
        assert await occupant_names(db_session, room_102) == ["Alice"]

    @pytest.mark.asyncio
    async def test_failed_move_rolls_back_resident_and_rooms(
        self, db_session, service, make_room
    ):
        room_101 = await make_room("101")
        room_104 = await make_room("104")
        alice = await service.create_resident(check_in("Alice", "101"))
        await service.create_resident(check_in("Bob", "104"))

        with pytest.raises(RoomFullError):
            await service.update_resident(alice.id, ResidentUpdate(room_number="104"))

        await db_session.refresh(alice)
        assert alice.room_number == "101"
        assert await occupant_names(db_session, room_101) == ["Alice"]
        assert await occupant_names(db_session, room_104) == ["Bob"]
        current = await RoomRepository(db_session).get_current(room_101.id)
        assert current.status == RoomStatus.OCCUPIED.value

    @pytest.mark.asyncio
    async def test_blank_room_number_vacates(self, db_session, service, make_room):
        room = await make_room("101")
        alice = await service.create_resident(check_in("Alice", "101"))

        updated = await service.update_resident(alice.id, ResidentUpdate(room_number="  "))

        assert updated.room_number == ""
        assert await occupant_names(db_session, room) == []

    @pytest.mark.asyncio
    async def test_rename_shows_in_occupant_list(self, db_session, service, make_room):
        room = await make_room("101")
        alice = await service.create_resident(check_in("Alice", "101"))

        await service.update_resident(alice.id, ResidentUpdate(name="Alice Smith"))

        assert await occupant_names(db_session, room) == ["Alice Smith"]

    @pytest.mark.asyncio
    async def test_unknown_resident_raises_not_found(self, service):
        with pytest.raises(ResourceNotFoundError):
            await service.update_resident("missing", ResidentUpdate(name="Nobody"))


class TestDeleteResident:
    @pytest.mark.asyncio
    async def test_delete_frees_the_room(self, db_session, service, make_room):
        room = await make_room("101")
        alice = await service.create_resident(check_in("Alice", "101"))

        await service.delete_resident(alice.id)

        current = await RoomRepository(db_session).get_current(room.id)
        assert current.status == RoomStatus.AVAILABLE.value
        assert await occupant_names(db_session, room) == []
        assert await ResidentRepository(db_session).get_by_id(alice.id) is None

    @pytest.mark.asyncio
    async def test_delete_succeeds_when_room_cleanup_fails(
        self, db_session, service, make_room, monkeypatch
    ):
        await make_room("101")
        alice = await service.create_resident(check_in("Alice", "101"))

        async def failing_get_by_number(self, number, *, for_update=False):
            raise OperationalError("SELECT rooms", {}, Exception("connection reset"))

        monkeypatch.setattr(RoomRepository, "get_by_number", failing_get_by_number)

        await service.delete_resident(alice.id)

        assert await ResidentRepository(db_session).get_by_id(alice.id) is None

    @pytest.mark.asyncio
    async def test_delete_resident_whose_room_is_gone(self, db_session, service):
        resident = await service.create_resident(
            check_in("Ivy", "999", status=ResidentStatus.INACTIVE)
        )

        await service.delete_resident(resident.id)

        assert await ResidentRepository(db_session).get_by_id(resident.id) is None
