from delvekit.statusview import status_line
from delvekit.templates import Position


def test_without_position():
    assert status_line(None, 3) == "Dungeon Level: 1  |  Rooms: 3"


def test_with_pair():
    assert (
        status_line((4, 7), 2)
        == "Dungeon Level: 1  |  Position: (4, 7)  |  Rooms: 2"
    )


def test_with_position_object_matches_pair():
    assert status_line(Position(x=9, y=1), 5) == status_line((9, 1), 5)


def test_length_is_bounded():
    assert len(status_line((1, 1), 10 ** 300)) == 255
    assert status_line((1, 1), 10 ** 300).startswith("Dungeon Level: 1")